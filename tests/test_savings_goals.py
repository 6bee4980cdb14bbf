import pytest


def test_create_starts_active_and_empty(ctx, user_id):
    goal = ctx.goals.create(user_id, "Trip", 1000, "airplane", "#54A0FF", "2025-12-31")
    assert goal.status == "active"
    assert goal.current_amount == 0
    assert goal.deadline == "2025-12-31"
    assert ctx.goals.progress(goal) == 0


@pytest.mark.parametrize("name, target, deadline", [
    ("", 100, None),
    ("Car", 0, None),
    ("Car", -1, None),
    ("Car", 100, "next year"),
])
def test_create_validation(ctx, user_id, name, target, deadline):
    with pytest.raises(ValueError):
        ctx.goals.create(user_id, name, target, deadline=deadline)


def test_deposit_rejects_non_positive(ctx, user_id):
    goal = ctx.goals.create(user_id, "Trip", 100)
    with pytest.raises(ValueError):
        ctx.goals.deposit(goal.id, 0)


def test_deposit_completes_and_unlocks_once(ctx, user_id):
    goal = ctx.goals.create(user_id, "Laptop", 500)
    goal = ctx.goals.deposit(goal.id, 200)
    assert goal.status == "active"
    assert goal.progress == 40
    assert ctx.goals.get_achievements(user_id) == []

    goal = ctx.goals.deposit(goal.id, 300)
    assert goal.status == "completed"
    assert goal.progress == 100

    goal = ctx.goals.deposit(goal.id, 50)
    assert goal.current_amount == 550
    assert ctx.goals.progress(goal) == 100
    [achievement] = ctx.goals.get_achievements(user_id)
    assert achievement.goal_id == goal.id
    assert "Laptop" in achievement.title


def test_stats_and_status_queries(ctx, user_id):
    a = ctx.goals.create(user_id, "A", 10)
    b = ctx.goals.create(user_id, "B", 10)
    c = ctx.goals.create(user_id, "C", 10)
    ctx.goals.deposit(a.id, 10)
    ctx.goals.cancel(c.id)
    assert ctx.goals.get_stats(user_id) == {"active": 1, "completed": 1, "achievements": 1}
    assert [g.name for g in ctx.goals.get_by_status(user_id, "active")] == [b.name]
    assert {g.name for g in ctx.goals.get_all(user_id)} == {"A", "B", "C"}


def test_update_raising_target_reopens_goal(ctx, user_id):
    goal = ctx.goals.create(user_id, "Fund", 100)
    ctx.goals.deposit(goal.id, 100)
    updated = ctx.goals.update(goal.id, "Fund", 200, "wallet", "#31D158")
    assert updated.status == "active"
    assert updated.icon == "wallet"


def test_delete(ctx, user_id):
    goal = ctx.goals.create(user_id, "Gone", 10)
    ctx.goals.delete(goal.id)
    assert ctx.goals.get_by_id(goal.id) is None
    with pytest.raises(ValueError):
        ctx.goals.deposit(goal.id, 5)


def test_cancel_keeps_saved_amount(ctx, user_id):
    goal = ctx.goals.create(user_id, "Bike", 300)
    ctx.goals.deposit(goal.id, 120)
    cancelled = ctx.goals.cancel(goal.id)
    assert cancelled.status == "cancelled"
    assert cancelled.current_amount == 120
    assert [g.name for g in ctx.goals.get_by_status(user_id, "cancelled")] == ["Bike"]
    assert ctx.goals.get_stats(user_id)["active"] == 0
    with pytest.raises(ValueError, match="not found"):
        ctx.goals.cancel(9999)


def test_update_keeps_cancelled_goal_cancelled(ctx, user_id):
    goal = ctx.goals.create(user_id, "Bike", 300)
    ctx.goals.deposit(goal.id, 120)
    ctx.goals.cancel(goal.id)

    lowered = ctx.goals.update(goal.id, "Bike", 100)
    assert lowered.status == "cancelled"
    raised = ctx.goals.update(goal.id, "Bike", 500)
    assert raised.status == "cancelled"


def test_deposit_reopens_cancelled_goal(ctx, user_id):
    partial = ctx.goals.create(user_id, "Camera", 300)
    ctx.goals.cancel(partial.id)
    partial = ctx.goals.deposit(partial.id, 100)
    assert partial.status == "active"
    assert ctx.goals.get_achievements(user_id) == []

    full = ctx.goals.create(user_id, "Phone", 200)
    ctx.goals.deposit(full.id, 150)
    ctx.goals.cancel(full.id)
    full = ctx.goals.deposit(full.id, 50)
    assert full.status == "completed"
    [achievement] = ctx.goals.get_achievements(user_id)
    assert achievement.goal_id == full.id

import pytest

from database.db_manager import DatabaseManager
from services.context import build_context


@pytest.fixture
def db(tmp_path):
    manager = DatabaseManager(str(tmp_path / "test.db"))
    manager.initialize()
    yield manager
    manager.close()


@pytest.fixture
def ctx(db):
    return build_context(db)


@pytest.fixture
def user_id(ctx):
    session = ctx.auth.sign_up("ana@example.com", "secret1", "Ana")
    return session.user_id

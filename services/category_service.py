from database.category_dao import CategoryDAO
from models.category import Category, CATEGORY_TYPES


class CategoryService:
    def __init__(self, category_dao: CategoryDAO):
        self._dao = category_dao

    def get_all(self, user_id: int) -> list[Category]:
        return self._dao.get_all(user_id)

    def get_by_type(self, user_id: int, type_: str) -> list[Category]:
        return self._dao.get_by_type(user_id, type_)

    def create(
        self, user_id: int, name: str, type_: str, icon: str, color: str
    ) -> Category:
        name = name.strip()
        self._validate(name, type_)
        existing = [c.name.lower() for c in self._dao.get_all(user_id)]
        if name.lower() in existing:
            raise ValueError(f"A category named '{name}' already exists.")
        return self._dao.create(user_id, name, type_, icon, color)

    def update(
        self, category_id: int, name: str, type_: str, icon: str, color: str
    ) -> Category:
        name = name.strip()
        self._validate(name, type_)
        current = self._dao.get_by_id(category_id)
        if current is None:
            raise ValueError("Category not found.")
        others = [c for c in self._dao.get_all(current.user_id) if c.id != category_id]
        if any(c.name.lower() == name.lower() for c in others):
            raise ValueError(f"A category named '{name}' already exists.")
        return self._dao.update(category_id, name, type_, icon, color)

    def delete(self, category_id: int):
        # Transactions keep the category name they were saved with.
        self._dao.delete(category_id)

    @staticmethod
    def _validate(name: str, type_: str):
        if not name:
            raise ValueError("Category name cannot be empty.")
        if type_ not in CATEGORY_TYPES:
            raise ValueError(f"Invalid category type: {type_}")

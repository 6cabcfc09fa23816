"""Menu operations: categories, dishes, their links, and the request data they take."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field
from typing import Any

from ordermenu.db import get_db
from ordermenu.errors import AppError, ValidationError
from ordermenu.models import Category, Dish
from ordermenu.repository import (
    CategoryDishMapRepository,
    CategoryRepository,
    DishRepository,
)

_log = logging.getLogger(__name__)


@dataclass
class CreateCategoryData:
    name: str = ""
    dish_ids: list[str] = field(default_factory=list)


@dataclass
class CreateDishData:
    name: str = ""
    price: float = 0.0
    picture: str = ""
    category_ids: list[str] = field(default_factory=list)


@dataclass
class CategoryWithDishes:
    category: Category
    dish: list[Dish]

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category.to_dict(),
            "dish": [d.to_dict() for d in self.dish],
        }


@dataclass
class UserInfo:
    id: str
    username: str


@dataclass
class CreateUserData:
    username: str = ""
    password: str = ""

    def validate(self) -> CreateUserData:
        """Check field lengths; raise ValidationError listing every failure."""
        problems = []
        if len(self.username) < 5:
            problems.append("username: username length must be greater than 5")
        if len(self.password) < 6:
            problems.append("password: password length must be greater than 5")
        if problems:
            raise ValidationError("; ".join(problems))
        return self


def query_menu(conn: sqlite3.Connection | None = None) -> list[CategoryWithDishes]:
    """Return every category with its dishes; categories that fail to load are logged and skipped."""
    categories = CategoryRepository(conn)
    result = []
    for category in categories.query_all():
        try:
            dishes = categories.query_related_dishes(category.id)
        except AppError as exc:
            _log.error("query menu error: %s", exc)
            continue
        result.append(CategoryWithDishes(category=category, dish=dishes))
    return result


class MenuService:
    """The menu operations offered to clients."""

    def __init__(self, conn: sqlite3.Connection | None = None) -> None:
        self._conn = conn if conn is not None else get_db()
        self._categories = CategoryRepository(self._conn)
        self._dishes = DishRepository(self._conn)
        self._links = CategoryDishMapRepository(self._conn)

    def create_category(self, data: CreateCategoryData) -> str:
        """Create a category linked to the given dishes; return its id."""
        category_id = self._categories.insert(data.name)
        for dish_id in data.dish_ids:
            self._links.insert(category_id, dish_id)
        return category_id

    def create_dish(self, data: CreateDishData, created_at: str | None = None) -> str:
        """Create a dish linked to the given categories; return its id."""
        dish_id = self._dishes.insert(data.name, data.price, data.picture, created_at)
        for category_id in data.category_ids:
            self._links.insert(category_id, dish_id)
        return dish_id

    def delete_category(self, category_id: str) -> None:
        self._links.delete_by_category_id(category_id)
        self._categories.delete_by_id(category_id)

    def delete_dish(self, dish_id: str) -> None:
        self._links.delete_by_dish_id(dish_id)
        self._dishes.delete_by_id(dish_id)

    def get_menu(self) -> list[CategoryWithDishes]:
        _log.info("get menu")
        return query_menu(self._conn)

    def get_all_categories(self) -> list[Category]:
        return self._categories.query_all()

    def get_all_dishes(self) -> list[Dish]:
        return self._dishes.query_all()

    def get_dishes_by_category(self, category_id: str) -> list[Dish]:
        return self._categories.query_related_dishes(category_id)
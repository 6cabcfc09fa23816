"""Data access for users, categories, dishes and the category-dish links."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

from ordermenu.db import get_db
from ordermenu.errors import AppError, NotFoundError
from ordermenu.models import Category, CategoryDishMap, Dish, DishStatus, User, new_id

_DISH_COLUMNS = 'd."id", d."index", d."name", d."price", d."picture", d."status", d."created_at"'


@contextmanager
def _transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Run a block in a transaction, turning database failures into AppError."""
    try:
        with conn:
            yield conn
    except sqlite3.Error as exc:
        raise AppError(f"db error: {exc}") from exc


def _now() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


class _Repository:
    def __init__(self, conn: sqlite3.Connection | None = None) -> None:
        self._conn = conn if conn is not None else get_db()


class UserRepository(_Repository):
    """Stores and looks up users; passwords are stored as given (already hashed)."""

    def insert_user(self, username: str, password: str) -> str:
        """Insert a user and return its new id."""
        user = User(id=new_id(), username=username, password=password)
        with _transaction(self._conn) as conn:
            conn.execute(
                'INSERT INTO "users" ("id", "username", "password") VALUES (?, ?, ?)',
                (user.id, user.username, user.password),
            )
        return user.id

    def _query_one(self, column: str, value: str) -> User | None:
        with _transaction(self._conn) as conn:
            row = conn.execute(
                f'SELECT "id", "username", "password" FROM "users" WHERE "{column}" = ?',
                (value,),
            ).fetchone()
        return User(*row) if row is not None else None

    def query_by_id(self, user_id: str) -> User | None:
        return self._query_one("id", user_id)

    def query_by_username(self, name: str) -> User | None:
        return self._query_one("username", name)


class CategoryRepository(_Repository):
    """Stores categories, kept in the order of their index."""

    def insert(self, name: str) -> str:
        """Insert a category after the last one and return its new id."""
        category_id = new_id()
        with _transaction(self._conn) as conn:
            row = conn.execute(
                'SELECT "index" FROM "category" ORDER BY "index" DESC LIMIT 1'
            ).fetchone()
            index = row[0] + 1 if row is not None else 0
            category = Category(id=category_id, index=index, name=name)
            conn.execute(
                'INSERT INTO "category" ("id", "index", "name") VALUES (?, ?, ?)',
                (category.id, category.index, category.name),
            )
        return category_id

    def delete_by_id(self, category_id: str) -> None:
        with _transaction(self._conn) as conn:
            conn.execute('DELETE FROM "category" WHERE "id" = ?', (category_id,))

    def query_all(self) -> list[Category]:
        with _transaction(self._conn) as conn:
            rows = conn.execute(
                'SELECT "id", "index", "name" FROM "category" ORDER BY "index" ASC'
            ).fetchall()
        return [Category(*row) for row in rows]

    def query_related_dishes(self, category_id: str) -> list[Dish]:
        """Return the dishes linked to a category; raise NotFoundError if it does not exist."""
        with _transaction(self._conn) as conn:
            found = conn.execute(
                'SELECT 1 FROM "category" WHERE "id" = ?', (category_id,)
            ).fetchone()
            if found is None:
                raise NotFoundError(f"category with id {category_id} does not exist")
            rows = conn.execute(
                f'SELECT {_DISH_COLUMNS} FROM "category_dish_map" m '
                'JOIN "dish" d ON d."id" = m."dish_id" '
                'WHERE m."category_id" = ? ORDER BY d."index" ASC',
                (category_id,),
            ).fetchall()
        return [Dish(*row) for row in rows]


class DishRepository(_Repository):
    """Stores dishes, numbered in the order they were added."""

    def insert(self, name: str, price: float, picture: str, created_at: str | None = None) -> str:
        """Insert an on-sale dish and return its new id."""
        dish_id = new_id()
        with _transaction(self._conn) as conn:
            (count,) = conn.execute('SELECT COUNT(*) FROM "dish"').fetchone()
            dish = Dish(
                id=dish_id,
                index=count + 1,
                name=name,
                price=float(price),
                picture=picture,
                status=DishStatus.NORMAL,
                created_at=created_at if created_at is not None else _now(),
            )
            conn.execute(
                'INSERT INTO "dish" ("id", "index", "name", "price", "picture", "status", '
                '"created_at") VALUES (?, ?, ?, ?, ?, ?, ?)',
                (
                    dish.id,
                    dish.index,
                    dish.name,
                    dish.price,
                    dish.picture,
                    dish.status.value,
                    dish.created_at,
                ),
            )
        return dish_id

    def query_all(self) -> list[Dish]:
        with _transaction(self._conn) as conn:
            rows = conn.execute(
                f'SELECT {_DISH_COLUMNS} FROM "dish" d ORDER BY d."index" ASC'
            ).fetchall()
        return [Dish(*row) for row in rows]

    def delete_by_id(self, dish_id: str) -> None:
        with _transaction(self._conn) as conn:
            conn.execute('DELETE FROM "dish" WHERE "id" = ?', (dish_id,))


class CategoryDishMapRepository(_Repository):
    """Stores the links between categories and dishes."""

    def insert(self, category_id: str, dish_id: str) -> None:
        link = CategoryDishMap(category_id=category_id, dish_id=dish_id)
        with _transaction(self._conn) as conn:
            conn.execute(
                'INSERT INTO "category_dish_map" ("category_id", "dish_id") VALUES (?, ?)',
                (link.category_id, link.dish_id),
            )

    def delete_by_category_id(self, category_id: str) -> None:
        with _transaction(self._conn) as conn:
            conn.execute(
                'DELETE FROM "category_dish_map" WHERE "category_id" = ?', (category_id,)
            )

    def delete_by_dish_id(self, dish_id: str) -> None:
        with _transaction(self._conn) as conn:
            conn.execute('DELETE FROM "category_dish_map" WHERE "dish_id" = ?', (dish_id,))
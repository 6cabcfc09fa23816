"""Records stored in the database: users, categories, dishes and their links."""

from __future__ import annotations

import secrets
import time
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

_CROCKFORD = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"


def new_id() -> str:
    """Return a new ULID: 48 bits of millisecond time and 80 random bits, in Crockford base32."""
    millis = (time.time_ns() // 1_000_000) & ((1 << 48) - 1)
    value = (millis << 80) | secrets.randbits(80)
    return "".join(_CROCKFORD[(value >> shift) & 31] for shift in range(125, -1, -5))


class DishStatus(Enum):
    """Whether a dish is on sale; the value is what the database stores."""

    NORMAL = "normal"
    DELIST = "delist"

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass
class User:
    id: str
    username: str
    password: str


@dataclass
class Category:
    id: str
    index: int
    name: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Dish:
    id: str
    index: int
    name: str
    price: float
    picture: str
    status: DishStatus
    created_at: str

    def __post_init__(self) -> None:
        if not isinstance(self.status, DishStatus):
            self.status = DishStatus(self.status)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.label
        return data


@dataclass
class CategoryDishMap:
    category_id: str
    dish_id: str
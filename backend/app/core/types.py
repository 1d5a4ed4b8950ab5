"""Custom SQLAlchemy types and the acted-by reference variant"""
from dataclasses import dataclass
from typing import Optional, Union
import uuid

from sqlalchemy import TypeDecorator, String


ADMIN_SENTINEL = "admin"


def generate_uuid():
    """Generate a UUID string"""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class AdminActor:
    """The environment-configured admin performed the action"""

    def __str__(self) -> str:
        return ADMIN_SENTINEL


@dataclass(frozen=True)
class UserActor:
    """A persisted user performed the action"""
    user_id: str

    def __str__(self) -> str:
        return self.user_id


Attribution = Union[AdminActor, UserActor]


def parse_attribution(value: Optional[str]) -> Optional[Attribution]:
    """Turn a stored acted-by string back into its variant"""
    if value is None:
        return None
    if value == ADMIN_SENTINEL:
        return AdminActor()
    return UserActor(value)


class AttributionType(TypeDecorator):
    """
    Stores an ``Attribution`` in a single VARCHAR column.

    The admin variant is written as the literal ``"admin"``; a user variant
    as the user's id. Reads always come back as the variant, never as a raw
    string, so callers branch on type instead of comparing strings.
    """
    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, AdminActor):
            return ADMIN_SENTINEL
        if isinstance(value, UserActor):
            return value.user_id
        raise TypeError(f"Expected AdminActor or UserActor, got {type(value).__name__}")

    def process_result_value(self, value, dialect):
        return parse_attribution(value)

"""Static user directory and the admin-managed admin list."""

from __future__ import annotations

import itertools
import logging
from typing import Iterable

from .errors import UserNotFoundError, ValidationError
from .models import RoleUser, UserRole

logger = logging.getLogger(__name__)

EMAIL_DOMAIN = "sefe.eu"


def _email_for(name: str) -> str:
    parts = [part.replace("-", "").lower() for part in name.split()]
    return f"{parts[0]}.{''.join(parts[1:])}@{EMAIL_DOMAIN}"


def _users(prefix: str, role: UserRole, names: Iterable[str]) -> tuple[RoleUser, ...]:
    return tuple(
        RoleUser(id=f"{prefix}-{index}", name=name, email=_email_for(name), role=role)
        for index, name in enumerate(names, start=1)
    )


PRODUCT_CONTROLLERS = _users(
    "pc",
    UserRole.PRODUCT_CONTROLLER,
    [
        "Emma Wilson",
        "Tom Harris",
        "Veronika Yastrebova",
        "Stefanie Shi",
        "James Thomas",
        "Kelly Lim",
        "Ruslan Markov",
    ],
)

TRADERS = _users(
    "tr",
    UserRole.TRADER,
    [
        "John Smith",
        "Sarah Johnson",
        "David Brown",
        "Lisa Anderson",
        "James Wilson",
        "Amy Davis",
        "Peter Jones",
        "Rachel Green",
        "Erik Svensson",
        "Anna Berg",
        "Hans Mueller",
        "Klaus Weber",
        "Robert Allan",
        "Alexander Welch",
        "Andrey Selikhov",
        "Deepesh Patel",
        "Paul Smith",
    ],
)

DESK_HEADS = _users(
    "dh",
    UserRole.DESK_HEAD,
    ["Michael Chen", "Robert Taylor", "Chris Martin", "Karoly Schmidt"],
)

DEFAULT_ADMINS = _users("admin", UserRole.ADMIN, ["Olivia Grant"])


class UserDirectory:
    """Lookup over the role lists.

    Product controllers, desk heads and traders are fixed for the life of the
    process. Admins are held per instance and changed only through
    :meth:`add_admin` and :meth:`remove_admin`.
    """

    def __init__(
        self,
        *,
        product_controllers: Iterable[RoleUser] = PRODUCT_CONTROLLERS,
        traders: Iterable[RoleUser] = TRADERS,
        desk_heads: Iterable[RoleUser] = DESK_HEADS,
        admins: Iterable[RoleUser] = DEFAULT_ADMINS,
    ):
        self.product_controllers = tuple(product_controllers)
        self.traders = tuple(traders)
        self.desk_heads = tuple(desk_heads)
        self._admins = list(admins)
        self._admin_ids = itertools.count(len(self._admins) + 1)

    @property
    def admins(self) -> tuple[RoleUser, ...]:
        return tuple(self._admins)

    def _login_order(self) -> Iterable[RoleUser]:
        return itertools.chain(self.product_controllers, self.desk_heads, self.traders, self._admins)

    def find_by_email(self, email: str) -> RoleUser:
        normalized = email.strip().lower()
        for user in self._login_order():
            if user.email.lower() == normalized:
                return user
        raise UserNotFoundError("No user found with this email address.")

    def find_by_name(self, name: str, role: UserRole | None = None) -> RoleUser | None:
        for user in self._login_order():
            if user.name == name and (role is None or user.role == role):
                return user
        return None

    def names_for(self, role: UserRole) -> list[str]:
        return [user.name for user in self.all_users(role=role)]

    def all_users(self, search: str | None = None, role: UserRole | None = None) -> list[RoleUser]:
        users = itertools.chain(self._admins, self.product_controllers, self.traders, self.desk_heads)
        needle = (search or "").strip().lower()
        return [
            user
            for user in users
            if (role is None or user.role == role)
            and (not needle or needle in user.name.lower() or needle in user.email.lower())
        ]

    def add_admin(self, name: str, email: str) -> RoleUser:
        name = (name or "").strip()
        email = (email or "").strip()
        if not name or not email:
            raise ValidationError("Please fill in all fields")
        if any(admin.email.lower() == email.lower() for admin in self._admins):
            raise ValidationError("User is already an admin")
        admin = RoleUser(id=f"admin-{next(self._admin_ids)}", name=name, email=email, role=UserRole.ADMIN)
        self._admins.append(admin)
        logger.info("%s added as admin", admin.name)
        return admin

    def remove_admin(self, admin_id: str) -> RoleUser:
        for index, admin in enumerate(self._admins):
            if admin.id == admin_id:
                del self._admins[index]
                logger.info("%s removed from admins", admin.name)
                return admin
        raise UserNotFoundError(f"Admin {admin_id} not found")


__all__ = [
    "DEFAULT_ADMINS",
    "DESK_HEADS",
    "EMAIL_DOMAIN",
    "PRODUCT_CONTROLLERS",
    "TRADERS",
    "UserDirectory",
]

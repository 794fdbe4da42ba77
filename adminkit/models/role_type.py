"""Role type enumeration for admin users."""

from __future__ import annotations

from enum import IntEnum

from adminkit.i18n import translations

TITLE_SCOPE = ["manage", "role", "kind"]


class RoleType(IntEnum):
    """Closed set of admin role kinds.

    Integer values are the ids stored by hosts in their role_type_id
    columns; ``code`` is the symbolic name used for translation lookups.
    """

    DEFAULT = 1
    REDACTOR = 2
    MODERATOR = 3
    ADMIN = 4

    @property
    def code(self) -> str:
        return self.name.lower()

    @property
    def title(self) -> str:
        """Human-readable label in the current language."""
        return translations.t(self.code, scope=TITLE_SCOPE)

    @classmethod
    def all(cls) -> list[RoleType]:
        return sorted(cls, key=lambda role: role.value)

    @classmethod
    def legal(cls, value: object) -> bool:
        """Check whether ``value`` is one of the declared role ids."""
        if isinstance(value, bool):
            return False
        return value in {role.value for role in cls}

    @classmethod
    def from_code(cls, code: str) -> RoleType | None:
        return next((role for role in cls if role.code == str(code).lower()), None)

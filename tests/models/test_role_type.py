"""Tests for RoleType."""

import pytest

from adminkit.i18n import translations
from adminkit.models.role_type import RoleType


@pytest.fixture(autouse=True)
def english():
    translations.set_language("en")
    yield
    translations.set_language("en")


class TestRoleType:
    """Tests for the role type enumeration."""

    def test_ids(self):
        assert [role.value for role in RoleType.all()] == [1, 2, 3, 4]
        assert RoleType.ADMIN == 4

    def test_codes(self):
        assert [role.code for role in RoleType.all()] == [
            "default",
            "redactor",
            "moderator",
            "admin",
        ]

    @pytest.mark.parametrize("value", [1, 2, 3, 4, RoleType.MODERATOR])
    def test_legal_ids(self, value):
        assert RoleType.legal(value) is True

    @pytest.mark.parametrize("value", [0, 5, -1, "1", None, 2.5, True])
    def test_illegal_ids(self, value):
        assert RoleType.legal(value) is False

    def test_title_english(self):
        assert RoleType.DEFAULT.title == "User"
        assert RoleType.ADMIN.title == "Administrator"

    def test_title_russian(self):
        translations.set_language("ru")

        assert RoleType.REDACTOR.title == "Редактор"
        assert RoleType.ADMIN.title == "Администратор"

    def test_from_code(self):
        assert RoleType.from_code("moderator") is RoleType.MODERATOR
        assert RoleType.from_code("ADMIN") is RoleType.ADMIN
        assert RoleType.from_code("owner") is None

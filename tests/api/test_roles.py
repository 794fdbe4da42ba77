"""Tests for role type API endpoint."""

from flask.testing import FlaskClient

from adminkit.i18n import translations


class TestListRoles:
    """Tests for GET /api/roles."""

    def test_list_roles(self, client: FlaskClient):
        response = client.get("/api/roles")

        assert response.status_code == 200
        data = response.get_json()
        assert data["count"] == 4
        assert [role["id"] for role in data["roles"]] == [1, 2, 3, 4]
        assert data["roles"][3] == {"id": 4, "code": "admin", "title": "Administrator"}

    def test_titles_follow_language(self, client: FlaskClient):
        translations.set_language("ru")

        response = client.get("/api/roles")

        titles = [role["title"] for role in response.get_json()["roles"]]
        assert titles == ["Пользователь", "Редактор", "Модератор", "Администратор"]

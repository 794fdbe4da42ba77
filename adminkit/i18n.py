"""Translation catalogue for admin UI labels.

Usage
-----
from adminkit.i18n import translations
translations.t("manage.role.kind.admin")
"""

import logging

logger = logging.getLogger(__name__)

_CATALOGUE: dict[str, dict[str, str]] = {
    "en": {
        "manage.role.kind.default": "User",
        "manage.role.kind.redactor": "Redactor",
        "manage.role.kind.moderator": "Moderator",
        "manage.role.kind.admin": "Administrator",
    },
    "ru": {
        "manage.role.kind.default": "Пользователь",
        "manage.role.kind.redactor": "Редактор",
        "manage.role.kind.moderator": "Модератор",
        "manage.role.kind.admin": "Администратор",
    },
}


class Translations:
    """Holds translated strings and the current language."""

    def __init__(self, default_lang: str = "en") -> None:
        self.supported = {lang: dict(entries) for lang, entries in _CATALOGUE.items()}
        self.default_lang = default_lang
        self.lang = default_lang
        self._missing_keys_logged: set[tuple[str, str]] = set()

    def set_language(self, lang: str) -> None:
        if lang in self.supported:
            self.lang = lang
        else:
            logger.warning("Unsupported language %s, keeping %s", lang, self.lang)

    def t(self, key: str, scope: list[str] | None = None) -> str:
        """Return the localized string for ``key``.

        ``scope`` is prepended to the key (``["manage", "role"]`` + ``"kind"``
        looks up ``manage.role.kind``). Missing keys fall back to the default
        language, then to the full key itself.
        """
        full_key = ".".join([*(scope or []), key])

        value = self.supported.get(self.lang, {}).get(full_key)
        if value is None:
            value = self.supported.get(self.default_lang, {}).get(full_key)
        if value is not None:
            return value

        if (self.lang, full_key) not in self._missing_keys_logged:
            logger.debug("Missing translation key %s (lang=%s)", full_key, self.lang)
            self._missing_keys_logged.add((self.lang, full_key))

        return full_key


translations = Translations()

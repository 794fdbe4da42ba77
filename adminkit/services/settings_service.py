"""Settings service for cached, target-scoped key-value storage."""

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from types import MappingProxyType
from typing import Any

from sqlalchemy import ColumnElement, Select, delete, select
from sqlalchemy.orm import Session

from adminkit.config import Settings
from adminkit.exceptions import (
    InvalidSettingValueException,
    SettingNotFoundException,
    SettingTypeMismatchException,
)
from adminkit.models.setting import Setting
from adminkit.services.settings_cache import (
    NullCache,
    SettingsCache,
    build_settings_cache,
)
from adminkit.utils.settings_metrics import record_cache_lookup

logger = logging.getLogger(__name__)

CACHE_KEY_SEPARATOR = "::"


@dataclass(frozen=True)
class CacheOptions:
    """Options applied to every cache read and write of a store."""

    expires_in: timedelta | None = timedelta(days=1)


@dataclass(frozen=True)
class SettingsStoreConfig:
    """Configuration shared by every store built from it.

    Defaults are copied on construction and exposed read-only, so they stay
    fixed for the lifetime of the config.
    """

    defaults: Mapping[str, Any] = field(default_factory=dict)
    cache: SettingsCache = field(default_factory=NullCache)
    cache_options: CacheOptions = field(default_factory=CacheOptions)

    def __post_init__(self) -> None:
        frozen = MappingProxyType({str(k): v for k, v in self.defaults.items()})
        object.__setattr__(self, "defaults", frozen)

    @classmethod
    def from_settings(cls, settings: Settings) -> "SettingsStoreConfig":
        """Build the store configuration from application settings."""
        expires_in = None
        if settings.settings_cache_expires_in > 0:
            expires_in = timedelta(seconds=settings.settings_cache_expires_in)

        return cls(
            defaults=settings.settings_defaults,
            cache=build_settings_cache(
                settings.settings_cache_backend,
                redis_url=settings.redis_url,
                key_prefix=settings.settings_cache_prefix,
            ),
            cache_options=CacheOptions(expires_in=expires_in),
        )


class SettingsService:
    """Service for named settings scoped to an optional target.

    A target is a (target_type, target_id) pair such as ("User", 42); the
    global scope has neither. Reads go through the cache and fall back to the
    database, then to the configured defaults. Unknown names never raise on
    read, they resolve to the default (or None).

    Settings can also be accessed by indexing: ``store["theme"]``,
    ``store["theme"] = "dark"`` and ``del store["theme"]``.
    """

    def __init__(
        self,
        db: Session,
        config: SettingsStoreConfig,
        target_type: str | None = None,
        target_id: int | None = None,
    ) -> None:
        """Initialize settings service.

        Args:
            db: SQLAlchemy database session
            config: Defaults, cache and cache options shared between stores
            target_type: Owning entity type, or None for global settings
            target_id: Owning entity id, or None for global settings
        """
        self.db = db
        self.config = config
        self._target_type = target_type
        self._target_id = target_id

    @property
    def target_type(self) -> str | None:
        return self._target_type

    @property
    def target_id(self) -> int | None:
        return self._target_id

    @property
    def defaults(self) -> Mapping[str, Any]:
        return self.config.defaults

    @property
    def cache(self) -> SettingsCache:
        return self.config.cache

    def for_target(self, target_type: str | None, target_id: int | None) -> "SettingsService":
        """Return a store over the same session and config scoped to a target."""
        return SettingsService(
            self.db, self.config, target_type=target_type, target_id=target_id
        )

    def for_record(self, record: Any) -> "SettingsService":
        """Return a store scoped to an ORM record, keyed by its class name and id."""
        return self.for_target(type(record).__name__, record.id)

    def cache_key(self, var_name: str) -> str:
        """Compute the cache key for a setting in this store's scope."""
        parts = [self.target_id, self.target_type, var_name]
        return CACHE_KEY_SEPARATOR.join(str(part) for part in parts if part is not None)

    def get(self, var_name: str) -> Any:
        """Get a setting value.

        Args:
            var_name: Setting name

        Returns:
            Stored value, else the default for the name, else None
        """
        var_name = str(var_name)
        missed = False

        def load() -> Any:
            nonlocal missed
            missed = True
            record = self._find(var_name)
            if record is not None:
                return record.value
            return copy.deepcopy(self.defaults.get(var_name))

        value = self.cache.fetch(
            self.cache_key(var_name), load, self.config.cache_options.expires_in
        )
        record_cache_lookup(hit=not missed)
        logger.debug(
            "Settings cache %s for %s", "miss" if missed else "hit", self.cache_key(var_name)
        )
        return value

    def set(self, var_name: str, value: Any) -> Any:
        """Set a setting value.

        Creates the record if it doesn't exist, updates it if it does, then
        writes the value to the cache.

        Args:
            var_name: Setting name
            value: JSON-serializable value

        Returns:
            The written value

        Raises:
            ValidationException: If the name or value is rejected by the model
        """
        var_name = str(var_name)
        record = self._find(var_name)

        if record is None:
            record = Setting(
                target_type=self.target_type,
                target_id=self.target_id,
                var=var_name,
            )
            record.value = value
            self.db.add(record)
            logger.debug("Created setting %s", self.cache_key(var_name))
        else:
            record.value = value
            logger.debug("Updated setting %s", self.cache_key(var_name))

        self.db.flush()

        self.cache.write(
            self.cache_key(var_name), value, self.config.cache_options.expires_in
        )
        return value

    def merge(self, var_name: str, partial: Mapping[str, Any]) -> dict[str, Any]:
        """Shallow-merge ``partial`` into a mapping-valued setting.

        The merged mapping is only written when it differs from the current
        value.

        Returns:
            The merged mapping

        Raises:
            InvalidSettingValueException: If ``partial`` is not a mapping
            SettingTypeMismatchException: If the current value is not a mapping
        """
        var_name = str(var_name)
        if not isinstance(partial, Mapping):
            raise InvalidSettingValueException(var_name, partial)

        current = self.get(var_name)
        if current is None:
            current = {}
        if not isinstance(current, Mapping):
            raise SettingTypeMismatchException(var_name, current)

        merged = {**current, **partial}
        if merged != current:
            self.set(var_name, merged)

        return merged

    def destroy(self, var_name: str) -> bool:
        """Delete a setting record and evict it from the cache.

        Raises:
            SettingNotFoundException: If no record exists in this scope
        """
        var_name = str(var_name)
        record = self._find(var_name)

        if record is None:
            raise SettingNotFoundException(var_name)

        self.db.delete(record)
        self.db.flush()
        self.cache.delete(self.cache_key(var_name))
        logger.debug("Deleted setting %s", self.cache_key(var_name))
        return True

    def all(self, prefix: str | None = None) -> dict[str, Any]:
        """Get all settings in scope merged over the defaults.

        Args:
            prefix: Only include names starting with this prefix

        Returns:
            Mapping of setting name to value, stored values taking precedence
        """
        result = {
            name: copy.deepcopy(value)
            for name, value in self.defaults.items()
            if prefix is None or name.startswith(prefix)
        }

        stmt = self._scoped_query()
        if prefix:
            stmt = stmt.where(Setting.var.startswith(prefix, autoescape=True))

        for record in self.db.scalars(stmt.order_by(Setting.var)):
            # LIKE is case-insensitive on some databases
            if prefix and not record.var.startswith(prefix):
                continue
            result[record.var] = record.value

        return result

    def update(self, attributes: Mapping[str, Any]) -> None:
        """Set every setting in ``attributes``, then clear the whole cache.

        The cache is cleared even when a write fails part way through.
        """
        try:
            for var_name, value in attributes.items():
                self.set(var_name, value)
        finally:
            self.cache.clear()

        logger.debug("Updated %d settings and cleared settings cache", len(attributes))

    def delete_all(self, *criteria: ColumnElement[bool]) -> int:
        """Clear the cache and delete records in scope matching ``criteria``.

        With no criteria every record in this store's scope is deleted.

        Returns:
            Number of deleted records
        """
        self.cache.clear()

        stmt = delete(Setting).where(*self._scope_criteria(), *criteria)
        result = self.db.execute(stmt)
        self.db.flush()

        deleted = int(result.rowcount or 0)  # type: ignore[attr-defined]
        logger.debug(
            "Deleted %d settings for target %s/%s", deleted, self.target_type, self.target_id
        )
        return deleted

    def __getitem__(self, var_name: str) -> Any:
        return self.get(var_name)

    def __setitem__(self, var_name: str, value: Any) -> None:
        self.set(var_name, value)

    def __delitem__(self, var_name: str) -> None:
        self.destroy(var_name)

    def __contains__(self, var_name: object) -> bool:
        name = str(var_name)
        return name in self.defaults or self._find(name) is not None

    def _scope_criteria(self) -> list[ColumnElement[bool]]:
        # Comparing a column with None renders IS NULL
        return [
            Setting.target_type == self.target_type,
            Setting.target_id == self.target_id,
        ]

    def _scoped_query(self) -> Select[tuple[Setting]]:
        return select(Setting).where(*self._scope_criteria())

    def _find(self, var_name: str) -> Setting | None:
        stmt = self._scoped_query().where(Setting.var == var_name)
        return self.db.scalars(stmt).first()

"""Dependency injection container for services."""

from dependency_injector import containers, providers
from sqlalchemy.orm import sessionmaker

from adminkit.config import Settings
from adminkit.services.settings_service import SettingsService, SettingsStoreConfig


class ServiceContainer(containers.DeclarativeContainer):
    """Container for service dependency injection."""

    # Configuration providers
    config = providers.Dependency(instance_of=Settings)
    session_maker = providers.Dependency(instance_of=sessionmaker)
    db_session = providers.ContextLocalSingleton(
        session_maker.provided.call()
    )

    # Settings store configuration - Singleton so defaults and cache are shared
    settings_store_config = providers.Singleton(
        SettingsStoreConfig.from_settings,
        settings=config,
    )

    # SettingsService - Factory creates new instance per request with database session.
    # Pass target_type/target_id when calling the provider for a scoped store.
    settings_service = providers.Factory(
        SettingsService,
        db=db_session,
        config=settings_store_config,
    )

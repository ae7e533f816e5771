"""Configuration DI providers."""

from dishka import Scope, provide

from passage.config import AuthSettings, DatabaseSettings, Settings
from passage.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings and their sections, loaded once per container."""

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Load settings from the environment and `.env`."""
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def provide_database_settings(self, settings: Settings) -> DatabaseSettings:
        return settings.database

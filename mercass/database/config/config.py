from functools import lru_cache
from typing import Dict, Optional, Union

from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Application configuration settings loaded from environment variables
    or a `.env` file. Read once at startup and frozen afterwards; every
    component receives the same instance through `app.state.settings`.
    """

    PORT: int = 3000
    """Port the HTTP server listens on."""

    HOST: str = "0.0.0.0"
    """Interface the HTTP server binds to."""

    EXT: str = ".html"
    """File extension of the view templates (e.g. `.html`, `.jinja`)."""

    AUTHSERVER: str = "http://localhost:4000"
    """Base URL of the external authentication service."""

    AUTH_TIMEOUT: float = 10.0
    """Seconds to wait for the authentication service before giving up."""

    COOKIE_SECURE: bool = False
    """Send the `Auth` cookie over HTTPS only."""

    FE_CDN_LINK: str = "http://localhost:3000/wwwroot/uploads/"
    """CDN base prepended to every uploaded file path."""

    FE_SITE_NAME: str = "Mercass"
    """Site title exposed to the templates."""

    FE_SUPPORT_EMAIL: str = ""
    """Support address exposed to the templates."""

    FE_DEFAULT_LANGUAGE: str = "tr"
    """Default UI language exposed to the templates."""

    UPLOAD_ROOT: str = "wwwroot/uploads"
    """Local directory backing the file store."""

    DB_DRIVER_NAME: str = "mssql+pyodbc"
    """SQLAlchemy dialect+driver of the store."""

    DB_USERNAME: str = ""
    """Database username credential."""

    DB_PASSWORD: str = ""
    """Database password credential."""

    DB_HOST: str = "localhost"
    """Hostname or IP address of the database server."""

    DB_PORT: Optional[int] = None
    """Port of the database server, driver default when unset."""

    DB_DATABASE_NAME: str = "Mercass"
    """Name of the application's database."""

    DB_ODBC_DRIVER: str = "ODBC Driver 18 for SQL Server"
    """ODBC driver name passed to pyodbc."""

    DB_POOL_SIZE: int = 10
    """Connections kept open in the shared pool."""

    DATABASE_URL: Optional[str] = None
    """Full SQLAlchemy URL; overrides the `DB_*` fields when set."""

    IYZICO_API_KEY: str = ""
    """iyzico API key."""

    IYZICO_SECRET_KEY: str = ""
    """iyzico secret key."""

    IYZICO_BASE_URL: str = "sandbox-api.iyzipay.com"
    """iyzico API host."""

    LOG_LEVEL: str = "INFO"
    """Root logger level."""

    LOG_DIR: str = "logs"
    """Directory of the rotating log file."""

    class Config:
        """
        Configuration for Pydantic settings. Loads values from `.env` file by default.
        """
        env_file = ".env"
        frozen = True

    def database_url(self) -> Union[str, URL]:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        query = {}
        if self.DB_DRIVER_NAME.endswith("pyodbc"):
            query = {"driver": self.DB_ODBC_DRIVER, "TrustServerCertificate": "yes"}
        return URL.create(
            self.DB_DRIVER_NAME,
            username=self.DB_USERNAME or None,
            password=self.DB_PASSWORD or None,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_DATABASE_NAME,
            query=query,
        )

    def front_end_params(self, prefix: str = "FE") -> Dict[str, str]:
        """Settings shared with the browser, keyed without their prefix."""
        marker = prefix + "_"
        return {
            name[len(marker):]: getattr(self, name)
            for name in type(self).model_fields
            if name.startswith(marker)
        }


@lru_cache
def get_settings() -> Settings:
    return Settings()

"""
Configuration settings for Tasky.
"""
import os
from typing import Optional
from urllib.parse import quote_plus

from dotenv import load_dotenv

from .. import __version__

# Load .env only outside production
if os.getenv("APP_ENV", "dev").lower() != "prod":
    load_dotenv()


class Settings:
    """Application settings"""

    service_version: str = __version__

    def __init__(self):
        self.app_port: int = int(os.getenv("APP_PORT", "8000"))
        self.debug: bool = os.getenv("DEBUG", "False").lower() == "true"
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")

        # API configuration
        self.api_prefix: str = os.getenv("API_PREFIX", "/api/v1")
        self.default_page: int = int(os.getenv("DEFAULT_PAGE", "1"))
        self.default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
        self.max_page_size: int = int(os.getenv("MAX_PAGE_SIZE", "30"))

        # MongoDB configuration
        self.mongo_username: str = os.getenv("MONGO_USERNAME", "")
        self.mongo_password: str = os.getenv("MONGO_PASSWORD", "")
        self.mongo_host: str = os.getenv("MONGO_HOST", "localhost")
        self.mongo_port: int = int(os.getenv("MONGO_PORT", "27017"))
        self.mongo_dbname: str = os.getenv("MONGO_DBNAME", "tasky")
        self.mongo_uri_override: Optional[str] = os.getenv("MONGO_URI") or None
        self.mongo_init_collections: bool = (
            os.getenv("MONGO_INIT_COLLECTIONS", "False").lower() == "true"
        )

        # Store call deadlines, in seconds
        self.connect_timeout: float = float(os.getenv("CONNECT_TIMEOUT", "10"))
        self.request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "10"))
        self.readiness_timeout: float = float(os.getenv("READINESS_TIMEOUT", "2"))

    @property
    def mongo_uri(self) -> str:
        """Connection string for the document store"""
        if self.mongo_uri_override:
            return self.mongo_uri_override

        credentials = ""
        if self.mongo_username:
            credentials = f"{quote_plus(self.mongo_username)}:{quote_plus(self.mongo_password)}@"

        return (
            f"mongodb://{credentials}{self.mongo_host}:{self.mongo_port}"
            f"/{self.mongo_dbname}?authSource=admin"
        )


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get settings instance."""
    return settings

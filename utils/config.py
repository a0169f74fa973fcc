"""
Configuration management.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path


def _split_origins(value: str) -> list:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass
class Config:
    """
    Application configuration.

    Loads from environment variables with sensible defaults.
    """

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    production: bool = field(
        default_factory=lambda: os.getenv("RAILWAY_ENVIRONMENT") is not None
        or os.getenv("PRODUCTION", "").lower() == "true"
    )
    allowed_origins: list = field(
        default_factory=lambda: _split_origins(os.getenv("ALLOWED_ORIGINS", ""))
    )

    # Data
    data_dir: str = field(default_factory=lambda: os.getenv("DATA_DIR", "./data"))
    listings_file: str = field(default_factory=lambda: os.getenv("LISTINGS_FILE", "listings.json"))

    # Search
    default_page_size: int = field(
        default_factory=lambda: int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
    )
    max_page_size: int = field(default_factory=lambda: int(os.getenv("MAX_PAGE_SIZE", "100")))
    nearby_radius_km: float = field(
        default_factory=lambda: float(os.getenv("NEARBY_RADIUS_KM", "200"))
    )

    def __post_init__(self):
        # Debug mode is never enabled in production
        if self.production:
            self.debug = False
        if self.default_page_size < 1 or self.max_page_size < self.default_page_size:
            raise ValueError("page sizes must satisfy 1 <= default <= max")

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment."""
        return cls()

    @property
    def listings_path(self) -> str:
        """Full path of the listings persistence file."""
        return str(Path(self.data_dir) / self.listings_file)

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "production": self.production,
            "allowed_origins": list(self.allowed_origins),
            "data_dir": self.data_dir,
            "listings_file": self.listings_file,
            "default_page_size": self.default_page_size,
            "max_page_size": self.max_page_size,
            "nearby_radius_km": self.nearby_radius_km,
        }


# =============================================================================
# Singleton Instance
# =============================================================================

_config_instance = None


def get_config() -> Config:
    """Get the process-wide configuration, loading it on first use."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config.load()
    return _config_instance

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Snapshot bundled with the package
DEFAULT_DATA_DIR = Path(__file__).parent / "data" / "english"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="FABCARDS_")

    app_name: str = "fabcards"
    debug: bool = False

    data_dir: Path = DEFAULT_DATA_DIR

    # Comma-separated list, "*" allows any origin
    cors_origins: str = "*"

    upstream_data_url: str = (
        "https://raw.githubusercontent.com/the-fab-cube/flesh-and-blood-cards/develop/json/english"
    )

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()


# =============================================================================
# PAGINATION LIMITS
# =============================================================================

# REST card listing
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100

# Tool invocations return summaries, so they page smaller
TOOL_DEFAULT_LIMIT = 20
TOOL_MAX_LIMIT = 50

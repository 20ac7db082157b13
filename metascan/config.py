from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_prefix="METASCAN_", env_file=".env")

    debug: bool = False

    # Comma-separated format patterns (case-insensitive substring match)
    formats: str = "Standard,Modern,Pioneer,Legacy"

    top_n: int = 5000
    search_limit: int = 20

    # Recency weighting (days)
    half_life: float = 45.0
    max_age: int = 1825

    data_dir: Path = Path("./data")
    data_repo: str = "https://github.com/barrins-project/mtg_decklist_cache.git"

    cache_dir: Path = Path.home() / ".cache" / "metascan"
    face_cache_max_age_days: int = 7
    scryfall_bulk_type: str = "all_cards"
    user_agent: str = "metascan/1.0"

    # 0 lets the executor pick (os.cpu_count())
    workers: int = 0


settings = Settings()


# =============================================================================
# FACE RESOLVER
# =============================================================================

SCRYFALL_BULK_API = "https://api.scryfall.com/bulk-data"

FACE_CACHE_FILENAME = "all-cards.json"

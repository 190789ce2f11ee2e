"""Runtime settings for the peak-finder server."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PEAK_FINDER_")

    # Overpass mirrors, tried in order until one answers
    overpass_endpoints: list[str] = Field(
        default_factory=lambda: [
            "https://overpass-api.de/api/interpreter",
            "https://overpass.kumi.systems/api/interpreter",
            "https://overpass.openstreetmap.ru/api/interpreter",
        ],
        min_length=1,
    )
    overpass_timeout_s: float = Field(default=30.0, gt=0)   # client side, per endpoint
    overpass_query_timeout_s: int = Field(default=25, gt=0)  # server side [timeout:N]

    search_radius_m: int = Field(default=50_000, gt=0)
    max_results: int = Field(default=30, gt=0)

    user_agent: str = "peak-finder/1.0"
    http_timeout_s: float = Field(default=10.0, gt=0)
    nominatim_url: str = "https://nominatim.openstreetmap.org"
    wikipedia_search_lang: str = "en"

    share_base_url: str = "mountain-details.html"
    log_level: str = "INFO"


settings = Settings()

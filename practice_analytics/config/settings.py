from pydantic_settings import BaseSettings

from practice_analytics.models.enums import Location, Timeframe


class Settings(BaseSettings):
    supabase_url: str = ""
    supabase_key: str = ""
    reference_timeout_seconds: float = 5.0
    default_timeframe: Timeframe = Timeframe.LAST_90_DAYS
    default_location: Location = Location.AGGREGATE
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    class Config:
        env_file = ".env"

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url.strip() and self.supabase_key.strip())

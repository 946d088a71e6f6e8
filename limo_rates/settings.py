from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

# Origins allowed when ALLOWED_ORIGINS is unset
DEFAULT_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
    "http://127.0.0.1:5173",
]


class Settings(BaseSettings):
    debounce_ms: int = Field(default=100, alias="LIMO_RATES_DEBOUNCE_MS")
    log_level: str = Field(default="INFO", alias="LIMO_RATES_LOG_LEVEL")
    # Comma separated; "*" allows any origin
    allowed_origins: str = Field(default="", alias="ALLOWED_ORIGINS")

    model_config = {"env_file": ".env", "extra": "ignore", "populate_by_name": True}

    @property
    def debounce_seconds(self) -> float:
        return max(self.debounce_ms, 0) / 1000

    @property
    def origins(self) -> list[str]:
        origins = [o.strip() for o in self.allowed_origins.split(",") if o.strip()]
        if "*" in origins:
            return ["*"]
        return origins or list(DEFAULT_ORIGINS)

    @property
    def allow_all_origins(self) -> bool:
        return self.origins == ["*"]


settings = Settings()

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "RESIZER_"


def _env(name: str, default: str) -> str:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


class Settings(BaseModel):
    """Service settings, read from the environment (and ``.env``)."""

    storage_dir: str = "./storage"
    default_width: int = Field(600, gt=0)
    default_height: int = Field(800, gt=0)
    max_dimension: int = Field(10000, gt=0)
    jpeg_quality: int = Field(75, ge=1, le=95)
    keep_originals: bool = True
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    host: str = "127.0.0.1"
    port: int = Field(8000, gt=0, lt=65536)
    log_level: str = "INFO"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        return v.upper()

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()  # Load environment variables from a .env file
        return cls.model_validate(
            {
                "storage_dir": _env("STORAGE_DIR", "./storage"),
                "default_width": _env("DEFAULT_WIDTH", "600"),
                "default_height": _env("DEFAULT_HEIGHT", "800"),
                "max_dimension": _env("MAX_DIMENSION", "10000"),
                "jpeg_quality": _env("JPEG_QUALITY", "75"),
                "keep_originals": _env("KEEP_ORIGINALS", "true"),
                "cors_origins": _env("CORS_ORIGINS", "*"),
                "host": _env("HOST", "127.0.0.1"),
                "port": _env("PORT", "8000"),
                "log_level": _env("LOG_LEVEL", "INFO"),
            }
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()

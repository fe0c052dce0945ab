import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./cashlens.db")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Cache de categorias (nome/ID)
    CATEGORY_CACHE_ENABLED: bool = _env_flag("CATEGORY_CACHE_ENABLED", True)

    # Cache de hierarquia (descendentes)
    CATEGORY_HIERARCHY_CACHE_MAXSIZE: int = int(
        os.getenv("CATEGORY_HIERARCHY_CACHE_MAXSIZE", "1000")
    )
    CATEGORY_HIERARCHY_CACHE_TTL: int = int(
        os.getenv("CATEGORY_HIERARCHY_CACHE_TTL", "3600")
    )


settings = Settings()

import os

from middleware.errors import ConfigurationError


def env_bool(key, default=False):
    return os.getenv(key, str(default)).lower() in ("1", "true", "yes", "on")


def env_int(key, default):
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(
            f"{key} must be an integer",
            details={"key": key, "value": raw},
        )


def env_list(key, default=""):
    raw = os.getenv(key, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_settings() -> dict:
    """Collect the Flask config mapping from the environment."""
    return {
        "DB_NAME": os.getenv("DB_NAME", "country_db").strip(),
        "COUNTRIES_COLLECTION": os.getenv("COUNTRIES_COLLECTION", "countries").strip(),
        "MONGO_TIMEOUT_MS": env_int("MONGO_TIMEOUT_MS", 5000),
        "DB_BOOTSTRAP_INDEXES": env_bool("DB_BOOTSTRAP_INDEXES", True),
        "CORS_ORIGINS": env_list("CORS_ORIGINS", "*"),
        "HOST": os.getenv("HOST", "0.0.0.0"),
        "PORT": env_int("PORT", 5000),
        "DEBUG": env_bool("FLASK_DEBUG"),
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO").upper(),
    }

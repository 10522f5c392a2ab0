"""Django settings for the weather batch pipeline."""
from __future__ import annotations

from pathlib import Path
import os

from django.core.exceptions import ImproperlyConfigured

BASE_DIR = Path(__file__).resolve().parent.parent


def env(name: str, default: str | None = None) -> str:
    """Fetch environment variables while allowing explicit defaults."""

    value = os.environ.get(name, default)
    if value is None:
        raise ImproperlyConfigured(f"Environment variable {name} is required")
    return value


SECRET_KEY = env("DJANGO_SECRET_KEY")
DEBUG = os.environ.get("DJANGO_DEBUG", "0") == "1"
ALLOWED_HOSTS: list[str] = []

INSTALLED_APPS = [
    "weatherbatch.jobs",
]

# The processor rejects an empty key, so the batch reports it as a single error record.
OPENWEATHERMAP_API_KEY = env("OPENWEATHERMAP_API_KEY", "")
OPENWEATHERMAP_BASE_URL = env(
    "OPENWEATHERMAP_BASE_URL", "https://api.openweathermap.org/data/2.5/weather"
)
WEATHER_REQUEST_TIMEOUT = float(env("WEATHER_REQUEST_TIMEOUT", "10"))
WEATHER_LOG_LEVEL = env("WEATHER_LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        # stdout carries the JSON results of the batch command
        "console": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "formatter": "plain",
        },
    },
    "loggers": {
        "weatherbatch": {
            "handlers": ["console"],
            "level": WEATHER_LOG_LEVEL,
        },
    },
}

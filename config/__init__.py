import importlib
import os

from .config import Settings


def get_settings_module() -> str:
    # APP_ENV selects the settings module, default 'development'
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def load_settings(module_name: str | None = None) -> Settings:
    """Build the immutable Settings object from a settings module."""

    module = importlib.import_module(module_name or get_settings_module())
    return Settings.from_module(module)

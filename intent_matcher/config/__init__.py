"""Configuration: settings model, env loading and logging setup."""

from intent_matcher.config.env import get_settings, load_env
from intent_matcher.config.logging_setup import configure_logging
from intent_matcher.config.settings import DEFAULT_INTENTS, Settings

__all__ = ["DEFAULT_INTENTS", "Settings", "configure_logging", "get_settings", "load_env"]

"""Load and validate environment variables. Single source for env handling."""
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load .env from project root (parent of intent_matcher/)
_root = Path(__file__).resolve().parent.parent.parent
load_dotenv(_root / ".env")


def _get(key: str, default: str = "") -> str:
    """Get config: Streamlit secrets (deployed) then env vars (local)."""
    try:
        import streamlit as st
        if hasattr(st, "secrets") and st.secrets and key in st.secrets:
            return str(st.secrets.get(key, default))
    except Exception:
        # No secrets.toml outside a deployed Streamlit app
        pass
    return os.getenv(key, default)


def _get_float(key: str, default: float) -> float:
    raw = _get(key, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not a number), using %s", key, raw, default)
        return default


def _get_int(key: str, default: int) -> int:
    raw = _get(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not an integer), using %s", key, raw, default)
        return default


def load_env() -> None:
    """Ensure .env is loaded. Call at app startup."""
    load_dotenv(_root / ".env")


def get_settings() -> "Settings":
    """Return validated settings. Uses Streamlit secrets when deployed, else env / .env."""
    from intent_matcher.config.settings import DEFAULT_MIN_MARGIN, DEFAULT_THRESHOLD, Settings

    intents_path = _get("INTENTS_PATH", "").strip()
    if intents_path:
        p = Path(intents_path)
        if not p.is_absolute():
            p = _root / p
        intents_path = str(p)

    return Settings(
        threshold=_get_float("INTENT_THRESHOLD", DEFAULT_THRESHOLD),
        min_margin=_get_float("INTENT_MIN_MARGIN", DEFAULT_MIN_MARGIN),
        strategy=_get("INTENT_STRATEGY", "weighted").strip() or "weighted",
        intents_path=intents_path,
        index_cache_size=_get_int("INDEX_CACHE_SIZE", 32),
        log_level=_get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )

"""Root logger configuration shared by the API, CLI and playground."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the root logger.

    `force=True` replaces handlers from a previous call (Streamlit reruns the
    script on every interaction).
    """
    logging.basicConfig(
        level=(level or "INFO").upper(),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
        force=True,
    )


__all__ = ["LOG_FORMAT", "configure_logging"]

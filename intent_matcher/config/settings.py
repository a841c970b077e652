"""Pydantic settings and app constants."""
from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

# Built-in catalog used when the caller (or INTENTS_PATH) supplies none
DEFAULT_INTENTS: Dict[str, List[str]] = {
    "greeting": [
        "Hola", "Buenas tardes", "Hola SAPAL", "Que tal sapal", "Buena tarde",
        "Hola buen dia", "Hola buenos dias", "Hola buenas noches", "Que tal", "/start",
    ],
    "thanks": [
        "Muchas gracias", "Gracias", "Agradezco", "muchisimas gracias", "te agradezco", "muchas gracias",
    ],
    "check_balance": [
        "Quiero revisar mi saldo", "Quiero saber cual es mi saldo", "Conocer mi saldo",
        "Saber mi saldo", "cuanto debo de agua", "Cuanto debo", "saldo", "1.- Saldo",
        "Necesito comprobar cuánto dinero tengo.", "Me gustaría verificar el saldo de mi cuenta.",
        "consultar mi saldo actual",
    ],
    "receipt": [
        "Quiero mi recibo", "Necesito mi recibo", "Descargar mi recibo", "Quiero el recibo",
    ],
}

UNKNOWN_INTENT = "unknown"

# Command alias answered before any scoring
START_COMMAND = "/start"
START_INTENT = "greeting"

DEFAULT_THRESHOLD = 0.62
DEFAULT_MIN_MARGIN = 0.06

# Weighted score: token overlap, edit distance, substring bonus
JACCARD_WEIGHT = 0.55
EDIT_WEIGHT = 0.35
CONTAINS_WEIGHT = 0.10

API_TITLE = "Intent Classification API"
API_VERSION = "1.0.0"


class Settings(BaseModel):
    threshold: float = Field(default=DEFAULT_THRESHOLD, ge=0.0, le=1.0, description="Minimum confidence to accept an intent")
    min_margin: float = Field(default=DEFAULT_MIN_MARGIN, ge=0.0, le=1.0, description="Minimum gap between best and second-best")
    strategy: str = Field(default="weighted", description="Scoring strategy: weighted or token_set")
    intents_path: str = Field(default="", description="Optional JSON file with the intent catalog")
    index_cache_size: int = Field(default=32, ge=1, description="Max cached catalog indexes")
    log_level: str = Field(default="INFO", description="Root log level")

    def options(self) -> "ClassificationOptions":
        from intent_matcher.services.intent_classifier import ClassificationOptions

        return ClassificationOptions(threshold=self.threshold, min_margin=self.min_margin)

    def catalog(self) -> Dict[str, List[str]]:
        """Catalog from `intents_path` when set, else the built-in one."""
        if self.intents_path.strip():
            from intent_matcher.services.catalog_loader import load_catalog

            return load_catalog(self.intents_path)
        return DEFAULT_INTENTS

"""Command-line demo: classify texts and print one JSON line per result.

    intent-matcher "hola buen día" "quiero ver mi recibo por favor"
    intent-matcher --intents catalog.json --threshold 0.5 "cuanto debo de agua?"
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from intent_matcher.config import configure_logging, get_settings, load_env
from intent_matcher.services.catalog_index import build_index
from intent_matcher.services.catalog_loader import load_catalog
from intent_matcher.services.errors import IntentMatcherError
from intent_matcher.services.intent_classifier import STRATEGIES, ClassificationOptions, get_classifier

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="intent-matcher", description="Classify utterances by fuzzy example matching.")
    parser.add_argument("texts", nargs="+", help="Utterances to classify")
    parser.add_argument("--intents", help="JSON file with {intent: [examples]} (default: built-in catalog or INTENTS_PATH)")
    parser.add_argument("--threshold", type=float, default=None, help="Minimum confidence (0-1)")
    parser.add_argument("--min-margin", type=float, default=None, help="Minimum gap to the runner-up (0-1)")
    parser.add_argument("--strategy", choices=STRATEGIES, default=None, help="Scoring strategy")
    parser.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL or INFO)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    load_env()

    try:
        settings = get_settings()
        configure_logging(args.log_level or settings.log_level)
        catalog = load_catalog(args.intents) if args.intents else settings.catalog()
        options = ClassificationOptions(
            threshold=settings.threshold if args.threshold is None else args.threshold,
            min_margin=settings.min_margin if args.min_margin is None else args.min_margin,
        )
        classifier = get_classifier(args.strategy or settings.strategy)
    except IntentMatcherError as e:
        logger.error("%s", e.message)
        return 2
    except (ValidationError, ValueError) as e:
        # Out-of-range env settings or an unknown log level
        logger.error("%s", e)
        return 2

    index = build_index(catalog)
    for text, result in zip(args.texts, classifier.classify_batch(args.texts, index, options)):
        print(json.dumps({"text": text, "result": result.to_dict()}, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())

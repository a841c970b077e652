"""Intent classification by fuzzy matching against example phrases.

Every example in a `CatalogIndex` is scored against the input; the best
candidate wins only if it clears the confidence threshold and beats the
runner-up by a minimum margin, otherwise the result is "unknown".

Two scoring strategies share that decision rule:
- `FuzzyIntentClassifier` ("weighted"): token Jaccard, edit-distance
  similarity and a substring bonus, combined with fixed weights.
- `TokenSetRatioClassifier` ("token_set"): rapidfuzz's token_set_ratio.
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from rapidfuzz import fuzz

from intent_matcher.config.settings import (
    CONTAINS_WEIGHT,
    DEFAULT_INTENTS,
    DEFAULT_MIN_MARGIN,
    DEFAULT_THRESHOLD,
    EDIT_WEIGHT,
    JACCARD_WEIGHT,
    START_COMMAND,
    START_INTENT,
    UNKNOWN_INTENT,
)
from intent_matcher.services.catalog_index import (
    CatalogIndex,
    IndexCache,
    IndexedExample,
    IntentCatalog,
)
from intent_matcher.services.errors import InvalidOptionsError, UnknownStrategyError
from intent_matcher.services.normalizer import normalize, tokenize
from intent_matcher.services.similarity import contains_bonus, edit_similarity, jaccard

logger = logging.getLogger(__name__)


IntentName = str


@dataclass(frozen=True)
class ClassificationOptions:
    threshold: float = DEFAULT_THRESHOLD
    min_margin: float = DEFAULT_MIN_MARGIN

    def __post_init__(self) -> None:
        for name in ("threshold", "min_margin"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise InvalidOptionsError(f"{name} must be between 0 and 1, got {value}", {name: value})


@dataclass(frozen=True)
class ClassificationResult:
    """Result of intent classification."""

    intent: IntentName
    confidence: float
    matched_example: Optional[str] = None

    @property
    def is_unknown(self) -> bool:
        return self.intent == UNKNOWN_INTENT

    def to_dict(self) -> Dict[str, object]:
        return {
            "intent": self.intent,
            "confidence": self.confidence,
            "matchedExample": self.matched_example,
        }


@dataclass(frozen=True)
class ScoredExample:
    intent: IntentName
    example: str
    score: float


class BaseIntentClassifier:
    """Shared decision rule; subclasses only define how one example is scored.

    Strategy:
    - Normalize and tokenize the input once.
    - "/start" short-circuits to the greeting intent.
    - Score every example, tracking best and second-best (first seen wins ties).
    - Reject when best < threshold or best - second < min_margin.
    """

    name = "base"

    def score(self, input_normalized: str, input_tokens: Sequence[str], example: IndexedExample) -> float:
        raise NotImplementedError

    def classify(
        self,
        text: str,
        index: CatalogIndex,
        options: Optional[ClassificationOptions] = None,
    ) -> ClassificationResult:
        opts = options or ClassificationOptions()
        input_normalized = normalize(text)
        input_tokens = tokenize(text)

        if input_normalized == START_COMMAND:
            return ClassificationResult(intent=START_INTENT, confidence=1.0, matched_example=START_COMMAND)

        best = ClassificationResult(intent=UNKNOWN_INTENT, confidence=0.0)
        second_score = 0.0

        for group in index:
            for example in group.examples:
                s = self.score(input_normalized, input_tokens, example)
                if s > best.confidence:
                    second_score = best.confidence
                    best = ClassificationResult(intent=group.name, confidence=s, matched_example=example.raw)
                elif s > second_score:
                    second_score = s

        margin = best.confidence - second_score
        if best.confidence < opts.threshold or margin < opts.min_margin:
            logger.debug(
                "Rejected %r: best=%s (%.3f) margin=%.3f",
                text, best.intent, best.confidence, margin,
            )
            return ClassificationResult(
                intent=UNKNOWN_INTENT,
                confidence=best.confidence,
                matched_example=best.matched_example,
            )

        logger.debug("Classified %r as %s (%.3f) margin=%.3f", text, best.intent, best.confidence, margin)
        return best

    def classify_batch(
        self,
        texts: Sequence[str],
        index: CatalogIndex,
        options: Optional[ClassificationOptions] = None,
    ) -> List[ClassificationResult]:
        """Classify each text independently against one shared index, keeping input order."""
        return [self.classify(text, index, options) for text in texts]

    def top_matches(self, text: str, index: CatalogIndex, limit: int = 5) -> List[ScoredExample]:
        """Highest scoring examples for `text`, best first (ties keep catalog order)."""
        input_normalized = normalize(text)
        input_tokens = tokenize(text)
        scored = []
        for group in index:
            for example in group.examples:
                s = self.score(input_normalized, input_tokens, example)
                scored.append((s, len(scored), group.name, example.raw))
        top = heapq.nsmallest(max(limit, 0), scored, key=lambda item: (-item[0], item[1]))
        return [ScoredExample(intent=name, example=raw, score=s) for s, _, name, raw in top]


class FuzzyIntentClassifier(BaseIntentClassifier):
    """Weighted blend of token overlap, edit distance and a substring bonus.

    Jaccard handles reordered or swapped words, edit distance handles typos in
    short phrases, and the bonus rewards single-keyword examples ("saldo")
    found inside longer utterances.
    """

    name = "weighted"

    def score(self, input_normalized: str, input_tokens: Sequence[str], example: IndexedExample) -> float:
        s = (
            JACCARD_WEIGHT * jaccard(input_tokens, example.tokens)
            + EDIT_WEIGHT * edit_similarity(input_normalized, example.normalized)
            + CONTAINS_WEIGHT * contains_bonus(input_normalized, example.normalized)
        )
        return min(s, 1.0)


class TokenSetRatioClassifier(BaseIntentClassifier):
    """Scores with rapidfuzz's token_set_ratio on the normalized strings."""

    name = "token_set"

    def score(self, input_normalized: str, input_tokens: Sequence[str], example: IndexedExample) -> float:
        return fuzz.token_set_ratio(input_normalized, example.normalized) / 100.0


_CLASSIFIERS: Dict[str, BaseIntentClassifier] = {
    FuzzyIntentClassifier.name: FuzzyIntentClassifier(),
    TokenSetRatioClassifier.name: TokenSetRatioClassifier(),
}

STRATEGIES = tuple(_CLASSIFIERS)


def get_classifier(strategy: str = "weighted") -> BaseIntentClassifier:
    try:
        return _CLASSIFIERS[strategy]
    except KeyError:
        raise UnknownStrategyError(
            f"Unknown strategy '{strategy}'; expected one of: {', '.join(sorted(_CLASSIFIERS))}",
            {"strategy": strategy},
        ) from None


def classify(
    text: str,
    index: CatalogIndex,
    options: Optional[ClassificationOptions] = None,
    strategy: str = "weighted",
) -> ClassificationResult:
    return get_classifier(strategy).classify(text, index, options)


def classify_batch(
    texts: Sequence[str],
    index: CatalogIndex,
    options: Optional[ClassificationOptions] = None,
    strategy: str = "weighted",
) -> List[ClassificationResult]:
    return get_classifier(strategy).classify_batch(texts, index, options)


_default_cache = IndexCache()


def classify_intent(
    text: str,
    catalog: Optional[IntentCatalog] = None,
    options: Optional[ClassificationOptions] = None,
) -> ClassificationResult:
    """Convenience function for one-off intent classification (built-in catalog by default)."""
    index = _default_cache.get_or_build(catalog if catalog is not None else DEFAULT_INTENTS)
    return classify(text, index, options)


__all__ = [
    "STRATEGIES",
    "BaseIntentClassifier",
    "ClassificationOptions",
    "ClassificationResult",
    "FuzzyIntentClassifier",
    "ScoredExample",
    "TokenSetRatioClassifier",
    "classify",
    "classify_batch",
    "classify_intent",
    "get_classifier",
]

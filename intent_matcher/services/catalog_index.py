"""Precomputed catalog index: normalized text and tokens for every example phrase.

An index is built once per distinct catalog and is read-only afterwards, so
one instance can be shared by concurrent classifications. `IndexCache` keeps
recently used indexes keyed by a canonical serialization of the catalog.
"""

from __future__ import annotations

import json
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Sequence, Tuple

from intent_matcher.services.normalizer import normalize, tokenize

logger = logging.getLogger(__name__)

IntentCatalog = Mapping[str, Sequence[str]]


@dataclass(frozen=True)
class IndexedExample:
    raw: str
    normalized: str
    tokens: Tuple[str, ...]


@dataclass(frozen=True)
class IntentGroup:
    name: str
    examples: Tuple[IndexedExample, ...]


@dataclass(frozen=True)
class CatalogIndex:
    groups: Tuple[IntentGroup, ...]

    def __iter__(self) -> Iterator[IntentGroup]:
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    @property
    def intent_names(self) -> List[str]:
        return [g.name for g in self.groups]

    @property
    def example_count(self) -> int:
        return sum(len(g.examples) for g in self.groups)


def index_example(raw: str) -> IndexedExample:
    return IndexedExample(raw=raw, normalized=normalize(raw), tokens=tuple(tokenize(raw)))


def build_index(catalog: IntentCatalog) -> CatalogIndex:
    """Index every example, keeping catalog and example order. Duplicates are kept."""
    groups = tuple(
        IntentGroup(name=name, examples=tuple(index_example(ex) for ex in examples))
        for name, examples in catalog.items()
    )
    return CatalogIndex(groups=groups)


def catalog_key(catalog: IntentCatalog) -> str:
    """Deterministic cache key. Insertion order is kept: it decides ties."""
    return json.dumps(
        [[name, list(examples)] for name, examples in catalog.items()],
        ensure_ascii=False,
        separators=(",", ":"),
    )


class IndexCache:
    """Build-once-per-catalog cache with LRU eviction.

    Builds of the same catalog are serialized by a per-key lock; builds of
    different catalogs run in parallel.
    """

    def __init__(self, max_entries: int = 32) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._max_entries = max_entries
        self._entries: "OrderedDict[str, CatalogIndex]" = OrderedDict()
        self._lock = threading.Lock()
        self._build_locks: Dict[str, threading.Lock] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, catalog: IntentCatalog) -> bool:
        key = catalog_key(catalog)
        with self._lock:
            return key in self._entries

    def _lookup(self, key: str) -> CatalogIndex | None:
        with self._lock:
            index = self._entries.get(key)
            if index is not None:
                self._entries.move_to_end(key)
            return index

    def get_or_build(self, catalog: IntentCatalog) -> CatalogIndex:
        key = catalog_key(catalog)
        index = self._lookup(key)
        if index is not None:
            logger.debug("Index cache hit (%d intents)", len(index))
            return index

        with self._lock:
            build_lock = self._build_locks.setdefault(key, threading.Lock())

        with build_lock:
            # Another thread may have finished the same build while we waited
            index = self._lookup(key)
            if index is not None:
                return index
            index = build_index(catalog)
            logger.info("Built catalog index: %d intents, %d examples", len(index), index.example_count)
            with self._lock:
                self._entries[key] = index
                self._entries.move_to_end(key)
                while len(self._entries) > self._max_entries:
                    evicted, _ = self._entries.popitem(last=False)
                    self._build_locks.pop(evicted, None)
                self._build_locks.pop(key, None)
        return index

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._build_locks.clear()


__all__ = [
    "CatalogIndex",
    "IndexCache",
    "IndexedExample",
    "IntentCatalog",
    "IntentGroup",
    "build_index",
    "catalog_key",
    "index_example",
]

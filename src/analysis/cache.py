"""Cache of computed analyses keyed by message text"""
from __future__ import annotations

from typing import Dict, Optional

from pydantic import ValidationError

from config import logger
from src.core import AnalysisResult, CacheEntry, Emotion, SentimentLabel
from src.storage import JsonStore

CACHE_KEY = "emotion_analysis_cache"

def cache_key(text: str) -> str:
    """Normalized lookup key shared by the cache and the feedback store"""
    return text.strip()

class AnalysisCache:
    """
    Persistent text -> AnalysisResult cache

    Keys are the trimmed text, compared case-sensitively. Entries are kept
    for good unless ``max_entries`` is set, in which case the oldest entries
    are dropped first. Human corrections overwrite entries in place.

    Attributes:
        store: Backing JsonStore
        max_entries: Optional size bound, unbounded when None
        verified_confidence: Confidence stamped on corrected entries
    """

    def __init__(
        self,
        store: JsonStore,
        max_entries: Optional[int] = None,
        verified_confidence: float = 0.95,
    ) -> None:
        self.store = store
        self.max_entries = max_entries
        self.verified_confidence = verified_confidence
        self._entries: Optional[Dict[str, AnalysisResult]] = None

    def _load(self) -> Dict[str, AnalysisResult]:
        if self._entries is not None:
            return self._entries

        entries: Dict[str, AnalysisResult] = {}
        raw = self.store.load(CACHE_KEY, [])
        if not isinstance(raw, list):
            logger.warning(f"Ignoring malformed '{CACHE_KEY}' record")
            raw = []

        for item in raw:
            try:
                entry = CacheEntry.model_validate(item)
            except ValidationError as e:
                logger.warning(f"Skipping malformed cache entry: {e.error_count()} errors")
                continue
            entries[cache_key(entry.text)] = entry.analysis

        logger.debug(f"Loaded {len(entries)} cached analyses")
        self._entries = entries
        return entries

    def _persist(self, entries: Dict[str, AnalysisResult]) -> None:
        # Memory only follows a successful write
        self.store.save(
            CACHE_KEY,
            [
                CacheEntry(text=text, analysis=analysis).model_dump(mode="json")
                for text, analysis in entries.items()
            ],
        )
        self._entries = entries

    def __len__(self) -> int:
        return len(self._load())

    def __contains__(self, text: str) -> bool:
        return cache_key(text) in self._load()

    def get(self, text: str) -> Optional[AnalysisResult]:
        analysis = self._load().get(cache_key(text))
        if analysis is None:
            return None
        return analysis.model_copy(deep=True)

    def put(self, text: str, result: AnalysisResult) -> None:
        """
        Store an analysis, replacing any previous entry for the same text

        Raises:
            StorageError: If the cache cannot be written
        """
        entries = dict(self._load())
        key = cache_key(text)
        entries.pop(key, None)
        entries[key] = result.model_copy(deep=True)

        if self.max_entries is not None:
            while len(entries) > self.max_entries:
                oldest = next(iter(entries))
                del entries[oldest]
                logger.debug("Evicted oldest cached analysis")

        self._persist(entries)

    def patch(
        self,
        text: str,
        corrected_emotion: Optional[Emotion] = None,
        corrected_sentiment: Optional[SentimentLabel] = None,
    ) -> Optional[AnalysisResult]:
        """
        Apply a human correction to the cached analysis of a text

        Args:
            text: Text whose entry is corrected
            corrected_emotion: New dominant emotion, if any
            corrected_sentiment: New sentiment label, if any

        Returns:
            The corrected analysis, or None if the text is not cached

        Raises:
            StorageError: If the cache cannot be written
        """
        key = cache_key(text)
        current = self._load().get(key)
        if current is None:
            logger.debug("No cached analysis to correct")
            return None

        corrected = current.with_corrections(
            emotion=corrected_emotion,
            sentiment=corrected_sentiment,
            confidence=self.verified_confidence,
        )
        entries = dict(self._load())
        entries[key] = corrected
        self._persist(entries)
        logger.info("Cached analysis corrected from feedback")
        return corrected.model_copy(deep=True)

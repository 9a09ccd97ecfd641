"""Append-only log of human corrections to predictions"""
from __future__ import annotations

from typing import Callable, List, Optional

from pydantic import ValidationError

from config import logger
from src.analysis.cache import AnalysisCache, cache_key
from src.core import AnalysisResult, Emotion, FeedbackEntry, SentimentLabel
from src.core.ports.analysis import FeedbackListener
from src.storage import JsonStore

FEEDBACK_KEY = "emotion_feedback_data"

class FeedbackStore:
    """
    Records human feedback and serves corrections for previously seen texts

    Entries are appended and never modified. Recording a correction for a
    text also corrects the cached analysis of that text and notifies every
    subscriber.

    Attributes:
        store: Backing JsonStore
        cache: AnalysisCache patched by corrections
        verified_confidence: Confidence stamped on corrected results
    """

    def __init__(
        self,
        store: JsonStore,
        cache: AnalysisCache,
        verified_confidence: float = 0.95,
    ) -> None:
        self.store = store
        self.cache = cache
        self.verified_confidence = verified_confidence
        self._listeners: List[FeedbackListener] = []

    def _load(self) -> List[FeedbackEntry]:
        raw = self.store.load(FEEDBACK_KEY, [])
        if not isinstance(raw, list):
            logger.warning(f"Ignoring malformed '{FEEDBACK_KEY}' record")
            return []

        entries: List[FeedbackEntry] = []
        for item in raw:
            try:
                entries.append(FeedbackEntry.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping malformed feedback entry: {e.error_count()} errors")
        return entries

    def subscribe(self, listener: FeedbackListener) -> Callable[[], None]:
        """
        Register a callback invoked with each new FeedbackEntry

        Returns:
            Function that removes the subscription
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, entry: FeedbackEntry) -> None:
        for listener in list(self._listeners):
            try:
                listener(entry)
            except Exception:
                logger.exception("Feedback listener failed")

    def record(
        self,
        customer_id: str,
        original_prediction: AnalysisResult,
        corrected_emotion: Optional[Emotion] = None,
        corrected_sentiment: Optional[SentimentLabel] = None,
        original_text: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> FeedbackEntry:
        """
        Append a feedback entry, correct the cache and notify subscribers

        Args:
            customer_id: Customer the prediction was made for
            original_prediction: Prediction being judged
            corrected_emotion: Emotion chosen by the reviewer, if different
            corrected_sentiment: Sentiment chosen by the reviewer, if different
            original_text: Message text, needed to correct future lookups
            notes: Free-text reviewer notes

        Returns:
            The stored FeedbackEntry

        Raises:
            StorageError: If the feedback log or the cache cannot be written
        """
        entry = FeedbackEntry.create(
            customer_id=customer_id,
            original_prediction=original_prediction,
            corrected_emotion=corrected_emotion,
            corrected_sentiment=corrected_sentiment,
            original_text=original_text,
            notes=notes,
        )

        raw = [e.model_dump(mode="json") for e in self._load()]
        raw.append(entry.model_dump(mode="json"))
        self.store.save(FEEDBACK_KEY, raw)
        logger.info(f"Feedback saved for customer {customer_id} (correct={entry.was_correct})")

        # Every stored entry is announced, even when the cache write fails
        try:
            if original_text and entry.has_corrections:
                self.cache.patch(original_text, corrected_emotion, corrected_sentiment)
        finally:
            self._notify(entry)
        return entry

    def get_all(self) -> List[FeedbackEntry]:
        """Return every feedback entry, newest first"""
        return list(reversed(self._load()))

    def find_correction_for(self, text: str) -> Optional[AnalysisResult]:
        """
        Look up the reviewed analysis of a text

        The newest entry whose trimmed text matches is used: its corrections
        override the original prediction and the confidence is stamped as
        verified. A confirmation without corrections returns the original
        prediction, verified.

        Args:
            text: Message text

        Returns:
            Reviewed AnalysisResult or None
        """
        key = cache_key(text)
        for entry in self.get_all():
            if entry.original_text is None or cache_key(entry.original_text) != key:
                continue
            logger.debug(f"Using feedback from {entry.timestamp.isoformat()}")
            result = entry.original_prediction.with_corrections(
                emotion=entry.corrected_emotion,
                sentiment=entry.corrected_sentiment,
                confidence=self.verified_confidence,
            )
            return result.model_copy(update={"original_text": entry.original_text})
        return None

"""Analysis service for customer message sentiment and follow-up priority"""
from __future__ import annotations

from typing import Callable, Iterable, List, Optional

from config import logger
from src.analysis.cache import AnalysisCache
from src.analysis.feedback import FeedbackStore
from src.analysis.language import LanguageDetector
from src.analysis.priority import PriorityScorer
from src.analysis.rules import RuleBasedSentimentEngine
from src.core import (
    AppError,
    AnalysisResult,
    CustomerAnalysisData,
    CustomerMessage,
    Emotion,
    FeedbackEntry,
    SentimentLabel,
)
from src.core.ports.analysis import FeedbackListener, ISentimentEngine
from src.storage import CustomerMessageLog

def _initials(name: str) -> str:
    parts = [p for p in name.split() if p]
    return "".join(p[0].upper() for p in parts[:2]) or "?"

class AnalysisService:
    """
    Service analyzing customer messages and prioritizing customers

    Orchestrates the analysis pipeline:
    1. Return a human-reviewed result from the feedback log if one exists
    2. Return a cached result if the text was analyzed before
    3. Classify with the transformer models, or with the keyword engine
       when the models are missing, failed to load or fail on this text
    4. Cache the result

    Attributes:
        rule_engine: RuleBasedSentimentEngine used as the guaranteed fallback
        model_engine: Optional model-backed engine tried first
        cache: AnalysisCache consulted before any classification
        feedback_store: FeedbackStore whose corrections win over the cache
        scorer: PriorityScorer for follow-up priority
        message_log: Optional per-customer message log
    """
    def __init__(
        self,
        rule_engine: RuleBasedSentimentEngine,
        cache: AnalysisCache,
        feedback_store: FeedbackStore,
        model_engine: Optional[ISentimentEngine] = None,
        scorer: Optional[PriorityScorer] = None,
        message_log: Optional[CustomerMessageLog] = None,
        language_detector: Optional[LanguageDetector] = None,
    ) -> None:
        logger.info(
            f"Initializing analysis service ({'model + keyword fallback' if model_engine else 'keyword engine only'})"
        )
        self.rule_engine = rule_engine
        self.model_engine = model_engine
        self.cache = cache
        self.feedback_store = feedback_store
        self.scorer = scorer or PriorityScorer()
        self.message_log = message_log
        self.language_detector = language_detector or LanguageDetector()

    async def analyze(self, text: str) -> AnalysisResult:
        """
        Analyze a customer message

        Args:
            text: Customer message text

        Returns:
            AnalysisResult containing:
                - sentiment and sentiment_score (0..1, higher is more positive)
                - emotions ranked by score and the dominant emotion
                - detected language and overall confidence
            Blank text yields the fixed neutral default. This method does
            not raise.
        """
        if not isinstance(text, str) or not text.strip():
            return AnalysisResult.neutral_default()

        corrected = self.feedback_store.find_correction_for(text)
        if corrected is not None:
            logger.debug("Returning human-reviewed analysis")
            return corrected

        cached = self.cache.get(text)
        if cached is not None:
            logger.debug("Returning cached analysis")
            return cached

        language = self.language_detector.detect(text)
        logger.info(f"Running analysis (language={language})")
        result = await self._classify(text)
        result = result.model_copy(update={"original_text": text})

        try:
            self.cache.put(text, result)
        except AppError as e:
            logger.warning(f"Analysis not cached: {e}")
        return result

    async def _classify(self, text: str) -> AnalysisResult:
        if self.model_engine is not None:
            try:
                return await self.model_engine.analyze(text)
            except AppError as e:
                logger.warning(f"Model analysis unavailable, using keyword engine: {e}")
            except Exception:
                logger.exception("Unexpected model failure, using keyword engine")
        return self.rule_engine.analyze(text)

    def prioritize(self, result: AnalysisResult, interaction_count: int) -> tuple[float, str]:
        """
        Priority score and category of a customer

        Args:
            result: Analysis of the customer's message
            interaction_count: Number of messages from the customer

        Returns:
            Tuple of (priority_score, priority_category)
        """
        score = self.scorer.score(result.sentiment_score, result.dominant_emotion, interaction_count)
        return score, self.scorer.categorize(score)

    def record_feedback(
        self,
        customer_id: str,
        original_prediction: AnalysisResult,
        corrected_emotion: Optional[Emotion] = None,
        corrected_sentiment: Optional[SentimentLabel] = None,
        original_text: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> FeedbackEntry:
        return self.feedback_store.record(
            customer_id=customer_id,
            original_prediction=original_prediction,
            corrected_emotion=corrected_emotion,
            corrected_sentiment=corrected_sentiment,
            original_text=original_text,
            notes=notes,
        )

    def get_all_feedback(self) -> List[FeedbackEntry]:
        return self.feedback_store.get_all()

    def subscribe(self, listener: FeedbackListener) -> Callable[[], None]:
        return self.feedback_store.subscribe(listener)

    def record_message(self, customer_id: str, customer_name: str, text: str) -> CustomerMessage:
        """
        Append a message to the customer message log

        Raises:
            AppError: If no message log is configured or it cannot be written
        """
        if self.message_log is None:
            raise AppError(code="NO_MESSAGE_LOG", message="No customer message log configured")
        return self.message_log.append(
            CustomerMessage(customer_id=customer_id, customer_name=customer_name, text=text)
        )

    async def analyze_customers(
        self,
        messages: Optional[Iterable[CustomerMessage]] = None,
    ) -> List[CustomerAnalysisData]:
        """
        Build the prioritized customer list

        Each customer's latest message is analyzed; the interaction count is
        the number of messages from that customer. Texts are analyzed one
        after another.

        Args:
            messages: Messages to use, defaults to the whole message log

        Returns:
            CustomerAnalysisData sorted by priority score, highest first
        """
        if messages is None:
            messages = self.message_log.all() if self.message_log is not None else []

        latest: dict[str, CustomerMessage] = {}
        counts: dict[str, int] = {}
        for message in messages:
            counts[message.customer_id] = counts.get(message.customer_id, 0) + 1
            current = latest.get(message.customer_id)
            if current is None or message.timestamp >= current.timestamp:
                latest[message.customer_id] = message

        customers: List[CustomerAnalysisData] = []
        for customer_id, message in latest.items():
            result = await self.analyze(message.text)
            score, category = self.prioritize(result, counts[customer_id])
            name = message.customer_name or customer_id
            customers.append(
                CustomerAnalysisData(
                    customer_id=customer_id,
                    customer_name=name,
                    customer_initials=_initials(name),
                    sentiment=result.sentiment,
                    sentiment_score=result.sentiment_score,
                    dominant_emotion=result.dominant_emotion,
                    emotions=result.emotions,
                    interaction_count=counts[customer_id],
                    priority_score=score,
                    priority_category=category,
                    language=result.language,
                    last_message=message.text,
                    timestamp=message.timestamp,
                )
            )

        customers.sort(key=lambda c: c.priority_score, reverse=True)
        logger.info(f"Prioritized {len(customers)} customers")
        return customers

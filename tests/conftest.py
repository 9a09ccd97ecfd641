"""Test configuration and fixtures."""

from typing import List, Optional

import pytest

from src.analysis import (
    AnalysisCache,
    AnalysisService,
    FeedbackStore,
    PriorityScorer,
    RuleBasedSentimentEngine,
)
from src.core import AnalysisResult, EmotionResult, ModelNotLoadedError
from src.storage import CustomerMessageLog, JsonStore


def make_result(
    emotion: str = "joy",
    sentiment: str = "positive",
    sentiment_score: float = 0.9,
    confidence: float = 0.8,
    language: str = "en",
) -> AnalysisResult:
    """Build a small valid AnalysisResult."""
    others = [e for e in ("neutral", "surprise") if e != emotion]
    return AnalysisResult(
        sentiment=sentiment,
        sentiment_score=sentiment_score,
        emotions=[
            EmotionResult(emotion=emotion, score=confidence, confidence=confidence),
            EmotionResult(emotion=others[0], score=0.1, confidence=0.1),
        ],
        dominant_emotion=emotion,
        language=language,
        confidence_score=confidence,
    )


class FakeModelEngine:
    """Stands in for ModelSentimentEngine and counts calls."""

    def __init__(self, result: Optional[AnalysisResult] = None, error: Optional[Exception] = None):
        self.result = result or make_result(emotion="trust", confidence=0.77)
        self.error = error
        self.calls: List[str] = []

    async def analyze(self, text: str) -> AnalysisResult:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.result.model_copy(deep=True)


class CountingRuleEngine(RuleBasedSentimentEngine):
    """Keyword engine that records how often it ran."""

    def __init__(self):
        super().__init__()
        self.calls: List[str] = []

    def analyze(self, text: str) -> AnalysisResult:
        self.calls.append(text)
        return super().analyze(text)


@pytest.fixture
def store(tmp_path) -> JsonStore:
    """JsonStore in a temporary directory."""
    return JsonStore(base_dir=tmp_path, tenant_id="acme")


@pytest.fixture
def cache(store) -> AnalysisCache:
    return AnalysisCache(store=store)


@pytest.fixture
def feedback_store(store, cache) -> FeedbackStore:
    return FeedbackStore(store=store, cache=cache)


@pytest.fixture
def message_log(store) -> CustomerMessageLog:
    return CustomerMessageLog(store=store)


@pytest.fixture
def rule_engine() -> CountingRuleEngine:
    return CountingRuleEngine()


@pytest.fixture
def failing_model() -> FakeModelEngine:
    return FakeModelEngine(error=ModelNotLoadedError())


@pytest.fixture
def service(rule_engine, cache, feedback_store, message_log, failing_model) -> AnalysisService:
    """Service whose model engine is unavailable, so the keyword engine runs."""
    return AnalysisService(
        rule_engine=rule_engine,
        cache=cache,
        feedback_store=feedback_store,
        model_engine=failing_model,
        scorer=PriorityScorer(),
        message_log=message_log,
    )

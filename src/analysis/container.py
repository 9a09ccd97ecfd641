"""Container for the analysis service with dependency injection"""
from functools import lru_cache
from typing import Optional

from config import settings
from src.analysis import (
    AnalysisCache,
    AnalysisService,
    FeedbackStore,
    LanguageDetector,
    ModelSentimentEngine,
    PriorityScorer,
    RuleBasedSentimentEngine,
)
from src.storage import CustomerMessageLog, JsonStore

@lru_cache(maxsize=1)
def get_store() -> JsonStore:
    """
    Get singleton JsonStore instance

    Returns:
        JsonStore rooted at settings.storage_dir, scoped to settings.tenant_id
    """
    return JsonStore(base_dir=settings.storage_dir, tenant_id=settings.tenant_id)

@lru_cache(maxsize=1)
def get_language_detector() -> LanguageDetector:
    return LanguageDetector()

@lru_cache(maxsize=1)
def get_analysis_cache() -> AnalysisCache:
    return AnalysisCache(
        store=get_store(),
        max_entries=settings.cache_max_entries,
        verified_confidence=settings.verified_confidence,
    )

@lru_cache(maxsize=1)
def get_feedback_store() -> FeedbackStore:
    return FeedbackStore(
        store=get_store(),
        cache=get_analysis_cache(),
        verified_confidence=settings.verified_confidence,
    )

@lru_cache(maxsize=1)
def get_message_log() -> CustomerMessageLog:
    return CustomerMessageLog(store=get_store())

@lru_cache(maxsize=1)
def get_rule_engine() -> RuleBasedSentimentEngine:
    return RuleBasedSentimentEngine(language_detector=get_language_detector())

@lru_cache(maxsize=1)
def get_model_engine() -> Optional[ModelSentimentEngine]:
    """
    Get singleton ModelSentimentEngine instance

    Returns:
        Engine configured with settings.sentiment_model_name and
        settings.emotion_model_name, or None when settings.use_model is off.
        The models themselves load on the first analysis.
    """
    if not settings.use_model:
        return None
    return ModelSentimentEngine(
        sentiment_model_name=settings.sentiment_model_name,
        emotion_model_name=settings.emotion_model_name,
        sentiment_top_k=settings.sentiment_top_k,
        emotion_top_k=settings.emotion_top_k,
        language_detector=get_language_detector(),
    )

@lru_cache(maxsize=1)
def get_priority_scorer() -> PriorityScorer:
    return PriorityScorer(max_interactions=settings.max_interactions)

@lru_cache(maxsize=1)
def get_analysis_service() -> AnalysisService:
    """
    Get singleton AnalysisService instance with all dependencies wired

    Returns:
        AnalysisService with engines, cache, feedback store, scorer and
        message log injected. Subsequent calls return the same cached instance
    """
    return AnalysisService(
        rule_engine=get_rule_engine(),
        cache=get_analysis_cache(),
        feedback_store=get_feedback_store(),
        model_engine=get_model_engine(),
        scorer=get_priority_scorer(),
        message_log=get_message_log(),
        language_detector=get_language_detector(),
    )

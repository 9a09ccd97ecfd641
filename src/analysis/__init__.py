"""
Analysis module
"""

from .language import LanguageDetector, language_name
from .rules import RuleBasedSentimentEngine
from .classifiers import ModelSentimentEngine
from .cache import AnalysisCache
from .feedback import FeedbackStore
from .priority import PriorityScorer
from .quick_sentiment import analyze_sentiment
from .service import AnalysisService
from .container import (
    get_store,
    get_analysis_cache,
    get_feedback_store,
    get_message_log,
    get_rule_engine,
    get_model_engine,
    get_priority_scorer,
    get_analysis_service,
)

__all__ = [
    "LanguageDetector",
    "language_name",
    "RuleBasedSentimentEngine",
    "ModelSentimentEngine",
    "AnalysisCache",
    "FeedbackStore",
    "PriorityScorer",
    "analyze_sentiment",
    "AnalysisService",
    "get_store",
    "get_analysis_cache",
    "get_feedback_store",
    "get_message_log",
    "get_rule_engine",
    "get_model_engine",
    "get_priority_scorer",
    "get_analysis_service",
]

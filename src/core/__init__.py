"""
Core domain layer
"""
from .models import (
    EMOTIONS,
    SENTIMENTS,
    Emotion,
    SentimentLabel,
    PriorityCategory,
    EmotionResult,
    AnalysisResult,
    FeedbackEntry,
    CacheEntry,
    CustomerMessage,
    CustomerAnalysisData,
    QuickSentimentResult,
)
from .exceptions import (
    AppError,
    InvalidInputError,
    AnalysisFailedError,
    ModelNotLoadedError,
    StorageError,
)

__all__ = [
    "EMOTIONS",
    "SENTIMENTS",
    "Emotion",
    "SentimentLabel",
    "PriorityCategory",
    "EmotionResult",
    "AnalysisResult",
    "FeedbackEntry",
    "CacheEntry",
    "CustomerMessage",
    "CustomerAnalysisData",
    "QuickSentimentResult",
    "AppError",
    "InvalidInputError",
    "AnalysisFailedError",
    "ModelNotLoadedError",
    "StorageError",
]

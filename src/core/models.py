"""Core data models for customer sentiment analysis and prioritization"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

Emotion = Literal[
    "joy",
    "anger",
    "sadness",
    "fear",
    "surprise",
    "disgust",
    "trust",
    "frustration",
    "neutral",
]
SentimentLabel = Literal["positive", "negative", "neutral"]
PriorityCategory = Literal["high", "medium", "low"]

EMOTIONS: tuple[str, ...] = (
    "joy",
    "anger",
    "sadness",
    "fear",
    "surprise",
    "disgust",
    "trust",
    "frustration",
    "neutral",
)
SENTIMENTS: tuple[str, ...] = ("positive", "neutral", "negative")

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

class EmotionResult(BaseModel):
    """Score of a single emotion for a text"""
    emotion: Emotion
    score: float = Field(..., ge=0.0, le=1.0)
    confidence: float = Field(..., ge=0.0, le=1.0)

class AnalysisResult(BaseModel):
    """Sentiment and emotion analysis of one customer message"""
    sentiment: SentimentLabel = Field(
        ...,
        description="Overall sentiment: 'positive', 'neutral' or 'negative'"
    )
    sentiment_score: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Higher means more positive, 0.5 is neutral"
    )
    emotions: List[EmotionResult] = Field(
        ...,
        min_length=1,
        description="Emotion scores sorted from highest to lowest"
    )
    dominant_emotion: Emotion = Field(
        ...,
        description="Highest scoring emotion, always emotions[0]"
    )
    language: str = Field(
        default="en",
        description="Language code: 'en', 'es', 'hi' or 'other'"
    )
    confidence_score: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Overall confidence, 0.95 once verified by a human"
    )
    original_text: Optional[str] = Field(
        None,
        description="Text the analysis was computed for"
    )

    # Diagnostics only, never serialized
    used_fallback: bool = Field(default=False, exclude=True)

    @model_validator(mode="after")
    def _check_emotion_order(self) -> "AnalysisResult":
        if self.dominant_emotion != self.emotions[0].emotion:
            raise ValueError(
                f"dominant_emotion '{self.dominant_emotion}' must match the first emotion "
                f"'{self.emotions[0].emotion}'"
            )
        scores = [e.score for e in self.emotions]
        if any(a < b for a, b in zip(scores, scores[1:])):
            raise ValueError("emotions must be sorted by descending score")
        return self

    @classmethod
    def neutral_default(cls, language: str = "en") -> "AnalysisResult":
        """Fixed result for empty input"""
        return cls(
            sentiment="neutral",
            sentiment_score=0.5,
            emotions=[EmotionResult(emotion="neutral", score=1.0, confidence=0.5)],
            dominant_emotion="neutral",
            language=language,
            confidence_score=0.5,
        )

    def with_corrections(
        self,
        emotion: Optional[Emotion] = None,
        sentiment: Optional[SentimentLabel] = None,
        confidence: float = 0.95,
    ) -> "AnalysisResult":
        """
        Build a human-verified copy of this result

        The corrected emotion is moved to the front of ``emotions`` with the
        current top score so the ordering invariant still holds.

        Args:
            emotion: Corrected dominant emotion, if any
            sentiment: Corrected sentiment label, if any
            confidence: Confidence stamped on the copy

        Returns:
            New validated AnalysisResult
        """
        emotions = [e.model_copy() for e in self.emotions]
        dominant = self.dominant_emotion
        if emotion is not None and emotion != self.dominant_emotion:
            top_score = emotions[0].score
            rest = [e for e in emotions if e.emotion != emotion]
            emotions = [EmotionResult(emotion=emotion, score=top_score, confidence=confidence)] + rest
            dominant = emotion

        return AnalysisResult(
            sentiment=sentiment or self.sentiment,
            sentiment_score=self.sentiment_score,
            emotions=emotions,
            dominant_emotion=dominant,
            language=self.language,
            confidence_score=confidence,
            original_text=self.original_text,
            used_fallback=self.used_fallback,
        )

class FeedbackEntry(BaseModel):
    """A single human judgement on a prediction, never modified after creation"""
    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(default_factory=_utcnow)
    customer_id: str
    original_prediction: AnalysisResult
    corrected_emotion: Optional[Emotion] = None
    corrected_sentiment: Optional[SentimentLabel] = None
    original_text: Optional[str] = None
    notes: Optional[str] = None
    was_correct: bool

    @classmethod
    def create(
        cls,
        customer_id: str,
        original_prediction: AnalysisResult,
        corrected_emotion: Optional[Emotion] = None,
        corrected_sentiment: Optional[SentimentLabel] = None,
        original_text: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> "FeedbackEntry":
        return cls(
            customer_id=customer_id,
            original_prediction=original_prediction,
            corrected_emotion=corrected_emotion,
            corrected_sentiment=corrected_sentiment,
            original_text=original_text,
            notes=notes,
            was_correct=corrected_emotion is None and corrected_sentiment is None,
        )

    @property
    def has_corrections(self) -> bool:
        return not self.was_correct

class CacheEntry(BaseModel):
    """Persisted analysis cache record"""
    text: str
    analysis: AnalysisResult

class CustomerMessage(BaseModel):
    """One message in the per-customer message log"""
    customer_id: str
    customer_name: str = ""
    text: str
    timestamp: datetime = Field(default_factory=_utcnow)

class CustomerAnalysisData(BaseModel):
    """Per-customer view joining the latest message, its analysis and priority"""
    customer_id: str
    customer_name: str
    customer_initials: str
    sentiment: SentimentLabel
    sentiment_score: float = Field(..., ge=0.0, le=1.0)
    dominant_emotion: Emotion
    emotions: List[EmotionResult]
    interaction_count: int = Field(..., ge=0)
    priority_score: float = Field(..., ge=0.0, le=1.0)
    priority_category: PriorityCategory
    language: str
    last_message: str
    timestamp: datetime

class QuickSentimentResult(BaseModel):
    """Word-count sentiment on a -1..1 scale, not comparable with AnalysisResult.sentiment_score"""
    sentiment: SentimentLabel
    score: float = Field(..., ge=-1.0, le=1.0)
    confidence: float = Field(..., ge=0.0, le=1.0)

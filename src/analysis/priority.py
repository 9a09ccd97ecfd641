"""Customer follow-up priority from sentiment, emotion and interaction frequency"""
from __future__ import annotations

from typing import Dict

from src.core import EMOTIONS, InvalidInputError

SENTIMENT_WEIGHT = 0.4
EMOTION_WEIGHT = 0.3
INTERACTION_WEIGHT = 0.3
WEIGHTS: Dict[str, float] = {
    "sentiment": SENTIMENT_WEIGHT,
    "emotion": EMOTION_WEIGHT,
    "interaction": INTERACTION_WEIGHT,
}

# Higher means more urgent
EMOTION_IMPACT: Dict[str, float] = {
    "anger": 1.0,
    "frustration": 0.9,
    "sadness": 0.8,
    "fear": 0.75,
    "disgust": 0.7,
    "surprise": 0.5,
    "neutral": 0.5,
    "joy": 0.3,
    "trust": 0.2,
}

HIGH_THRESHOLD = 0.7
MEDIUM_THRESHOLD = 0.3

class PriorityScorer:
    """Weighted priority score in [0, 1] and its high/medium/low category"""

    def __init__(self, max_interactions: int = 10) -> None:
        if max_interactions <= 0:
            raise InvalidInputError(message="max_interactions must be positive")
        self.max_interactions = max_interactions

    def score(
        self,
        sentiment_score: float,
        dominant_emotion: str,
        interaction_count: int,
        max_interactions: int | None = None,
    ) -> float:
        """
        Compute the follow-up priority of a customer

        Args:
            sentiment_score: Analysis sentiment score, 0..1 with higher meaning more positive
            dominant_emotion: One of the nine supported emotions
            interaction_count: Number of messages from the customer
            max_interactions: Count at which the interaction signal saturates

        Returns:
            Priority score clamped to [0, 1]

        Raises:
            InvalidInputError: If the sentiment score is outside [0, 1], the
                emotion is unknown or max_interactions is not positive
        """
        limit = self.max_interactions if max_interactions is None else max_interactions
        if limit <= 0:
            raise InvalidInputError(message="max_interactions must be positive")
        if not 0.0 <= sentiment_score <= 1.0:
            raise InvalidInputError(
                message=f"sentiment_score must be in [0, 1], got {sentiment_score}"
            )
        if dominant_emotion not in EMOTIONS:
            raise InvalidInputError(message=f"Unknown emotion: {dominant_emotion}")

        normalized_interactions = min(max(interaction_count, 0) / limit, 1.0)
        priority = (
            (1 - sentiment_score) * SENTIMENT_WEIGHT
            + EMOTION_IMPACT[dominant_emotion] * EMOTION_WEIGHT
            + normalized_interactions * INTERACTION_WEIGHT
        )
        return min(max(priority, 0.0), 1.0)

    @staticmethod
    def categorize(score: float) -> str:
        if score > HIGH_THRESHOLD:
            return "high"
        if score > MEDIUM_THRESHOLD:
            return "medium"
        return "low"

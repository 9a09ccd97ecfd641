"""Ports (interfaces) for the analysis components"""
from typing import Callable, List, Optional, Protocol

from src.core import AnalysisResult, Emotion, FeedbackEntry, SentimentLabel

FeedbackListener = Callable[[FeedbackEntry], None]

class ISentimentEngine(Protocol):
    """Classifier that may fail; the caller decides how to fall back"""

    async def analyze(self, text: str) -> AnalysisResult:
        """
        Classify sentiment and emotions of a text

        Args:
            text (str): Customer message text

        Returns:
            AnalysisResult: Sentiment, ranked emotions and confidence

        Raises:
            ModelNotLoadedError: If the underlying models are unavailable
            AnalysisFailedError: If inference fails
        """
        ...

class IAnalysisService(Protocol):
    """Interface consumed by UI surfaces"""

    async def analyze(self, text: str) -> AnalysisResult:
        """
        Analyze a customer message, never raising

        Args:
            text (str): Customer message text

        Returns:
            AnalysisResult: Corrected, cached or freshly computed analysis
        """
        ...

    def record_feedback(
        self,
        customer_id: str,
        original_prediction: AnalysisResult,
        corrected_emotion: Optional[Emotion] = None,
        corrected_sentiment: Optional[SentimentLabel] = None,
        original_text: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> FeedbackEntry:
        ...

    def get_all_feedback(self) -> List[FeedbackEntry]:
        ...

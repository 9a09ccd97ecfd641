"""Pretrained transformer classifiers for sentiment and emotion"""
from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

import torch
from transformers import pipeline

from config import logger
from src.analysis.language import LanguageDetector
from src.core import (
    AppError,
    AnalysisResult,
    AnalysisFailedError,
    EmotionResult,
    ModelNotLoadedError,
)

DEVICE = 0 if torch.cuda.is_available() else -1

# Raw model labels -> the nine supported emotions
EMOTION_LABELS: Dict[str, str] = {
    "joy": "joy",
    "happy": "joy",
    "happiness": "joy",
    "sadness": "sadness",
    "sad": "sadness",
    "anger": "anger",
    "angry": "anger",
    "fear": "fear",
    "scared": "fear",
    "afraid": "fear",
    "disgust": "disgust",
    "surprise": "surprise",
    "surprised": "surprise",
    "frustration": "frustration",
    "frustrated": "frustration",
    "trust": "trust",
    "neutral": "neutral",
}

def _flatten(results: Any) -> List[Dict[str, Any]]:
    """Pipelines return [[...]] for some inputs and [...] for others"""
    if results and isinstance(results[0], list):
        return results[0]
    return list(results)

class ModelSentimentEngine:
    """
    Sentiment and emotion classification with two Hugging Face pipelines

    Both pipelines are built on first use and kept for the life of the
    process. A failed build is permanent: later calls raise
    ModelNotLoadedError without trying again.

    Attributes:
        sentiment_model_name: Binary POSITIVE/NEGATIVE text classifier
        emotion_model_name: Multi-class emotion text classifier
        failed: True once loading has failed
    """

    def __init__(
        self,
        sentiment_model_name: str,
        emotion_model_name: str,
        sentiment_top_k: int = 2,
        emotion_top_k: int = 5,
        language_detector: Optional[LanguageDetector] = None,
    ) -> None:
        self.sentiment_model_name = sentiment_model_name
        self.emotion_model_name = emotion_model_name
        self.sentiment_top_k = sentiment_top_k
        self.emotion_top_k = emotion_top_k
        self.language_detector = language_detector or LanguageDetector()

        self.failed = False
        self._sentiment_classifier = None
        self._emotion_classifier = None
        self._load_lock = asyncio.Lock()

    @property
    def loaded(self) -> bool:
        return self._sentiment_classifier is not None and self._emotion_classifier is not None

    def _load(self) -> None:
        if self._sentiment_classifier is None:
            logger.info(f"Loading sentiment model: {self.sentiment_model_name}")
            self._sentiment_classifier = pipeline(
                "text-classification",
                model=self.sentiment_model_name,
                device=DEVICE,
            )
        if self._emotion_classifier is None:
            logger.info(f"Loading emotion model: {self.emotion_model_name}")
            self._emotion_classifier = pipeline(
                "text-classification",
                model=self.emotion_model_name,
                device=DEVICE,
            )
        logger.info("Models loaded")

    async def ensure_loaded(self) -> None:
        """
        Build both pipelines once

        Raises:
            ModelNotLoadedError: If loading fails now or failed before
        """
        if self.failed:
            raise ModelNotLoadedError(message="Classifiers failed to load earlier, not retrying")
        if self.loaded:
            return

        async with self._load_lock:
            if self.failed:
                raise ModelNotLoadedError(message="Classifiers failed to load earlier, not retrying")
            if self.loaded:
                return
            try:
                await asyncio.to_thread(self._load)
            except Exception as e:
                self.failed = True
                logger.exception("Failed to load classifiers")
                raise ModelNotLoadedError(
                    message=f"Failed to load classifiers '{self.sentiment_model_name}' / '{self.emotion_model_name}'"
                ) from e

    def _classify(self, text: str) -> tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
        with torch.inference_mode():
            sentiment_raw = self._sentiment_classifier(text, top_k=self.sentiment_top_k, truncation=True)
            emotion_raw = self._emotion_classifier(text, top_k=self.emotion_top_k, truncation=True)
        return _flatten(sentiment_raw), _flatten(emotion_raw)

    async def analyze(self, text: str) -> AnalysisResult:
        """
        Classify a text with the pretrained models

        Args:
            text: Customer message, passed verbatim whatever its language

        Returns:
            AnalysisResult with sentiment_score on the 0..1 'higher is more positive' scale

        Raises:
            ModelNotLoadedError: If the models are unavailable
            AnalysisFailedError: If inference fails
        """
        await self.ensure_loaded()
        language = self.language_detector.detect(text)
        if language != "en":
            logger.debug(f"Processing non-English text ({language}) with English models")

        try:
            sentiment_results, emotion_results = await asyncio.to_thread(self._classify, text)
            sentiment, sentiment_score = self._map_sentiment(sentiment_results)
            emotions = self._map_emotions(emotion_results)

            return AnalysisResult(
                sentiment=sentiment,
                sentiment_score=sentiment_score,
                emotions=emotions,
                dominant_emotion=emotions[0].emotion,
                language=language,
                confidence_score=emotions[0].score,
            )
        except AppError:
            raise
        except Exception as e:
            logger.exception("Classifier inference failed")
            raise AnalysisFailedError(message="Classifier inference failed") from e

    @staticmethod
    def _map_sentiment(results: List[Dict[str, Any]]) -> tuple[str, float]:
        sentiment = "neutral"
        sentiment_score = 0.5
        for result in results:
            label = str(result.get("label", "")).upper()
            score = float(result.get("score", 0.0))
            if label == "POSITIVE" and score > 0.5:
                sentiment = "positive"
                sentiment_score = score
            elif label == "NEGATIVE" and score > 0.5:
                sentiment = "negative"
                # Same scale as the keyword engine: higher means more positive
                sentiment_score = 1 - score
        return sentiment, sentiment_score

    @staticmethod
    def _map_emotions(results: List[Dict[str, Any]]) -> List[EmotionResult]:
        # Several raw labels can map to one emotion; keep its best score
        best: Dict[str, float] = {}
        for result in results:
            emotion = EMOTION_LABELS.get(str(result["label"]).lower(), "neutral")
            score = float(result["score"])
            if score > best.get(emotion, -1.0):
                best[emotion] = score

        emotions = [
            EmotionResult(emotion=emotion, score=score, confidence=score)
            for emotion, score in best.items()
        ]
        if not emotions:
            raise AnalysisFailedError(message="Emotion classifier returned no labels")
        emotions.sort(key=lambda e: e.score, reverse=True)
        return emotions

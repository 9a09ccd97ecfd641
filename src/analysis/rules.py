"""Keyword-matching sentiment and emotion engine used as the guaranteed fallback"""
from __future__ import annotations

from typing import Dict, List, Optional

from src.analysis.language import LanguageDetector
from src.core import EMOTIONS, AnalysisResult, EmotionResult

# Signal -> (emotion accumulator, increment per match, counts as positive)
SIGNALS: Dict[str, tuple[str, float, bool]] = {
    "positive": ("joy", 0.3, True),
    "negative": ("anger", 0.2, False),
    "fear": ("fear", 0.3, False),
    "trust": ("trust", 0.3, True),
    "surprise": ("surprise", 0.3, False),
    "disgust": ("disgust", 0.3, False),
    "sadness": ("sadness", 0.3, False),
    "frustration": ("frustration", 0.3, False),
}

KEYWORDS: Dict[str, tuple[str, ...]] = {
    "positive": (
        "good", "great", "excellent", "amazing", "love", "happy", "thank",
        "perfect", "awesome", "fantastic", "wonderful", "pleased", "glad",
        "gracias", "excelente", "bueno", "feliz", "genial",
    ),
    "negative": (
        "bad", "terrible", "awful", "horrible", "hate", "angry", "worst",
        "poor", "broken", "useless", "unacceptable", "delay", "complaint",
        "malo", "pésimo", "enojado", "furioso",
    ),
    "fear": (
        "afraid", "scared", "worried", "fear", "anxious", "nervous", "concerned",
        "miedo", "preocupado", "asustado",
    ),
    "trust": (
        "trust", "reliable", "recommend", "loyal", "confident", "honest", "depend on",
        "confianza", "confiable",
    ),
    "surprise": (
        "surpris", "unexpected", "wow", "shock", "astonish", "can't believe",
        "sorpresa", "increíble",
    ),
    "disgust": (
        "disgust", "gross", "revolting", "nasty", "sick of", "filthy",
        "asco", "repugnante",
    ),
    "sadness": (
        "sad", "disappoint", "unhappy", "sorry", "regret", "upset", "heartbroken",
        "triste", "decepcion",
    ),
    "frustration": (
        "frustrat", "delay", "unacceptable", "waiting", "fed up", "ridiculous",
        "annoy", "still not", "again and again",
        "harto", "retraso",
    ),
}

NEUTRAL_THRESHOLD = 0.2
NEUTRAL_BOOST = 0.3

class RuleBasedSentimentEngine:
    """
    Deterministic keyword engine producing sentiment and a 9-way emotion ranking

    Keywords are matched as lowercase substrings and every occurrence counts,
    so a keyword inside a longer word matches too.
    """

    def __init__(
        self,
        language_detector: Optional[LanguageDetector] = None,
        keywords: Optional[Dict[str, tuple[str, ...]]] = None,
    ) -> None:
        self.language_detector = language_detector or LanguageDetector()
        self.keywords = keywords or KEYWORDS

    def analyze(self, text: str) -> AnalysisResult:
        lowered = text.lower()
        scores: Dict[str, float] = {emotion: 0.0 for emotion in EMOTIONS}
        positive_count = 0
        negative_count = 0

        for signal, (emotion, increment, is_positive) in SIGNALS.items():
            for keyword in self.keywords.get(signal, ()):
                matches = lowered.count(keyword)
                if not matches:
                    continue
                scores[emotion] += increment * matches
                if is_positive:
                    positive_count += matches
                else:
                    negative_count += matches

        if positive_count > negative_count:
            sentiment = "positive"
            sentiment_score = 0.5 + min(positive_count, 5) / 10
        elif negative_count > positive_count:
            sentiment = "negative"
            sentiment_score = 0.5 - min(negative_count, 5) / 10
        else:
            sentiment = "neutral"
            sentiment_score = 0.5

        raw_max = max(scores.values())
        ranked = self._rank(scores)
        if ranked[0][1] < NEUTRAL_THRESHOLD:
            scores["neutral"] = NEUTRAL_BOOST
            ranked = self._rank(scores)

        emotions = [
            EmotionResult(emotion=emotion, score=min(score, 1.0), confidence=min(score, 1.0))
            for emotion, score in ranked
        ]
        return AnalysisResult(
            sentiment=sentiment,
            sentiment_score=max(0.0, min(sentiment_score, 1.0)),
            emotions=emotions,
            dominant_emotion=emotions[0].emotion,
            language=self.language_detector.detect(text),
            confidence_score=min(raw_max, 1.0),
            used_fallback=True,
        )

    @staticmethod
    def _rank(scores: Dict[str, float]) -> List[tuple[str, float]]:
        # sorted() is stable, ties keep the EMOTIONS order
        return sorted(scores.items(), key=lambda item: item[1], reverse=True)

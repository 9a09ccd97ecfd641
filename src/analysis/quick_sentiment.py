"""
Word-count sentiment on a -1..1 scale

Used for quick labels on feedback lists. Its score is not on the 0..1 scale
of AnalysisResult.sentiment_score and must not be fed to PriorityScorer.
"""
import re
from typing import Iterable

from src.core import QuickSentimentResult

POSITIVE_WORDS = frozenset({
    "good", "great", "excellent", "amazing", "wonderful", "fantastic", "terrific",
    "outstanding", "superb", "awesome", "nice", "love", "happy", "satisfied",
    "perfect", "brilliant", "impressive", "exceptional", "delighted", "pleased",
    "thank", "thanks", "like", "enjoy", "excited", "recommend", "best",
})

NEGATIVE_WORDS = frozenset({
    "bad", "poor", "terrible", "awful", "horrible", "disappointing", "frustrating",
    "unsatisfied", "dissatisfied", "unhappy", "sorry", "hate", "dislike", "worst",
    "mistake", "annoying", "problem", "issue", "fail", "failure", "complaint",
    "complain", "disappointed", "upset", "regret", "sad", "angry", "broken",
})

_WORD = re.compile(r"\b(\w+)\b")

def analyze_sentiment(text: str) -> QuickSentimentResult:
    if not text or not isinstance(text, str):
        return QuickSentimentResult(sentiment="neutral", score=0.0, confidence=0.0)

    words = _WORD.findall(text.lower())
    positive_count = 0
    negative_count = 0
    for word in words:
        if word in POSITIVE_WORDS:
            positive_count += 1
        elif word in NEGATIVE_WORDS:
            negative_count += 1

    total_words = len(words)
    score = (positive_count - negative_count) / max(total_words, 5) if total_words else 0.0
    confidence = min((positive_count + negative_count) / total_words * 2, 1.0) if total_words else 0.0

    if score > 0.1:
        sentiment = "positive"
    elif score < -0.1:
        sentiment = "negative"
    else:
        sentiment = "neutral"

    return QuickSentimentResult(sentiment=sentiment, score=score, confidence=confidence)

def sentiment_display_score(scores: Iterable[float]) -> int:
    """Average quick score mapped to 0..100 for display (50 is neutral)"""
    values = list(scores)
    if not values:
        return 50
    average = sum(values) / len(values)
    return round((average + 1) * 50)

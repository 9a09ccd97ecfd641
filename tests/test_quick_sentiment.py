"""Tests for the word-count sentiment helper."""

import pytest

from src.analysis.priority import PriorityScorer
from src.analysis.quick_sentiment import analyze_sentiment, sentiment_display_score
from src.core import InvalidInputError


def test_positive():
    result = analyze_sentiment("Great product, I love it")

    assert result.sentiment == "positive"
    assert result.score == pytest.approx(2 / 5)
    assert result.confidence == pytest.approx(min(2 / 5 * 2, 1))


def test_negative():
    result = analyze_sentiment("terrible and broken")

    assert result.sentiment == "negative"
    assert result.score == pytest.approx(-2 / 5)


def test_whole_words_only():
    # unlike the keyword engine, "goodness" is not "good"
    assert analyze_sentiment("goodness").sentiment == "neutral"


def test_empty():
    result = analyze_sentiment("")

    assert (result.sentiment, result.score, result.confidence) == ("neutral", 0.0, 0.0)


def test_mixed_is_neutral():
    result = analyze_sentiment("good product but bad delivery and slow support overall")

    assert result.sentiment == "neutral"
    assert result.score == 0.0


def test_display_score():
    assert sentiment_display_score([]) == 50
    assert sentiment_display_score([1.0, 0.0]) == 75
    assert sentiment_display_score([-1.0]) == 0


def test_negative_scale_rejected_by_priority_scorer():
    result = analyze_sentiment("awful awful awful")

    with pytest.raises(InvalidInputError):
        PriorityScorer().score(result.score, "anger", 1)

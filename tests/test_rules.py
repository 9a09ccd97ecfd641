"""Tests for the keyword-based sentiment engine."""

import pytest

from src.analysis.priority import PriorityScorer
from src.analysis.rules import RuleBasedSentimentEngine
from src.core import EMOTIONS


class TestRuleBasedSentimentEngine:
    """Test cases for RuleBasedSentimentEngine."""

    def setup_method(self):
        self.engine = RuleBasedSentimentEngine()

    def test_frustrated_customer_is_negative_and_high_priority(self):
        result = self.engine.analyze("I am extremely frustrated with the delays, this is unacceptable")

        assert result.sentiment == "negative"
        assert result.dominant_emotion == "frustration"
        assert result.language == "en"
        assert result.used_fallback is True

        scorer = PriorityScorer()
        score = scorer.score(result.sentiment_score, result.dominant_emotion, 3)
        assert scorer.categorize(score) == "high"

    def test_positive_message(self):
        result = self.engine.analyze("Great service, thank you! I love it")

        assert result.sentiment == "positive"
        assert result.dominant_emotion == "joy"
        assert result.sentiment_score == pytest.approx(0.8)

    def test_no_keywords_is_neutral(self):
        result = self.engine.analyze("Please send the invoice to my office")

        assert result.sentiment == "neutral"
        assert result.sentiment_score == 0.5
        assert result.dominant_emotion == "neutral"
        assert result.emotions[0].score == pytest.approx(0.3)
        assert result.confidence_score == 0.0

    def test_tie_is_neutral(self):
        result = self.engine.analyze("good but bad")

        assert result.sentiment == "neutral"
        assert result.sentiment_score == 0.5

    def test_substring_matches_count(self):
        # "goodness" contains "good"
        result = self.engine.analyze("goodness")

        assert result.sentiment == "positive"
        assert result.dominant_emotion == "joy"

    def test_every_occurrence_counts(self):
        once = self.engine.analyze("good")
        twice = self.engine.analyze("good good")

        assert twice.sentiment_score > once.sentiment_score
        assert twice.emotions[0].score == pytest.approx(0.6)

    def test_spanish_keywords(self):
        result = self.engine.analyze("Excelente atención, muchas gracias")

        assert result.sentiment == "positive"
        assert result.language == "es"

    def test_negative_score_bottoms_out_at_five_matches(self):
        result = self.engine.analyze("bad bad bad bad bad bad bad")

        assert result.sentiment_score == pytest.approx(0.0)

    def test_emotion_scores_are_clamped(self):
        result = self.engine.analyze("sad " * 6)

        assert result.emotions[0].emotion == "sadness"
        assert result.emotions[0].score == 1.0
        assert result.confidence_score == 1.0

    def test_confidence_is_raw_maximum(self):
        result = self.engine.analyze("I am worried")

        assert result.dominant_emotion == "fear"
        assert result.confidence_score == pytest.approx(0.3)

    def test_all_nine_emotions_sorted(self):
        result = self.engine.analyze("Wow, what a surprise, I trust you")

        assert {e.emotion for e in result.emotions} == set(EMOTIONS)
        scores = [e.score for e in result.emotions]
        assert scores == sorted(scores, reverse=True)
        assert result.dominant_emotion == result.emotions[0].emotion

    def test_deterministic(self):
        text = "The product arrived broken and I'm disappointed"

        assert self.engine.analyze(text) == self.engine.analyze(text)

    @pytest.mark.parametrize("count", range(0, 7))
    def test_more_positive_keywords_never_lower_the_score(self, count):
        base = "the delivery was late and the box was broken. "
        fewer = self.engine.analyze(base + "great " * count)
        more = self.engine.analyze(base + "great " * (count + 1))

        assert more.sentiment_score >= fewer.sentiment_score

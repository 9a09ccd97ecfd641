"""Tests for the script-based language detector."""

import pytest

from src.analysis.language import LanguageDetector, language_name


class TestLanguageDetector:
    """Test cases for LanguageDetector."""

    def setup_method(self):
        self.detector = LanguageDetector()

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Hello there", "en"),
            ("¿Cómo estás?", "es"),
            ("Gracias, el pedido llegó", "es"),
            ("मुझे मदद चाहिए", "hi"),
            ("Hej där", "en"),
            ("Grüße aus Berlin", "en"),
            ("Здравствуйте", "other"),
            ("ありがとう", "other"),
            ("", "en"),
        ],
    )
    def test_detect(self, text, expected):
        assert self.detector.detect(text) == expected

    def test_devanagari_wins_over_spanish_marks(self):
        assert self.detector.detect("ñ नमस्ते") == "hi"

    def test_spanish_marks_are_case_insensitive(self):
        assert self.detector.detect("ÉXITO TOTAL") == "es"

    def test_deterministic(self):
        text = "¿Dónde está mi pedido?"
        assert self.detector.detect(text) == self.detector.detect(text)


def test_language_name():
    assert language_name("es") == "Spanish"
    assert language_name("hi") == "Hindi"
    assert language_name("fr") == "fr"

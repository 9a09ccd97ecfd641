"""Script-based language guess for customer messages"""
import re

LANGUAGE_NAMES = {
    "en": "English",
    "es": "Spanish",
    "hi": "Hindi",
    "other": "Other",
}

_NON_ASCII = re.compile(r"[^\u0000-\u007F]")
_DEVANAGARI = re.compile(r"[\u0900-\u097F]")
_SPANISH_MARKS = re.compile(r"[áéíóúüñ¿¡]", re.IGNORECASE)
# Basic Latin, Latin-1 Supplement, Latin Extended-A/B, Latin Extended Additional, General Punctuation
_LATIN_ONLY = re.compile(r"^[\u0000-\u024F\u1E00-\u1EFF\u2000-\u206F]*$")

class LanguageDetector:
    """
    Coarse language heuristic based on character sets

    Pure ASCII text is English. Devanagari wins over everything else, then
    the Spanish marks. Latin-script languages other than Spanish (Swedish,
    German, ...) are reported as English; only other scripts give 'other'.
    """

    def detect(self, text: str) -> str:
        """
        Guess the language of a text

        Args:
            text: Input text

        Returns:
            'en', 'es', 'hi' or 'other'
        """
        if not _NON_ASCII.search(text):
            return "en"
        if _DEVANAGARI.search(text):
            return "hi"
        if _SPANISH_MARKS.search(text):
            return "es"
        if _LATIN_ONLY.match(text):
            return "en"
        return "other"

def language_name(code: str) -> str:
    return LANGUAGE_NAMES.get(code, code)

"""
Script based language guess for recognized fragments

This is a rough heuristic: it looks for characters specific to an
alphabet and returns the first match in SCRIPT_PATTERNS order. Mixed
script fragments get whichever script is listed first.
"""
import re
from typing import Callable, Optional

LanguageClassifier = Callable[[str], Optional[str]]

SCRIPT_PATTERNS = (
    ("ru", re.compile("[а-яё]")),
    ("ja", re.compile("[぀-ヿ]")),  # hiragana, katakana
    ("zh", re.compile("[一-鿿]")),
    ("ko", re.compile("[가-힯]")),
    ("ar", re.compile("[ء-ي]")),
    ("hi", re.compile("[ऀ-ॿ]")),
    ("es", re.compile("[ñ¿¡]")),
    ("de", re.compile("[ß]")),
    ("fr", re.compile("[àâæçèêëîïôœùûÿ]")),
    ("de", re.compile("[äöü]")),
    ("es", re.compile("[áíóú]")),
    ("en", re.compile("[a-z]")),
)


def detect_language(text: str) -> Optional[str]:
    """Guess a language code from the characters in text"""
    if not text:
        return None

    lowered = text.lower()
    for language, pattern in SCRIPT_PATTERNS:
        if pattern.search(lowered):
            return language
    return None

#!/usr/bin/env python3
"""
detection.py
-------------------
Local language detection for page bodies.

Wraps `langdetect` (a port of the n-gram language-detection library) and
normalises its result to a two-letter ISO 639-1 code with Babel, so that
e.g. `zh-cn` is compared as `zh`.

Usage:
    from hugocheck.nlp.detection import detect_language

    detect_language("Ceci est une page en français.")  # 'fr'
"""
# --- Annotations ---
from __future__ import annotations

# --- Third party imports ---
from babel import Locale, UnknownLocaleError
from langdetect import DetectorFactory, detect
from langdetect.lang_detect_exception import LangDetectException

# --- Local imports ---
from hugocheck.core.exceptions import LanguageDetectionError

# langdetect is probabilistic; a fixed seed keeps runs reproducible
DetectorFactory.seed = 0


def to_two_letter(code: str) -> str:
    """
    Reduce a detected language tag to its two-letter language code.

    Examples:
        >>> to_two_letter("zh-cn")
        'zh'
        >>> to_two_letter("en")
        'en'

    Raises:
        LanguageDetectionError: If Babel does not know the language
    """
    try:
        return Locale.parse(code.replace("-", "_")).language
    except (UnknownLocaleError, ValueError) as e:
        raise LanguageDetectionError(
            f"Detected language '{code}' is not a known locale"
        ) from e


def detect_language(text: str) -> str:
    """
    Detect the language of a text.

    Args:
        text: Prose to analyse

    Returns:
        Two-letter language code (lower case)

    Raises:
        LanguageDetectionError: If no language can be detected
    """
    try:
        detected = detect(text)
    except LangDetectException as e:
        raise LanguageDetectionError(f"Cannot detect language: {e}") from e
    return to_two_letter(detected)

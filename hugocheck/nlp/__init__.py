"""
Language services used by body checks.

- detection: local language detection (langdetect)
- spellcheck: remote spelling/grammar check (OpenAI)
"""

from hugocheck.nlp.detection import detect_language, to_two_letter
from hugocheck.nlp.spellcheck import SpellChecker, SpellCheckResult, build_prompt

__all__ = [
    "detect_language",
    "to_two_letter",
    "SpellChecker",
    "SpellCheckResult",
    "build_prompt",
]

"""
test_detection.py
-----------------
Unit tests for hugocheck.nlp.detection.
"""
import pytest
from unittest.mock import patch

from langdetect.lang_detect_exception import LangDetectException

from hugocheck.core.exceptions import LanguageDetectionError
from hugocheck.nlp.detection import detect_language, to_two_letter


class TestToTwoLetter:
    """Test to_two_letter function."""

    @pytest.mark.parametrize(
        "code,expected", [("en", "en"), ("zh-cn", "zh"), ("zh-tw", "zh"), ("pt", "pt")]
    )
    def test_known_codes(self, code, expected):
        assert to_two_letter(code) == expected

    def test_unknown_code(self):
        with pytest.raises(LanguageDetectionError, match="not a known locale"):
            to_two_letter("qq")


class TestDetectLanguage:
    """Test detect_language function."""

    def test_result_is_normalised(self):
        with patch("hugocheck.nlp.detection.detect", return_value="zh-cn"):
            assert detect_language("some text") == "zh"

    def test_no_features(self):
        with patch(
            "hugocheck.nlp.detection.detect",
            side_effect=LangDetectException(0, "No features in text."),
        ):
            with pytest.raises(LanguageDetectionError, match="No features"):
                detect_language("12345")

    def test_real_detection(self):
        text = (
            "Ceci est une page écrite en français. Elle décrit le fonctionnement "
            "du site et la manière de publier un nouvel article."
        )
        assert detect_language(text) == "fr"

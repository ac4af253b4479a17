"""
test_spellcheck.py
------------------
Unit tests for hugocheck.nlp.spellcheck.

The OpenAI client is replaced with a mock; no network calls are made.
"""
import json
import pytest
from unittest.mock import MagicMock, patch

import openai

from hugocheck.core.exceptions import SpellCheckError
from hugocheck.nlp.spellcheck import SpellChecker, SpellCheckResult, build_prompt


def completion(content):
    response = MagicMock()
    response.choices[0].message.content = content
    return response


@pytest.fixture
def client():
    with patch("hugocheck.nlp.spellcheck.openai.OpenAI") as mock_openai:
        yield mock_openai.return_value


@pytest.fixture
def checker(client):
    checker = SpellChecker()
    checker.initialise("sk-test", "Proofread. {language_hint}", "gpt-4o-mini", 0.0, 512)
    return checker


class TestBuildPrompt:
    """Test build_prompt function."""

    def test_with_language(self):
        assert build_prompt("Check. {language_hint}", "fr") == (
            "Check. The text must be written in language 'fr'. "
        )

    def test_without_language(self):
        assert build_prompt("Check. {language_hint}") == "Check. "

    def test_template_without_placeholder(self):
        assert build_prompt("Check.", "fr") == "Check."


class TestInitialise:
    """Test SpellChecker.initialise."""

    @pytest.mark.parametrize("api_key", [None, "", "  "])
    def test_missing_api_key(self, api_key):
        with pytest.raises(SpellCheckError, match="Undefined chatgpt-api-key"):
            SpellChecker().initialise(api_key, "prompt", "gpt-4o-mini", 0.0, 512)

    def test_creates_client(self):
        with patch("hugocheck.nlp.spellcheck.openai.OpenAI") as mock_openai:
            checker = SpellChecker()
            checker.initialise("sk-test", "prompt", "gpt-4o-mini", 0.0, 512)

        mock_openai.assert_called_once_with(api_key="sk-test")
        assert checker.is_initialised

    def test_check_before_initialise(self):
        with pytest.raises(SpellCheckError, match="not initialised"):
            SpellChecker().check("text")


class TestCheck:
    """Test SpellChecker.check."""

    def test_clean_text(self, checker, client):
        client.chat.completions.create.return_value = completion('{"ok": true}')

        result = checker.check("Some text.", "en")

        assert result == SpellCheckResult(ok=True)
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["max_tokens"] == 512
        assert kwargs["messages"][0]["content"] == (
            "Proofread. The text must be written in language 'en'. "
        )
        assert kwargs["messages"][1] == {"role": "user", "content": "Some text."}

    def test_reported_issues(self, checker, client):
        client.chat.completions.create.return_value = completion(
            json.dumps({"ok": False, "issues": ["teh -> the", "recieve -> receive"]})
        )

        result = checker.check("teh text")

        assert not result.ok
        assert result.reason == "teh -> the; recieve -> receive"

    def test_failure_without_issues_has_reason(self):
        assert SpellCheckResult(ok=False).reason == "Spell check reported mistakes"

    def test_non_json_reply(self, checker, client):
        client.chat.completions.create.return_value = completion("Looks fine to me")
        with pytest.raises(SpellCheckError, match="Unexpected spell check reply"):
            checker.check("text")

    def test_reply_without_ok(self, checker, client):
        client.chat.completions.create.return_value = completion('{"status": "fine"}')
        with pytest.raises(SpellCheckError, match="Unexpected spell check reply"):
            checker.check("text")

    def test_api_error(self, checker, client):
        client.chat.completions.create.side_effect = openai.OpenAIError("rate limited")
        with pytest.raises(SpellCheckError, match="rate limited"):
            checker.check("text")

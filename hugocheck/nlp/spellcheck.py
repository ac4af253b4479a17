#!/usr/bin/env python3
"""
spellcheck.py
-------------------
Remote spelling and grammar check through the OpenAI API.

The checker is initialised once per folder with the folder's prompt and
model parameters, then asked to review each page body. The prompt template
may contain a `{language_hint}` placeholder, which is replaced with a
sentence naming the expected language (or removed when no hint is given).

The model must reply with a JSON object:
    {"ok": true}
    {"ok": false, "issues": ["...", "..."]}

Setup:
    export OPENAI_API_KEY="your-api-key"

Usage:
    checker = SpellChecker()
    checker.initialise(api_key, prompt, "gpt-4o-mini", 0.0, 1024)
    result = checker.check(body, language="fr")
    if not result.ok:
        print(result.reason)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
from dataclasses import dataclass, field
from typing import List, Optional

# --- Third party imports ---
import openai

# --- Local imports ---
from hugocheck.core.exceptions import SpellCheckError

LANGUAGE_HINT_PLACEHOLDER = "{language_hint}"


@dataclass
class SpellCheckResult:
    """Outcome of one remote spell check."""

    ok: bool
    issues: List[str] = field(default_factory=list)

    @property
    def reason(self) -> str:
        if self.ok:
            return ""
        return "; ".join(self.issues) or "Spell check reported mistakes"


def build_prompt(template: str, language: Optional[str] = None) -> str:
    """
    Fill the language hint into a prompt template.

    Examples:
        >>> build_prompt("Check this. {language_hint}", "fr")
        "Check this. The text must be written in language 'fr'. "
        >>> build_prompt("Check this. {language_hint}")
        'Check this. '
    """
    hint = f"The text must be written in language '{language}'. " if language else ""
    return template.replace(LANGUAGE_HINT_PLACEHOLDER, hint)


class SpellChecker:
    """
    OpenAI chat-completion client used as a spell checker.

    Call initialise() before check(); a checker may be re-initialised for
    another folder.
    """

    def __init__(self) -> None:
        self.client: Optional[openai.OpenAI] = None
        self.prompt: str = ""
        self.model: str = ""
        self.temperature: float = 0.0
        self.max_tokens: int = 0

    @property
    def is_initialised(self) -> bool:
        return self.client is not None

    def initialise(
        self,
        api_key: Optional[str],
        prompt: str,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> None:
        """
        Connect to the OpenAI API with folder-specific parameters.

        Args:
            api_key: OpenAI API key
            prompt: System prompt template
            model: Chat model name (e.g. gpt-4o-mini)
            temperature: Sampling temperature
            max_tokens: Completion token budget

        Raises:
            SpellCheckError: If the API key is missing
        """
        if not api_key or not api_key.strip():
            raise SpellCheckError("Undefined chatgpt-api-key. ChatGPT is not available.")

        self.client = openai.OpenAI(api_key=api_key)
        self.prompt = prompt
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    def check(self, text: str, language: Optional[str] = None) -> SpellCheckResult:
        """
        Ask the model to review a text.

        Args:
            text: Page body
            language: Expected language code, sent as a hint when given

        Returns:
            SpellCheckResult

        Raises:
            SpellCheckError: If the checker is not initialised, the request
                fails, or the reply is not the expected JSON object
        """
        if self.client is None:
            raise SpellCheckError("Spell checker is not initialised")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": build_prompt(self.prompt, language)},
                    {"role": "user", "content": text},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                response_format={"type": "json_object"},
            )
        except openai.OpenAIError as e:
            raise SpellCheckError(f"OpenAI request failed: {e}") from e

        content = response.choices[0].message.content or ""

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise SpellCheckError(f"Unexpected spell check reply: {content!r}") from e

        if not isinstance(data, dict) or not isinstance(data.get("ok"), bool):
            raise SpellCheckError(f"Unexpected spell check reply: {content!r}")

        issues = data.get("issues") or []
        if not isinstance(issues, list):
            issues = [str(issues)]
        return SpellCheckResult(ok=data["ok"], issues=[str(i) for i in issues])

"""AI-assisted wording for line-item descriptions and business terms.

Both entry points are coroutines that never raise: failures come back as a
:class:`Suggestion` whose ``text`` is a message the caller can show verbatim.
"""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

_LOGGER = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4.1"

DESCRIPTION_PROMPT_TEMPLATE = (
    "Rozšiřte tento stručný popis služby do profesionálnější a podrobnější položky pro cenovou nabídku. "
    "Popis by měl být vhodný pro klienta. Udržujte ho v rozsahu jedné nebo dvou vět. "
    'Stručný popis: "{text}"'
)

TERMS_PROMPT = """
Vygenerujte standardní obchodní podmínky pro cenovou nabídku od freelancera nebo malé firmy. Zahrňte stručné sekce pro:
1. Platební podmínky (např. 50 % předem, 50 % po dokončení, splatnost 30 dní).
2. Rozsah práce (obecné prohlášení, že detaily jsou v nabídce).
3. Časový harmonogram (obecné prohlášení).
4. Důvěrnost.
5. Storno podmínky.
Jazyk udržujte jasný, stručný a profesionální.
"""

NOT_CONFIGURED_MESSAGE = "API klíč není nakonfigurován."
DESCRIPTION_FAILED_MESSAGE = "Chyba při generování popisu. Zkuste to prosím znovu."
TERMS_FAILED_MESSAGE = "Chyba při generování podmínek. Zkuste to prosím znovu."


class SuggestionStatus(str, enum.Enum):
    OK = "ok"
    NOT_CONFIGURED = "not_configured"
    FAILED = "failed"


@dataclass(frozen=True)
class Suggestion:
    status: SuggestionStatus
    text: str

    @property
    def ok(self) -> bool:
        return self.status is SuggestionStatus.OK


class TextSuggester:
    """Thin async wrapper over the OpenAI chat completions API.

    ``client`` may be any object exposing ``chat.completions.create`` as a
    coroutine; by default an ``AsyncOpenAI`` client is created on first use.
    """

    def __init__(self, api_key: Optional[str] = None, model: str = DEFAULT_MODEL, client: Any = None) -> None:
        self.api_key = api_key if api_key is not None else os.getenv("OPENAI_API_KEY")
        self.model = model
        self._client = client

    @property
    def configured(self) -> bool:
        return self._client is not None or bool(self.api_key)

    def _get_client(self) -> Any:
        if self._client is None:
            from openai import AsyncOpenAI

            self._client = AsyncOpenAI(api_key=self.api_key)
        return self._client

    async def _complete(self, prompt: str) -> str:
        response = await self._get_client().chat.completions.create(
            model=self.model,
            temperature=0.7,
            messages=[{"role": "user", "content": prompt}],
        )
        content = response.choices[0].message.content
        if not content:
            raise RuntimeError("Text suggestion returned an empty response.")
        return content.strip()

    async def _suggest(self, prompt: str, failure_message: str, purpose: str) -> Suggestion:
        if not self.configured:
            return Suggestion(SuggestionStatus.NOT_CONFIGURED, NOT_CONFIGURED_MESSAGE)
        try:
            text = await self._complete(prompt)
        except Exception:  # pylint: disable=broad-except
            _LOGGER.exception("Text suggestion failed", extra={"purpose": purpose})
            return Suggestion(SuggestionStatus.FAILED, failure_message)
        return Suggestion(SuggestionStatus.OK, text)

    async def suggest_description(self, text: str) -> Suggestion:
        """Expand a short line-item description; blank input is returned unchanged."""
        if not text.strip():
            return Suggestion(SuggestionStatus.OK, text)
        prompt = DESCRIPTION_PROMPT_TEMPLATE.format(text=text)
        return await self._suggest(prompt, DESCRIPTION_FAILED_MESSAGE, "description")

    async def suggest_terms(self) -> Suggestion:
        return await self._suggest(TERMS_PROMPT.strip(), TERMS_FAILED_MESSAGE, "terms")

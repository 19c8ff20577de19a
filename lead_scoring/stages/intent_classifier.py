"""
Intent Classification
=====================
Asks an LLM for a coarse buying-intent label (High/Medium/Low) and a short
justification for one lead against the current offer.

The stage never raises: a missing API key, a failed request or an
unparseable reply all degrade to a Medium intent with a diagnostic reason.
"""

import logging
import re
import time
from typing import Any, Optional

import anthropic
import openai
from openai import OpenAI

from ..models.schemas import Lead, Offer, Intent, IntentResult
from ..config.settings import (
    LLM_CONFIG,
    FALLBACK_REASONS,
    INTENT_INSTRUCTIONS,
    REASON_FALLBACK_CHARS,
)

logger = logging.getLogger(__name__)

_INTENT_RE = re.compile(r"Intent:\s*(High|Medium|Low)", re.IGNORECASE)
_REASON_RE = re.compile(r"Reason:\s*(.+)", re.IGNORECASE | re.DOTALL)


class IntentClassifierStage:
    """
    Classify a lead's buying intent with an LLM.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        client: Any = None,
    ):
        """
        Initialize LLM client.

        Args:
            api_key: API key for LLM provider
            provider: LLM provider ("openai", "openrouter" or "anthropic")
            model: Model name, defaults to the configured model
            client: Pre-built SDK client (mainly for tests)
        """
        self.api_key = api_key if api_key is not None else LLM_CONFIG.get("api_key", "")
        self.provider = provider or LLM_CONFIG.get("provider", "openai")
        self.model = model or LLM_CONFIG.get("model", "gpt-4o-mini")
        self.base_url = LLM_CONFIG.get("base_url")
        self.max_tokens = LLM_CONFIG.get("max_tokens", 200)
        self.temperature = LLM_CONFIG.get("temperature", 0.2)
        self.timeout = LLM_CONFIG.get("timeout", 30.0)
        self.max_retries = LLM_CONFIG.get("max_retries", 0)
        self.client = client

        if self.client is None:
            self._initialize_client()

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def _initialize_client(self):
        """Initialize the LLM client based on provider"""
        if not self.api_key:
            return

        if self.provider == "openrouter":
            self.client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=self.max_retries,
                default_headers={
                    "HTTP-Referer": LLM_CONFIG.get("site_url", ""),
                    "X-Title": LLM_CONFIG.get("app_name", ""),
                },
            )
        elif self.provider == "openai":
            self.client = OpenAI(
                api_key=self.api_key,
                timeout=self.timeout,
                max_retries=self.max_retries,
            )
        elif self.provider == "anthropic":
            self.client = anthropic.Anthropic(
                api_key=self.api_key,
                timeout=self.timeout,
                max_retries=self.max_retries,
            )
        else:
            logger.warning("Unknown LLM provider %r; every call will fall back", self.provider)

    def process(self, lead: Lead, offer: Offer) -> IntentResult:
        """
        Classify a lead's buying intent.

        Args:
            lead: Lead to classify
            offer: Offer the lead is being considered for

        Returns:
            IntentResult; `fallback` is set when no LLM answer was used
        """
        if not self.api_key:
            return IntentResult(
                intent=Intent.MEDIUM,
                reason=FALLBACK_REASONS["no_api_key"],
                fallback=True,
            )

        start_time = time.time()
        try:
            reply = self._call_llm(self._generate_prompt(lead, offer))
        except (openai.APIStatusError, anthropic.APIStatusError) as e:
            logger.error("LLM error for %r: %s %s", lead.name, e.status_code, e.message)
            return IntentResult(
                intent=Intent.MEDIUM,
                reason=FALLBACK_REASONS["call_failed"].format(status=e.status_code),
                fallback=True,
            )
        except Exception:
            logger.exception("LLM call exception for %r", lead.name)
            return IntentResult(
                intent=Intent.MEDIUM,
                reason=FALLBACK_REASONS["call_exception"],
                fallback=True,
            )

        logger.debug(
            "Classified %r in %.1f ms", lead.name, (time.time() - start_time) * 1000
        )
        return parse_intent_reply(reply)

    def _generate_prompt(self, lead: Lead, offer: Offer) -> str:
        """Build the user message embedding the serialized offer and lead"""
        return (
            f"Offer: {offer.model_dump_json()}\n"
            f"Lead: {lead.model_dump_json()}\n\n"
            "Classify the lead's buying intent and explain in 1-2 sentences."
        )

    def _call_llm(self, prompt: str) -> str:
        """Call the LLM API and return the reply text"""
        if self.client is None:
            raise RuntimeError(f"No LLM client for provider {self.provider!r}")

        if self.provider in ["openrouter", "openai"]:
            # Both OpenRouter and OpenAI use the same SDK interface
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": INTENT_INSTRUCTIONS},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
            if not response.choices:
                return ""
            return response.choices[0].message.content or ""

        elif self.provider == "anthropic":
            response = self.client.messages.create(
                model=self.model,
                system=INTENT_INSTRUCTIONS,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
            if not response.content:
                return ""
            return response.content[0].text or ""

        raise ValueError(f"Unknown provider: {self.provider}")


def parse_intent_reply(reply: str) -> IntentResult:
    """
    Parse an `Intent: ...` / `Reason: ...` reply.

    Missing intent defaults to Medium; a missing reason falls back to the
    start of the raw reply.
    """
    reply = reply or ""

    intent_match = _INTENT_RE.search(reply)
    intent = Intent(intent_match.group(1).capitalize()) if intent_match else Intent.MEDIUM

    reason_match = _REASON_RE.search(reply)
    if reason_match:
        reason = reason_match.group(1).strip().split("\n")[0].strip()
    else:
        reason = reply.strip()[:REASON_FALLBACK_CHARS]

    return IntentResult(intent=intent, reason=reason)


def classify_intent(lead: Lead, offer: Offer) -> IntentResult:
    """Classify with a stage built from the environment configuration"""
    return IntentClassifierStage().process(lead, offer)

"""Narrative legal analysis via the Claude API."""

import logging
from typing import Optional

import anthropic
import httpx

from nyaaybot.config import Settings
from nyaaybot.models import NarrativeResult

logger = logging.getLogger(__name__)

SYSTEM_PROMPT_TEMPLATE = """\
You are NYAAYBOT, an AI assistant specialized in legal document analysis for {jurisdiction}.
Analyze the provided legal document(s) and respond with these sections, each under a markdown heading:

## What This Case Is About
A short plain-language overview of the matter, the parties, and what is being decided.

## Key Legal Points and Provisions
The statutes, articles, sections, and clauses that apply, with a one-line explanation of each.

## Important Clauses and References
Notable clauses, obligations, deadlines, and cross-references found in the documents.

## Potential Legal Issues
Risks, weaknesses, inconsistencies, or open questions a lawyer should look at.

## Recommendations
Practical next steps and what to verify.

Rules:
- Write in plain language for a non-lawyer; define every legal term the first time you use it.
- Be neutral, accurate, and grounded in the documents. Do not invent facts.
- Focus on the law of {jurisdiction}, and say so when a point depends on another jurisdiction.
- If the documents contain extraction errors or are unreadable, say which ones and analyze the rest.\
"""

CONNECTION_ERROR_MESSAGE = (
    "Language model connection error. Please ensure the analysis service "
    "is reachable and try again."
)


class ModelUnavailable(Exception):
    """The language model could not be reached (connection refused, timeout)."""


class NarrativeAnalyzer:
    """Produces a narrative analysis of the combined documents.

    ``analyze`` never raises. When the model cannot be reached the
    result is degraded with ``reason="connection"``; any other failure
    gives ``reason="error"``. Both degraded texts embed the combined
    document so the caller still has something to read and classify.

    Usage::

        analyzer = NarrativeAnalyzer()
        result = analyzer.analyze(combined_text, "India")
    """

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize the analyzer.

        Args:
            api_key: Anthropic API key. If not provided, reads from
                     ANTHROPIC_API_KEY environment variable (loaded from .env).
            model: Claude model ID to use.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens in the API response.
            timeout: Seconds before the request is abandoned; a timeout
                     is handled like a refused connection.
            settings: Defaults for every argument left unset.
        """
        settings = settings or Settings.from_env()
        self.api_key = api_key or settings.anthropic_api_key
        self.model = model or settings.model
        self.temperature = settings.temperature if temperature is None else temperature
        self.max_tokens = max_tokens or settings.max_tokens
        self.timeout = timeout or settings.model_timeout

    @staticmethod
    def build_system_prompt(jurisdiction: str) -> str:
        return SYSTEM_PROMPT_TEMPLATE.format(jurisdiction=jurisdiction)

    def analyze(self, combined_text: str, jurisdiction: str) -> NarrativeResult:
        """Run the analysis and return the model text or a degraded result."""
        try:
            if not self.api_key:
                raise ValueError("ANTHROPIC_API_KEY is not set. Add it to your .env file.")
            text = self._call_api(
                self.build_system_prompt(jurisdiction),
                f"Analyze the following documents:\n\n{combined_text}",
            )
        except ModelUnavailable as e:
            logger.warning("Language model unavailable: %s", e)
            return NarrativeResult(
                text=(
                    f"{CONNECTION_ERROR_MESSAGE}\n\n"
                    f"Extracted text from documents:\n\n{combined_text}"
                ),
                reason="connection",
                model=self.model,
            )
        except Exception as e:
            logger.warning("Narrative analysis failed: %s", e)
            return NarrativeResult(
                text=(
                    f"Analysis error: {e}\n\n"
                    f"Extracted text from documents:\n\n{combined_text}"
                ),
                reason="error",
                model=self.model,
            )

        return NarrativeResult(text=text, model=self.model)

    def _call_api(self, system: str, user: str) -> str:
        """Send one system + user exchange and return the completion text.

        Raises:
            ModelUnavailable: the API could not be reached.
        """
        client = anthropic.Anthropic(api_key=self.api_key, timeout=self.timeout)
        try:
            response = client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=system,
                messages=[{"role": "user", "content": user}],
            )
        except (anthropic.APIConnectionError, httpx.ConnectError, ConnectionRefusedError) as e:
            # APITimeoutError subclasses APIConnectionError
            raise ModelUnavailable(str(e) or type(e).__name__) from e
        return response.content[0].text

"""Client for the external text-analysis service.

The service is an OpenAI-compatible chat endpoint. It receives plain text
and answers with unstructured prose that usually embeds JSON; parsing is
best effort. Nothing here reads or writes corpus state: failures surface
as AnalysisServiceError and stay with the caller.

Usage:
    client = AnalysisClient()
    cues = client.detect_cues(state.get_text_range(1, 1, 13))
"""

import json
import logging
import re
import time
from dataclasses import dataclass
from typing import Optional

import httpx

from .config import Settings, get_settings
from .corpus.state import CorpusState
from .ingest.loader import CorpusLoadError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a biblical scholar specializing in narratology and attentional "
    "cue detection in ancient texts."
)

CUE_PROMPT = """Analyze this text segment from Mark's Gospel for attentional cues that direct readers to construct character models for background figures, particularly the Holy Spirit.

Text: "{text}"

Look for these types of cues:
1. Primacy effect: Early mentions that establish character importance
2. Causal implication: Events attributed to off-stage characters
3. Focalization shifts: Narrative perspective changes
4. Conspicuous absence: Notable omissions or gaps
5. Prolepsis: Forward references that anticipate character action

For each cue found, provide:
- Type of cue
- Location (word or phrase)
- Explanation of how it functions
- Confidence score (0-1)

Respond in JSON format:
{{
  "cues": [
    {{
      "type": "cue_type",
      "location": "specific_text",
      "explanation": "how_it_works",
      "confidence": 0.8
    }}
  ]
}}"""

CHARACTER_PROMPT = """Analyze the character relationships in this text segment from Mark's Gospel.

Characters mentioned: {characters}

Text: "{text}"

Identify:
1. Direct interactions between characters
2. Implicit relationships
3. Power dynamics
4. Narrative roles (protagonist, antagonist, background, etc.)

Respond in JSON format with relationship analysis."""

PATTERN_PROMPT = """Analyze these narrative segments from Mark's Gospel for recurring patterns and narrative techniques.

Segments: {segments}

Identify patterns in:
1. Character introduction
2. Scene transitions
3. Attentional cue distribution
4. Narrative rhythm

Respond in JSON format with pattern analysis."""


class AnalysisServiceError(RuntimeError):
    """The analysis service could not produce a usable response."""


@dataclass(frozen=True)
class AnalysisCue:
    """A cue proposed by the analysis service."""

    type: str
    location: str
    explanation: str
    confidence: float | None = None


class AnalysisClient:
    """Talks to the analysis service.

    Requests are idempotent, so transport failures and 5xx responses are
    retried up to ``max_retries`` times.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
    ):
        """Initialize the client.

        Args:
            settings: Settings to use (cached environment settings if omitted)
            timeout: Request timeout in seconds (default from config)
            max_retries: Retries after the first attempt (default from config)
        """
        self.settings = settings or get_settings()
        self.endpoint = self.settings.analysis_endpoint.rstrip("/")
        self.model = self.settings.analysis_model
        self.api_key = self.settings.analysis_api_key
        self.timeout = timeout if timeout is not None else self.settings.analysis_timeout
        self.max_retries = (
            max_retries if max_retries is not None else self.settings.analysis_max_retries
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def complete(
        self,
        prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 1000,
    ) -> str:
        """Send one prompt and return the response content.

        Raises:
            AnalysisServiceError: on missing key, timeout, transport failure,
                error status or empty content
        """
        if not self.api_key:
            raise AnalysisServiceError(
                "API key not configured. Set NC_ANALYSIS_API_KEY to use the analysis service."
            )

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        attempts = self.max_retries + 1
        last_error = ""
        for attempt in range(1, attempts + 1):
            try:
                response = httpx.post(
                    f"{self.endpoint}/chat/completions",
                    headers=headers,
                    json=payload,
                    timeout=self.timeout,
                )
            except httpx.TimeoutException as e:
                last_error = f"request timed out after {self.timeout}s"
                logger.warning("Analysis request timed out (attempt %d/%d): %s", attempt, attempts, e)
            except httpx.RequestError as e:
                last_error = f"request failed: {e}"
                logger.warning("Analysis request failed (attempt %d/%d): %s", attempt, attempts, e)
            else:
                if response.status_code >= 500:
                    last_error = f"service error {response.status_code}"
                    logger.warning(
                        "Analysis service returned %d (attempt %d/%d)",
                        response.status_code,
                        attempt,
                        attempts,
                    )
                elif response.status_code != 200:
                    raise AnalysisServiceError(
                        f"API request failed: {response.status_code} {response.text[:200]}"
                    )
                else:
                    return self._content(response)

            if attempt < attempts:
                time.sleep(min(2 ** (attempt - 1), 8))

        raise AnalysisServiceError(f"Failed to communicate with analysis service: {last_error}")

    def _content(self, response: httpx.Response) -> str:
        """Pull the message content out of a chat-completion response."""
        try:
            result = response.json()
        except ValueError as e:
            raise AnalysisServiceError("Analysis service returned malformed JSON") from e

        content = ""
        if isinstance(result, dict) and result.get("choices"):
            choices = result["choices"]
            choice = choices[0] if isinstance(choices, list) else None
            message = choice.get("message") if isinstance(choice, dict) else None
            if not isinstance(message, dict):
                raise AnalysisServiceError("Analysis service returned a malformed choice")
            content = message.get("content") or ""
        elif isinstance(result, dict):
            content = result.get("content") or ""
        elif isinstance(result, str):
            content = result

        if not isinstance(content, str):
            raise AnalysisServiceError(
                f"Analysis service returned malformed content ({type(content).__name__})"
            )
        if not content.strip():
            raise AnalysisServiceError("Analysis service returned empty content")
        return content.strip()

    def detect_cues(self, text: str) -> list[AnalysisCue]:
        """Ask the service for attentional cues in a text span."""
        content = self.complete(CUE_PROMPT.format(text=text))
        return parse_cue_response(content)

    def analyze_characters(self, names: list[str], text: str) -> str:
        """Ask the service about relationships among the named characters."""
        return self.complete(
            CHARACTER_PROMPT.format(characters=", ".join(names), text=text)
        )

    def recognize_patterns(self, segments: list[str]) -> str:
        """Ask the service for narrative patterns across verse segments."""
        return self.complete(PATTERN_PROMPT.format(segments="\n\n".join(segments)))


_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")
_JSON_SPANS = (re.compile(r"\{[\s\S]*\}"), re.compile(r"\[[\s\S]*\]"))


def extract_json(response: str) -> list | dict | None:
    """Pull the first parseable JSON value out of a model response.

    Candidates, in order: the first fenced code block (or the whole
    response), then its outermost {...} span, then its outermost [...] span.
    """
    if not response:
        return None

    fenced = _FENCED_BLOCK.search(response)
    text = fenced.group(1) if fenced else response

    candidates = [text]
    for pattern in _JSON_SPANS:
        span = pattern.search(text)
        if span:
            candidates.append(span.group(0))

    for candidate in candidates:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue
    return None


def parse_cue_response(content: str) -> list[AnalysisCue]:
    """Read the 'cues' array out of a response; unusable items are dropped."""
    data = extract_json(content)
    if isinstance(data, dict):
        items = data.get("cues", [])
    elif isinstance(data, list):
        items = data
    else:
        return []

    cues = []
    for item in items:
        if not isinstance(item, dict) or not item.get("type"):
            continue

        confidence = item.get("confidence")
        try:
            confidence = float(confidence) if confidence is not None else None
        except (TypeError, ValueError):
            confidence = None

        cues.append(
            AnalysisCue(
                type=str(item["type"]),
                location=str(item.get("location", "")),
                explanation=str(item.get("explanation", "")),
                confidence=confidence,
            )
        )
    return cues


def assemble_analysis_text(state: CorpusState, chapter: int) -> str:
    """Choose the text span handed to the analysis service for a chapter.

    Tries verses 1-50 of the chapter, then its first 10 sentences, then
    the first 20 sentences of the corpus.

    Raises:
        CorpusLoadError: if the corpus has no text at all
    """
    text = state.get_text_range(chapter, 1, 50)
    if text.strip():
        return text

    chapter_sentences = [s for s in state.sentences if s.chapter == chapter]
    text = " ".join(s.surface_text for s in chapter_sentences[:10])
    if text.strip():
        return text

    text = " ".join(s.surface_text for s in state.sentences[:20])
    if text.strip():
        return text

    raise CorpusLoadError("No text available for analysis; is the corpus loaded?")

"""Google Gemini backed section suggester."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from ..contracts import Section, SuggestConfig
from ..document import SourceDocument
from ..sections import SectionRecordError, sections_from_records
from .base import SectionSuggester, SuggestionError, sample_page_texts

logger = logging.getLogger(__name__)

_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "name": {"type": "STRING", "description": "Descriptive name for the section"},
            "startPage": {"type": "INTEGER", "description": "Starting page number (1-indexed)"},
            "endPage": {"type": "INTEGER", "description": "Ending page number (1-indexed)"},
        },
        "required": ["name", "startPage", "endPage"],
    },
}


def _suggestion_prompt(samples: list[str], page_count: int) -> str:
    joined = "\n\n".join(samples)
    return (
        f"Based on the following text samples from the first {len(samples)} pages of a PDF document, "
        "suggest a logical breakdown of sections. Return the start and end pages for each major "
        f"section or chapter you can identify. The document has {page_count} total pages.\n\n"
        f"Samples:\n{joined}\n\n"
        f"Current total pages: {page_count}"
    )


def _extract_text(data: dict[str, Any]) -> str:
    try:
        return data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return ""


def _parse_records(content: str) -> list[Any]:
    cleaned = content.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.strip("`")
        if cleaned.lower().startswith("json"):
            cleaned = cleaned[4:]
    obj = json.loads(cleaned)
    if isinstance(obj, dict) and isinstance(obj.get("sections"), list):
        obj = obj["sections"]
    if not isinstance(obj, list):
        raise SuggestionError(f"Expected a JSON array of sections, got {type(obj).__name__}")
    return obj


class GeminiSectionSuggester(SectionSuggester):
    def __init__(self, cfg: SuggestConfig) -> None:
        self.cfg = cfg

    def suggest(self, document: SourceDocument) -> list[Section]:
        samples = sample_page_texts(
            document,
            max_pages=self.cfg.max_sample_pages,
            chars_per_page=self.cfg.sample_chars_per_page,
        )
        prompt = _suggestion_prompt(samples, document.page_count)
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": 0.2,
                "responseMimeType": "application/json",
                "responseSchema": _RESPONSE_SCHEMA,
            },
        }

        logger.info("Requesting section suggestions from %s for %s", self.cfg.model, document.name)
        try:
            data = self._post(payload)
        except (httpx.HTTPError, json.JSONDecodeError) as exc:
            logger.warning("Suggestion request failed: %s", exc)
            raise SuggestionError(f"Section suggestion request failed: {type(exc).__name__}") from exc

        content = _extract_text(data)
        if not content:
            raise SuggestionError("Section suggestion response was empty")
        try:
            records = _parse_records(content)
            sections = sections_from_records(records)
        except (json.JSONDecodeError, SectionRecordError) as exc:
            logger.warning("Could not parse suggested sections: %s", exc)
            raise SuggestionError(f"Could not parse suggested sections: {exc}") from exc

        logger.info("Received %d suggested sections", len(sections))
        return sections

    def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.cfg.base_url}/v1beta/models/{self.cfg.model}:generateContent"
        params = {"key": self.cfg.api_key}
        with httpx.Client(timeout=self.cfg.timeout_s, trust_env=self.cfg.trust_env) as client:
            resp = client.post(url, params=params, json=payload)
            resp.raise_for_status()
            return resp.json()

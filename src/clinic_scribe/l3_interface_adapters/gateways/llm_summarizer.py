"""Gateway: LLM-backed summarizer — implements Summarizer port over any LLMClient."""

from __future__ import annotations

import asyncio
import json
import logging
import re

import pydantic
from pydantic import BaseModel, Field

from clinic_scribe.l1_entities.errors import EmptyInputError, SummarizationFailure
from clinic_scribe.l1_entities.summary import SummaryResult
from clinic_scribe.l2_use_cases.ports.llm_client import LLMClient
from clinic_scribe.l2_use_cases.utils.prompt_builder import build_summary_prompt

log = logging.getLogger('cs.summary')

_FENCE_RE = re.compile(r'^```(?:json)?\s*(.*?)\s*```$', re.DOTALL)


class _SummaryPayload(BaseModel):
    """Wire shape the model is asked to return."""

    summary: str
    key_points: list[str] = Field(default_factory=list)
    prescriptions: list[str] = Field(default_factory=list)


def parse_summary_response(raw: str) -> SummaryResult:
    """Parse the model's JSON answer, tolerating a Markdown code fence. Raises SummarizationFailure."""
    text = raw.strip()
    match = _FENCE_RE.match(text)
    if match:
        text = match.group(1)
    if not text:
        raise SummarizationFailure('empty response from LLM')
    try:
        payload = _SummaryPayload.model_validate(json.loads(text))
    except (json.JSONDecodeError, pydantic.ValidationError) as e:
        raise SummarizationFailure(f'malformed summary response: {e}') from e
    if not payload.summary.strip():
        raise SummarizationFailure('summary text missing from LLM response')
    return SummaryResult(
        text=payload.summary.strip(),
        key_points=[p.strip() for p in payload.key_points if p.strip()],
        prescriptions=[p.strip() for p in payload.prescriptions if p.strip()],
    )


class LLMSummarizer:
    """Asks an LLM for a structured visit summary. Every failure surfaces as SummarizationFailure."""

    def __init__(self, llm_client: LLMClient, model: str, timeout: float = 120.0) -> None:
        self._llm = llm_client
        self._model = model
        self._timeout = timeout

    async def generate_summary(self, transcript: str) -> SummaryResult:
        if not transcript:
            raise EmptyInputError('cannot summarize an empty transcript')

        prompt = build_summary_prompt(transcript)
        log.info('Summary request: model=%s, transcript=%d chars', self._model, len(transcript))
        try:
            raw = await asyncio.wait_for(self._llm.chat_single(self._model, prompt), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            log.error('Summary timed out after %.0fs', self._timeout)
            raise SummarizationFailure(f'LLM did not answer within {self._timeout:.0f}s') from e
        except Exception as e:
            log.error('LLM error: %s: %s', type(e).__name__, e, exc_info=True)
            raise SummarizationFailure(f'LLM error: {type(e).__name__}: {e}') from e

        log.debug('LLM raw response (%d chars): %s', len(raw), raw[:500])
        try:
            result = parse_summary_response(raw)
        except SummarizationFailure as e:
            log.warning('Unusable summary response: %s', e)
            raise
        log.info(
            'Summary succeeded (%d key points, %d prescriptions)',
            len(result.key_points),
            len(result.prescriptions),
        )
        return result

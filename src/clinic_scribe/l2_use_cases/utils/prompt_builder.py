"""Pure functions for building LLM prompts."""

from __future__ import annotations

SUMMARY_SYSTEM_INSTRUCTIONS = """\
You are a clinical documentation assistant. Read the transcript of a
doctor-patient conversation and summarize it for the patient's chart.

Respond with a single JSON object and nothing else, using exactly these keys:
  "summary": a concise narrative paragraph of the visit,
  "key_points": a list of short strings, the clinically relevant findings and decisions,
  "prescriptions": a list of short strings, one per medication prescribed (empty list if none).
Do not invent findings that are not in the transcript."""


def build_summary_prompt(transcript: str) -> str:
    """Build the single-turn prompt asking for a structured visit summary."""
    return f'{SUMMARY_SYSTEM_INSTRUCTIONS}\n\nTranscript:\n"""\n{transcript.strip()}\n"""'

"""Summary result entity."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SummaryResult(BaseModel):
    """Structured output of a summarizer: narrative text, key points, prescriptions."""

    model_config = ConfigDict(frozen=True)

    text: str
    key_points: list[str] = Field(default_factory=list)
    prescriptions: list[str] = Field(default_factory=list)

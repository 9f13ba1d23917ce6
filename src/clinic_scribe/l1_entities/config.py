"""Configuration Pydantic models — pure schema, no infrastructure defaults."""

from __future__ import annotations

from pydantic import BaseModel, Field


class TranscriptionConfig(BaseModel):
    fragment_interval: float = Field(gt=0, description='Seconds between scripted transcript fragments')
    tick_interval: float = Field(gt=0, description='Seconds per accumulated duration unit (one minute)')


class SummaryConfig(BaseModel):
    model: str
    latency: float = Field(ge=0)  # scripted summarizer only
    timeout: float = Field(gt=0)


class OutputConfig(BaseModel):
    directory: str


class AppConfig(BaseModel):
    transcription: TranscriptionConfig
    summary: SummaryConfig
    output: OutputConfig

"""Infrastructure provider configs — lives in L4, not domain."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class OllamaProviderConfig(BaseModel):
    host: str = 'http://localhost:11434'


class OpenAIProviderConfig(BaseModel):
    api_key: str | None = None  # None → SDK reads OPENAI_API_KEY env
    base_url: str = 'https://api.openai.com/v1'


class InfraConfig(BaseModel):
    """Groups all provider-specific settings outside the domain layer."""

    summarizer: Literal['scripted', 'llm'] = 'scripted'
    llm_provider: Literal['ollama', 'openai'] = 'ollama'
    ollama: OllamaProviderConfig = Field(default_factory=OllamaProviderConfig)
    openai: OpenAIProviderConfig = Field(default_factory=OpenAIProviderConfig)

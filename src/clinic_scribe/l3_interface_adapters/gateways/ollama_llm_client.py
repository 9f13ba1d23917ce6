"""Gateway: Ollama LLM client — implements LLMClient port."""

from __future__ import annotations

import logging

import ollama

log = logging.getLogger('cs.llm')


class OllamaLLMClient:
    """Summaries from an Ollama server, requested in JSON format mode.

    Temperature is pinned to 0 so retrying a finish on the same transcript
    yields the same record.
    """

    def __init__(self, host: str = 'http://localhost:11434') -> None:
        self._host = host
        self._client: ollama.AsyncClient | None = None

    def _async_client(self) -> ollama.AsyncClient:
        if self._client is None:
            self._client = ollama.AsyncClient(host=self._host)
        return self._client

    async def chat_single(self, model: str, prompt: str) -> str:
        try:
            resp = await self._async_client().chat(
                model=model,
                messages=[{'role': 'user', 'content': prompt}],
                format='json',
                options={'temperature': 0},
            )
        except ollama.ResponseError as e:
            if e.status_code == 404:
                raise LookupError(f'Model {model!r} is not pulled on {self._host}') from e
            raise
        content = resp.message.content or ''
        if not content.strip():
            log.warning('Ollama returned an empty message (model=%s)', model)
        return content

    def check_model(self, model: str) -> tuple[bool, str]:
        try:
            listing = ollama.Client(host=self._host).list()
        except (ConnectionError, ollama.ResponseError) as e:
            return False, f'Ollama at {self._host} is unreachable: {e}'

        # Bare names resolve to the :latest tag.
        pulled = {m.model for m in listing.models if m.model}
        if model in pulled or f'{model}:latest' in pulled:
            return True, ''
        return False, f'Model {model!r} is not pulled on {self._host} (ollama pull {model})'

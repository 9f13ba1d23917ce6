"""Gateway: OpenAI-compatible LLM client — implements LLMClient port.

Works with any server speaking the chat completions API with JSON response
format: OpenAI, Groq, Together, vLLM, LM Studio.
"""

from __future__ import annotations

import logging

import openai

log = logging.getLogger('cs.llm')


class OpenAICompatLLMClient:
    def __init__(self, api_key: str | None = None, base_url: str = 'https://api.openai.com/v1') -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._client: openai.AsyncOpenAI | None = None

    def _async_client(self) -> openai.AsyncOpenAI:
        if self._client is None:
            self._client = openai.AsyncOpenAI(api_key=self._api_key, base_url=self._base_url)
        return self._client

    async def chat_single(self, model: str, prompt: str) -> str:
        resp = await self._async_client().chat.completions.create(
            model=model,
            messages=[{'role': 'user', 'content': prompt}],
            response_format={'type': 'json_object'},
            temperature=0,
        )
        if not resp.choices:
            raise RuntimeError(f'{self._base_url} returned no choices for {model}')
        choice = resp.choices[0]
        if choice.finish_reason == 'length':
            log.warning('Summary response cut off at the token limit (model=%s)', model)
        return choice.message.content or ''

    def check_model(self, model: str) -> tuple[bool, str]:
        try:
            openai.OpenAI(api_key=self._api_key, base_url=self._base_url).models.retrieve(model)
        except openai.AuthenticationError as e:
            return False, f'API key rejected by {self._base_url}: {e}'
        except openai.NotFoundError:
            return False, f'Model {model!r} is not served by {self._base_url}'
        except openai.APIConnectionError as e:
            return False, f'Cannot reach {self._base_url}: {e}'
        except openai.OpenAIError as e:
            return False, f'{type(e).__name__}: {e}'
        return True, ''

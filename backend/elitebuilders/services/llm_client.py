import json
from typing import Any, Dict, Optional

import openai
from loguru import logger
from openai import AsyncOpenAI

from ..config import Settings, get_settings
from ..errors import CompletionApiFailure, MalformedResponse

# Low temperature keeps grading consistent between submissions.
SCORING_TEMPERATURE = 0.3


class LLMClient:
    def __init__(self, settings: Optional[Settings] = None, client: Optional[Any] = None):
        settings = settings or get_settings()
        self.default_model = settings.openai_model
        self.max_tokens = settings.llm_max_tokens
        self.timeout = settings.llm_timeout_seconds
        if client is not None:
            self.client = client
            return
        if not settings.openai_api_key:
            # allow caller to handle absence
            self.client = None
            return
        self.client = AsyncOpenAI(
            api_key=settings.openai_api_key,
            base_url=str(settings.openai_api_base) if settings.openai_api_base else None,
            timeout=self.timeout,
            max_retries=0,
        )

    @property
    def configured(self) -> bool:
        return self.client is not None

    async def complete_json(
        self, system_prompt: str, user_prompt: str, model: Optional[str] = None
    ) -> Dict[str, Any]:
        """Single chat completion in JSON mode, parsed into a dict."""
        if not self.client:
            raise RuntimeError("LLM client not configured")
        model = model or self.default_model
        try:
            resp = await self.client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=SCORING_TEMPERATURE,
                max_tokens=self.max_tokens,
                response_format={"type": "json_object"},
                timeout=self.timeout,
            )
        except openai.APIStatusError as exc:
            raise CompletionApiFailure(
                f"Completion API error {exc.status_code}: {exc.message}",
                status_code=exc.status_code,
            ) from exc
        except openai.APIConnectionError as exc:
            raise CompletionApiFailure(
                f"Completion API request error: {type(exc).__name__} {exc}"
            ) from exc

        content = resp.choices[0].message.content if resp.choices else None
        if not content or not content.strip():
            raise MalformedResponse("Completion has no content")
        logger.debug(f"[llm] raw completion ({model}):\n{content}")
        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise MalformedResponse(f"Completion is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise MalformedResponse(f"Completion is a JSON {type(data).__name__}, expected an object")
        return data

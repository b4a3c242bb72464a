"""Gemini client built on the native generateContent REST API."""

import base64
import json
from collections.abc import AsyncIterator
from typing import Any

import httpx
from pydantic import ValidationError

from core.llm.base import (
    BaseModelProvider,
    GenerationOptions,
    GenerationResult,
    ModelProviderError,
    ModelRequestError,
)
from core.log import get_logger
from core.models.external.gemini import GenerateContentResponse

logger = get_logger(__name__)

SSE_DATA_PREFIX = "data:"


class GeminiClient(BaseModelProvider):
    """Gemini provider with Google Search grounding and SSE streaming."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 120.0,
        model: str = "gemini-2.5-flash",
        max_retries: int = 3,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Gemini client.

        Args:
            api_key: Gemini API key
            base_url: API base URL including the version segment
            timeout: Request timeout in seconds
            model: Default model to use
            max_retries: Connection retries for the underlying transport
            http_client: Preconfigured client, mainly for tests
        """
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._client = http_client or httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout,
            headers={"x-goog-api-key": api_key},
            transport=httpx.AsyncHTTPTransport(retries=max_retries),
        )

        logger.info(
            f"Initialized {self.__class__.__name__} "
            f"with {base_url=}, {model=}, {max_retries=}"
        )

    @property
    def model(self) -> str:
        return self._model

    async def generate(
        self, prompt: str, options: GenerationOptions | None = None
    ) -> GenerationResult:
        """Generate a complete response.

        Args:
            prompt: User prompt
            options: System instruction, web search and attachments

        Returns:
            Response text and grounding metadata (when search was used)

        Raises:
            ModelRequestError: If the API returns an error status
            ModelProviderError: If the response cannot be parsed
        """
        options = options or GenerationOptions()
        model = options.model or self._model
        payload = self._build_payload(prompt, options)

        logger.debug(
            f"generateContent model={model} web_search={options.web_search} "
            f"attachments={len(options.attachments)}"
        )
        response = await self._client.post(
            f"/models/{model}:generateContent", json=payload
        )
        self._raise_for_status(response)

        try:
            parsed = GenerateContentResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ModelProviderError(f"Invalid Gemini response: {e}") from e

        logger.debug(f"generateContent returned {len(parsed.text)} characters")
        return GenerationResult(text=parsed.text, grounding=parsed.grounding_metadata)

    async def stream(
        self, prompt: str, options: GenerationOptions | None = None
    ) -> AsyncIterator[str]:
        """Stream response text fragments as they are produced.

        Yields:
            Non-empty text fragments in generation order

        Raises:
            ModelRequestError: If the API returns an error status
            ModelProviderError: If an event cannot be parsed
        """
        options = options or GenerationOptions()
        model = options.model or self._model
        payload = self._build_payload(prompt, options)

        logger.debug(f"streamGenerateContent model={model}")
        async with self._client.stream(
            "POST",
            f"/models/{model}:streamGenerateContent",
            params={"alt": "sse"},
            json=payload,
        ) as response:
            if response.is_error:
                await response.aread()
                self._raise_for_status(response)

            async for line in response.aiter_lines():
                if not line.startswith(SSE_DATA_PREFIX):
                    continue
                data = line[len(SSE_DATA_PREFIX) :].strip()
                if not data:
                    continue
                try:
                    event = GenerateContentResponse.model_validate_json(data)
                except ValidationError as e:
                    raise ModelProviderError(f"Invalid Gemini stream event: {e}") from e
                if event.text:
                    yield event.text

    async def aclose(self) -> None:
        await self._client.aclose()

    def _build_payload(self, prompt: str, options: GenerationOptions) -> dict[str, Any]:
        parts: list[dict[str, Any]] = [{"text": prompt}]
        for attachment in options.attachments:
            parts.append(
                {
                    "inline_data": {
                        "mime_type": attachment.media_type,
                        "data": base64.b64encode(attachment.decode_content()).decode(
                            "ascii"
                        ),
                    }
                }
            )

        payload: dict[str, Any] = {"contents": [{"role": "user", "parts": parts}]}
        if options.system:
            payload["system_instruction"] = {"parts": [{"text": options.system}]}
        if options.web_search:
            payload["tools"] = [{"google_search": {}}]
        return payload

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if not response.is_error:
            return
        try:
            error_data = response.json()
        except json.JSONDecodeError:
            error_data = {"raw": response.text}
        if not isinstance(error_data, dict):
            error_data = {"raw": error_data}

        error = error_data.get("error")
        message = error.get("message") if isinstance(error, dict) else None
        raise ModelRequestError(
            f"Gemini request failed with status {response.status_code}: "
            f"{message or response.reason_phrase}",
            status_code=response.status_code,
            error_data=error_data,
        )

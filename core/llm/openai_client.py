"""OpenAI client for the research agents using the official SDK."""

from collections.abc import AsyncIterator
from typing import Any

from openai import APIError, APIStatusError, AsyncOpenAI
from pydantic import ValidationError

from core.llm.base import (
    BaseModelProvider,
    GenerationOptions,
    GenerationResult,
    ModelProviderError,
    ModelRequestError,
)
from core.log import get_logger
from core.models.external.openai import ResponsesResult

logger = get_logger(__name__)

WEB_SEARCH_TOOL = {"type": "web_search_preview"}
TEXT_DELTA_EVENT = "response.output_text.delta"


class OpenAIClient(BaseModelProvider):
    """OpenAI provider backed by the Responses API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 120.0,
        model: str = "gpt-4o-mini",
        max_retries: int = 3,
    ) -> None:
        """Initialize the OpenAI client.

        Args:
            api_key: OpenAI API key
            base_url: OpenAI API base URL
            timeout: Request timeout in seconds
            model: Default model to use
            max_retries: Maximum number of retries for failed requests
        """
        self._base_url = base_url.rstrip("/")
        self._model = model

        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=self._base_url,
            timeout=timeout,
            max_retries=max_retries,
        )

        logger.info(
            f"Initialized {self.__class__.__name__} "
            f"with {base_url=}, {model=}, {max_retries=}"
        )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    async def generate(
        self, prompt: str, options: GenerationOptions | None = None
    ) -> GenerationResult:
        """Create a response, with web search when requested.

        URL citations in the output are returned as grounding metadata.

        Raises:
            ModelRequestError: If the request fails
            ModelProviderError: If the response cannot be parsed
        """
        request_data = self._build_request(prompt, options or GenerationOptions())
        logger.debug(f"/v1/responses model={request_data['model']}")

        try:
            response = await self._client.responses.create(**request_data)
        except APIError as e:
            raise self._to_request_error(e) from e

        try:
            result = ResponsesResult.model_validate(response.model_dump())
        except ValidationError as e:
            raise ModelProviderError(f"Invalid OpenAI response: {e}") from e

        logger.debug(f"Response {result.id} returned {len(result.output_text)} characters")
        return GenerationResult(
            text=result.output_text, grounding=result.to_grounding_metadata()
        )

    async def stream(
        self, prompt: str, options: GenerationOptions | None = None
    ) -> AsyncIterator[str]:
        """Stream output text deltas.

        Raises:
            ModelRequestError: If the request fails
        """
        request_data = self._build_request(prompt, options or GenerationOptions())
        logger.debug(f"/v1/responses (stream) model={request_data['model']}")

        try:
            events = await self._client.responses.create(**request_data, stream=True)
            async for event in events:
                if event.type == TEXT_DELTA_EVENT and event.delta:
                    yield event.delta
        except APIError as e:
            raise self._to_request_error(e) from e

    async def aclose(self) -> None:
        await self._client.close()

    def _build_request(
        self, prompt: str, options: GenerationOptions
    ) -> dict[str, Any]:
        content: list[dict[str, Any]] = [{"type": "input_text", "text": prompt}]
        for attachment in options.attachments:
            content.append(
                {
                    "type": "input_file",
                    "filename": attachment.filename,
                    "file_data": attachment.url,
                }
            )

        request_data: dict[str, Any] = {
            "model": options.model or self._model,
            "input": [{"role": "user", "content": content}],
        }
        if options.system:
            request_data["instructions"] = options.system
        if options.web_search:
            request_data["tools"] = [WEB_SEARCH_TOOL]
        return request_data

    @staticmethod
    def _to_request_error(error: APIError) -> ModelRequestError:
        status_code = error.status_code if isinstance(error, APIStatusError) else None
        body = error.body if isinstance(error.body, dict) else None
        return ModelRequestError(
            f"OpenAI request failed: {error.message}",
            status_code=status_code,
            error_data=body,
        )

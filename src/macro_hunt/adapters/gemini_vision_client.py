"""Gemini generateContent client for meal photo analysis."""

from dataclasses import dataclass

from pydantic import ValidationError

from macro_hunt.adapters.gemini_models import (
    GeminiContent,
    GeminiPart,
    GeminiRequest,
    GeminiResponse,
    GenerationConfig,
    InlineData,
    parse_error_message,
)
from macro_hunt.adapters.http_transport import HttpRequest
from macro_hunt.adapters.retrying_executor import RetryingExecutor
from macro_hunt.errors import DecodingError, HTTPStatusError, NoDataError
from macro_hunt.media import detect_mime_type, to_base64
from macro_hunt.services.vision import VisionClient


@dataclass
class GeminiVisionClient(VisionClient):
    """Vision client that sends inline images to Gemini."""

    executor: RetryingExecutor
    api_key: str
    endpoint: str
    temperature: float = 0.3
    max_output_tokens: int = 500

    async def generate(self, *, prompt: str, images: list[bytes]) -> str:
        """Send one multimodal request and return the first text part."""
        parts = [GeminiPart(text=prompt)]
        for image in images:
            parts.append(
                GeminiPart(
                    inline_data=InlineData(
                        mime_type=detect_mime_type(image), data=to_base64(image)
                    )
                )
            )
        payload = GeminiRequest(
            contents=[GeminiContent(parts=parts)],
            generation_config=GenerationConfig(
                temperature=self.temperature,
                max_output_tokens=self.max_output_tokens,
            ),
        )
        request = HttpRequest(
            method="POST",
            url=self.endpoint,
            headers={
                "Content-Type": "application/json",
                "x-goog-api-key": self.api_key,
            },
            body=payload.to_json_bytes(),
        )
        try:
            response = await self.executor.execute(request)
        except HTTPStatusError as exc:
            message = parse_error_message(exc.body.encode("utf-8"))
            raise HTTPStatusError(
                exc.status_code, message or exc.body or "Unknown error"
            ) from exc

        if not response.body:
            raise NoDataError()
        try:
            envelope = GeminiResponse.model_validate_json(response.body)
        except ValidationError:
            envelope = GeminiResponse()
        text = envelope.first_text()
        if text is None:
            detail = parse_error_message(response.body) or "Unexpected response format"
            raise DecodingError(f"Unexpected Gemini response: {detail}")
        return text

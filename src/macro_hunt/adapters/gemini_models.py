"""Typed request and response bodies for the Gemini generateContent API."""

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class InlineData(BaseModel):
    """Base64 encoded media embedded in a request part."""

    mime_type: str
    data: str


class GeminiPart(BaseModel):
    """Single request part: either text or inline media."""

    text: str | None = None
    inline_data: InlineData | None = None


class GeminiContent(BaseModel):
    """Ordered list of parts forming one user turn."""

    parts: list[GeminiPart]


class GenerationConfig(BaseModel):
    """Sampling configuration."""

    model_config = ConfigDict(populate_by_name=True)

    temperature: float = 0.3
    max_output_tokens: int = Field(default=500, alias="maxOutputTokens")


class GeminiRequest(BaseModel):
    """generateContent request body."""

    model_config = ConfigDict(populate_by_name=True)

    contents: list[GeminiContent]
    generation_config: GenerationConfig = Field(
        default_factory=GenerationConfig, alias="generationConfig"
    )

    def to_json_bytes(self) -> bytes:
        """Serialize using the provider's field names."""
        return self.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


class GeminiResponsePart(BaseModel):
    text: str | None = None


class GeminiResponseContent(BaseModel):
    parts: list[GeminiResponsePart] = Field(default_factory=list)


class GeminiCandidate(BaseModel):
    content: GeminiResponseContent | None = None


class GeminiResponse(BaseModel):
    """generateContent response envelope (only the fields we read)."""

    candidates: list[GeminiCandidate] = Field(default_factory=list)

    def first_text(self) -> str | None:
        """Return the first candidate's first text part, if present."""
        if not self.candidates:
            return None
        content = self.candidates[0].content
        if content is None or not content.parts:
            return None
        return content.parts[0].text


class GeminiErrorDetail(BaseModel):
    message: str | None = None
    status: str | None = None


class GeminiErrorEnvelope(BaseModel):
    error: GeminiErrorDetail | None = None


def parse_error_message(body: bytes) -> str | None:
    """Extract "STATUS: message" from a Gemini error body."""
    try:
        envelope = GeminiErrorEnvelope.model_validate_json(body)
    except ValidationError:
        return None
    if envelope.error is None:
        return None
    message = envelope.error.message or ""
    status = envelope.error.status
    if status:
        message = f"{status}: {message}" if message else status
    return message or None

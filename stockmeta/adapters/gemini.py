"""Google Gemini adapter."""

import logging

from stockmeta.adapters.base import SAFETY, ModelAdapter, ModelResponse
from stockmeta.config import GEMINI_API_KEY
from stockmeta.controls import ApiImageData

logger = logging.getLogger(__name__)


def to_gemini_schema(schema: dict):
    """Convert a JSON schema dict into a google-genai Schema."""
    from google.genai import types

    properties = {
        key: to_gemini_schema(prop) for key, prop in schema.get("properties", {}).items()
    }
    return types.Schema(
        type=schema["type"].upper(),
        properties=properties or None,
        items=to_gemini_schema(schema["items"]) if "items" in schema else None,
        required=schema.get("required"),
    )


def _reason_name(reason) -> str | None:
    if reason is None:
        return None
    return getattr(reason, "name", None) or str(reason)


class GeminiAdapter(ModelAdapter):
    """Gemini-based vision adapter using the google-genai SDK."""

    def __init__(self):
        if not GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY environment variable is required")

        from google import genai

        self.client = genai.Client(api_key=GEMINI_API_KEY)

    async def generate(
        self, model: str, prompt: str, image: ApiImageData, schema: dict
    ) -> ModelResponse:
        """Generate JSON output for an image with Gemini."""
        from google.genai import types

        response = await self.client.aio.models.generate_content(
            model=model,
            contents=[
                prompt,
                types.Part.from_bytes(data=image.raw_bytes(), mime_type=image.mime_type),
            ],
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=to_gemini_schema(schema),
            ),
        )

        finish_reason = None
        if response.candidates:
            finish_reason = _reason_name(response.candidates[0].finish_reason)
        elif response.prompt_feedback and response.prompt_feedback.block_reason:
            # Prompt rejected before any candidate was produced
            logger.debug(f"Gemini prompt blocked: {response.prompt_feedback.block_reason}")
            finish_reason = SAFETY

        return ModelResponse(text=response.text, finish_reason=finish_reason)

    async def is_available(self) -> bool:
        """Check if the Gemini API is reachable."""
        try:
            await self.client.aio.models.list()
            return True
        except Exception as e:
            logger.warning(f"Gemini availability check failed: {e}")
            return False

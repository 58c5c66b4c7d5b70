"""Anthropic adapter for vision metadata generation."""

import json
import logging

from stockmeta.adapters.base import SAFETY, ModelAdapter, ModelResponse
from stockmeta.config import ANTHROPIC_API_KEY, REQUEST_TIMEOUT
from stockmeta.controls import ApiImageData

logger = logging.getLogger(__name__)

TOOL_NAME = "image_metadata"


class AnthropicAdapter(ModelAdapter):
    """Anthropic Claude-based vision adapter."""

    def __init__(self):
        if not ANTHROPIC_API_KEY:
            raise ValueError("ANTHROPIC_API_KEY environment variable is required")

        from anthropic import AsyncAnthropic

        self.client = AsyncAnthropic(api_key=ANTHROPIC_API_KEY, timeout=REQUEST_TIMEOUT)
        self.max_tokens = 4096

    async def generate(
        self, model: str, prompt: str, image: ApiImageData, schema: dict
    ) -> ModelResponse:
        """Generate structured output through a forced tool call."""
        message = await self.client.messages.create(
            model=model,
            max_tokens=self.max_tokens,
            tools=[
                {
                    "name": TOOL_NAME,
                    "description": "Record the generated metadata for the image",
                    "input_schema": schema,
                }
            ],
            tool_choice={"type": "tool", "name": TOOL_NAME},
            messages=[
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "image",
                            "source": {
                                "type": "base64",
                                "media_type": image.mime_type,
                                "data": image.base64_data,
                            },
                        },
                        {"type": "text", "text": prompt},
                    ],
                }
            ],
        )

        if message.stop_reason == "refusal":
            return ModelResponse(finish_reason=SAFETY)

        # Tool input is already parsed; hand it back as JSON text
        for content in message.content:
            if content.type == "tool_use":
                return ModelResponse(
                    text=json.dumps(content.input), finish_reason=message.stop_reason
                )

        logger.warning(f"No tool use in response for {TOOL_NAME}")
        return ModelResponse(finish_reason=message.stop_reason)

    async def is_available(self) -> bool:
        """Check if Anthropic API is available."""
        try:
            await self.client.models.list()
            return True
        except Exception as e:
            logger.warning(f"Anthropic availability check failed: {e}")
            return False

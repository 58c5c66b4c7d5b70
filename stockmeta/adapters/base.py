"""Base adapter interface for vision model calls."""

from abc import ABC, abstractmethod

from pydantic import BaseModel

from stockmeta.controls import ApiImageData

SAFETY = "SAFETY"

# Finish reasons that mean the provider withheld output on content grounds
SAFETY_REASONS = frozenset({SAFETY, "PROHIBITED_CONTENT", "BLOCKLIST", "IMAGE_SAFETY", "SPII"})


class ModelResponse(BaseModel):
    """Raw outcome of a single model call."""

    text: str | None = None
    finish_reason: str | None = None  # provider reason, SAFETY for content blocks


class ModelAdapter(ABC):
    """Abstract base class for vision model adapters.

    Adapters perform exactly one request per call and never retry; transport
    errors propagate to the caller.
    """

    @abstractmethod
    async def generate(
        self, model: str, prompt: str, image: ApiImageData, schema: dict
    ) -> ModelResponse:
        """Send a prompt and an inline image, requesting JSON output.

        Args:
            model: Model identifier
            prompt: Instruction text
            image: Base64-encoded image payload
            schema: JSON schema for the expected output

        Returns:
            ModelResponse with the JSON text, or None text and a finish reason
        """
        pass

    @abstractmethod
    async def is_available(self) -> bool:
        """Check if the provider is reachable.

        Returns:
            True if available, False otherwise
        """
        pass

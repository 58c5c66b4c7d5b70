"""Ollama adapter for local vision models."""

import logging

import httpx

from stockmeta.adapters.base import ModelAdapter, ModelResponse
from stockmeta.config import OLLAMA_URL, REQUEST_TIMEOUT
from stockmeta.controls import ApiImageData

logger = logging.getLogger(__name__)


class OllamaAdapter(ModelAdapter):
    """Ollama-based vision adapter."""

    def __init__(self):
        self.base_url = OLLAMA_URL
        self.timeout = REQUEST_TIMEOUT

    async def generate(
        self, model: str, prompt: str, image: ApiImageData, schema: dict
    ) -> ModelResponse:
        """Generate JSON output for an image with Ollama's structured outputs."""
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                f"{self.base_url}/api/generate",
                json={
                    "model": model,
                    "prompt": prompt,
                    "images": [image.base64_data],
                    "stream": False,
                    "format": schema,
                },
            )
            response.raise_for_status()
            result = response.json()

        return ModelResponse(
            text=result.get("response") or None,
            finish_reason=result.get("done_reason"),
        )

    async def is_available(self) -> bool:
        """Check if Ollama is reachable."""
        try:
            async with httpx.AsyncClient(timeout=5.0) as client:
                response = await client.get(f"{self.base_url}/api/tags")
                return response.status_code == 200
        except Exception as e:
            logger.warning(f"Ollama availability check failed: {e}")
            return False

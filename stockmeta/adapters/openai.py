"""OpenAI adapter for vision metadata generation."""
import logging
from stockmeta.adapters.base import SAFETY, ModelAdapter, ModelResponse
from stockmeta.config import OPENAI_API_KEY, REQUEST_TIMEOUT
from stockmeta.controls import ApiImageData

logger = logging.getLogger(__name__)


class OpenAIAdapter(ModelAdapter):
    """OpenAI GPT-based vision adapter."""
    
    def __init__(self):
        if not OPENAI_API_KEY:
            raise ValueError("OPENAI_API_KEY environment variable is required")
        
        from openai import AsyncOpenAI
        self.client = AsyncOpenAI(api_key=OPENAI_API_KEY, timeout=REQUEST_TIMEOUT)
        self.max_tokens = 4096
    
    async def generate(self, model: str, prompt: str, image: ApiImageData, schema: dict) -> ModelResponse:
        """Generate JSON output for an image using structured outputs."""
        response = await self.client.chat.completions.create(
            model=model,
            messages=[{
                "role": "user",
                "content": [
                    {
                        "type": "text",
                        "text": prompt
                    },
                    {
                        "type": "image_url",
                        "image_url": {
                            "url": f"data:{image.mime_type};base64,{image.base64_data}"
                        }
                    }
                ]
            }],
            max_tokens=self.max_tokens,
            response_format={
                "type": "json_schema",
                "json_schema": {"name": "image_metadata", "schema": schema}
            }
        )
        
        if not response.choices:
            return ModelResponse()
        
        choice = response.choices[0]
        # Refusals and content filtering both surface as safety blocks
        if choice.finish_reason == "content_filter" or getattr(choice.message, "refusal", None):
            return ModelResponse(finish_reason=SAFETY)
        
        return ModelResponse(text=choice.message.content, finish_reason=choice.finish_reason)
    
    async def is_available(self) -> bool:
        """Check if OpenAI API is available."""
        try:
            await self.client.models.list()
            return True
        except Exception as e:
            logger.warning(f"OpenAI availability check failed: {e}")
            return False

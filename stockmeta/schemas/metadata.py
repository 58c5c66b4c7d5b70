"""Stock-media metadata result schema."""

from pydantic import BaseModel


class StockMetadata(BaseModel):
    """Metadata generated for stock media sites."""

    title: str
    description: str
    keywords: list[str]
    category: str


RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "description": {"type": "string"},
        "keywords": {"type": "array", "items": {"type": "string"}},
        "category": {"type": "string"},
    },
    "required": ["title", "description", "keywords", "category"],
}

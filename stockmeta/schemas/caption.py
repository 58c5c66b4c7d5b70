"""Caption-only result schema."""

from pydantic import BaseModel


class Caption(BaseModel):
    """A single descriptive caption."""

    description: str


RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "description": {"type": "string"},
    },
    "required": ["description"],
}

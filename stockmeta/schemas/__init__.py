"""Schema router for generation modes."""

from pydantic import BaseModel

from stockmeta.controls import Mode


def get_schema_for_mode(mode: Mode | str) -> tuple[type[BaseModel], dict]:
    """Get the Pydantic model and JSON response schema for a mode.

    Args:
        mode: Generation mode (metadata or prompt)

    Returns:
        Tuple of (result_model, response_schema)
    """
    if Mode(mode) == Mode.PROMPT:
        from stockmeta.schemas.caption import RESPONSE_SCHEMA, Caption

        return Caption, RESPONSE_SCHEMA

    from stockmeta.schemas.metadata import RESPONSE_SCHEMA, StockMetadata

    return StockMetadata, RESPONSE_SCHEMA


__all__ = ["get_schema_for_mode"]

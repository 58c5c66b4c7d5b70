"""Request execution with capped exponential backoff."""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel, ValidationError

from stockmeta.adapters.base import SAFETY_REASONS, ModelAdapter, ModelResponse
from stockmeta.config import RETRY_INITIAL_DELAY_MS, RETRY_MAX_DELAY_MS
from stockmeta.controls import ApiImageData, ControlSettings, Mode
from stockmeta.errors import (
    GenerationCancelledError,
    InvalidResponseError,
    MissingInputError,
    RecoverableAPIError,
    ResponseParseError,
    RetriesExhaustedError,
    SafetyBlockedError,
)
from stockmeta.normalize import normalize_metadata
from stockmeta.schemas import get_schema_for_mode

logger = logging.getLogger(__name__)

RetryCallback = Callable[[int], Any]


def _check_metadata_types(data: dict) -> None:
    """Reject metadata whose title or keywords cannot be normalized."""
    title = data.get("title")
    if title is not None and not isinstance(title, str):
        raise ResponseParseError(f"Expected title to be a string, got {type(title).__name__}")

    keywords = data.get("keywords")
    if keywords is None:
        return
    if not isinstance(keywords, list) or not all(isinstance(kw, str) for kw in keywords):
        raise ResponseParseError("Expected keywords to be a list of strings")


def parse_response(
    response: ModelResponse, settings: ControlSettings, mode: Mode | str
) -> BaseModel | dict:
    """Turn a raw model response into a result for the mode.

    Args:
        response: Raw model response
        settings: Settings used for metadata normalization
        mode: Generation mode

    Returns:
        Normalized StockMetadata in metadata mode, the parsed dict in caption mode

    Raises:
        RecoverableAPIError: If the response is blocked, empty or malformed
    """
    mode = Mode(mode)
    result_model, _ = get_schema_for_mode(mode)

    if not response.text:
        if response.finish_reason in SAFETY_REASONS:
            logger.warning(f"Response blocked by safety settings: {response.model_dump_json()}")
            raise SafetyBlockedError()
        logger.warning(f"Response carried no text: {response.model_dump_json()}")
        raise InvalidResponseError()

    try:
        data = json.loads(response.text)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Response is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ResponseParseError(f"Expected a JSON object, got {type(data).__name__}")

    if mode == Mode.METADATA:
        _check_metadata_types(data)

    try:
        if mode == Mode.METADATA:
            return result_model.model_validate(normalize_metadata(data, settings))
        result_model.model_validate(data)
    except ValidationError as e:
        raise ResponseParseError(f"Response does not match {result_model.__name__}: {e}") from e

    # Captions are returned exactly as parsed
    return data


async def _until_cancelled(aw: Awaitable, cancel_event: asyncio.Event | None):
    """Await aw, aborting with GenerationCancelledError once cancel_event is set."""
    if cancel_event is None:
        return await aw

    work = asyncio.ensure_future(aw)
    waiter = asyncio.ensure_future(cancel_event.wait())
    try:
        await asyncio.wait({work, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in (work, waiter):
            if not task.done():
                task.cancel()

    if work.done() and not work.cancelled():
        return work.result()
    raise GenerationCancelledError("Generation cancelled by caller")


async def execute(
    adapter: ModelAdapter,
    model: str,
    prompt: str,
    image_data: ApiImageData | None,
    settings: ControlSettings,
    mode: Mode | str,
    on_retry: RetryCallback | None = None,
    *,
    max_attempts: int | None = None,
    cancel_event: asyncio.Event | None = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    initial_delay_ms: int = RETRY_INITIAL_DELAY_MS,
    max_delay_ms: int = RETRY_MAX_DELAY_MS,
) -> BaseModel | dict:
    """Call the model until it returns a usable result.

    Every failed attempt (transport error, safety block, empty or malformed
    response) is retried after a backoff that starts at initial_delay_ms and
    doubles up to max_delay_ms. on_retry receives the delay in milliseconds
    before each sleep. Without max_attempts the loop never gives up.

    Args:
        adapter: Vision model adapter
        model: Model identifier
        prompt: Prompt text from build_prompt
        image_data: Encoded image payload
        settings: Generation settings
        mode: Generation mode (metadata or prompt)
        on_retry: Optional callback invoked with the backoff delay
        max_attempts: Optional bound on the number of attempts
        cancel_event: Optional event that aborts the request when set
        sleep: Coroutine function used for backoff waits (seconds)
        initial_delay_ms: First backoff delay
        max_delay_ms: Backoff ceiling

    Returns:
        StockMetadata in metadata mode, the parsed caption dict in prompt mode

    Raises:
        MissingInputError: If image_data is missing
        ValueError: If max_attempts is below 1
        RetriesExhaustedError: If max_attempts attempts all failed
        GenerationCancelledError: If cancel_event was set
    """
    if image_data is None:
        raise MissingInputError("Image data is missing")
    if max_attempts is not None and max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    mode = Mode(mode)
    _, schema = get_schema_for_mode(mode)
    delay = initial_delay_ms
    attempt = 0

    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise GenerationCancelledError("Generation cancelled by caller")

        attempt += 1
        try:
            response = await _until_cancelled(
                adapter.generate(model, prompt, image_data, schema), cancel_event
            )
            result = parse_response(response, settings, mode)
            logger.debug(f"Generated {mode.value} result on attempt {attempt}")
            return result
        except GenerationCancelledError:
            raise
        except RecoverableAPIError as e:
            error = e
        except Exception as e:
            error = RecoverableAPIError(f"{type(e).__name__}: {e}")
            error.__cause__ = e

        if max_attempts is not None and attempt >= max_attempts:
            logger.error(f"API call failed after {attempt} attempt(s): {error}")
            raise RetriesExhaustedError(attempt, error) from error

        logger.warning(f"API call failed. Retrying in {delay / 1000}s... {error}")
        if on_retry is not None:
            on_retry(delay)
        await _until_cancelled(sleep(delay / 1000), cancel_event)
        delay = min(delay * 2, max_delay_ms)

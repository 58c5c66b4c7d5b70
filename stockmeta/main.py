import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from stockmeta.adapters import get_adapter
from stockmeta.config import EXTRACTOR_MODEL_VISION
from stockmeta.controls import ApiImageData, ControlSettings, Mode
from stockmeta.errors import RetriesExhaustedError
from stockmeta.executor import execute
from stockmeta.prompts import build_prompt

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="stockmeta",
        description="Generate stock-media metadata or a caption for an image.",
    )
    parser.add_argument("image", type=Path, help="Path to the image file")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in Mode],
        default=Mode.METADATA.value,
        help="metadata (title, description, keywords, category) or prompt (caption only)",
    )
    parser.add_argument("--settings", type=Path, help="JSON file with control settings")
    parser.add_argument("--model", default=EXTRACTOR_MODEL_VISION, help="Model identifier")
    parser.add_argument("--provider", help="gemini, openai, anthropic or ollama")
    parser.add_argument(
        "--max-attempts", type=positive_int, default=None, help="Give up after N failed attempts"
    )
    return parser.parse_args(argv)


def load_settings(path: Path | None) -> ControlSettings:
    if path is None:
        return ControlSettings()
    return ControlSettings.model_validate_json(path.read_text())


def report_retry(delay_ms: int) -> None:
    logger.info(f"Retrying in {delay_ms / 1000:.0f}s")


async def run(args: argparse.Namespace) -> dict:
    """Build the prompt, call the model and return the result as a dict."""
    settings = load_settings(args.settings)
    image_data = ApiImageData.from_path(args.image)
    mode = Mode(args.mode)
    adapter = get_adapter(args.provider)

    prompt = build_prompt(settings, mode)
    result = await execute(
        adapter,
        args.model,
        prompt,
        image_data,
        settings,
        mode,
        report_retry,
        max_attempts=args.max_attempts,
    )
    return result if isinstance(result, dict) else result.model_dump()


def main(argv: list[str] | None = None) -> int:
    """Entry point for the stockmeta command."""
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s"
    )
    args = parse_args(argv)

    try:
        result = asyncio.run(run(args))
    except (OSError, ValueError) as e:
        logger.error(f"Cannot start generation: {e}")
        return 1
    except RetriesExhaustedError as e:
        logger.error(str(e))
        return 2
    except KeyboardInterrupt:
        logger.info("Stopped by user")
        return 130

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Stock-media metadata and caption generation for images."""

from stockmeta.controls import AdvanceTitle, ApiImageData, ControlSettings, Mode, PromptSwitches
from stockmeta.executor import execute
from stockmeta.prompts import build_prompt

__all__ = [
    "AdvanceTitle",
    "ApiImageData",
    "ControlSettings",
    "Mode",
    "PromptSwitches",
    "build_prompt",
    "execute",
]

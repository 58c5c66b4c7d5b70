"""User-facing generation settings and request inputs."""

import base64
import mimetypes
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

CUSTOM_PROMPT_OPTION = "set_custom"


class Mode(str, Enum):
    """Which output schema and prompt template a request uses."""

    METADATA = "metadata"
    PROMPT = "prompt"  # caption only


class PromptSwitches(BaseModel):
    """Toggles that shape caption-mode prompts."""

    model_config = ConfigDict(populate_by_name=True)

    custom_prompt: bool = Field(default=False, alias="customPrompt")
    silhouette: bool = False
    white_bg: bool = Field(default=False, alias="whiteBg")
    transparent_bg: bool = Field(default=False, alias="transparentBg")


class AdvanceTitle(BaseModel):
    """Toggles that force decoration phrases into titles and keywords."""

    model_config = ConfigDict(populate_by_name=True)

    transparent_bg: bool = Field(default=False, alias="transparentBg")
    white_bg: bool = Field(default=False, alias="whiteBg")
    vector: bool = False
    illustration: bool = False


class ControlSettings(BaseModel):
    """Settings supplied by the caller for a single generation request.

    Accepts the camelCase keys used by the settings panel as well as the
    snake_case field names.
    """

    model_config = ConfigDict(populate_by_name=True)

    custom_prompt_select: str = Field(default="default", alias="customPromptSelect")
    custom_prompt_entry: str = Field(default="", alias="customPromptEntry")
    custom_prompt_entry_prompt: str = Field(default="", alias="customPromptEntryPrompt")
    prompt_switches: PromptSwitches = Field(
        default_factory=PromptSwitches, alias="promptSwitches"
    )
    advance_title: AdvanceTitle = Field(default_factory=AdvanceTitle, alias="advanceTitle")
    # Advisory targets passed to the model, not enforced locally
    title_length: int = Field(default=100, alias="titleLength")
    desc_length: int = Field(default=150, alias="descLength")
    keywords_count: int = Field(default=40, alias="keywordsCount")
    desc_words: int = Field(default=30, alias="descWords")


class ApiImageData(BaseModel):
    """Base64-encoded image payload sent inline with the prompt."""

    base64_data: str
    mime_type: str = "image/jpeg"

    @classmethod
    def from_path(cls, path: str | Path) -> "ApiImageData":
        """Read an image file and encode it for the API.

        Args:
            path: Path to the image file

        Returns:
            ApiImageData with the file contents and a guessed MIME type
        """
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.name)
        data = base64.b64encode(path.read_bytes()).decode("ascii")
        return cls(base64_data=data, mime_type=mime_type or "image/jpeg")

    def raw_bytes(self) -> bytes:
        return base64.b64decode(self.base64_data)

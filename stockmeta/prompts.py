"""Prompt construction for metadata and caption requests."""

from stockmeta.controls import CUSTOM_PROMPT_OPTION, ControlSettings, Mode

CUSTOM_PROMPT = """Analyze this image based on the following instructions:
{instructions}

{request}"""

CAPTION_REQUEST = "Provide JSON object with only 'description'."
CUSTOM_METADATA_REQUEST = (
    "Provide JSON object with 'title', 'description', 'keywords', and a relevant 'category'."
)
METADATA_REQUEST = "Provide JSON object with 'title', 'description', 'keywords', and 'category'."

PREAMBLE = """Act as an expert metadata generator specializing in stock media requirements.
Analyze this image.
IMPORTANT: If the subject is isolated, assume it's on a white or transparent background. Never describe the backdrop as black, dark, or any similar shade.
"""

CAPTION_TEMPLATE = """Generate only a compelling description.
Target Description Length: MUST BE EXACTLY {desc_words} words. Provide the exact word count requested.
{style}Focus on facts and concepts, avoiding subjective words (e.g., beautiful, amazing).

{request}"""

CAPTION_STYLES = [
    ("silhouette", "Style: Silhouette. Emphasize this.\n"),
    ("white_bg", "Background: Plain white. Mention 'white background', 'isolated'.\n"),
    ("transparent_bg", "Background: Transparent. Mention 'transparent background', 'isolated'.\n"),
]

METADATA_TEMPLATE = """Generate Title, Description, Keywords, and Category for stock media sites.
Title: MUST BE EXACTLY {title_length} characters long. Provide the exact character count requested. Be descriptive, accurate, concise.
Description: MUST BE EXACTLY {desc_length} characters long. Provide the exact character count requested. Be informative.
Keywords: MUST BE EXACTLY {keywords_count} keywords. Provide the exact number of keywords requested. Order by importance (most relevant first), include conceptual keywords.
Category: Select the single most relevant category (e.g., Nature, Business, People, Technology, Food, Abstract).
Rules: Keywords must be relevant and specific. Avoid spamming, subjective words (beautiful, amazing), plurals if singular exists, technical details unless essential. Capitalize only the first letter of the Title.

{request}"""


def build_prompt(settings: ControlSettings, mode: Mode | str) -> str:
    """Build the instruction text sent to the model alongside the image.

    Custom prompts take precedence when enabled and non-empty; otherwise the
    default template for the mode is filled in from the settings.

    Args:
        settings: User generation settings
        mode: Generation mode (metadata or prompt)

    Returns:
        Prompt text
    """
    mode = Mode(mode)

    if mode == Mode.PROMPT and settings.prompt_switches.custom_prompt:
        instructions = settings.custom_prompt_entry_prompt.strip()
        if instructions:
            return CUSTOM_PROMPT.format(instructions=instructions, request=CAPTION_REQUEST)

    if mode == Mode.METADATA and settings.custom_prompt_select == CUSTOM_PROMPT_OPTION:
        instructions = settings.custom_prompt_entry.strip()
        if instructions:
            return CUSTOM_PROMPT.format(
                instructions=instructions, request=CUSTOM_METADATA_REQUEST
            )

    if mode == Mode.PROMPT:
        switches = settings.prompt_switches
        style = "".join(text for name, text in CAPTION_STYLES if getattr(switches, name))
        return PREAMBLE + CAPTION_TEMPLATE.format(
            desc_words=settings.desc_words, style=style, request=CAPTION_REQUEST
        )

    return PREAMBLE + METADATA_TEMPLATE.format(
        title_length=settings.title_length,
        desc_length=settings.desc_length,
        keywords_count=settings.keywords_count,
        request=METADATA_REQUEST,
    )

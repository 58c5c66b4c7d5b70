"""Deterministic post-processing of model-generated metadata."""

from stockmeta.controls import AdvanceTitle, ControlSettings

# Order matters: phrases are appended to titles in this order
DECORATION_PHRASES = [
    ("transparent_bg", "isolated on transparent background"),
    ("white_bg", "isolated on white background"),
    ("vector", "Vector"),
    ("illustration", "illustration"),
]


def decoration_phrases(advance_title: AdvanceTitle) -> list[str]:
    """Return the enabled decoration phrases in their fixed order."""
    return [phrase for name, phrase in DECORATION_PHRASES if getattr(advance_title, name)]


def normalize_title(title: str, phrases: list[str]) -> str:
    """Capitalize the first letter only and append decoration phrases.

    A title that already ends with the same decoration suffix is not decorated
    twice, so normalizing an already-normalized title leaves it unchanged.
    """
    base = title[:1].upper() + title[1:].lower() if title else ""
    if not phrases:
        return base

    suffix = ", ".join(phrases)
    if base.lower().endswith(" " + suffix.lower()):
        base = base[: -(len(suffix) + 1)]
    return f"{base} {suffix}"


def normalize_keywords(keywords: list[str], phrases: list[str], limit: int) -> list[str]:
    """Lowercase, force decoration phrases in, de-duplicate and cap keywords.

    Decoration keywords are appended last, so a small limit may drop them.
    """
    combined = [kw.strip().lower() for kw in keywords]
    combined = [kw for kw in combined if kw]

    for phrase in phrases:
        phrase = phrase.lower()
        if phrase not in combined:
            combined.append(phrase)

    # dict preserves first-seen order
    unique = list(dict.fromkeys(combined))
    return unique[: max(limit, 0)]


def normalize_metadata(metadata: dict, settings: ControlSettings) -> dict:
    """Apply title and keyword rules to a parsed metadata response.

    Args:
        metadata: Parsed JSON object from the model
        settings: Settings holding the advance-title toggles and keyword count

    Returns:
        New dictionary with normalized title and keywords; other keys are kept
    """
    phrases = decoration_phrases(settings.advance_title)
    result = dict(metadata)
    result["title"] = normalize_title(metadata.get("title") or "", phrases)
    result["keywords"] = normalize_keywords(
        metadata.get("keywords") or [], phrases, settings.keywords_count
    )
    return result

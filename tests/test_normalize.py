"""Tests for metadata normalization."""
import pytest

from stockmeta.controls import AdvanceTitle, ControlSettings
from stockmeta.normalize import (
    decoration_phrases,
    normalize_keywords,
    normalize_metadata,
    normalize_title,
)


@pytest.fixture
def raw_metadata():
    """Create a parsed model response."""
    return {
        "title": "red BIKE",
        "description": "A red bicycle.",
        "keywords": ["Bike", "bike", " Red ", ""],
        "category": "Transport",
    }


def test_decoration_phrases_fixed_order():
    """Test phrases come out in a fixed order regardless of toggles."""
    advance = AdvanceTitle(illustration=True, vector=True, whiteBg=True, transparentBg=True)

    assert decoration_phrases(advance) == [
        "isolated on transparent background",
        "isolated on white background",
        "Vector",
        "illustration",
    ]


def test_decoration_phrases_none_enabled():
    """Test no phrases when nothing is toggled."""
    assert decoration_phrases(AdvanceTitle()) == []


def test_title_white_background(raw_metadata):
    """Test title casing and white background decoration."""
    settings = ControlSettings(advanceTitle={"whiteBg": True}, keywordsCount=3)

    result = normalize_metadata(raw_metadata, settings)

    assert result["title"] == "Red bike isolated on white background"


def test_keywords_example(raw_metadata):
    """Test keyword cleanup, forced phrase and cap."""
    settings = ControlSettings(advanceTitle={"whiteBg": True}, keywordsCount=3)

    result = normalize_metadata(raw_metadata, settings)

    assert result["keywords"] == ["bike", "red", "isolated on white background"]


def test_other_fields_untouched(raw_metadata):
    """Test description and category pass through."""
    result = normalize_metadata(raw_metadata, ControlSettings())

    assert result["description"] == "A red bicycle."
    assert result["category"] == "Transport"
    assert raw_metadata["title"] == "red BIKE"


def test_title_without_decorations():
    """Test only the first character stays uppercase."""
    assert normalize_title("SUNSET Over THE sea", []) == "Sunset over the sea"


def test_title_multiple_decorations_keep_casing():
    """Test phrases are comma-joined in their own casing."""
    title = normalize_title("flower", ["isolated on white background", "Vector"])

    assert title == "Flower isolated on white background, Vector"


def test_missing_title():
    """Test a missing title becomes an empty base."""
    settings = ControlSettings(advanceTitle={"vector": True})

    result = normalize_metadata({"keywords": []}, settings)

    assert result["title"] == " Vector"
    assert result["keywords"] == ["vector"]


def test_decoration_keyword_not_duplicated():
    """Test a phrase already present is not added twice."""
    keywords = normalize_keywords(
        ["Isolated on white background", "cup"], ["isolated on white background"], 10
    )

    assert keywords == ["isolated on white background", "cup"]


def test_truncation_can_drop_decorations():
    """Test a small cap drops trailing decoration keywords."""
    keywords = normalize_keywords(
        ["cup", "mug"], ["isolated on white background", "Vector"], 3
    )

    assert keywords == ["cup", "mug", "isolated on white background"]


def test_normalization_idempotent(raw_metadata):
    """Test normalizing twice gives the same title and keywords."""
    settings = ControlSettings(
        advanceTitle={"whiteBg": True, "vector": True, "illustration": True},
        keywordsCount=5,
    )

    once = normalize_metadata(raw_metadata, settings)
    twice = normalize_metadata(once, settings)

    assert twice["title"] == once["title"]
    assert twice["keywords"] == once["keywords"]
    assert once["title"] == "Red bike isolated on white background, Vector, illustration"


def test_title_already_decorated_by_model():
    """Test a model title ending in the enabled phrase is not decorated twice."""
    settings = ControlSettings(advanceTitle={"whiteBg": True})

    result = normalize_metadata(
        {"title": "Cup ISOLATED on white background", "keywords": ["cup"]}, settings
    )

    assert result["title"] == "Cup isolated on white background"

import pytest
from pydantic import ValidationError

from pdf2pic.schemas import Base64Result, ConversionOptions, ConversionResult


def test_conversion_options_defaults():
    options = ConversionOptions()
    assert options.quality == 0
    assert options.format == "png"
    assert options.size == "768x512"
    assert options.density == 72
    assert options.save_directory == "./"
    assert options.save_name == "untitled"
    assert options.compression == "jpeg"


def test_conversion_options_merges_overrides():
    options = ConversionOptions(format="jpg", density=150)
    assert options.format == "jpg"
    assert options.density == 150
    assert options.size == "768x512"


def test_conversion_options_is_frozen():
    options = ConversionOptions()
    with pytest.raises(ValidationError):
        options.density = 300


@pytest.mark.parametrize("overrides", [{"density": 0}, {"quality": -1}, {"savedir": "out"}])
def test_conversion_options_rejects_bad_values(overrides):
    with pytest.raises(ValidationError):
        ConversionOptions(**overrides)


def test_malformed_size_is_not_checked_here():
    assert ConversionOptions(size="huge").size == "huge"


def test_results_are_frozen():
    result = ConversionResult(name="doc_1.png", size=1.5, path="out/doc_1.png", page=1)
    encoded = Base64Result(base64="aGk=", page=2)
    with pytest.raises(ValidationError):
        result.page = 2
    with pytest.raises(ValidationError):
        encoded.base64 = ""


def test_results_reject_page_zero():
    with pytest.raises(ValidationError):
        Base64Result(base64="", page=0)

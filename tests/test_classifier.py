import pytest

from fileai.core.routing_types import ClassificationVerdict
from fileai.multimodal.classifier import (
    SAMPLE_SIZE,
    classify,
    is_image_path,
    is_likely_text,
)


BINARY_NOISE = bytes(range(256)) * 4


def test_plain_ascii_is_text():
    content = b"Meeting notes: ship the release on Friday.\n"
    assert classify(content, "notes.txt") is ClassificationVerdict.TEXT


def test_whitespace_controls_count_as_text():
    content = b"col1\tcol2\r\nval1\tval2\r\n" * 10
    assert is_likely_text(content)


def test_exactly_ninety_percent_printable_is_text():
    content = b"a" * 9 + b"\x00"
    assert is_likely_text(content)


def test_below_ninety_percent_printable_is_not_text():
    content = b"a" * 8 + b"\x00\x01"
    assert not is_likely_text(content)


def test_only_leading_sample_is_inspected():
    content = b"x" * SAMPLE_SIZE + b"\x00" * 4096
    assert is_likely_text(content)

    content = b"\x00" * 100 + b"x" * (SAMPLE_SIZE - 100)
    assert not is_likely_text(content)


def test_occasional_utf8_is_tolerated():
    content = ("The café opens at nine. " * 10).encode("utf-8")
    assert classify(content, "menu.md") is ClassificationVerdict.TEXT


def test_empty_content_is_unknown():
    assert not is_likely_text(b"")
    assert classify(b"", "empty.txt") is ClassificationVerdict.UNKNOWN
    assert classify(b"", "empty.png") is ClassificationVerdict.UNKNOWN


@pytest.mark.parametrize(
    "path",
    ["a.jpg", "b.JPEG", "c.Png", "dir/d.gif", "e.BMP", "/tmp/f.tiff"],
)
def test_image_extensions_route_binary_content_to_image(path):
    assert is_image_path(path)
    assert classify(BINARY_NOISE, path) is ClassificationVerdict.IMAGE


@pytest.mark.parametrize("path", ["a.webp", "b.tif", "c", "png", "d.png.bak"])
def test_other_extensions_are_not_images(path):
    assert not is_image_path(path)


def test_text_takes_precedence_over_image_extension():
    assert classify(b"not really a png at all", "fake.png") is ClassificationVerdict.TEXT


def test_binary_with_unknown_extension_is_unknown():
    assert classify(BINARY_NOISE, "blob.xyz") is ClassificationVerdict.UNKNOWN


def test_classification_is_idempotent():
    for content, path in [
        (b"hello world\n", "a.txt"),
        (BINARY_NOISE, "a.gif"),
        (BINARY_NOISE, "a.bin"),
    ]:
        assert classify(content, path) is classify(content, path)

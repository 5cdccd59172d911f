"""Unit tests for thumbnail reference helpers."""

import json

import pytest

from showcase.core.thumbnails import (
    decode_reference,
    encode_reference,
    generate_short_desc,
    is_media_host_url,
    is_same_thumbnail,
    is_valid_url,
    make_reference,
    resolve_public_id,
    strip_folder,
)

FOLDER = "project-thumbnails"


class TestGenerateShortDesc:
    """Tests for generate_short_desc()."""

    def test__generate_short_desc__keeps_short_text(self):
        """Test that text of at most 50 characters is returned unchanged."""
        assert generate_short_desc("x" * 50) == "x" * 50

    def test__generate_short_desc__truncates_long_text(self):
        """Test that longer text is cut at 50 characters with an ellipsis."""
        assert generate_short_desc("y" * 51) == "y" * 50 + "..."

    def test__generate_short_desc__strips_trailing_whitespace_before_ellipsis(self):
        """Test that whitespace at the cut point is removed."""
        desc = "a" * 49 + " " + "b" * 10
        assert generate_short_desc(desc) == "a" * 49 + "..."


class TestIsValidUrl:
    """Tests for is_valid_url()."""

    @pytest.mark.parametrize(
        "value",
        ["https://example.com/a.png", "http://localhost:8000/x", "https://res.cloudinary.com/demo/image/upload/a.jpg"],
    )
    def test__is_valid_url__accepts_http_urls(self, value: str):
        assert is_valid_url(value) is True

    @pytest.mark.parametrize("value", ["cover.png", "ftp://example.com/a.png", "https://", "", None, 42])
    def test__is_valid_url__rejects_everything_else(self, value):
        assert is_valid_url(value) is False


class TestReferenceEncoding:
    """Tests for encode_reference() and decode_reference()."""

    def test__encode_reference__stores_json_object(self):
        """Test that a reference is stored as a JSON object with all three keys."""
        stored = encode_reference(make_reference("https://example.com/a.png", "a.png", "project-thumbnails/a"))

        assert json.loads(stored) == {
            "url": "https://example.com/a.png",
            "filename": "a.png",
            "id": "project-thumbnails/a",
        }

    def test__decode_reference__legacy_url(self):
        """Test that a bare URL decodes to a reference without filename and id."""
        assert decode_reference("https://example.com/legacy.png") == {
            "url": "https://example.com/legacy.png",
            "filename": None,
            "id": None,
        }

    def test__decode_reference__json_without_object(self):
        """Test that JSON that is not an object is treated as a raw value."""
        assert decode_reference('"quoted"') == {"url": '"quoted"', "filename": None, "id": None}

    def test__decode_reference__drops_non_string_fields(self):
        """Test that stored fields of the wrong type decode to None."""
        assert decode_reference('{"url": "https://example.com/a.png", "filename": 7, "id": 5}') == {
            "url": "https://example.com/a.png",
            "filename": None,
            "id": None,
        }

    def test__decode_reference__fills_missing_keys(self):
        """Test that missing keys decode to None."""
        assert decode_reference('{"url": "https://example.com/a.png"}') == {
            "url": "https://example.com/a.png",
            "filename": None,
            "id": None,
        }


class TestIsSameThumbnail:
    """Tests for is_same_thumbnail()."""

    def test__is_same_thumbnail__matching_url(self):
        old = make_reference("https://example.com/a.png")
        new = make_reference("https://example.com/a.png", "a.png")
        assert is_same_thumbnail(old, new) is True

    def test__is_same_thumbnail__matching_id(self):
        old = make_reference("https://example.com/a.png", None, "project-thumbnails/a")
        new = make_reference("https://example.com/b.png", None, "project-thumbnails/a")
        assert is_same_thumbnail(old, new) is True

    def test__is_same_thumbnail__matching_filename(self):
        old = make_reference("https://example.com/a.png", "cover.png")
        new = make_reference("https://example.com/b.png", "cover.png")
        assert is_same_thumbnail(old, new) is True

    def test__is_same_thumbnail__missing_fields_never_match(self):
        """Test that absent ids and filenames on both sides do not count as equal."""
        old = make_reference("https://example.com/a.png")
        new = make_reference("https://example.com/b.png")
        assert is_same_thumbnail(old, new) is False

    def test__is_same_thumbnail__no_old_reference(self):
        assert is_same_thumbnail(None, make_reference("https://example.com/a.png")) is False


class TestResolvePublicId:
    """Tests for resolve_public_id() and strip_folder()."""

    def test__resolve_public_id__qualified_id(self):
        reference = make_reference("https://example.com/a.png", "a.png", "project-thumbnails/abc")
        assert resolve_public_id(reference, FOLDER) == "project-thumbnails/abc"

    def test__resolve_public_id__bare_id_gets_folder(self):
        reference = make_reference("https://example.com/a.png", "a.png", "abc")
        assert resolve_public_id(reference, FOLDER) == "project-thumbnails/abc"

    def test__resolve_public_id__from_url(self):
        reference = make_reference("https://res.cloudinary.com/demo/image/upload/v1/project-thumbnails/abc.jpg")
        assert resolve_public_id(reference, FOLDER) == "project-thumbnails/abc"

    def test__resolve_public_id__strict_ignores_url(self):
        reference = make_reference("https://res.cloudinary.com/demo/image/upload/v1/project-thumbnails/abc.jpg")
        assert resolve_public_id(reference, FOLDER, strict=True) is None

    def test__resolve_public_id__strict_rejects_bare_id(self):
        reference = make_reference("https://res.cloudinary.com/demo/image/upload/v1/abc.jpg", "a.png", "abc")
        assert resolve_public_id(reference, FOLDER, strict=True) is None

    def test__resolve_public_id__strict_accepts_qualified_id(self):
        reference = make_reference("https://example.com/a.png", "a.png", "project-thumbnails/abc")
        assert resolve_public_id(reference, FOLDER, strict=True) == "project-thumbnails/abc"

    def test__resolve_public_id__non_string_id_ignored(self):
        reference = {"url": "https://example.com/a.png", "filename": "a.png", "id": 5}
        assert resolve_public_id(reference, FOLDER, strict=True) is None

    def test__resolve_public_id__url_outside_folder(self):
        reference = make_reference("https://res.cloudinary.com/demo/image/upload/v1/elsewhere/abc.jpg")
        assert resolve_public_id(reference, FOLDER) is None

    def test__strip_folder(self):
        assert strip_folder("project-thumbnails/abc", FOLDER) == "abc"
        assert strip_folder("abc", FOLDER) == "abc"


def test__is_media_host_url():
    assert is_media_host_url("https://res.cloudinary.com/demo/image/upload/a.jpg") is True
    assert is_media_host_url("https://example.com/a.png") is False
    assert is_media_host_url(None) is False

"""Tests for form validation."""

import pytest

from xaireport.core.exceptions import (
    InvalidFieldError,
    InvalidImageError,
    MissingFieldError,
)
from xaireport.core.types import BoundingBox, ImagePayload
from xaireport.core.validation import (
    build_request,
    is_negative_coordinate,
    negative_coordinates,
    parse_coordinate,
    validate_image,
    validate_request_fields,
)


class TestValidateRequestFields:
    """Tests for required field checks."""

    def test_complete_fields(self, request_fields, png_image):
        validate_request_fields(request_fields, original_image=png_image)

    def test_missing_coordinate(self, request_fields, png_image):
        request_fields["gt_x2"] = ""

        with pytest.raises(MissingFieldError) as exc_info:
            validate_request_fields(request_fields, original_image=png_image)

        assert exc_info.value.fields == ["gt_x2"]

    def test_blank_metadata(self, request_fields, png_image):
        request_fields["dataset"] = "   "
        del request_fields["xai_technique"]

        with pytest.raises(MissingFieldError) as exc_info:
            validate_request_fields(request_fields, heatmap_image=png_image)

        assert set(exc_info.value.fields) == {"dataset", "xai_technique"}

    def test_requires_an_image(self, request_fields):
        """Test that at least one image is needed."""
        with pytest.raises(MissingFieldError) as exc_info:
            validate_request_fields(request_fields)

        assert exc_info.value.fields == ["image"]

    def test_one_image_is_enough(self, request_fields, png_image):
        validate_request_fields(request_fields, heatmap_image=png_image)

    def test_prompt_required_when_requested(self, request_fields, png_image):
        request_fields["prompt"] = ""

        validate_request_fields(request_fields, original_image=png_image)
        with pytest.raises(MissingFieldError):
            validate_request_fields(request_fields, original_image=png_image, require_prompt=True)

    def test_missing_field_is_value_error(self, request_fields):
        with pytest.raises(ValueError):
            validate_request_fields(request_fields)


class TestCoordinates:
    """Tests for coordinate parsing."""

    def test_parse(self):
        assert parse_coordinate("gt_x1", "12.5") == 12.5
        assert parse_coordinate("gt_x1", 3) == 3.0

    def test_parse_blank(self):
        with pytest.raises(MissingFieldError):
            parse_coordinate("gt_x1", "")

    def test_parse_invalid(self):
        with pytest.raises(InvalidFieldError) as exc_info:
            parse_coordinate("gt_x1", "ten")

        assert exc_info.value.field == "gt_x1"

    @pytest.mark.parametrize("value", ["nan", "inf", "-inf", "Infinity", float("nan")])
    def test_parse_non_finite(self, value):
        """Test that NaN and infinities are rejected."""
        with pytest.raises(InvalidFieldError) as exc_info:
            parse_coordinate("gt_x2", value)

        assert exc_info.value.field == "gt_x2"

    def test_negative_flag(self, request_fields):
        """Test that negative values are flagged but allowed."""
        assert is_negative_coordinate("-1")
        assert not is_negative_coordinate("0")
        assert not is_negative_coordinate("abc")

        request_fields["xai_y2"] = "-4"
        assert negative_coordinates(request_fields) == ["xai_y2"]


class TestValidateImage:
    """Tests for upload checks."""

    def test_valid_image(self, png_image):
        assert validate_image(png_image) is png_image

    def test_rejects_non_image(self):
        with pytest.raises(InvalidImageError, match="valid image"):
            validate_image(ImagePayload(b"%PDF", "application/pdf"))

    def test_rejects_oversized(self):
        image = ImagePayload(b"\x00" * 2049, "image/png")

        with pytest.raises(InvalidImageError, match="less than"):
            validate_image(image, max_bytes=2048)

    def test_limit_is_inclusive(self):
        validate_image(ImagePayload(b"\x00" * 2048, "image/png"), max_bytes=2048)


class TestBuildRequest:
    """Tests for request assembly."""

    def test_build(self, request_fields, png_image):
        request = build_request(request_fields, original_image=png_image)

        assert request.ground_truth == BoundingBox(0, 0, 10, 10)
        assert request.xai_generated == BoundingBox(5, 5, 15, 15)
        assert request.metadata.xai_technique == "gradcam"
        assert request.original_image is png_image
        assert request.heatmap_image is None
        assert request.prompt == "Analyze the discrepancy."

    def test_build_invalid_coordinate(self, request_fields, png_image):
        request_fields["xai_x1"] = "five"

        with pytest.raises(InvalidFieldError):
            build_request(request_fields, original_image=png_image)

    @pytest.mark.parametrize("value", ["nan", "inf"])
    def test_build_non_finite_coordinate(self, request_fields, png_image, value):
        """Test that a non-finite corner never reaches a request."""
        request_fields["gt_x2"] = value

        with pytest.raises(InvalidFieldError) as exc_info:
            build_request(request_fields, original_image=png_image)

        assert exc_info.value.field == "gt_x2"

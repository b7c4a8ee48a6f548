"""Tests for color literal parsing, luminance and palette transforms."""

from __future__ import annotations

import pytest

from iconsmith.color.model import (
    auto_variant,
    complementary_color,
    darken_color,
    desaturate_color,
    generate_color_variations,
    get_contrast_ratio,
    get_luminance,
    hex_to_rgb,
    hsl_to_hex,
    invert_color,
    is_light_color,
    lighten_color,
    normalize_color,
    rgb_to_hex,
    rgb_to_hsl,
    transform_palette,
)


# ---------------------------------------------------------------------------
# 1. normalize_color
# ---------------------------------------------------------------------------

class TestNormalize:
    @pytest.mark.parametrize("raw,expected", [
        ("#ABC", "#aabbcc"),
        ("#FF0000", "#ff0000"),
        ("  #ff0000  ", "#ff0000"),
        ("#f00a", "#ff0000"),
        ("#ff000080", "#ff0000"),
        ("red", "#ff0000"),
        ("RED", "#ff0000"),
        ("green", "#008000"),
        ("rgb(255, 0, 0)", "#ff0000"),
        ("rgba(0,128,255,0.5)", "#0080ff"),
        ("rgb(0 128 255)", "#0080ff"),
        ("rgb(12.7, 0, 0)", "#0c0000"),
        ("hsl(120, 100%, 50%)", "#00ff00"),
        ("hsla(240, 100%, 50%, 0.3)", "#0000ff"),
    ])
    def test_recognized(self, raw, expected):
        assert normalize_color(raw) == expected

    @pytest.mark.parametrize("raw", [
        "none", "transparent", "currentColor", "CURRENTCOLOR",
        "url(#grad)", "banana", "#12", "#ggg", "", None,
    ])
    def test_unrecognized_is_none(self, raw):
        assert normalize_color(raw) is None

    def test_idempotent(self):
        for raw in ("#ABC", "red", "rgb(1, 2, 3)", "hsl(10, 50%, 40%)"):
            once = normalize_color(raw)
            assert normalize_color(once) == once


# ---------------------------------------------------------------------------
# 2. Conversions
# ---------------------------------------------------------------------------

class TestConversions:
    def test_rgb_to_hex_clamps_and_rounds_half_up(self):
        assert rgb_to_hex(255.5, -3, 300) == "#ff00ff"
        assert rgb_to_hex(127.5, 0, 0) == "#800000"
        assert rgb_to_hex(0, 0, 0) == "#000000"

    def test_hex_to_rgb(self):
        assert hex_to_rgb("#0080ff") == (0, 128, 255)
        assert hex_to_rgb("white") == (255, 255, 255)
        assert hex_to_rgb("nope") is None

    def test_hsl_round_trip_primaries(self):
        for color in ("#ff0000", "#00ff00", "#0000ff", "#ffff00"):
            h, s, l = rgb_to_hsl(*hex_to_rgb(color))
            assert hsl_to_hex(h, s, l) == color

    def test_hue_wraps(self):
        assert hsl_to_hex(360, 100, 50) == "#ff0000"
        assert hsl_to_hex(-120, 100, 50) == "#0000ff"

    def test_gray_has_no_saturation(self):
        h, s, l = rgb_to_hsl(128, 128, 128)
        assert s == 0.0
        assert l == pytest.approx(50.196, abs=0.01)


# ---------------------------------------------------------------------------
# 3. Luminance and contrast
# ---------------------------------------------------------------------------

class TestContrast:
    def test_luminance_extremes(self):
        assert get_luminance(0, 0, 0) == 0.0
        assert get_luminance(255, 255, 255) == pytest.approx(1.0)

    def test_black_on_white(self):
        assert get_contrast_ratio("#000000", "#ffffff") == pytest.approx(21.0)

    def test_symmetric(self):
        assert get_contrast_ratio("#ffffff", "#000") == get_contrast_ratio("#000", "#ffffff")

    def test_same_color_is_one(self):
        assert get_contrast_ratio("#3366ff", "rgb(51, 102, 255)") == pytest.approx(1.0)

    def test_unparseable_is_one(self):
        assert get_contrast_ratio("banana", "#ffffff") == 1.0
        assert get_contrast_ratio("#ffffff", "currentColor") == 1.0

    def test_is_light_color(self):
        assert is_light_color("#ffffff")
        assert not is_light_color("#000000")
        assert not is_light_color("#808080")


# ---------------------------------------------------------------------------
# 4. Palette transforms
# ---------------------------------------------------------------------------

class TestTransforms:
    def test_scalar_helpers(self):
        assert invert_color("#ff0000") == "#00ffff"
        assert darken_color("#ffffff") == "#b3b3b3"
        assert lighten_color("#000000") == "#4d4d4d"
        assert desaturate_color("#ff0000") == "#a62626"
        assert complementary_color("#ff0000") == "#00ffff"

    def test_scalar_helpers_reject_garbage(self):
        assert invert_color("banana") is None
        assert darken_color("none") is None

    @pytest.mark.parametrize("kind,expected", [
        ("invert", "#00ffff"),
        ("darken", "#b30000"),
        ("lighten", "#ff4d4d"),
        ("muted", "#a62626"),
        ("grayscale", "#4c4c4c"),
        ("complementary", "#00ffff"),
    ])
    def test_transform_red(self, kind, expected):
        assert transform_palette(["#ff0000"], kind) == [expected]

    def test_order_and_length_preserved(self):
        colors = ["#ff0000", "currentColor", "#00ff00", "#0000ff"]
        result = transform_palette(colors, "invert")
        assert result == ["#00ffff", "currentColor", "#ff00ff", "#ffff00"]

    def test_empty_palette(self):
        assert transform_palette([], "darken") == []

    def test_explicit_amount(self):
        assert transform_palette(["#ffffff"], "darken", 1.0) == ["#000000"]
        assert transform_palette(["#000000"], "lighten", 1.0) == ["#ffffff"]

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown palette transform"):
            transform_palette(["#ffffff"], "sepia")

    def test_complementary_keeps_grays(self):
        assert complementary_color("#808080") == "#808080"

    def test_auto_variant_names(self):
        assert auto_variant(["#ffffff"], "darken") == (["#b3b3b3"], "Dark")
        assert auto_variant(["#ff0000"], "invert")[1] == "Inverted"
        assert auto_variant(["#ff0000"], "grayscale")[1] == "Grayscale"

    def test_generate_variations(self):
        variations = generate_color_variations("#ff0000")
        assert variations[0] == "#ff0000"
        assert len(variations) == 6
        assert variations[-1] == "#00ffff"

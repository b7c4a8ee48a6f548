"""Color model — literal parsing, canonical hex form, luminance and palette transforms.

Every public function is total: unparseable input yields ``None`` (or the
neutral value documented on the function) instead of raising.
"""

from __future__ import annotations

import math
import re
from typing import Callable, Literal

import numpy as np
from numpy.typing import NDArray

PaletteTransform = Literal["invert", "darken", "lighten", "muted", "grayscale", "complementary"]

# Named colors to hex (CSS values)
NAMED_COLORS: dict[str, str] = {
    "black": "#000000", "white": "#ffffff", "red": "#ff0000",
    "green": "#008000", "blue": "#0000ff", "yellow": "#ffff00",
    "cyan": "#00ffff", "magenta": "#ff00ff", "orange": "#ffa500",
    "purple": "#800080", "pink": "#ffc0cb", "brown": "#a52a2a",
    "gray": "#808080", "grey": "#808080", "silver": "#c0c0c0",
    "navy": "#000080", "teal": "#008080", "maroon": "#800000",
    "olive": "#808000", "lime": "#00ff00", "aqua": "#00ffff",
    "fuchsia": "#ff00ff",
}

# Tokens that are valid paint values but carry no editable RGB value
NON_COLOR_TOKENS = frozenset({"none", "transparent", "currentcolor"})

_HEX_RE = re.compile(r"^#([0-9a-f]{3}|[0-9a-f]{4}|[0-9a-f]{6}|[0-9a-f]{8})$")
_SEP = r"\s*(?:,\s*|\s+)"
_RGB_RE = re.compile(
    r"^rgba?\(\s*(-?\d+)(?:\.\d*)?" + _SEP + r"(-?\d+)(?:\.\d*)?" + _SEP + r"(-?\d+)(?:\.\d*)?"
)
_HSL_RE = re.compile(
    r"^hsla?\(\s*(-?\d+(?:\.\d+)?)(?:deg)?" + _SEP + r"(\d+(?:\.\d+)?)%?" + _SEP + r"(\d+(?:\.\d+)?)%?"
)

# ITU-R BT.601 luma weights, used for desaturation toward gray
_LUMA_601 = np.array([0.299, 0.587, 0.114])
# WCAG 2.x relative luminance (BT.709 primaries)
_LUMA_709 = (0.2126, 0.7152, 0.0722)
_SRGB_LINEAR_KNEE = 0.03928

_AUTO_VARIANT_NAMES: dict[str, str] = {
    "invert": "Inverted",
    "darken": "Dark",
    "lighten": "Light",
    "muted": "Muted",
    "grayscale": "Grayscale",
    "complementary": "Complementary",
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Format channels as ``#rrggbb``, clamping each to [0, 255] first."""
    def channel(v: float) -> str:
        return f"{max(0, min(255, _round_half_up(v))):02x}"

    return f"#{channel(r)}{channel(g)}{channel(b)}"


def hsl_to_hex(h: float, s: float, l: float) -> str:
    """Convert hue (degrees), saturation and lightness (percent) to hex."""
    h = h % 360
    s_norm = max(0.0, min(100.0, s)) / 100
    l_norm = max(0.0, min(100.0, l)) / 100

    c = (1 - abs(2 * l_norm - 1)) * s_norm
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = l_norm - c / 2

    if h < 60:
        r, g, b = c, x, 0.0
    elif h < 120:
        r, g, b = x, c, 0.0
    elif h < 180:
        r, g, b = 0.0, c, x
    elif h < 240:
        r, g, b = 0.0, x, c
    elif h < 300:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    return rgb_to_hex((r + m) * 255, (g + m) * 255, (b + m) * 255)


def rgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Return (hue degrees, saturation %, lightness %)."""
    rn, gn, bn = r / 255, g / 255, b / 255
    hi, lo = max(rn, gn, bn), min(rn, gn, bn)
    light = (hi + lo) / 2
    delta = hi - lo
    if delta == 0:
        return 0.0, 0.0, light * 100

    sat = delta / (1 - abs(2 * light - 1))
    if hi == rn:
        hue = 60 * (((gn - bn) / delta) % 6)
    elif hi == gn:
        hue = 60 * ((bn - rn) / delta + 2)
    else:
        hue = 60 * ((rn - gn) / delta + 4)
    return hue, sat * 100, light * 100


def normalize_color(color: str | None) -> str | None:
    """Canonicalize a color literal to lowercase ``#rrggbb``.

    Returns ``None`` for ``none``, ``transparent``, ``currentColor`` and for
    anything that is not a recognizable color.
    """
    if not color:
        return None

    value = color.strip().lower()
    if value in NON_COLOR_TOKENS:
        return None

    if value in NAMED_COLORS:
        return NAMED_COLORS[value]

    m = _HEX_RE.match(value)
    if m:
        digits = m.group(1)
        if len(digits) in (3, 4):
            digits = "".join(ch * 2 for ch in digits[:3])
        return "#" + digits[:6]

    m = _RGB_RE.match(value)
    if m:
        return rgb_to_hex(*(int(g) for g in m.groups()))

    m = _HSL_RE.match(value)
    if m:
        return hsl_to_hex(*(float(g) for g in m.groups()))

    return None


def hex_to_rgb(color: str | None) -> tuple[int, int, int] | None:
    """Parse any supported color literal to an (r, g, b) tuple."""
    normalized = normalize_color(color)
    if normalized is None:
        return None
    return int(normalized[1:3], 16), int(normalized[3:5], 16), int(normalized[5:7], 16)


def get_luminance(r: float, g: float, b: float) -> float:
    """Relative luminance of an sRGB color (WCAG definition)."""
    def linear(c: float) -> float:
        s = c / 255
        return s / 12.92 if s <= _SRGB_LINEAR_KNEE else ((s + 0.055) / 1.055) ** 2.4

    return _LUMA_709[0] * linear(r) + _LUMA_709[1] * linear(g) + _LUMA_709[2] * linear(b)


def get_contrast_ratio(color1: str, color2: str) -> float:
    """WCAG contrast ratio in [1, 21]; 1 when either color does not parse."""
    rgb1 = hex_to_rgb(color1)
    rgb2 = hex_to_rgb(color2)
    if rgb1 is None or rgb2 is None:
        return 1.0

    l1 = get_luminance(*rgb1)
    l2 = get_luminance(*rgb2)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def is_light_color(color: str) -> bool:
    rgb = hex_to_rgb(color)
    if rgb is None:
        return True
    return get_luminance(*rgb) > 0.5


# ---------------------------------------------------------------------------
# Palette transforms over rows of an Nx3 float array, one row per color
# ---------------------------------------------------------------------------

def _invert(rgb: NDArray[np.float64], amount: float | None) -> NDArray[np.float64]:
    return 255.0 - rgb


def _darken(rgb: NDArray[np.float64], amount: float | None) -> NDArray[np.float64]:
    return rgb * (1.0 - (0.3 if amount is None else amount))


def _lighten(rgb: NDArray[np.float64], amount: float | None) -> NDArray[np.float64]:
    return rgb + (255.0 - rgb) * (0.3 if amount is None else amount)


def _desaturate(rgb: NDArray[np.float64], amount: float | None) -> NDArray[np.float64]:
    gray = rgb @ _LUMA_601
    return rgb + (gray[:, None] - rgb) * (0.5 if amount is None else amount)


def _grayscale(rgb: NDArray[np.float64], amount: float | None) -> NDArray[np.float64]:
    return _desaturate(rgb, 1.0)


def _complementary(rgb: NDArray[np.float64], amount: float | None) -> NDArray[np.float64]:
    rotated = []
    for r, g, b in rgb:
        h, s, l = rgb_to_hsl(r, g, b)
        rotated.append(hex_to_rgb(hsl_to_hex(h + 180, s, l)))
    return np.array(rotated, dtype=np.float64)


_PALETTE_OPS: dict[str, Callable[[NDArray[np.float64], float | None], NDArray[np.float64]]] = {
    "invert": _invert,
    "darken": _darken,
    "lighten": _lighten,
    "muted": _desaturate,
    "grayscale": _grayscale,
    "complementary": _complementary,
}


def transform_palette(
    colors: list[str],
    kind: PaletteTransform,
    amount: float | None = None,
) -> list[str]:
    """Apply one transform to every color, keeping list order and length.

    Entries that are not parseable colors (e.g. ``currentColor``) are passed
    through untouched so the result still lines up positionally.
    """
    op = _PALETTE_OPS.get(kind)
    if op is None:
        raise ValueError(f"Unknown palette transform: {kind!r}")

    parsed = [hex_to_rgb(c) for c in colors]
    valid = [i for i, rgb in enumerate(parsed) if rgb is not None]
    result = list(colors)
    if not valid:
        return result

    channels = np.array([parsed[i] for i in valid], dtype=np.float64)
    out = np.clip(np.floor(op(channels, amount) + 0.5), 0, 255).astype(int)
    for i, (r, g, b) in zip(valid, out):
        result[i] = rgb_to_hex(r, g, b)
    return result


def auto_variant(colors: list[str], kind: PaletteTransform) -> tuple[list[str], str]:
    """Derived palette plus the display name used for the generated variant."""
    return transform_palette(colors, kind), _AUTO_VARIANT_NAMES[kind]


def _transform_one(color: str, kind: PaletteTransform, amount: float | None = None) -> str | None:
    if hex_to_rgb(color) is None:
        return None
    return transform_palette([color], kind, amount)[0]


def invert_color(color: str) -> str | None:
    return _transform_one(color, "invert")


def darken_color(color: str, amount: float = 0.3) -> str | None:
    """Scale each channel toward 0 by ``amount`` (0..1)."""
    return _transform_one(color, "darken", amount)


def lighten_color(color: str, amount: float = 0.3) -> str | None:
    """Move each channel toward 255 by ``amount`` (0..1)."""
    return _transform_one(color, "lighten", amount)


def desaturate_color(color: str, amount: float = 0.5) -> str | None:
    return _transform_one(color, "muted", amount)


def complementary_color(color: str) -> str | None:
    """Hue rotated by 180 degrees, saturation and lightness kept."""
    return _transform_one(color, "complementary")


def generate_color_variations(base_color: str) -> list[str]:
    """Base color, two lighter, two darker and its complement."""
    variations = [base_color]
    for candidate in (
        lighten_color(base_color, 0.2),
        lighten_color(base_color, 0.4),
        darken_color(base_color, 0.2),
        darken_color(base_color, 0.4),
        complementary_color(base_color),
    ):
        if candidate:
            variations.append(candidate)
    return variations

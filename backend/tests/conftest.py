"""Shared test fixtures."""

from __future__ import annotations

import pytest

from iconsmith.config import Settings
from iconsmith.store.files import IconOutputService


# Icon markup

CIRCLE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">
  <circle cx="12" cy="12" r="10"/>
</svg>'''

HOME_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">
  <path d="M15 21v-8a1 1 0 0 0-1-1h-4a1 1 0 0 0-1 1v8"/>
  <path d="M3 10a2 2 0 0 1 .709-1.528l7-5.999a2 2 0 0 1 2.582 0l7 5.999A2 2 0 0 1 21 10v9a2 2 0 0 1-2 2H5a2 2 0 0 1-2-2z"/>
</svg>'''

FILLED_RECT_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <rect x="10" y="10" width="80" height="80" fill="#4ECDC4"/>
  <circle cx="50" cy="50" r="20" fill="#FF6B6B"/>
</svg>'''

# Same red in two notations, stroke + fill usage, one style declaration
MIXED_COLORS_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">
  <path d="M2 2h20v20H2z" fill="#FF0000"/>
  <circle cx="12" cy="12" r="6" fill="#00f" stroke="red"/>
  <rect x="4" y="4" width="4" height="4" style="fill: #00FF00; stroke-width: 2"/>
  <path d="M0 0L24 24" fill='none' stroke='#000'/>
</svg>'''

GRADIENT_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">
  <defs>
    <linearGradient id="g">
      <stop offset="0" stop-color="#ffaa00"/>
      <stop offset="1" style="stop-color: rgb(0, 128, 255)"/>
    </linearGradient>
  </defs>
  <rect width="24" height="24" fill="url(#g)"/>
</svg>'''

SMIL_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">
  <circle cx="12" cy="12" r="4" fill="#3366ff">
    <animate attributeName="r" values="4;8;4" dur="1s" repeatCount="indefinite"/>
  </circle>
  <circle cx="12" cy="12" r="2" fill="#010101"/>
</svg>'''

# Output containers

MODULE_CONTENT = """// Auto-generated by iconsmith
// Do not edit manually

export const home = {
  name: 'home',
  body: `<path d="M3 10l9-7 9 7"/>`,
  viewBox: '0 0 24 24'
};

export const arrowRight = {
  name: 'arrow-right',
  body: `<path d="M5 12h14"/><path d="m12 5 7 7-7 7"/>`,
  viewBox: '0 0 24 24'
};

export const icons = {
  'home': home,
  'arrow-right': arrowRight
};
"""

SPRITE_CONTENT = """<svg xmlns="http://www.w3.org/2000/svg" style="display: none;">
  <symbol id="home" viewBox="0 0 24 24">
    <path d="M3 10l9-7 9 7"/>
  </symbol>
  <symbol id='arrow-right' viewBox="0 0 24 24">
    <path d="M5 12h14"/>
  </symbol>
</svg>
"""


@pytest.fixture
def circle_svg() -> str:
    return CIRCLE_SVG


@pytest.fixture
def mixed_svg() -> str:
    return MIXED_COLORS_SVG


@pytest.fixture
def module_content() -> str:
    return MODULE_CONTENT


@pytest.fixture
def sprite_content() -> str:
    return SPRITE_CONTENT


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(output_directory=str(tmp_path / "icons"))


@pytest.fixture
def output_service(test_settings) -> IconOutputService:
    return IconOutputService(test_settings.output_directory, test_settings)

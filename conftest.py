"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Sample classic documents
- Engine and mapping fixtures
"""

from __future__ import annotations

from datetime import datetime

import pytest
from dotenv import load_dotenv

from paconvert.engine import ConversionEngine
from paconvert.mapping import MappingConfiguration

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Sample Documents
# =============================================================================

CLASSIC_BUTTON = """\
- Button1:
    Control: Classic/Button@2.2.0
    Properties:
      Text: "Submit"
      RadiusTopLeft: 5
"""

CLASSIC_BUTTON_FULL = """\
- Button1:
    Control: Classic/Button@2.2.0
    Properties:
      OnSelect: =Navigate(Screen2, ScreenTransition.Fade)
      Text: ="Submit"
      Fill: =RGBA(56, 96, 178, 1)
      HoverFill: =ColorFade(Self.Fill, -20%)
      DisabledFill: =RGBA(166, 166, 166, 1)
      Color: =RGBA(255, 255, 255, 1)
      Size: =13
      RadiusTopLeft: =10
      RadiusBottomRight: =10
      X: =40
      Y: =200
"""


@pytest.fixture
def classic_button() -> str:
    """Minimal classic button document."""
    return CLASSIC_BUTTON


@pytest.fixture
def classic_button_full() -> str:
    """Classic button with formulas, dropped and renamed properties."""
    return CLASSIC_BUTTON_FULL


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def engine() -> ConversionEngine:
    """Engine with the built-in mapping tables."""
    return ConversionEngine()


@pytest.fixture
def small_mappings() -> MappingConfiguration:
    """Small hand-written configuration for precise assertions."""
    return MappingConfiguration.from_data(
        {
            "controlTypes": {
                "Classic/Button@2.2.0": "Button@0.0.45",
                "Classic/Button": "Button@0.0.44",
                "Label": "Text@0.0.51",
            },
            "properties": {
                "Button": {"Fill": "BasePaletteColor", "HoverFill": None},
                "*": {"Color": "FontColor"},
            },
            "defaults": {"Button": {"ButtonType": "Standard"}},
        }
    )


@pytest.fixture
def fixed_clock():
    """Clock returning a constant time, for formatted log assertions."""
    moment = datetime(2024, 5, 1, 9, 30, 15)
    return lambda: moment

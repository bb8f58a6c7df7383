"""
App settings definitions.
"""
from enum import Enum


class Theme(str, Enum):
    """
    Visual themes available to the UI.
    """
    MODERN = "modern"
    RETRO = "retro"


DEFAULT_THEME = Theme.MODERN

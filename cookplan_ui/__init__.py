"""First-party planning and display contracts for Cookplan."""

from .style.palette import NEUTRAL_COLOR, PALETTE, validate_palette

__all__ = [
    "NEUTRAL_COLOR",
    "PALETTE",
    "validate_palette",
]

"""
Visual Freezer Module

CDP capture actions: device emulation, MHTML and PDF.
"""

from .freezer import VisualFreezer

__all__ = ["VisualFreezer"]

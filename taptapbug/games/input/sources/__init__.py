"""
Input source implementations.
"""

from taptapbug.games.input.sources.base import InputSource
from taptapbug.games.input.sources.mouse import MouseInputSource

__all__ = ['InputSource', 'MouseInputSource']

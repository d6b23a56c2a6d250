"""API routes for the TTS service"""

from . import synthesize

__all__ = ["synthesize"]

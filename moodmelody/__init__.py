"""
MoodMelody - mood inference and mood-based track discovery.

This package infers a mood (or a blend of two moods) from free text, derives
catalog search phrases from it, and caches search results per mood with a
per-mood liked-track overlay.
"""

__version__ = "0.1.0"

"""
Task modules for background processing.

This package contains all background task implementations.
"""

from . import feed_counters

__all__ = ["feed_counters"]

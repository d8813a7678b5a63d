"""
Feedscore Core Package.

This package contains the engagement scoring and journey attribution
logic, service classes, and shared schemas.
"""

__version__ = "0.1.0"

from .logging_config import get_logger, init_logging

__all__ = ["init_logging", "get_logger"]

"""
PassWarden Shared Module
========================

Configuration, structured logging, Rich console helpers, result models
and the async HTTP client used across the PassWarden toolkit.
"""

from shared.config import PassWardenConfig

__all__ = ["PassWardenConfig"]

"""
PassWarden Generators
======================

The :class:`PasswordGenerator` context plus its naming-convention and
word-list helpers.
"""

from passwarden.generators.naming import apply_convention
from passwarden.generators.password_generator import PasswordGenerator
from passwarden.generators.words import JsonWordSource, WordSource

__all__ = ["JsonWordSource", "PasswordGenerator", "WordSource", "apply_convention"]

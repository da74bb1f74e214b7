"""
PassWarden -- Password Analysis and Generation
===============================================

Measures password entropy and strength, detects weak structural patterns,
scores similarity, estimates brute-force crack time and checks breach
exposure.  Generates passwords from exact character rules, at maximum
strength with a breach check, from leetspeak substitution of a phrase,
and from mnemonic word combinations.

Modules:
    - passwarden.core.engine: Central orchestrator
    - passwarden.core.models: Pydantic data models and enumerations
    - passwarden.core.exceptions: Error taxonomy
    - passwarden.core.hashing: bcrypt and SHA-1 hashers
    - passwarden.analyzers: Individual analysis modules
    - passwarden.generators: Password generator context
    - passwarden.output: Console and report output
    - passwarden.cli: Click-based command-line interface

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
"""

__version__ = "1.0.0"
__tool_name__ = "passwarden"

"""
PassWarden Module Entry Point
==============================

Allows running the PassWarden CLI via: python -m passwarden
"""

from passwarden.cli import main

if __name__ == "__main__":
    main()

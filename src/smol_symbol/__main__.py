"""
smol_symbol package entry point.

Allows running: python -m smol_symbol [command] [args]
"""
import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())

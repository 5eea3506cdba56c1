"""
Entry point for running the tcrun CLI as a module.

Usage: python -m tcrun.cli [options] TOOL [ARGS...]
"""

from .parser import main

if __name__ == "__main__":
    main()

"""
Entry point for running tcrun as a module.

Usage: python -m tcrun [options] TOOL [ARGS...]
"""

from tcrun.cli.parser import main

if __name__ == "__main__":
    main()

"""
Package entry point.

Allows running the application via:

    python -m courseup

This simply forwards execution to courseup.cli.main().
"""

from courseup.cli import main

if __name__ == "__main__":
    main()

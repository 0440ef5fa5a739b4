"""
Package entry point.

Allows running the application via:

    python -m schedcheck

This simply forwards execution to schedcheck.cli.main().
"""

from schedcheck.cli import main

if __name__ == "__main__":
    main()

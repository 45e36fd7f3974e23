"""
Package entry point.

Allows running the application via:

    python -m smartevent interactive

This simply forwards execution to smartevent.cli.main().
"""

from smartevent.cli import main

if __name__ == "__main__":
    main()

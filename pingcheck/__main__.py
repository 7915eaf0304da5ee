"""Entry point for pingcheck."""

from pingcheck.cli import main

if __name__ == "__main__":
    main()

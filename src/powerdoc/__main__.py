"""Allow running the CLI with ``python -m powerdoc``."""

from powerdoc.cli import main

if __name__ == "__main__":
    main()

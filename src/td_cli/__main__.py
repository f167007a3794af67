"""Entry point for ``python -m td_cli``."""

from td_cli import main

if __name__ == "__main__":
    main()

"""Module entrypoint for ``python -m gridpick``."""

from .cli import main


if __name__ == "__main__":
    main()

"""Module entrypoint for ``python -m ttyconf``."""

from .cli import main


if __name__ == "__main__":
    main()

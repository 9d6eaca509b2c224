"""Support ``python -m largest`` as an alias of the ``largest`` console script."""

from .cli import main


if __name__ == "__main__":
    main()

"""Allow ``python -m tanglesmith``."""

from tanglesmith.ui.cli import main


if __name__ == "__main__":
    main()

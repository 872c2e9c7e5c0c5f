"""Allow ``python -m subfont``."""

from subfont.ui.cli import main


if __name__ == "__main__":
    main()

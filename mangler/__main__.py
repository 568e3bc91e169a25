"""Allow ``python -m mangler``."""

from mangler.cli import main

if __name__ == "__main__":
    main()

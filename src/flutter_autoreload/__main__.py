"""Allow `python -m flutter_autoreload`."""

from .cli.app import main

if __name__ == "__main__":
    main()

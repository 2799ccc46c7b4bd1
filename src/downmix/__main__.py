"""Allow running as ``python -m downmix``."""

from downmix.cli import main

if __name__ == "__main__":
    main()

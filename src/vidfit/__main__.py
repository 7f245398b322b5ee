"""Allow running vidfit as ``python -m vidfit``."""

from vidfit.cli import main

if __name__ == "__main__":
    main()

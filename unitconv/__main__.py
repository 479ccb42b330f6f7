"""Allow ``python -m unitconv``."""

from unitconv.cli.main import main

if __name__ == "__main__":
    main()

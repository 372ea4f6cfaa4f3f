"""Package entry point for ``python -m hexbin``."""

from hexbin.cli.hex2bin import main

if __name__ == "__main__":
    main()

"""Module entrypoint to run `python -m hpcadmin`."""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())

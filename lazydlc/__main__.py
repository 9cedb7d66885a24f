"""Module entrypoint for ``python -m lazydlc``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing and session setup happen in ``lazydlc.cli``.
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())

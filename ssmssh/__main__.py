"""Module entrypoint for ``python -m ssmssh``.

Argument parsing, the selector, and the session hand-off live in ``ssmssh.cli``.
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())

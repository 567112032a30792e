"""Module entrypoint for ``python -m duview``.

Argument parsing and session setup happen in ``duview.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()

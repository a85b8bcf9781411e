"""Module entrypoint for ``python -m tocker``.

Argument parsing and runtime setup happen in ``tocker.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()

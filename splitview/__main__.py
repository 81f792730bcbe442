"""Module entrypoint for ``python -m splitview``.

All argument parsing and runtime setup happen in ``splitview.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()

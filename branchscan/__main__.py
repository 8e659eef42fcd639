"""Module entrypoint for ``python -m branchscan``.

All argument parsing and runtime setup happen in ``branchscan.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()

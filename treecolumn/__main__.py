"""Module entrypoint for ``python -m treecolumn``.

All argument parsing and rendering happen in ``treecolumn.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()

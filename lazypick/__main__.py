"""Module entrypoint for ``python -m lazypick``.

Argument checks, stdin ingestion, and the terminal session all happen in
``lazypick.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()

"""Allow ``python -m bibsmith``."""

from __future__ import annotations

from bibsmith.ui.cli import main


if __name__ == "__main__":
    main()

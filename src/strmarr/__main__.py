from __future__ import annotations

from strmarr.ui.cli import main

if __name__ == "__main__":
    main()

"""Development entry point: `python main.py health`, `python main.py batch ...`.

The packages live under `src/`; without an editable install they are not
importable, so this script puts `src/` on the path before loading the CLI.
The installed equivalent is the `refcheck` console script.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Workaround for UnicodeEncodeError on Windows terminals/CI (cp1252 vs utf-8).
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")


def main() -> None:
    src = Path(__file__).resolve().parent / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()

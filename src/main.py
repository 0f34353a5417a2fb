"""Run script.

Why it exists:
- Lets `python -m main` run the CLI from inside `src/` during development.
- Keeps a plain entry point next to the `osx-bind` console script.
"""

from __future__ import annotations

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()

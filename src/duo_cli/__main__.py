"""Module entrypoint for `python -m duo_cli`."""

from duo_cli.cli import main


if __name__ == "__main__":  # pragma: no cover - exercised via CLI tests
    main()

"""Entry point for ``python -m tipster``."""

from pathlib import Path

from dotenv import load_dotenv

from tipster.cli.commands import app


def main() -> None:
    # Real environment wins over ~/.tipster/.env, so TIPSTER_* exports still apply.
    load_dotenv(Path.home() / ".tipster" / ".env", override=False)
    app(prog_name="tipster")


if __name__ == "__main__":
    main()

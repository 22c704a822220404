"""Main CLI application module."""

import typer

from .db_commands import db_app
from .stats_commands import stats

app = typer.Typer(
    help="User directory administration",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(db_app, name="db")
app.command("stats")(stats)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

"""Database maintenance commands: schema, identity sequence and backfill."""

import random
from datetime import UTC, datetime, timedelta

import typer
from rich.console import Console
from rich.prompt import Confirm

from src.directory.core.services import (
    DbSessionService,
    SequenceGuardian,
    build_identity_sequence,
)
from src.directory.core.types import Gender
from src.directory.entities.core.user import UserTable
from src.directory.runtime.context import get_config
from src.directory.runtime.init_db import init_db

console = Console()

db_app = typer.Typer(help="Manage the directory database")

_FIRST_NAMES = ["Ada", "Grace", "Alan", "Linus", "Margaret", "Dennis", "Barbara", "Ken"]
_LAST_NAMES = ["Lovelace", "Hopper", "Turing", "Torvalds", "Hamilton", "Ritchie", "Liskov"]
_DOMAINS = ["example.com", "mail.test", "corp.example"]


def _guardian(database_service: DbSessionService) -> SequenceGuardian:
    return SequenceGuardian(
        build_identity_sequence(get_config().database, database_service.engine)
    )


def sample_rows(start_id: int, count: int, seed: int | None = None) -> list[UserTable]:
    """Sample users with explicit ids ``start_id .. start_id + count - 1``.

    Creation dates are spread over the last year so the monthly cohort has
    something to show.
    """
    rng = random.Random(seed)
    now = datetime.now(UTC)
    genders = list(Gender)
    rows = []
    for offset in range(count):
        user_id = start_id + offset
        first = rng.choice(_FIRST_NAMES)
        last = rng.choice(_LAST_NAMES)
        rows.append(
            UserTable(
                id=user_id,
                first_name=first,
                last_name=last,
                email=f"{first}.{last}.{user_id}@{rng.choice(_DOMAINS)}".lower(),
                gender=rng.choice(genders).value,
                phone=f"555-{rng.randint(100, 999)}-{rng.randint(1000, 9999)}",
                created_at=now - timedelta(days=rng.randint(0, 365)),
            )
        )
    return rows


@db_app.command("init")
def init(
    reset: bool = typer.Option(False, "--reset", help="Drop existing tables first"),
) -> None:
    """Create the directory tables."""
    if reset and not Confirm.ask("[red]Drop all directory tables?[/red]"):
        raise typer.Exit()
    init_db(reset=reset)
    console.print("[green]✅ Tables created[/green]")


@db_app.command("sync-sequence")
def sync_sequence() -> None:
    """Advance the user id sequence past the highest stored id."""
    database_service = DbSessionService()
    next_value = _guardian(database_service).sync_on_startup(database_service.get_session)
    if next_value is None:
        console.print("[red]❌ Could not synchronize the identity sequence[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]✅ Next user id: {next_value}[/green]")


@db_app.command("seed")
def seed(
    count: int = typer.Option(20, "--count", "-n", min=1, help="Rows to insert"),
    seed_value: int | None = typer.Option(None, "--seed", help="Random seed"),
) -> None:
    """Backfill sample users with explicit ids.

    The ids bypass the identity sequence, the same way a restore or bulk
    import would. Run ``sync-sequence`` afterwards, or let the API repair
    the sequence on its next insert.
    """
    database_service = DbSessionService()
    guardian = _guardian(database_service)
    with database_service.session_scope() as session:
        start_id = guardian.max_id(session) + 1
        session.add_all(sample_rows(start_id, count, seed=seed_value))

    console.print(
        f"[green]✅ Inserted {count} users (ids {start_id}-{start_id + count - 1})[/green]"
    )

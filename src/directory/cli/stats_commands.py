"""Analytics printed as Rich tables."""

import typer
from rich.console import Console
from rich.table import Table

from src.directory.core.services import AnalyticsService, DbSessionService

console = Console()


def stats(
    top: int = typer.Option(10, "--top", "-t", min=1, help="Email domains to list"),
) -> None:
    """Show gender, monthly and email-domain statistics."""
    database_service = DbSessionService()
    with database_service.session_scope() as session:
        analytics = AnalyticsService(session)
        genders = analytics.gender_distribution()
        months = analytics.monthly_registrations()
        domains = analytics.email_domains()

    gender_table = Table(title="Users by gender")
    gender_table.add_column("Gender", style="cyan")
    gender_table.add_column("Count", style="green", justify="right")
    for label, count in genders.model_dump().items():
        gender_table.add_row(label, str(count))
    console.print(gender_table)

    month_table = Table(title="Registrations per month")
    month_table.add_column("Month", style="cyan")
    month_table.add_column("Count", style="green", justify="right")
    for bucket in months:
        month_table.add_row(bucket.month, str(bucket.count))
    console.print(month_table)

    domain_table = Table(title=f"Top {top} email domains")
    domain_table.add_column("Domain", style="cyan")
    domain_table.add_column("Count", style="green", justify="right")
    for bucket in domains[:top]:
        domain_table.add_row(bucket.domain, str(bucket.count))
    console.print(domain_table)

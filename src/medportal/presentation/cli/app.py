"""medportal CLI application using Typer.

This module provides command-line access to the portal: signing in and
out as a patient or facility admin, and reading queues, blood stock,
doctors and help requests from the hosted backend.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import typer
from rich.console import Console
from rich.table import Table

from medportal.application.commands import JoinQueueCommand
from medportal.application.queries import (
    ALL_DEPARTMENTS,
    BloodBankInventoryQuery,
    ListDepartmentsQuery,
    ListDoctorsQuery,
    ListHelpRequestsQuery,
    WaitingCountsQuery,
)
from medportal.application.services import LiveList
from medportal.domain.records import (
    DEPARTMENTS_TABLE,
    WAITING_LIST_TABLE,
    DepartmentQueue,
    QueueStatus,
    StockStatus,
)
from medportal.domain.shared import DomainException
from medportal.presentation.cli.portal import Portal, open_portal
from medportal_config import configure_logging, get_settings
from medportal_identity import Actor
from medportal_identity.infrastructure.storage import StorageEventRelay

T = TypeVar("T")

app = typer.Typer(
    name="medportal",
    help="medportal - hospital portal command line",
    no_args_is_help=True,
)
console = Console()

_STATUS_STYLES = {
    QueueStatus.GOOD: "green",
    QueueStatus.WARNING: "yellow",
    QueueStatus.CRITICAL: "red",
    StockStatus.GOOD: "green",
    StockStatus.LOW: "yellow",
    StockStatus.CRITICAL: "red",
}


def _run(action: Callable[[Portal], Awaitable[T]]) -> T:
    """Open a portal window, run ``action`` in it and close it again."""
    configure_logging()

    async def _main() -> T:
        async with open_portal(get_settings()) as portal:
            return await action(portal)

    try:
        return asyncio.run(_main())
    except DomainException as e:
        console.print(f"[red]Error:[/red] {e.message} [dim]({e.code.value})[/dim]")
        raise typer.Exit(code=1) from e


def _describe(actor: Actor) -> str:
    if not actor.is_authenticated:
        return "[dim]Not signed in[/dim]"
    role = "admin" if actor.is_admin else "user"
    line = f"[bold]{actor.identifier}[/bold] ({role}, via {actor.source.value})"
    if actor.is_admin:
        line += f"\nFacility: [cyan]{actor.facility_name}[/cyan] ({actor.facility_id})"
    return line


def _queues_table(queues: list[DepartmentQueue]) -> Table:
    table = Table(title="Department queues")
    table.add_column("Department")
    table.add_column("Waiting", justify="right")
    table.add_column("Capacity", justify="right")
    table.add_column("Status")
    for queue in queues:
        style = _STATUS_STYLES[queue.status]
        table.add_row(
            queue.department.name,
            str(queue.waiting),
            str(queue.department.capacity),
            f"[{style}]{queue.status.value}[/{style}]",
        )
    return table


# -----------------------------------------------------------------------------
# Identity
# -----------------------------------------------------------------------------


@app.command()
def whoami() -> None:
    """Show who the portal is acting as."""

    async def _action(portal: Portal) -> Actor:
        return portal.resolver.actor

    console.print(_describe(_run(_action)))


@app.command("sign-in")
def sign_in(
    username: str = typer.Argument(..., help="Username (without the email domain)"),
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Sign in as a patient, a test user or a facility admin."""

    async def _action(portal: Portal):
        return await portal.resolver.sign_in(username, password)

    result = _run(_action)
    if not result.ok:
        console.print(f"[red]Sign-in failed:[/red] {result.message}")
        raise typer.Exit(code=1)
    console.print("[green]Signed in[/green]")
    console.print(_describe(result.actor))


@app.command("sign-up")
def sign_up(
    username: str = typer.Argument(..., help="Username (without the email domain)"),
    password: str = typer.Option(
        ..., prompt=True, hide_input=True, confirmation_prompt=True
    ),
) -> None:
    """Create a patient account on the hosted backend."""

    async def _action(portal: Portal):
        return await portal.resolver.sign_up(username, password)

    result = _run(_action)
    if not result.ok:
        console.print(f"[red]Sign-up failed:[/red] {result.message}")
        raise typer.Exit(code=1)
    console.print("[green]Account created[/green]")
    console.print(_describe(result.actor))


@app.command("sign-out")
def sign_out() -> None:
    """Sign out and forget any stored override."""

    async def _action(portal: Portal) -> None:
        await portal.resolver.sign_out()

    _run(_action)
    console.print("Signed out")


# -----------------------------------------------------------------------------
# Records
# -----------------------------------------------------------------------------


@app.command()
def queues() -> None:
    """Show waiting patients per department."""

    async def _action(portal: Portal) -> list[DepartmentQueue]:
        departments = await ListDepartmentsQuery.from_factory(portal.context).execute()
        return await WaitingCountsQuery.from_factory(portal.context).queues(departments)

    console.print(_queues_table(_run(_action)))


@app.command("watch-queues")
def watch_queues(
    seconds: float = typer.Option(30.0, help="How long to keep watching"),
) -> None:
    """Keep the queue table current and report sign-ins from other windows."""
    settings = get_settings()

    async def _action(portal: Portal) -> None:
        departments_query = ListDepartmentsQuery.from_factory(portal.context)
        counts_query = WaitingCountsQuery.from_factory(portal.context)

        async def _fetch() -> list[DepartmentQueue]:
            return await counts_query.queues(await departments_query.execute())

        live: LiveList[DepartmentQueue] = LiveList(
            portal.context.row_store(),
            [DEPARTMENTS_TABLE, WAITING_LIST_TABLE],
            _fetch,
        )
        live.subscribe(lambda items: console.print(_queues_table(items)))
        portal.resolver.subscribe(
            lambda actor: console.print(f"Actor changed: {_describe(actor)}")
        )

        relay = None
        if portal.store is not None:
            relay = StorageEventRelay(portal.store, settings.storage_relay_interval)
            relay.start()
        try:
            async with live:
                await asyncio.sleep(seconds)
        finally:
            if relay is not None:
                await relay.stop()

    _run(_action)


@app.command("blood-bank")
def blood_bank() -> None:
    """Show blood stock per blood type."""

    async def _action(portal: Portal):
        return await BloodBankInventoryQuery.from_factory(portal.context).execute()

    table = Table(title="Blood bank")
    table.add_column("Blood type")
    table.add_column("Units", justify="right")
    table.add_column("Status")
    for stock in _run(_action):
        style = _STATUS_STYLES[stock.stock_status]
        table.add_row(
            stock.blood_type,
            str(stock.units),
            f"[{style}]{stock.stock_status.value}[/{style}]",
        )
    console.print(table)


@app.command()
def doctors(
    department: str = typer.Option(ALL_DEPARTMENTS, help="Department id or 'all'"),
    search: str = typer.Option("", help="Match against name or specialization"),
) -> None:
    """List doctors, optionally filtered."""

    async def _action(portal: Portal):
        return await ListDoctorsQuery.from_factory(portal.context).execute(
            department_id=department,
            search=search,
        )

    found = _run(_action)
    if not found:
        console.print("[dim]No doctors found[/dim]")
        return

    table = Table(title="Doctors")
    table.add_column("Name")
    table.add_column("Specialization")
    table.add_column("Department")
    table.add_column("Available")
    for doctor in found:
        table.add_row(
            doctor.name,
            doctor.specialization,
            doctor.department_name,
            "[green]yes[/green]" if doctor.available else "[red]no[/red]",
        )
    console.print(table)


@app.command("help-requests")
def help_requests(
    facility: str | None = typer.Option(None, help="Facility id"),
) -> None:
    """List help requests (an admin sees their own facility)."""

    async def _action(portal: Portal):
        return await ListHelpRequestsQuery.from_factory(portal.context).execute(
            facility_id=facility,
        )

    found = _run(_action)
    if not found:
        console.print("[dim]No help requests[/dim]")
        return

    table = Table(title="Help requests")
    table.add_column("Created")
    table.add_column("Patient")
    table.add_column("Facility")
    table.add_column("Status")
    table.add_column("Description")
    for request in found:
        table.add_row(
            request.created_at.strftime("%Y-%m-%d %H:%M") if request.created_at else "",
            request.patient_name,
            request.hospital_id or "",
            request.status.value,
            request.description or "",
        )
    console.print(table)


@app.command("join-queue")
def join_queue(
    department_id: str = typer.Argument(...),
    patient_name: str = typer.Argument(...),
    reason: str | None = typer.Option(None, help="Reason for the visit"),
) -> None:
    """Join a department's waiting queue."""

    async def _action(portal: Portal):
        return await JoinQueueCommand.from_factory(portal.context).execute(
            department_id=department_id,
            patient_name=patient_name,
            reason=reason,
        )

    entry = _run(_action)
    console.print(
        f"[green]Joined queue[/green] for department {entry.department_id} "
        f"as {entry.patient_name}"
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()

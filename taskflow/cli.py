#!/usr/bin/env python3
"""TaskFlow CLI.

Command-line interface for running the task API and managing tasks
through it.
"""

import asyncio
import logging

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from .client import TaskClient
from .config import get_settings
from .database import create_db_and_tables, get_engine, verify_database
from .errors import TaskflowError
from .schemas.unified_models import TaskRead
from .utils.task_filters import TaskFilter, filter_tasks, summarize


# Initialize CLI and console
app = typer.Typer(help="TaskFlow personal task tracker")
console = Console()


def configure_logging(level: str) -> None:
    """Configure root logging once, before the server starts."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class TaskflowCLI:
    """CLI interface over the task API client."""

    def __init__(self, client: TaskClient | None = None):
        self.client = client

    def get_client(self) -> TaskClient:
        """Create the API client if not already done."""
        if self.client is None:
            self.client = TaskClient()
        return self.client

    async def cleanup(self):
        """Cleanup resources."""
        if self.client is not None:
            await self.client.close()
            self.client = None


# Global CLI instance
cli_instance = TaskflowCLI()


def _run(coro) -> None:
    """Run a client coroutine, reporting TaskFlow errors as exit code 1."""

    async def _wrapped():
        try:
            await coro
        finally:
            await cli_instance.cleanup()

    try:
        asyncio.run(_wrapped())
    except TaskflowError as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise typer.Exit(code=1) from e


def _task_table(tasks: list[TaskRead], title: str) -> Table:
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Done", justify="center")
    table.add_column("Title", style="white")
    table.add_column("Description", style="dim")
    table.add_column("Created", style="yellow")

    for task in tasks:
        table.add_row(
            str(task.id),
            "[green]✓[/green]" if task.completed else "",
            task.title,
            task.description or "",
            task.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    return table


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Interface to bind"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to listen on"),
):
    """Run the task API server."""
    settings = get_settings()
    configure_logging(settings.log_level)

    uvicorn.run(
        "taskflow.api.app:create_app",
        factory=True,
        host=host or settings.server.host,
        port=port or settings.server.port,
        reload=settings.server.reload,
        log_level=settings.log_level.lower(),
    )


@app.command()
def init_db():
    """Create the task table if it doesn't exist."""
    configure_logging(get_settings().log_level)
    engine = get_engine()
    create_db_and_tables(engine)
    if not verify_database(engine):
        console.print(f"[bold red]Error: database not usable: {engine.url}[/bold red]")
        raise typer.Exit(code=1)
    console.print(f"[green]Database ready: {engine.url}[/green]")


@app.command("list")
def list_tasks(
    task_filter: TaskFilter = typer.Option(
        TaskFilter.ALL, "--filter", "-f", help="Show all, pending or completed tasks"
    ),
):
    """List tasks."""

    async def _list():
        tasks = await cli_instance.get_client().list_tasks()
        shown = filter_tasks(tasks, task_filter)

        if not shown:
            console.print("[yellow]No tasks found.[/yellow]")
        else:
            console.print(_task_table(shown, f"Tasks ({task_filter.value})"))
        console.print(f"{summarize(tasks)}")

    _run(_list())


@app.command()
def add(
    title: str = typer.Argument(..., help="Task title"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="Optional task description"
    ),
):
    """Add a new task."""

    async def _add():
        task = await cli_instance.get_client().create_task(title, description)
        console.print(f"[green]Task added: #{task.id} {task.title}[/green]")

    _run(_add())


@app.command()
def complete(task_id: int = typer.Argument(..., help="ID of the task")):
    """Mark a task as completed."""

    async def _complete():
        task = await cli_instance.get_client().set_completed(task_id, True)
        console.print(f"[green]Task #{task.id} completed: {task.title}[/green]")

    _run(_complete())


@app.command()
def reopen(task_id: int = typer.Argument(..., help="ID of the task")):
    """Mark a completed task as pending again."""

    async def _reopen():
        task = await cli_instance.get_client().set_completed(task_id, False)
        console.print(f"[green]Task #{task.id} reopened: {task.title}[/green]")

    _run(_reopen())


@app.command()
def delete(task_id: int = typer.Argument(..., help="ID of the task")):
    """Delete a task permanently."""

    async def _delete():
        await cli_instance.get_client().delete_task(task_id)
        console.print(f"[green]Task #{task_id} deleted.[/green]")

    _run(_delete())


if __name__ == "__main__":
    app()

"""
Command Line Interface for Exquisite Corpse.
"""

import asyncio
from contextlib import contextmanager
from typing import Iterator, Optional

import typer
import uvicorn
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import get_settings
from ..db.base import get_session_local, init_database
from ..logging_config import configure_logging
from ..poems.errors import PoemError
from ..poems.lifecycle import PoemLifecycle

app = typer.Typer(help="Exquisite Corpse - collaborative hidden-line poems")
console = Console()

STATUS_STYLES = {"active": "green", "complete": "yellow", "revealed": "magenta"}


@contextmanager
def _lifecycle() -> Iterator[PoemLifecycle]:
    settings = get_settings()
    db = get_session_local()()
    try:
        yield PoemLifecycle(db, hint_word_count=settings.hint_word_count)
    except PoemError as e:
        console.print(f"[red]❌ {e.code}: {e.message}[/red]")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.callback()
def main() -> None:
    configure_logging(get_settings())


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Host to bind the server to"),
    port: Optional[int] = typer.Option(None, help="Port to run the API server on"),
    dev: bool = typer.Option(False, help="Run in development mode with reload"),
):
    """Run the HTTP API."""
    settings = get_settings()
    rprint(Panel.fit("🖋️ Starting Exquisite Corpse", style="bold blue"))
    uvicorn.run(
        "exquisite_corpse.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=dev,
    )


@app.command("init-db")
def init_db():
    """Create database tables."""
    asyncio.run(init_database())
    console.print("✅ Database initialized")


@app.command()
def create(
    total_lines: int = typer.Option(7, "--lines", "-n", help="Target line count (5, 7, 11 or 13)"),
):
    """Start a new poem."""
    with _lifecycle() as lifecycle:
        poem = lifecycle.create_poem(total_lines)

    console.print(
        Panel(
            f"[bold]{poem.id}[/bold]  ({poem.total_lines} lines)\n\n"
            f"Hint: [italic]…{poem.seed_hint}[/italic]\n"
            f"Version: {poem.version}",
            title="New poem",
        )
    )


@app.command("list")
def list_poems(
    status: Optional[str] = typer.Option(None, help="Filter by status"),
):
    """List poems, newest first."""
    with _lifecycle() as lifecycle:
        poems = lifecycle.list_poems(status=status)

    if not poems:
        console.print("No poems found")
        return

    table = Table(title="Poems")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Lines", no_wrap=True)
    table.add_column("Status")
    table.add_column("Seed line")
    table.add_column("Created")

    for poem in poems:
        style = STATUS_STYLES.get(poem.status.value, "white")
        table.add_row(
            poem.id,
            f"{poem.current_line_count}/{poem.total_lines}",
            f"[{style}]{poem.status.value}[/{style}]",
            poem.seed_line,
            poem.created_at.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)


@app.command()
def show(poem_id: str = typer.Argument(..., help="Poem ID")):
    """Show a poem (hints only until it is revealed)."""
    with _lifecycle() as lifecycle:
        poem = lifecycle.get_poem(poem_id)

    table = Table(title=poem.title or f"Poem {poem.id}")
    table.add_column("#", justify="right")
    table.add_column("Line")
    for line in poem.lines:
        text = line.full_text if line.full_text is not None else f"[dim]…{line.visible_hint}[/dim]"
        table.add_row(str(line.line_number), text)

    console.print(table)
    console.print(
        f"Status: {poem.status.value}  "
        f"Lines: {poem.current_line_count}/{poem.total_lines}  "
        f"Version: {poem.version}"
    )


@app.command()
def add(
    poem_id: str = typer.Argument(..., help="Poem ID"),
    text: str = typer.Argument(..., help="Line to append"),
    version: int = typer.Option(..., "--version", "-v", help="Poem version you last saw"),
):
    """Append a line to a poem."""
    with _lifecycle() as lifecycle:
        result = lifecycle.add_line(poem_id, text, version)

    console.print(
        f"✅ Line {result.line.line_number} added "
        f"(version {result.version}, next hint: …{result.line.visible_hint})"
    )
    if result.is_complete:
        console.print("🎉 Poem complete! Run [bold]reveal[/bold] to read it.")


@app.command()
def reveal(poem_id: str = typer.Argument(..., help="Poem ID")):
    """Reveal a complete poem."""
    with _lifecycle() as lifecycle:
        result = lifecycle.reveal(poem_id)

    body = "\n".join(line.full_text or "" for line in result.lines)
    console.print(Panel(body, title=f"[bold]{result.title}[/bold]"))


if __name__ == "__main__":
    app()

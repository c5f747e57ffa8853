"""Command-line entry points for the news meme tools."""

import json
from typing import Any, Callable, Dict, List, Optional

import typer
from rich import print as rprint
from rich.markup import escape

from .config import Settings, get_settings
from .logging_config import configure_logging
from .tools import MemeToolkit

app = typer.Typer(help="Turn Indian news headlines into Imgflip memes.")


def _build_toolkit(settings: Settings) -> MemeToolkit:
    """Create the toolkit; separated for easier testing."""
    return MemeToolkit(settings)


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj["settings"]


def _run_tool(
    ctx: typer.Context,
    name: str,
    arguments: Dict[str, Any],
    reshape: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None,
) -> None:
    envelope = _build_toolkit(_settings(ctx)).call(name, arguments)
    if not envelope["success"]:
        rprint(f"[red]Error: {escape(envelope['error'])}[/red]")
        raise typer.Exit(code=1)
    if reshape is not None:
        envelope = reshape(envelope)
    typer.echo(json.dumps(envelope, indent=2, ensure_ascii=False))


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override LOG_LEVEL for this run."
    ),
):
    """Load settings once and configure logging before any command runs."""
    settings = get_settings()
    configure_logging(log_level or settings.log_level, settings.log_format)
    ctx.obj = {"settings": settings}


@app.command()
def news(
    ctx: typer.Context,
    topic: str = typer.Option("", "--topic", "-t", help="Search topic; blank for general news."),
):
    """Fetch up to ten recent Indian news articles."""
    _run_tool(ctx, "fetch_indian_news", {"topic": topic})


@app.command()
def templates(
    ctx: typer.Context,
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", min=1, help="Show only the first N templates."
    ),
):
    """List the top Imgflip meme templates."""

    def first_n(envelope: Dict[str, Any]) -> Dict[str, Any]:
        if limit is None:
            return envelope
        shown = envelope["templates"][:limit]
        return {**envelope, "count": len(shown), "templates": shown}

    _run_tool(ctx, "get_meme_templates", {}, reshape=first_n)


@app.command()
def caption(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Article title."),
    description: str = typer.Argument(..., help="Article description."),
    template: List[int] = typer.Option(
        ..., "--template", "-T", help="Allowed template id (repeatable)."
    ),
):
    """Ask the model for a caption for one article."""
    _run_tool(
        ctx,
        "generate_meme_caption",
        {"title": title, "description": description, "availableTemplates": template},
    )


@app.command()
def meme(
    ctx: typer.Context,
    template_id: int = typer.Argument(..., help="Imgflip template id."),
    top_text: str = typer.Argument(..., help="Top caption text."),
    bottom_text: str = typer.Argument(..., help="Bottom caption text."),
):
    """Render a meme from a template and two lines of text."""
    _run_tool(
        ctx,
        "create_meme",
        {"templateId": template_id, "topText": top_text, "bottomText": bottom_text},
    )


@app.command()
def generate(
    ctx: typer.Context,
    topic: str = typer.Option("", "--topic", "-t", help="Search topic; blank for general news."),
    index: int = typer.Option(0, "--index", "-i", help="Which search result to use."),
):
    """Run the full workflow: news -> caption -> meme."""
    _run_tool(ctx, "generate_news_meme", {"topic": topic, "articleIndex": index})


@app.command()
def serve(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default HTTP_HOST)."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default HTTP_PORT)."),
):
    """Start the REST API with uvicorn."""
    import uvicorn

    from .server import create_app

    settings = _settings(ctx)
    rprint(
        f"[green]Meme Generator HTTP server on {host or settings.http_host}:"
        f"{port or settings.http_port}[/green]"
    )
    uvicorn.run(
        create_app(_build_toolkit(settings)),
        host=host or settings.http_host,
        port=port or settings.http_port,
    )


@app.command()
def mcp(ctx: typer.Context):
    """Serve the tools over MCP on stdio."""
    from .mcp_server import build_server

    build_server(_build_toolkit(_settings(ctx))).run()


if __name__ == "__main__":
    app()

#!/usr/bin/env python3
"""
linkgraph: CLI for the blog link graph

Usage:
    linkgraph check                  # Report broken internal links
    linkgraph graph -o graph.json    # Write the graph dataset
    linkgraph backlinks series/one   # Posts linking to a post
    linkgraph index                  # Full backlink index as JSON
    linkgraph serve                  # Serve graph.json and backlinks API
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from . import __version__ as LINKGRAPH_VERSION
from ._logging import set_log_level, uvicorn_log_level
from .backlinks import BacklinkCache
from .config import DEFAULT_HOST, DEFAULT_PORT, ConfigurationError, get_content_root
from .content import load_posts


def format_table(rows: list[dict], columns: list[str], max_widths: dict | None = None) -> str:
    """Format rows as a simple table."""
    if not rows:
        return ""

    max_widths = max_widths or {}

    def cell(row: dict, col: str) -> str:
        val = str(row.get(col, ""))
        limit = max_widths.get(col, 50)
        if len(val) > limit:
            val = val[: limit - 3] + "..."
        return val

    widths = {col: max([len(col)] + [len(cell(row, col)) for row in rows]) for col in columns}

    lines = [
        "  ".join(col.upper().ljust(widths[col]) for col in columns),
        "  ".join("-" * widths[col] for col in columns),
    ]
    for row in rows:
        lines.append("  ".join(cell(row, col).ljust(widths[col]) for col in columns).rstrip())

    return "\n".join(lines)


def output(data, as_json: bool = False):
    """Output data as JSON or formatted text."""
    if as_json:
        click.echo(json.dumps(data, indent=2, default=str))
    else:
        click.echo(data)


def _content_root(ctx: click.Context) -> Path:
    try:
        return get_content_root(ctx.obj.get("content_root"))
    except ConfigurationError as e:
        raise click.UsageError(str(e), ctx=ctx) from e


def _make_cache(ctx: click.Context, include_drafts: bool) -> BacklinkCache:
    content_root = _content_root(ctx)
    return BacklinkCache(lambda: load_posts(content_root, include_drafts=include_drafts))


# ─────────────────────────────────────────────────────────────────────────────
# Main CLI Group
# ─────────────────────────────────────────────────────────────────────────────


@click.group()
@click.version_option(version=LINKGRAPH_VERSION, prog_name="linkgraph")
@click.option(
    "--content-root",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="LINKGRAPH_CONTENT_ROOT",
    help="Blog content collection directory (default: src/content/blog)",
)
@click.option("--verbose", "-v", is_flag=True, help="Debug logging (same as --log-level DEBUG)")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Package log level (overrides LINKGRAPH_LOG_LEVEL)",
)
@click.pass_context
def cli(ctx: click.Context, content_root: Path | None, verbose: bool, log_level: str | None):
    """linkgraph: backlinks, link graph and link checks for a markdown blog.

    \b
    Quick start:
      linkgraph check                    # Find broken internal links
      linkgraph backlinks my-post        # Who links to my-post?
      linkgraph graph -o public/graph.json
    """
    ctx.ensure_object(dict)
    ctx.obj["content_root"] = content_root

    if verbose or log_level:
        set_log_level("DEBUG" if verbose else log_level)


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output the report as JSON")
@click.pass_context
def check(ctx: click.Context, as_json: bool):
    """Check internal links against posts and assets.

    Exits with status 1 if any link is broken.
    """
    from .checker import check_links

    report = check_links(_content_root(ctx))

    if as_json:
        output(report.model_dump(), as_json=True)
    else:
        for broken in report.broken:
            click.echo(
                f"Link broken in {broken.source_id}: {broken.link} -> (Target: {broken.target_id})",
                err=True,
            )
        if report.broken:
            click.echo(f"Found {len(report.broken)} broken links.", err=True)
        else:
            click.echo("All internal links look good!")

    if not report.ok:
        sys.exit(1)


@cli.command()
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write to file instead of stdout",
)
@click.option("--compact", is_flag=True, help="No indentation")
@click.option("--include-drafts", is_flag=True, help="Include draft posts")
@click.pass_context
def graph(ctx: click.Context, output_path: Path | None, compact: bool, include_drafts: bool):
    """Emit the post/tag graph dataset (graph.json)."""
    from .graph import build_graph, graph_to_json

    posts = load_posts(_content_root(ctx), include_drafts=include_drafts)
    payload = graph_to_json(build_graph(posts), indent=None if compact else 2)

    if output_path is None:
        click.echo(payload)
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(payload + "\n", encoding="utf-8")
    click.echo(f"Wrote {output_path}", err=True)


@cli.command()
@click.argument("post_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--include-drafts", is_flag=True, help="Include draft posts")
@click.pass_context
def backlinks(ctx: click.Context, post_id: str, as_json: bool, include_drafts: bool):
    """List posts that link to POST_ID."""
    cache = _make_cache(ctx, include_drafts)
    if cache.get_post(post_id) is None:
        raise click.ClickException(f"Post not found: {post_id}")

    rows = [
        {"id": post.id, "title": post.title, "date": post.data.date or ""}
        for post in cache.backlinks_for(post_id)
    ]

    if as_json:
        output(rows, as_json=True)
    elif not rows:
        click.echo(f"No backlinks to {post_id}")
    else:
        click.echo(format_table(rows, ["id", "title", "date"]))


@cli.command()
@click.option("--include-drafts", is_flag=True, help="Include draft posts")
@click.pass_context
def index(ctx: click.Context, include_drafts: bool):
    """Dump the backlink index (target -> source ids) as JSON."""
    cache = _make_cache(ctx, include_drafts)
    output(cache.ensure().to_dict(), as_json=True)


@cli.command()
@click.option("--host", default=DEFAULT_HOST, show_default=True)
@click.option("--port", default=DEFAULT_PORT, show_default=True, type=int)
@click.option("--include-drafts", is_flag=True, help="Include draft posts")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, include_drafts: bool):
    """Serve /graph.json and the backlinks API."""
    import uvicorn

    from .webapp import create_app

    app = create_app(_make_cache(ctx, include_drafts))
    uvicorn.run(app, host=host, port=port, log_level=uvicorn_log_level())


def main():
    """Entry point for linkgraph CLI."""
    from ._logging import configure_logging

    configure_logging()
    cli()


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
blog-build: CLI for the blog build pipeline

Usage:
    blog-build convert posts/my-post.md       # Convert one post
    blog-build build-all posts                # Convert every post
    blog-build update-metadata posts          # Regenerate posts/metadata.json
    blog-build search "crypto"                # Query the manifest
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import NoReturn

import click
from click.exceptions import UsageError

from . import __version__ as BLOGBUILD_VERSION
from .config import BuildConfig, METADATA_FILENAME, get_posts_dir


def _exit_with_error(message: str, exit_code: int = 1) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(exit_code)


# ─────────────────────────────────────────────────────────────────────────────
# Main CLI Group
# ─────────────────────────────────────────────────────────────────────────────


@click.group(invoke_without_command=True)
@click.version_option(version=BLOGBUILD_VERSION, prog_name="blog-build")
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    envvar="BLOGBUILD_QUIET",
    help="Suppress progress logging, show only warnings and errors",
)
@click.pass_context
def cli(ctx: click.Context, quiet: bool):
    """blog-build: markdown to HTML converter for the blog.

    \b
    Commands:
      convert <input.md> [output.html]    Convert a single markdown file
      build-all [input-dir] [output-dir]  Convert all markdown files in a directory
      update-metadata [posts-dir]         Regenerate metadata.json
      search <query>                      Search posts listed in metadata.json
      help [command]                      Show help

    \b
    Examples:
      blog-build convert posts/my-post.md
      blog-build build-all posts
      blog-build update-metadata posts
    """
    from ._logging import configure_logging, set_quiet_mode

    configure_logging()
    if quiet:
        set_quiet_mode(True)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(1)


_HELP_EXAMPLES = (
    "blog-build convert posts/my-post.md",
    "blog-build build-all posts",
    "blog-build update-metadata posts",
    'blog-build search "zero knowledge"',
)


def _synopsis(cmd: click.Command) -> str:
    """Argument synopsis such as "<query>" or "[input-dir] [output-dir]"."""
    parts = []
    for param in cmd.params:
        if not isinstance(param, click.Argument):
            continue
        name = param.name.replace("_", "-")
        parts.append(f"<{name}>" if param.required else f"[{name}]")
    return " ".join(parts)


def _command_listing(ctx: click.Context) -> str:
    """Usage line, one row per command with its arguments, then examples."""
    formatter = ctx.make_formatter()
    formatter.write_usage("blog-build", "<command> [options]")

    rows = []
    for name in ctx.command.list_commands(ctx):
        cmd = ctx.command.get_command(ctx, name)
        if cmd is None or cmd.hidden:
            continue
        rows.append((f"{name} {_synopsis(cmd)}".rstrip(), cmd.get_short_help_str(limit=60)))

    with formatter.section("Commands"):
        formatter.write_dl(rows)
    with formatter.section("Examples"):
        for example in _HELP_EXAMPLES:
            formatter.write_text(example)
    return formatter.getvalue().rstrip("\n")


@cli.command("help")
@click.argument("command", required=False)
@click.pass_context
def help_cmd(ctx: click.Context, command: str | None):
    """List commands, or show the full help of one command."""
    parent = ctx.parent or ctx
    if not command:
        click.echo(_command_listing(parent))
        return

    cmd = parent.command.get_command(parent, command)
    if cmd is None:
        raise UsageError(f"Unknown command '{command}'. Run 'blog-build help' for a list.")
    click.echo(cmd.get_help(parent))


@cli.command()
@click.argument("input_path", type=click.Path(path_type=Path))
@click.argument("output_path", required=False, type=click.Path(path_type=Path))
def convert(input_path: Path, output_path: Path | None):
    """Convert a single markdown file to HTML.

    OUTPUT_PATH defaults to INPUT_PATH with an .html extension.

    Examples:
      blog-build convert posts/my-post.md
      blog-build convert draft.md preview.html
    """
    from .errors import BlogBuildError
    from .publisher import ConversionPipeline

    input_path = input_path.resolve()
    output_path = output_path.resolve() if output_path else None

    try:
        written = ConversionPipeline().convert_one(input_path, output_path)
    except BlogBuildError as e:
        _exit_with_error(str(e))

    click.echo(f"Converted {input_path} to {written}")


@cli.command("build-all")
@click.argument("input_dir", required=False, type=click.Path(path_type=Path))
@click.argument("output_dir", required=False, type=click.Path(path_type=Path))
def build_all(input_dir: Path | None, output_dir: Path | None):
    """Convert all markdown files in a directory.

    Both directories default to ./posts (or BLOGBUILD_POSTS_DIR).
    Files that fail are reported in the summary; the exit code stays 0.

    Examples:
      blog-build build-all
      blog-build build-all posts site/posts
    """
    from .errors import MissingInputError
    from .publisher import ConversionPipeline

    input_dir = input_dir or get_posts_dir()
    output_dir = output_dir or input_dir
    pipeline = ConversionPipeline(BuildConfig(posts_dir=input_dir, output_dir=output_dir))

    try:
        summary = pipeline.convert_all(input_dir, output_dir)
    except MissingInputError as e:
        _exit_with_error(str(e))

    if summary.converted == 0 and summary.failed == 0:
        click.echo(f"No markdown files found in {input_dir}")
        return

    click.echo("\nConversion Summary:")
    click.echo(f"  Successfully converted: {summary.converted} files")
    if summary.failed:
        click.echo(f"  Failed conversions: {summary.failed} files")
        for failure in summary.failures:
            click.echo(f"    - {failure['path']}: {failure['error']}")
    click.echo(f"  Output directory: {summary.output_dir}")


@cli.command("update-metadata")
@click.argument("posts_dir", required=False, type=click.Path(path_type=Path))
@click.option(
    "--output",
    "-o",
    "metadata_path",
    type=click.Path(path_type=Path),
    help=f"Manifest path (default: POSTS_DIR/{METADATA_FILENAME})",
)
def update_metadata_cmd(posts_dir: Path | None, metadata_path: Path | None):
    """Regenerate metadata.json from the front matter of every post.

    Posts without a title or date are left out.

    Examples:
      blog-build update-metadata
      blog-build update-metadata posts -o public/metadata.json
    """
    from .errors import BlogBuildError
    from .publisher import update_metadata

    posts_dir = posts_dir or get_posts_dir()

    try:
        result = update_metadata(posts_dir, metadata_path)
    except BlogBuildError as e:
        _exit_with_error(str(e))

    click.echo(
        f"Updated {result.metadata_path} with {result.included} posts "
        f"({result.scanned} markdown files scanned)"
    )
    if result.failed:
        click.echo(f"  Unreadable files: {', '.join(result.failed)}")


@cli.command()
@click.argument("query")
@click.option(
    "--metadata",
    "-m",
    "metadata_path",
    type=click.Path(path_type=Path),
    help=f"Manifest to search (default: <posts-dir>/{METADATA_FILENAME})",
)
@click.option("--category", "-c", help="Only list posts in this category slug")
def search(query: str, metadata_path: Path | None, category: str | None):
    """Search posts by title, excerpt, tag or category name.

    Examples:
      blog-build search crypto
      blog-build search proof --category mathematics
    """
    from .browse import BlogIndex
    from .errors import BlogBuildError

    metadata_path = metadata_path or get_posts_dir() / METADATA_FILENAME

    try:
        index = BlogIndex.load(metadata_path)
    except BlogBuildError as e:
        _exit_with_error(str(e))

    results = index.search(query)
    if category:
        results = [post for post in results if post.category == category]

    if not results:
        click.echo(f'No posts found for "{query}"')
        return

    for post in results:
        click.echo(f"{post.date}  [{index.category_name(post.category)}] {post.title}  {post.url}")


if __name__ == "__main__":
    cli()

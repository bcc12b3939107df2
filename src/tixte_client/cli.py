"""Command-line interface for tixte_client."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import click
from dotenv import load_dotenv

from tixte_client import (
    ApiResult,
    ClientConfig,
    ConfigurationError,
    InvalidArgument,
    RemoteError,
    TixteClient,
    UploadOptions,
)
from tixte_client.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT


def _get_config(ctx: click.Context) -> ClientConfig:
    """Build the client config from the group options, exiting 1 if unusable."""
    try:
        return ClientConfig(**ctx.obj)
    except ConfigurationError as e:
        click.echo(
            click.style(f"Configuration error: {e} (set TIXTE_API_KEY or pass --api-key)", fg="red"),
            err=True,
        )
        sys.exit(1)


def _run(ctx: click.Context, operation: Callable[[TixteClient], Awaitable[Any]]) -> Any:
    """Run one client operation on a fresh event loop."""
    config = _get_config(ctx)

    async def runner() -> Any:
        async with TixteClient(config=config) as client:
            return await operation(client)

    return asyncio.run(runner())


def _describe_failure(result: ApiResult) -> str:
    if isinstance(result, InvalidArgument):
        return f"Invalid argument {result.message}"
    if isinstance(result, RemoteError):
        return f"API error (HTTP {result.status_code}): {json.dumps(result.body)}"
    return f"Request failed: {result.cause}"  # type: ignore[union-attr]


def _echo_result(result: ApiResult) -> None:
    """Print an Ok payload as JSON or report the failure and exit 1."""
    if result.ok:
        click.echo(json.dumps(result.payload, indent=2))  # type: ignore[union-attr]
        return
    click.echo(click.style(_describe_failure(result), fg="red"), err=True)
    sys.exit(1)


@click.group()
@click.version_option(package_name="tixte-client")
@click.option("--api-key", "-k", envvar="TIXTE_API_KEY", help="Tixte API key")
@click.option(
    "--base-url",
    envvar="TIXTE_BASE_URL",
    default=DEFAULT_BASE_URL,
    show_default=True,
    help="API base URL",
)
@click.option(
    "--timeout",
    type=float,
    envvar="TIXTE_TIMEOUT",
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Request timeout in seconds",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(
    ctx: click.Context,
    api_key: str | None,
    base_url: str,
    timeout: float,
    verbose: bool,
) -> None:
    """Tixte CLI - Manage uploads on your Tixte account."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    ctx.obj = {"api_key": api_key or "", "base_url": base_url, "timeout": timeout}


@main.command()
@click.pass_context
def size(ctx: click.Context) -> None:
    """Show the total size of your uploads."""
    _echo_result(_run(ctx, lambda client: client.get_size()))


@main.command()
@click.option("--amount", "-n", type=int, default=10, show_default=True, help="Uploads per page")
@click.option("--page", "-p", type=int, default=1, show_default=True, help="Page number")
@click.pass_context
def uploads(ctx: click.Context, amount: int, page: int) -> None:
    """List your uploads.

    Examples:

        tixte uploads

        tixte uploads --amount 50 --page 2
    """
    _echo_result(_run(ctx, lambda client: client.get_uploads(amount, page)))


@main.command()
@click.pass_context
def me(ctx: click.Context) -> None:
    """Show the account the API key belongs to."""
    _echo_result(_run(ctx, lambda client: client.get_user_info()))


@main.command()
@click.argument("name")
@click.pass_context
def user(ctx: click.Context, name: str) -> None:
    """Show another user's profile.

    NAME: Username or user ID
    """
    _echo_result(_run(ctx, lambda client: client.get_user_info_by_name(name)))


@main.command()
@click.pass_context
def domains(ctx: click.Context) -> None:
    """List the domains registered to your account."""
    _echo_result(_run(ctx, lambda client: client.get_user_domains()))


@main.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
@click.option("--domain", "-d", required=True, help="Domain to upload to (e.g. me.tixte.co)")
@click.option("--extension", "-x", default=None, help="File extension used on the server")
@click.option("--name", default=None, help="File name used on the server (single file only)")
@click.option("--stop-on-error", is_flag=True, help="Stop at the first failed upload")
@click.pass_context
def upload(
    ctx: click.Context,
    files: tuple[Path, ...],
    domain: str,
    extension: str | None,
    name: str | None,
    stop_on_error: bool,
) -> None:
    """Upload files to Tixte.

    FILES: One or more files to upload.

    Each file keeps its own stem and suffix on the server unless --name or
    --extension override them.

    Examples:

        tixte upload cat.png --domain me.tixte.co

        tixte upload *.jpg -d me.tixte.co --stop-on-error
    """
    if name and len(files) > 1:
        click.echo(click.style("--name can only be used with a single file", fg="red"), err=True)
        sys.exit(1)

    options = [
        UploadOptions(
            extension=extension or path.suffix.lstrip(".") or "png",
            file_name=name or path.stem,
        )
        for path in files
    ]

    results: list[ApiResult] = _run(
        ctx,
        lambda client: client.upload_many(
            list(files), domain, options=options, stop_on_error=stop_on_error
        ),
    )

    success_count = 0
    for path, result in zip(files, results):
        if result.ok:
            payload: Any = result.payload  # type: ignore[union-attr]
            data = payload.get("data") if isinstance(payload, dict) else None
            url = data.get("url") if isinstance(data, dict) else None
            click.echo(click.style("✓ ", fg="green") + f"{path.name} -> {url or domain}")
            success_count += 1
        else:
            click.echo(
                click.style("✗ ", fg="red") + f"{path.name}: {_describe_failure(result)}",
                err=True,
            )

    total = len(files)
    if success_count == total:
        click.echo(click.style(f"\nAll {total} file(s) uploaded successfully!", fg="green"))
    else:
        click.echo(f"\n{success_count}/{total} file(s) uploaded.", err=True)
        sys.exit(1)


@main.command()
@click.argument("image_id")
@click.pass_context
def delete(ctx: click.Context, image_id: str) -> None:
    """Delete an upload by its ID."""
    _echo_result(_run(ctx, lambda client: client.delete_image(image_id)))


def run() -> None:
    """Console entry point: load a .env file, then dispatch."""
    load_dotenv()
    main()


if __name__ == "__main__":
    run()

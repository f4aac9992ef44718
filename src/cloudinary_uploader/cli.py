"""Command-line interface for cloudinary_uploader."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import click
from dotenv import load_dotenv

from cloudinary_uploader import (
    ChangeTracker,
    CloudinaryClient,
    CloudinaryError,
    ConfigurationError,
    Resource,
    ResourceType,
    ServiceConfig,
    Settings,
)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def get_client(
    config_path: Path | None = None,
    *,
    dry_run: bool = False,
    verbose: bool = False,
) -> tuple[CloudinaryClient, str]:
    """Create a CloudinaryClient from a config file or the environment.

    Without a config file, CLOUDINARY_URL and the optional MONGODB_URI
    environment variables are used.

    Returns (client, prepend_path).
    """
    load_dotenv()
    if config_path is not None:
        settings = Settings.load(config_path)
    else:
        uri = os.getenv("CLOUDINARY_URL")
        if not uri:
            raise ConfigurationError("No config file given and CLOUDINARY_URL is not set")
        settings = Settings(cloudinary_uri=uri, mongo_uri=os.getenv("MONGODB_URI"))

    config: ServiceConfig = settings.service_config()
    config.dry_run = dry_run
    config.verbose = verbose

    tracker = ChangeTracker.connect(settings.mongo_uri) if settings.mongo_uri else None
    return CloudinaryClient(config, tracker=tracker), settings.prepend_path


def _resource_type(raw: bool) -> ResourceType:
    return ResourceType.RAW if raw else ResourceType.IMAGE


def _fail(message: str) -> None:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


@click.group()
@click.version_option(package_name="cloudinary-uploader")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Config file with a [cloudinary] section (default: CLOUDINARY_URL env var)",
)
@click.option("--dry-run", "-s", is_flag=True, help="Simulate, do nothing (dry run)")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, dry_run: bool, verbose: bool) -> None:
    """Cloudinary CLI - Manage static assets on Cloudinary."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ctx.obj = {"config_path": config_path, "dry_run": dry_run, "verbose": verbose}


@main.command("up")
@click.argument("path")
@click.option("--raw", "-r", is_flag=True, help="Upload as raw files instead of images")
@click.pass_obj
def upload(obj: dict, path: str, raw: bool) -> None:
    """Upload a local file, a directory or a remote URL.

    Examples:

        cloudinary-uploader -c settings.conf up images/

        cloudinary-uploader up --raw static/css/default.css
    """
    client: CloudinaryClient | None = None
    try:
        client, prepend_path = get_client(**obj)
        if client.dry_run:
            click.echo("*** DRY RUN MODE ***")
        if prepend_path:
            click.echo(f"/!\\ Remote prepend path set to: {prepend_path}")

        rtype = _resource_type(raw)
        click.echo(f"==> Uploading as {'raw data' if raw else 'images'}")
        if Path(path).is_dir():
            results = client.upload_tree(path, prepend_path=prepend_path, resource_type=rtype)
        else:
            results = [client.upload_file(path, prepend_path=prepend_path, resource_type=rtype)]

        for result in results:
            if result.uploaded:
                click.echo(
                    click.style("✓ ", fg="green") + f"{result.file_path} -> {result.public_id}"
                )
            else:
                click.echo(f"- {result.file_path} ({result.status})")

        sent = sum(1 for r in results if r.uploaded)
        click.echo(click.style(f"\n{sent}/{len(results)} file(s) uploaded.", fg="green"))
    except CloudinaryError as e:
        _fail(str(e))
    finally:
        if client is not None:
            client.close()


@main.command("ls")
@click.pass_obj
def list_resources(obj: dict) -> None:
    """List all remote raw files and images."""
    client: CloudinaryClient | None = None
    try:
        client, _ = get_client(**obj)
        click.echo("==> Raw resources:")
        _print_resources(client.resources(ResourceType.RAW))
        click.echo("==> Images:")
        _print_resources(client.resources(ResourceType.IMAGE))
    except CloudinaryError as e:
        _fail(str(e))
    finally:
        if client is not None:
            client.close()


@main.command("rm")
@click.argument("public_id", required=False)
@click.option("--raw", "-r", is_flag=True, help="PUBLIC_ID is a raw file")
@click.option("--all", "-a", "drop_all", is_flag=True, help="Delete every remote resource")
@click.pass_obj
def remove(obj: dict, public_id: str | None, raw: bool, drop_all: bool) -> None:
    """Delete a remote resource, or all of them with --all."""
    if not public_id and not drop_all:
        _fail("Missing PUBLIC_ID or --all option.")
    client: CloudinaryClient | None = None
    try:
        client, prepend_path = get_client(**obj)
        if drop_all:
            click.echo("==> Deleting all resources...")
            client.drop_all(sys.stdout)
        elif public_id:
            click.echo(f"==> Deleting {'raw file' if raw else 'image'} {public_id}")
            if client.delete(public_id, prepend_path, _resource_type(raw)):
                click.echo(click.style("ok", fg="green"))
            else:
                click.echo("keep")
    except CloudinaryError as e:
        _fail(str(e))
    finally:
        if client is not None:
            client.close()


@main.command()
@click.argument("from_public_id")
@click.argument("to_public_id")
@click.option("--raw", "-r", is_flag=True, help="Resources are raw files")
@click.pass_obj
def rename(obj: dict, from_public_id: str, to_public_id: str, raw: bool) -> None:
    """Rename a remote resource."""
    client: CloudinaryClient | None = None
    try:
        client, prepend_path = get_client(**obj)
        client.rename(from_public_id, to_public_id, prepend_path, _resource_type(raw))
        click.echo(click.style(f"Renamed {from_public_id} to {to_public_id}", fg="green"))
    except CloudinaryError as e:
        _fail(str(e))
    finally:
        if client is not None:
            client.close()


@main.command()
@click.argument("public_id")
@click.option("--raw", "-r", is_flag=True, help="PUBLIC_ID is a raw file")
@click.pass_obj
def url(obj: dict, public_id: str, raw: bool) -> None:
    """Print the URL of a remote resource."""
    client: CloudinaryClient | None = None
    try:
        client, _ = get_client(**obj)
        click.echo(client.url(public_id, _resource_type(raw)))
    except CloudinaryError as e:
        _fail(str(e))
    finally:
        if client is not None:
            client.close()


def _print_resources(resources: list[Resource]) -> None:
    if not resources:
        click.echo("No resource found.")
        return
    click.echo(f"{'public_id':<30} {'Version':<10} {'Type':<5} Size")
    click.echo("-" * 70)
    for r in resources:
        click.echo(f"{r.public_id:<30} {r.version:<10} {r.resource_type:<5} {_format_size(r.size)}")


def _format_size(size_bytes: int) -> str:
    """Format file size in human-readable form."""
    for unit in ["B", "KB", "MB", "GB"]:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}" if unit != "B" else f"{size_bytes} {unit}"
        size_bytes /= 1024  # type: ignore[assignment]
    return f"{size_bytes:.1f} TB"


if __name__ == "__main__":
    main()

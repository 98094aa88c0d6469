# cli.py
import sys

import click

from gcs_files_api.errors import FilesApiError
from gcs_files_api.gateway import StorageGateway
from gcs_files_api.main import configure_logging
from gcs_files_api.settings import get_settings


def build_gateway(settings) -> StorageGateway:
    return StorageGateway(settings.storage_config())


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL")
@click.pass_context
def cli(ctx, log_level):
    """CLI commands for the GCS Files API"""
    settings = get_settings()
    configure_logging(log_level or settings.log_level)
    ctx.obj = settings


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
@click.option("--reload", is_flag=True, help="Restart on code changes")
def serve(host, port, reload):
    """Run the API and browser client with uvicorn"""
    import uvicorn

    uvicorn.run(
        "gcs_files_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


@cli.command()
@click.pass_obj
def show_config(settings):
    """Show current configuration"""
    storage_config = settings.storage_config()

    click.echo("Current Configuration:")
    for key, value in storage_config.describe().items():
        click.echo(f"  {key}: {value}")
    click.echo(f"  log_level: {settings.log_level}")

    try:
        storage_config.validate()
    except FilesApiError as err:
        click.echo(f"Configuration invalid: {err}")
        sys.exit(1)
    click.echo("Configuration valid")


@cli.command()
@click.pass_obj
def list_files(settings):
    """List every object in the bucket"""
    gateway = build_gateway(settings)
    try:
        stored_files = gateway.list_objects()
    except FilesApiError as err:
        click.echo(f"Failed to list files: {err}", err=True)
        sys.exit(1)

    for stored_file in stored_files:
        click.echo(f"{stored_file.name}\t{stored_file.size}\t{stored_file.content_type}")


@cli.command()
@click.argument("name")
@click.pass_obj
def delete_file(settings, name):
    """Delete the object called NAME"""
    gateway = build_gateway(settings)
    try:
        gateway.delete_object(name)
    except FilesApiError as err:
        click.echo(f"Failed to delete {name}: {err}", err=True)
        sys.exit(1)
    click.echo(f"Deleted {name}")


if __name__ == "__main__":
    cli()

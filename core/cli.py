"""
Command-line interface for the RSA AI Framework
"""
import json
import sys

import click
import yaml

from core.config import settings
from core.exceptions import FrameworkError
from core.logging import get_logger
from d0_metadata.store import DOCUMENTS, ConfigStore
from d1_scoring.classifier import classify
from d1_scoring.formatting import format_score
from d1_scoring.types import ALL_LEVERS
from d2_sizing.estimator import estimate_size

logger = get_logger(__name__)


def _lever_option(name: str):
    return click.option(f"--{name.replace('_', '-')}", name, type=float, default=None, help=f"{name} rating (1-5)")


@click.group()
@click.version_option(version=settings.app_version)
def cli():
    """RSA AI Framework CLI - use case scoring and portfolio configuration"""
    pass


@cli.command()
@click.option("--host", default="0.0.0.0", help="Host to bind to")
@click.option("--port", default=8000, help="Port to bind to")
@click.option("--reload", is_flag=True, help="Enable auto-reload")
def runserver(host: str, port: int, reload: bool):
    """Run the FastAPI development server"""
    import uvicorn

    click.echo(f"Starting {settings.app_name} server on {host}:{port}")
    click.echo(f"Environment: {settings.environment}")
    click.echo(f"Config dir: {settings.config_dir}")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@cli.command("validate-config")
@click.option("--config-dir", type=click.Path(file_okay=False), default=None, help="Configuration directory")
def validate_config(config_dir):
    """Validate every admin configuration document"""
    store = ConfigStore(config_dir or settings.config_dir)
    failed = False
    for name, result in store.check().items():
        if result == "ok":
            click.echo(f"✓ {name}")
        else:
            failed = True
            click.echo(f"✗ {name}: {result}", err=True)
    if failed:
        sys.exit(1)


@cli.command("show-config")
@click.argument("name", type=click.Choice(sorted(DOCUMENTS)))
@click.option("--config-dir", type=click.Path(file_okay=False), default=None, help="Configuration directory")
def show_config(name: str, config_dir):
    """Print a validated configuration document and its SHA"""
    store = ConfigStore(config_dir or settings.config_dir)
    try:
        document = store.get_document(name)
    except FrameworkError as e:
        click.echo(f"✗ {e.message}", err=True)
        sys.exit(1)
    click.echo(f"# sha: {document.sha}")
    click.echo(yaml.safe_dump(document.data, sort_keys=False).rstrip())


def _with_lever_options(func):
    for lever in reversed(ALL_LEVERS):
        func = _lever_option(lever)(func)
    return func


@cli.command("classify")
@_with_lever_options
@click.option("--threshold", type=float, default=None, help="Quadrant threshold (defaults to configured)")
@click.option("--config-dir", type=click.Path(file_okay=False), default=None, help="Configuration directory")
@click.option("--as-json", is_flag=True, help="Print the result as JSON")
def classify_command(threshold, config_dir, as_json, **levers):
    """Classify a single use case from lever ratings"""
    store = ConfigStore(config_dir or settings.config_dir)
    try:
        result = classify(levers, store.load_scoring_weights(), threshold)
        size = estimate_size(result.impact_score, result.effort_score, store.load_sizing_config())
    except FrameworkError as e:
        click.echo(f"✗ {e.message}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({"classification": result.to_dict(), "size": size.to_dict()}, indent=2))
        return

    click.echo(f"Impact:   {format_score(result.impact_score)}")
    click.echo(f"Effort:   {format_score(result.effort_score)}")
    click.echo(f"Quadrant: {result.quadrant.value}")
    click.echo(f"Size:     {size.size or 'TBD'}")


def main():
    """Main entry point"""
    cli()


if __name__ == "__main__":
    main()

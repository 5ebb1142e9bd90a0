"""Command-line interface for statsdzabbix."""

import json
import logging
import sys
import time
from pathlib import Path

import click

from statsdzabbix import __version__
from statsdzabbix.config import BackendConfig
from statsdzabbix.core import FlushScheduler
from statsdzabbix.formatting import SnapshotFormatter
from statsdzabbix.metrics import MetricsSnapshot
from statsdzabbix.orchestration import ZabbixBackend
from statsdzabbix.routing import KeyRouter
from statsdzabbix.utils.config_validator import (
    ConfigurationError,
    load_config_file,
    validate_and_load_config,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

SEND_TIMEOUT_S = 30

log_level_option = click.option(
    "--log-level", "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default="INFO",
    help="Logging level"
)
config_option = click.option(
    "--config", "-c", "config_file", required=True,
    type=click.Path(exists=True),
    help="Backend configuration file (YAML or JSON)"
)


def _load_snapshot(snapshot_file: str) -> MetricsSnapshot:
    return MetricsSnapshot.from_statsd(load_config_file(snapshot_file))


@click.group()
@click.version_option(version=__version__, prog_name="statsdzabbix")
def cli():
    """statsdzabbix: Flush statsd metrics to Zabbix."""
    pass


@cli.command()
@click.argument("snapshot_file", type=click.Path(exists=True))
@config_option
@click.option(
    "--timestamp", "-t", type=int, default=None,
    help="Unix timestamp for the flush (defaults to now)"
)
@click.option(
    "--dry-run", is_flag=True,
    help="Print the zabbix_sender input instead of sending it"
)
@log_level_option
def flush(snapshot_file: str, config_file: str, timestamp: int, dry_run: bool, log_level: str):
    """Run one flush cycle for a metrics snapshot file."""
    logging.getLogger().setLevel(getattr(logging, log_level))

    try:
        config = BackendConfig.from_dict(load_config_file(config_file))
        snapshot = _load_snapshot(snapshot_file)
        ts = timestamp if timestamp is not None else int(time.time())

        if dry_run:
            formatter = SnapshotFormatter(KeyRouter(config.allowed_items), config.flush_interval_ms)
            text, num_stats = formatter.format(ts, snapshot)
            click.echo(text, nl=False)
            click.echo(f"{num_stats} stats formatted", err=True)
            return

        backend = ZabbixBackend(config)
        num_stats = backend.flush(ts, snapshot)
        backend.join(SEND_TIMEOUT_S)

        click.echo(f"Flushed {num_stats} stats")
        if backend.status_record.failures:
            click.echo("Delivery to Zabbix failed", err=True)
            sys.exit(1)

    except (ConfigurationError, ValueError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("snapshot_file", type=click.Path(exists=True))
@config_option
@click.option(
    "--cycles", "-n", type=int, default=1, show_default=True,
    help="Number of flush cycles to run"
)
@click.option(
    "--realtime/--no-realtime", default=True,
    help="Wait a real flush interval between cycles"
)
@log_level_option
def replay(snapshot_file: str, config_file: str, cycles: int, realtime: bool, log_level: str):
    """Flush the same snapshot repeatedly on the configured interval."""
    logging.getLogger().setLevel(getattr(logging, log_level))

    try:
        backend = ZabbixBackend(BackendConfig.from_dict(load_config_file(config_file)))
        snapshot = _load_snapshot(snapshot_file)

        scheduler = FlushScheduler(backend, lambda: snapshot, realtime=realtime)
        completed = scheduler.run(cycles=cycles)
        backend.join(SEND_TIMEOUT_S)

        click.echo(f"Completed {completed} flush cycles")

    except (ConfigurationError, ValueError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("config_file", type=click.Path(exists=True))
def validate(config_file: str):
    """Validate a configuration file without flushing anything."""
    click.echo(f"Validating configuration: {config_file}")

    try:
        is_valid, errors, config = validate_and_load_config(config_file)

        if is_valid:
            click.echo(click.style("✓ Configuration is valid", fg="green"))
            if not config.get("zabbixHost", config.get("zabbix_host")):
                click.echo(click.style("! No Zabbix host configured, delivery is disabled", fg="yellow"))
        else:
            click.echo(click.style(f"✗ Configuration has {len(errors)} errors:", fg="red"))
            for i, error in enumerate(errors[:20], 1):
                click.echo(f"  {i}. {error}")
            if len(errors) > 20:
                click.echo(f"  ... and {len(errors) - 20} more errors")

        sys.exit(0 if is_valid else 1)

    except (ConfigurationError, ValueError, OSError) as e:
        click.echo(click.style(f"Error validating configuration: {e}", fg="red"))
        sys.exit(1)


@cli.command()
@click.option(
    "--output", "-o", default="zabbix_config.yaml",
    help="Output file path"
)
@click.option(
    "--format", "-f", type=click.Choice(["yaml", "json"]), default="yaml",
    help="Configuration file format"
)
def generate_config(output: str, format: str):
    """Generate an example configuration file."""
    example_config = {
        "zabbixHost": "zabbix.example.com",
        "zabbixPort": 10051,
        "zabbixSender": "/usr/bin/zabbix_sender",
        "zabbixAllowedItems": [
            "myhost.some.item",
            "/^statsd/",
        ],
        "flushInterval": 10000,
        "debug": False,
    }

    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if format == "yaml":
        import yaml
        with open(output_path, "w") as f:
            yaml.dump(example_config, f, default_flow_style=False, sort_keys=False)
    else:
        with open(output_path, "w") as f:
            json.dump(example_config, f, indent=2)

    click.echo(f"Generated example configuration at {output_path}")


if __name__ == "__main__":
    cli()

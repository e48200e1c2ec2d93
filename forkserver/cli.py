"""forkserver command line.

Assembles the server configuration from the same flags the server and its
workers are started with, then shows the result or the arguments a worker
would be spawned with.
"""

import logging
import sys

import click

from forkserver.config import ServerConfig
from forkserver.config import ServerConfigError
from forkserver.config import assemble
from forkserver.worker import forked_process_args

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(config: ServerConfig | None = None) -> None:
    """Configure root logging; 'debug' in the config turns on DEBUG output."""
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    if config is not None and config.log_level == "debug":
        logging.getLogger().setLevel(logging.DEBUG)


@click.group()
@click.option("-c", "--config", "config_file", help="Path to the XML config file")
@click.option("-p", "--port", help="Port to listen on")
@click.option("-h", "--host", help="Host to bind to ('*' for all interfaces)")
@click.option("-i", "--id", "instance_id", help="Server instance id")
@click.option("--numRestarts", "num_restarts", help="Restarts so far (set by the parent)")
@click.option("--forkedStatusFile", "forked_status_file", help="Status file path (set by the parent)")
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: str | None,
    port: str | None,
    host: str | None,
    instance_id: str | None,
    num_restarts: str | None,
    forked_status_file: str | None,
):
    """forkserver - server configuration for a supervised worker process."""
    configure_logging()
    options = {
        "c": config_file,
        "p": port,
        "h": host,
        "i": instance_id,
        "numRestarts": num_restarts,
        "forkedStatusFile": forked_status_file,
    }
    try:
        config = assemble(options)
    except ServerConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    configure_logging(config)
    ctx.obj = config


@cli.command()
@click.pass_obj
def show(config: ServerConfig):
    """Print the assembled configuration as JSON."""
    click.echo(config.model_dump_json(indent=2))


@cli.command("worker-args")
@click.option("--worker-port", type=int, help="Worker port (default: configured port)")
@click.option("--worker-id", help="Worker id (default: configured id)")
@click.pass_obj
def worker_args(config: ServerConfig, worker_port: int | None, worker_id: str | None):
    """Print the arguments a new worker would be started with, one per line."""
    port = worker_port if worker_port is not None else config.port
    args = forked_process_args(config, port, worker_id or config.id)
    for arg in args:
        click.echo(arg)


def main():
    """Entry point for forkserver CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nInterrupted")
        sys.exit(0)


if __name__ == "__main__":
    main()

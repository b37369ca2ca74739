"""CLI commands for volumes, synchronization and workspace provisioning"""

import subprocess
import sys
from pathlib import Path

import click

from repovol.capability import get_capabilities
from repovol.cli.utils.logging import logger
from repovol.git import synchronize
from repovol.provision import WorkspaceProvisioner
from repovol.volumes import select_backend

# Library errors are never caught below the CLI; these are the ones it reports.
# ValueError covers invalid configuration values and unmappable clone URIs.
PROVISIONING_ERRORS = (subprocess.CalledProcessError, OSError, ValueError)


def _fail(action: str, error: Exception):
    logger.error(f"Failed to {action}: {error}")
    sys.exit(1)


@click.command(name="capabilities")
def show_capabilities():
    """Report whether copy-on-write volumes are available."""
    caps = get_capabilities()
    if not caps.enabled:
        logger.info("Copy-on-write snapshots are disabled by configuration")
    elif caps.copy_on_write:
        logger.info(f"Copy-on-write snapshots available via {caps.cow_tool}")
    else:
        logger.info("Copy-on-write tool not found, using plain copies")
    logger.info(f"Backend: {select_backend(caps).name}")


@click.command(name="create")
@click.argument("path", type=click.Path(exists=False, path_type=Path))
def create(path: Path):
    """Create an empty volume at PATH."""
    try:
        select_backend(get_capabilities()).create(path)
    except PROVISIONING_ERRORS as e:
        _fail(f"create volume {path}", e)
    logger.info(f"Created {path}")


@click.command(name="snapshot")
@click.argument(
    "source", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.argument("dest", type=click.Path(exists=False, path_type=Path))
def snapshot(source: Path, dest: Path):
    """Snapshot SOURCE into a new, independent DEST."""
    try:
        select_backend(get_capabilities()).snapshot(source, dest)
    except PROVISIONING_ERRORS as e:
        _fail(f"snapshot {source} to {dest}", e)
    logger.info(f"Snapshot of {source} created at {dest}")


@click.command(name="sync")
@click.argument("clone_uri")
@click.argument("path", type=click.Path(path_type=Path))
@click.argument("commit")
@click.option(
    "--update",
    is_flag=True,
    help="PATH already holds a clone; fetch instead of cloning.",
)
def sync(clone_uri: str, path: Path, commit: str, update: bool):
    """Clone or update CLONE_URI at PATH and hard reset it to COMMIT.

    Any local modification in PATH is discarded.

    Example:

      repovol sync https://github.com/user/repo ./repo 1faafa2
    """
    try:
        synchronize(update, clone_uri, path, commit)
    except PROVISIONING_ERRORS as e:
        _fail(f"synchronize {path}", e)
    logger.info(f"{path} is at {commit}")


@click.command(name="provision")
@click.argument("clone_uri")
@click.argument("commit")
@click.argument("dest", type=click.Path(exists=False, path_type=Path))
@click.option(
    "--clones-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding canonical clones (defaults to the configured one).",
)
def provision(clone_uri: str, commit: str, dest: Path, clones_dir: Path):
    """Provision an isolated workspace of CLONE_URI at COMMIT in DEST.

    The canonical clone of the repository is created on first use and
    snapshotted into DEST.
    """
    try:
        provisioner = WorkspaceProvisioner.from_config(clones_dir)
        path, resolved = provisioner.provision(clone_uri, commit, dest)
    except PROVISIONING_ERRORS as e:
        _fail(f"provision {clone_uri}@{commit}", e)
    click.echo(f"{path}\t{resolved}")

"""
dust installer — CLI entrypoint.

Usage:
    dust-install
    DUST_VERSION=1.2.3 dust-install
    DUST_INSTALL=~/bin dust-install --json
    python -m dust_installer --help
"""

from __future__ import annotations

import json
import signal
import sys
from pathlib import Path

import click

from dust_installer import __version__
from dust_installer.core.models.run import RunContext, Stage
from dust_installer.core.observability.logging_config import (
    resolve_level,
    setup_logging_from_env,
)

_STAGE_LABELS = {
    "init": "startup",
    "detect_platform": "platform detection",
    "detect_arch": "architecture detection",
    "resolve_version": "version resolution",
    "derive_target": "target selection",
    "retrieve": "download",
    "install": "installation",
}


def _terminate(signum: int, frame: object) -> None:
    # Unwind through SystemExit so the temporary directory is removed.
    sys.exit(128 + signum)


def _progress_printer():
    """Build a stage listener that prints what each stage produced."""

    def on_stage(stage: Stage, ctx: RunContext) -> None:
        if stage == Stage.RESOLVE_VERSION:
            label = "Pinned version" if ctx.version_pinned else "Latest version"
            click.echo(f"   {label}: v{ctx.version}")
        elif stage == Stage.DERIVE_TARGET and ctx.target is not None:
            click.echo(f"   Target platform: {ctx.target.triple}")
            if not ctx.target.native:
                click.secho(f"   ⚠️  {ctx.target.warning}", fg="yellow")
        elif stage == Stage.RETRIEVE:
            click.echo(f"   Downloaded: {ctx.url}")
        elif stage == Stage.INSTALL and ctx.install_target is not None:
            suffix = " (with sudo)" if ctx.elevated else ""
            click.echo(f"   Installed to {ctx.install_target.directory}{suffix}")

    return on_stage


@click.command()
@click.version_option(version=__version__, prog_name="dust-installer")
@click.option(
    "--release",
    "-r",
    default=None,
    help="Release to install, e.g. 1.2.3 (env: DUST_VERSION; default: latest).",
)
@click.option(
    "--install-dir",
    "-d",
    default=None,
    help="Install directory (env: DUST_INSTALL; default: /usr/local/bin or ~/.local/bin).",
)
@click.option(
    "--http-client",
    type=click.Choice(["auto", "urllib", "curl", "wget"]),
    default=None,
    help="HTTP client to use (env: DUST_HTTP_CLIENT; default: auto).",
)
@click.option("--no-sudo", is_flag=True, help="Never retry the copy with sudo.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to an installer YAML config (env: DUST_INSTALLER_CONFIG).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output result as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def cli(
    release: str | None,
    install_dir: str | None,
    http_client: str | None,
    no_sudo: bool,
    config_path: str | None,
    as_json: bool,
    verbose: bool,
    quiet: bool,
    debug: bool,
) -> None:
    """Install the latest dust release for this machine."""
    from dust_installer.core.use_cases.install import run_install

    setup_logging_from_env(resolve_level(debug=debug, verbose=verbose, quiet=quiet))
    signal.signal(signal.SIGTERM, _terminate)

    show_progress = not (as_json or quiet)
    if show_progress:
        click.secho("\n📦 dust installer", fg="cyan", bold=True)

    overrides = {
        "version": release,
        "install_dir": install_dir,
        "http_client": http_client,
        "allow_elevation": False if no_sudo else None,
    }

    try:
        result = run_install(
            Path(config_path) if config_path else None,
            overrides=overrides,
            on_stage=_progress_printer() if show_progress else None,
        )
    except KeyboardInterrupt:
        click.secho("\n❌ Installation cancelled by user.", fg="red", err=True)
        sys.exit(130)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))

    if not result.ok:
        stage = _STAGE_LABELS.get(result.stage, result.stage)
        click.secho(f"❌ {stage} failed: {result.error}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        sys.exit(0)

    click.echo()
    click.secho(
        f"✅ {result.binary_name} v{result.version} installed successfully!",
        fg="green",
        bold=True,
    )
    if not quiet:
        click.echo(f"   {result.installed_path}")

    if result.path_hint:
        click.echo()
        click.secho(f"⚠️  {result.install_dir} is not in your PATH", fg="yellow")
        click.echo("   Add the following to your shell config (~/.bashrc, ~/.zshrc, etc.):")
        click.echo()
        click.echo(f"       {result.path_hint}")

    if result.version_output and not quiet:
        click.echo()
        click.secho("   Version check:", fg="white", bold=True)
        for line in result.version_output.splitlines():
            click.echo(f"     │ {line}")

    if not quiet:
        click.echo()
        click.echo(f"   Installation complete! Try running: {result.binary_name}")
        click.echo()


if __name__ == "__main__":
    cli()

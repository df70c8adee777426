"""Command-line entry point for taxcat."""

from __future__ import annotations

import logging
import sys

import click

from .commands import tag_post as tag_cmd
from .core.config import ConfigManager, DEFAULT_CONFIG_PATH

# Setup logging early so submodules inherit sane defaults
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


@click.group()
@click.option(
    "--config",
    default=str(DEFAULT_CONFIG_PATH),
    show_default=True,
    help="Path to config file (defaults to data_dir/config/config.yaml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, config: str, verbose: bool) -> None:
    """taxcat - tag WordPress posts with the organizations and people they mention."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config


@cli.command("tag")
@click.argument("post_id", type=click.IntRange(min=1))
@click.option(
    "--show-terms",
    is_flag=True,
    help="Also print the post's organization and people terms after writing them",
)
@click.pass_context
def tag(ctx: click.Context, post_id: int, show_terms: bool) -> None:
    """Replace POST_ID's organization and people terms with entities found by Azure."""
    try:
        tag_cmd.run(ctx.obj["config_path"], post_id, show_terms=show_terms)
        click.echo(f"✅ Post {post_id} tagged successfully")
    except Exception as exc:  # pragma: no cover - click echoes the message
        click.echo(f"❌ Tag command failed: {exc}", err=True)
        sys.exit(1)


@cli.command("status")
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show configuration and whether the API keys are set."""
    try:
        config_manager = ConfigManager(ctx.obj["config_path"])
        click.echo(f"📄 Config file: {config_manager.config_path}")

        if config_manager.validate_config():
            click.echo("✅ Configuration is valid")
        else:
            click.echo("❌ Configuration validation failed")
            sys.exit(1)

        config = config_manager.load_config()
        click.echo(f"🔎 Azure endpoint: {config['azure']['endpoint']}{config['azure']['path']}")
        click.echo(f"🔎 Watson endpoint: {config['watson']['endpoint']}{config['watson']['path']}")
        click.echo(f"📝 Results file: {config['report']['results_file']}")

        config_manager.load_env_files()
        for service, env_name in config_manager.key_env_names().items():
            state = "set" if config_manager.has_secret(env_name) else "MISSING"
            click.echo(f"🔑 {service} key ({env_name}): {state}")

    except Exception as exc:  # pragma: no cover - click echoes the message
        click.echo(f"❌ Error checking status: {exc}", err=True)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover - script entry
    cli()

"""
cleanblog CLI - Main entry point
"""
import asyncio

import click
from rich.console import Console

from cleanblog import __version__
from cleanblog.config import load_settings
from cleanblog.container import Container
from cleanblog.core.exceptions import ConfigurationError, DetailError
from cleanblog.domain.entities import User


console = Console()


def _run(ctx, operation):
    """Run an async operation against a fresh container and close it afterwards."""
    container = Container(ctx.obj['settings'], configure_logging=True)

    async def runner():
        try:
            return await operation(container)
        finally:
            await container.close()

    try:
        return asyncio.run(runner())
    except DetailError as e:
        click.echo(f"❌ {e.business_error.to_json()}", err=True)
        ctx.exit(1)
    except ConfigurationError as e:
        click.echo(f"❌ Configuration error: {e.message}", err=True)
        ctx.exit(2)


@click.group()
@click.version_option(version=__version__)
@click.option('--config', 'config_path', type=click.Path(dir_okay=False),
              help='Path to a YAML config file')
@click.pass_context
def cli(ctx, config_path):
    """
    cleanblog - blog backend administration

    WORKFLOW:

    1. Create the schema:
       cleanblog init-db

    2. Register a user:
       cleanblog register alice alice@example.com

    3. Issue a token:
       cleanblog login alice
    """
    ctx.ensure_object(dict)
    try:
        ctx.obj['settings'] = load_settings(config_path)
    except ConfigurationError as e:
        click.echo(f"❌ Configuration error: {e.message}", err=True)
        ctx.exit(2)


@cli.command('init-db')
@click.pass_context
def init_db(ctx):
    """Create the database tables"""
    _run(ctx, lambda container: container.init_db())
    click.echo("✅ Database initialized")


@cli.command()
@click.argument('username')
@click.argument('email')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True,
              help='Password for the new account')
@click.pass_context
def register(ctx, username, email, password):
    """Register a new user"""
    user = User(username=username, email=email, password_hash=password)
    registered = _run(ctx, lambda container: container.user_use_case().register(user))
    click.echo(f"✅ Registered {registered.username} (id={registered.id})")


@cli.command()
@click.argument('username')
@click.option('--password', prompt=True, hide_input=True, help='Account password')
@click.pass_context
def login(ctx, username, password):
    """Log in and print a bearer token"""
    token = _run(ctx, lambda container: container.user_use_case().login(username, password))
    click.echo(token)


@cli.command('show-config')
@click.pass_context
def show_config(ctx):
    """Show the effective configuration (secrets masked)"""
    console.print_json(data=ctx.obj['settings'].to_safe_dict())


if __name__ == '__main__':
    cli()

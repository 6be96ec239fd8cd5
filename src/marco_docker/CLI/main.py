"""
Command Line Interface for marco-docker.
"""
import json

import click
import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from ..exceptions import MarcoDockerError
from ..MANAGERS.container_source import DockerContainerSource
from ..MANAGERS.poller import Poller
from ..MANAGERS.pusher import Pusher
from ..MODELS import agent_config as defaults
from ..MODELS.agent_config import AgentConfig, ENV_VARS
from ..PARSERS.config_parser import ConfigFileParser
from ..REGISTRY.registry_client import MarcoClient
from ..UTILS.log_setup import setup_logging
from ..UTILS.matching import MatchMode

def load_config_file(ctx, param, value):
    """Use a YAML config file as the defaults of the other options."""
    if value:
        try:
            ctx.default_map = ConfigFileParser().parse(value)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise click.BadParameter(str(e), ctx=ctx, param=param)
    return value

def make_pusher(config: AgentConfig) -> Pusher:
    return Pusher(config,
                  source=DockerContainerSource(config.endpoint, config.timeout),
                  client=MarcoClient(config.timeout))

@click.group()
@click.option('--config', '-c', type=click.Path(dir_okay=False), callback=load_config_file,
              is_eager=True, expose_value=False, help='YAML config file')
@click.option('--marco', default=defaults.DEFAULT_MARCO, envvar=ENV_VARS['marco'],
              show_default=True, help='The remote Marco backend.')
@click.option('--endpoint', default=defaults.DEFAULT_ENDPOINT, envvar=ENV_VARS['endpoint'],
              show_default=True, help='The Docker endpoint.')
@click.option('--ports', default=defaults.DEFAULT_PORTS, envvar=ENV_VARS['ports'],
              show_default=True, help='The ports you wish to proxy.')
@click.option('--env', default=defaults.DEFAULT_ENV, envvar=ENV_VARS['env'], show_default=True,
              help='The container environment variable that is used as a domain identifier.')
@click.option('--frequency', default=defaults.DEFAULT_FREQUENCY, type=int,
              envvar=ENV_VARS['frequency'], show_default=True,
              help='How often to push to Marco, in seconds.')
@click.option('--match', type=click.Choice([m.value for m in MatchMode]),
              default=MatchMode.SUBSTRING.value, envvar=ENV_VARS['match_mode'], show_default=True,
              help='Match the domain variable and ports by substring or by whole token.')
@click.option('--timeout', default=defaults.DEFAULT_TIMEOUT, type=float,
              envvar=ENV_VARS['timeout'], show_default=True,
              help='Seconds to wait for Docker and Marco.')
@click.pass_context
def cli(ctx, marco, endpoint, ports, env, frequency, match, timeout):
    """
    marco-docker - push Docker backends to Marco.

    Containers are grouped by the value of their domain environment variable
    and every published, allowed port becomes a backend URL.
    """
    ctx.ensure_object(dict)
    try:
        ctx.obj['config'] = AgentConfig(marco=marco, endpoint=endpoint, ports=ports, env=env,
                                        frequency=frequency, match_mode=match, timeout=timeout)
    except ValidationError as e:
        raise click.UsageError(f"Invalid configuration: {e}", ctx=ctx)

@cli.command()
@click.pass_context
def run(ctx):
    """Push to Marco forever, every FREQUENCY seconds."""
    config = ctx.obj['config']
    poller = Poller(make_pusher(config).push, interval=config.frequency)
    try:
        poller.run_forever()
    except KeyboardInterrupt:
        click.echo("\nStopping...")
        poller.stop()

@cli.command()
@click.pass_context
def push(ctx):
    """Push to Marco once."""
    pusher = make_pusher(ctx.obj['config'])
    try:
        backends = pusher.push()
    except MarcoDockerError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    click.echo(f"Pushed {len(backends)} domains to {ctx.obj['config'].marco}.")

@cli.command()
@click.option('--format', '-o', 'fmt', type=click.Choice(['json', 'yaml']), default='json')
@click.pass_context
def show(ctx, fmt):
    """Print the backends that would be pushed, without pushing."""
    pusher = make_pusher(ctx.obj['config'])
    try:
        mapping = pusher.collect()
    except MarcoDockerError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    backends = [b.model_dump() for b in pusher.to_backends(mapping)]
    if fmt == 'yaml':
        click.echo(yaml.safe_dump(backends, sort_keys=False), nl=False)
    else:
        click.echo(json.dumps(backends, indent=2))

def main():
    """
    Main entry point for the CLI.
    """
    load_dotenv()
    setup_logging()
    cli(obj={})

if __name__ == '__main__':
    main()

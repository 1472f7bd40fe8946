#!/usr/bin/env python3
"""Main CLI entry point for CDK stack utilities."""

import json
import logging
import sys
from typing import List, Optional, Tuple

import click

from cdk import CdkClient, CdkError, StackParameter
from config import ConfigurationError, load_cdk_config


def parse_parameters(ctx, param, values: Tuple[str, ...]) -> List[StackParameter]:
    """Turn repeated KEY=VALUE options into stack parameters."""
    parameters = []
    for value in values:
        key, sep, val = value.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got '{value}'")
        parameters.append(StackParameter(parameter_key=key, parameter_value=val))
    return parameters


def echo_description(description: Optional[dict]) -> None:
    """Print a stack description as JSON."""
    click.echo(json.dumps(description, indent=2, default=str))


stack_name_option = click.option(
    "--stack-name", "-s", required=True, help="Fully qualified stack name"
)
script_option = click.option("--script", help="Path to the stack script")
parameter_option = click.option(
    "--parameter",
    "-P",
    "parameters",
    multiple=True,
    callback=parse_parameters,
    help="Stack parameter as KEY=VALUE (repeatable)",
)


@click.group()
@click.version_option(package_name="cdk-stack-utils")
@click.option("--profile", help="AWS profile to use")
@click.option("--region", "-r", help="AWS region")
@click.option("--cdk-dir", help="Directory containing cdk.json")
@click.option(
    "--config-file",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML file with profile/region/cdk_dir/cdk_command",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, profile, region, cdk_dir, config_file, verbose) -> None:
    """AWS CDK stack lifecycle utilities.

    Runs cdk init, synth, diff, deploy and destroy with consistent
    profile, region, parameter and context flags.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
    )
    try:
        config = load_cdk_config(
            config_file, profile=profile, region=region, cdk_dir=cdk_dir
        )
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    ctx.obj = CdkClient(config)


@cli.command()
@click.option("--language", "-l", required=True, help="CDK app language")
@click.pass_obj
def init(client: CdkClient, language: str) -> None:
    """Initialize a new CDK app."""
    try:
        client.init(language)
        click.echo("✅ CDK app initialized")
    except CdkError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@stack_name_option
@script_option
@parameter_option
@click.pass_obj
def deploy(client: CdkClient, stack_name, script, parameters) -> None:
    """Deploy a stack and print its description."""
    try:
        echo_description(client.deploy(stack_name, script, parameters))
    except CdkError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@stack_name_option
@script_option
@parameter_option
@click.pass_obj
def diff(client: CdkClient, stack_name, script, parameters) -> None:
    """Show changes between a stack and its deployed state."""
    try:
        client.diff(stack_name, script, parameters)
    except CdkError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@stack_name_option
@script_option
@parameter_option
@click.pass_obj
def synth(client: CdkClient, stack_name, script, parameters) -> None:
    """Synthesize a stack and print its current description."""
    try:
        echo_description(client.synth(stack_name, script, parameters))
    except CdkError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@stack_name_option
@parameter_option
@click.confirmation_option(prompt="Are you sure you want to destroy this stack?")
@click.pass_obj
def destroy(client: CdkClient, stack_name, parameters) -> None:
    """Destroy a stack."""
    try:
        name = client.destroy(stack_name, parameters)
        click.echo(f"🗑️  Stack {name} destroyed")
    except CdkError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.pass_obj
def version(client: CdkClient) -> None:
    """Show the installed cdk version."""
    try:
        click.echo(client.version())
    except CdkError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option("--account-id", help="AWS account ID (defaults to the caller's)")
@click.pass_obj
def bootstrap(client: CdkClient, account_id: Optional[str]) -> None:
    """Bootstrap the CDK toolkit stack."""
    try:
        client.bootstrap(account_id)
        click.echo("✅ CDK bootstrap complete")
    except CdkError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()

"""Click-based CLI entry point for the Okta group member export tool."""

import sys

import click

from ..core.config import ATTRIBUTE_SAMPLE_SIZE
from ..utils.display_utils import RED, RESET, YELLOW
from ..utils.rich_utils import install_rich_tracebacks
from .commands import OperationHandler

org_option = click.option(
    "--org", help="Okta org name, host or URL (env: OKTA_ORG)"
)
token_option = click.option(
    "--token", help="Okta API token (env: OKTA_API_TOKEN); prompted if omitted"
)
group_option = click.option(
    "--group", help="Group ID or name to export (env: OKTA_GROUP)"
)


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """GroupExport - export Okta group members to CSV."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@org_option
@token_option
@group_option
@click.option(
    "--output",
    "-o",
    "output_file",
    help="Output CSV path (env: OKTA_OUTPUT_FILE)",
)
@click.option(
    "--quick",
    is_flag=True,
    help="Skip the attribute checklist and export the default columns",
)
@click.option(
    "--attributes",
    help="Extra comma-separated attribute names (env: OKTA_EXTRA_ATTRIBUTES)",
)
def export(
    org: str | None,
    token: str | None,
    group: str | None,
    output_file: str | None,
    quick: bool,
    attributes: str | None,
) -> None:
    """Export the members of one group to a CSV file."""
    handler = OperationHandler()
    handler.handle_export(org, token, group, output_file, quick, attributes)


@cli.command()
@org_option
@token_option
@group_option
@click.option(
    "--sample-size",
    type=click.IntRange(1, 200),
    default=ATTRIBUTE_SAMPLE_SIZE,
    show_default=True,
    help="Number of members sampled for attribute discovery",
)
def attributes(
    org: str | None, token: str | None, group: str | None, sample_size: int
) -> None:
    """List the attributes available for a group's members."""
    handler = OperationHandler()
    handler.handle_list_attributes(org, token, group, sample_size)


@cli.command()
@org_option
@token_option
def doctor(org: str | None, token: str | None) -> None:
    """Test the Okta API token."""
    handler = OperationHandler()
    if not handler.handle_doctor(org, token):
        sys.exit(1)


def main() -> None:
    """Main entry point for the CLI application."""
    try:
        install_rich_tracebacks()
        # Non-standalone mode lets Ctrl-C and Abort reach the handlers below.
        cli(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except (KeyboardInterrupt, click.Abort):
        click.echo(f"\n{YELLOW}Operation interrupted by user.{RESET}", err=True)
        sys.exit(130)
    except Exception as e:
        click.echo(f"{RED}Unexpected error: {e}{RESET}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()

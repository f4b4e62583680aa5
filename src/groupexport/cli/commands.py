"""Command handlers for CLI operations."""

import sys

import click

from ..core.auth import doctor
from ..core.client import OktaClient
from ..core.config import (
    ATTRIBUTE_SAMPLE_SIZE,
    ENV_EXTRA_ATTRIBUTES,
    ENV_GROUP,
    ENV_ORG,
    ENV_OUTPUT_FILE,
    ENV_TOKEN,
    build_export_config,
    check_env_file,
    env_value,
    validate_required,
)
from ..core.exceptions import AuthenticationError, GroupExportError
from ..models.config import ExportConfig
from ..models.group import Group
from ..operations.attribute_ops import (
    QUICK_ATTRIBUTES,
    categorize_attributes,
    checklist_options,
    discover_attributes,
    display_name,
    finalize_selection,
    merge_extra_attributes,
    parse_attribute_list,
    quick_selection,
)
from ..operations.export_ops import default_output_filename, export_group_members
from ..operations.group_ops import resolve_group
from ..utils.display_utils import (
    CYAN,
    GREEN,
    RED,
    RESET,
    finish_progress,
    print_section_header,
    print_success,
    print_warning,
    show_progress,
)
from ..utils.logging_utils import get_logger
from .selection import choose_group, interactive_select

logger = get_logger(__name__)


class OperationHandler:
    """Handles CLI operations for the group member export tool.

    Each handler resolves its settings (argument, then environment, then an
    interactive prompt), runs the operation and reports the outcome. Fatal
    errors end the process with exit code 1.
    """

    def _resolve_setting(
        self,
        value: str | None,
        env_name: str,
        prompt_text: str | None = None,
        hide_input: bool = False,
        default: str | None = None,
    ) -> str | None:
        """Return a setting from the argument, the environment or a prompt.

        Args:
            value: Value passed on the command line
            env_name: Environment variable to fall back to
            prompt_text: Prompt shown when both are missing; None disables it
            hide_input: Do not echo typed input
            default: Default offered by the prompt

        Returns:
            Optional[str]: The setting, or None if it stayed empty
        """
        if value and value.strip():
            return value.strip()

        from_env = env_value(env_name)
        if from_env:
            return from_env

        if prompt_text is None:
            return default

        answer = click.prompt(
            prompt_text,
            default=default or "",
            show_default=bool(default),
            hide_input=hide_input,
        )
        return str(answer).strip() or None

    def _build_config(
        self,
        org: str | None,
        token: str | None,
        group: str | None = None,
        output_file: str | None = None,
        quick: bool = False,
        attributes: str | None = None,
    ) -> ExportConfig:
        """Collect org and token plus optional export settings.

        Raises:
            ConfigurationError: If org or token cannot be resolved
        """
        check_env_file()
        org = self._resolve_setting(org, ENV_ORG, "Okta org (e.g. acme or acme.okta.com)")
        token = self._resolve_setting(token, ENV_TOKEN, "Okta API token", hide_input=True)
        return build_export_config(
            org=org,
            token=token,
            group=self._resolve_setting(group, ENV_GROUP),
            output_file=self._resolve_setting(output_file, ENV_OUTPUT_FILE),
            quick=quick,
            extra_attributes=self._resolve_setting(attributes, ENV_EXTRA_ATTRIBUTES),
        )

    def _handle_operation_error(self, error: Exception, operation_name: str) -> None:
        """Handle operation errors with consistent formatting.

        Args:
            error: The exception that occurred
            operation_name: Name of the operation that failed
        """
        if isinstance(error, AuthenticationError):
            click.echo(f"{RED}Authentication failed: {error}{RESET}", err=True)
        else:
            click.echo(f"{RED}{operation_name} failed: {error}{RESET}", err=True)
        sys.exit(1)

    def _resolve_group(self, client: OktaClient, identifier: str | None) -> Group:
        """Prompt for a missing group identifier and resolve it."""
        if not identifier:
            identifier = self._resolve_setting(None, ENV_GROUP, "Group ID or name")
        identifier = validate_required("Group ID or name", identifier)
        group = resolve_group(client, identifier, choose_group)
        click.echo(f"Group: {GREEN}{group.name}{RESET} ({group.id})")
        return group

    def _select_attributes(
        self, client: OktaClient, group: Group, config: ExportConfig
    ) -> list[str]:
        """Choose export columns in quick or interactive mode."""
        extras = parse_attribute_list(config.extra_attributes)
        if config.quick:
            return finalize_selection(quick_selection(extras))

        click.echo(f"\n{CYAN}Discovering attributes...{RESET}")
        options = checklist_options(discover_attributes(client, group.id))
        initial = [name for name in QUICK_ATTRIBUTES if name in options]
        selection = interactive_select(options, initial)
        return finalize_selection(merge_extra_attributes(selection, extras))

    def handle_export(
        self,
        org: str | None,
        token: str | None,
        group: str | None,
        output_file: str | None,
        quick: bool,
        attributes: str | None,
    ) -> None:
        """Handle the group member export operation."""
        try:
            config = self._build_config(org, token, group, output_file, quick, attributes)
            logger.debug(
                f"Export configuration: {config.to_dict()}",
                extra={"operation": "export"},
            )

            with OktaClient(config.base_url, config.token) as client:
                resolved = self._resolve_group(client, config.group)
                columns = self._select_attributes(client, resolved, config)
                click.echo(
                    "Columns: " + ", ".join(display_name(name) for name in columns)
                )

                output_file = config.output_file or self._resolve_setting(
                    None,
                    ENV_OUTPUT_FILE,
                    "Output file",
                    default=default_output_filename(resolved.name),
                )
                output_file = validate_required("Output file", output_file)

                result = export_group_members(
                    client, resolved, columns, output_file, progress=show_progress
                )
                if result.page_count:
                    finish_progress()
            logger.debug(
                f"Export result: {result.to_dict()}", extra={"operation": "export"}
            )

            if result.is_empty:
                print_warning(
                    f"Group {resolved.name} has no members; "
                    f"wrote header only to {result.output_file}"
                )
            else:
                print_success(
                    f"Exported {result.row_count} members to {result.output_file}"
                )
        except GroupExportError as e:
            self._handle_operation_error(e, "Export")

    def handle_list_attributes(
        self,
        org: str | None,
        token: str | None,
        group: str | None,
        sample_size: int = ATTRIBUTE_SAMPLE_SIZE,
    ) -> None:
        """Handle the attribute discovery preview."""
        try:
            config = self._build_config(org, token, group)
            with OktaClient(config.base_url, config.token) as client:
                resolved = self._resolve_group(client, config.group)
                available = discover_attributes(client, resolved.id, sample_size)

            print_section_header(f"Attributes for {resolved.name}")
            for category, members in categorize_attributes(available).items():
                click.echo(f"\n{CYAN}{category}{RESET}")
                for name in members:
                    label = display_name(name)
                    click.echo(f"  {name}" + (f"  ({label})" if label != name else ""))
        except GroupExportError as e:
            self._handle_operation_error(e, "Attribute discovery")

    def handle_doctor(self, org: str | None, token: str | None) -> bool:
        """Handle doctor operation for testing Okta credentials.

        Returns:
            bool: True if successful, False otherwise
        """
        try:
            config = self._build_config(org, token)
        except GroupExportError as e:
            click.echo(f"{RED}Doctor check failed: {e}{RESET}", err=True)
            return False

        with OktaClient(config.base_url, config.token) as client:
            result = doctor(client)

        if result["success"]:
            click.echo(
                f"{GREEN}✓ API token is valid for {result['base_url']} "
                f"(owner: {result['login']}){RESET}"
            )
        else:
            click.echo(
                f"{RED}✗ Credentials test failed: {result['error']}{RESET}", err=True
            )
        return bool(result["success"])

"""Export operations: member pagination, row flattening and CSV writing."""

import csv
import os
import re
import tempfile
from collections.abc import Callable, Iterator
from datetime import datetime
from typing import Any, TextIO

from ..core.client import OktaClient
from ..core.config import MEMBER_PAGE_LIMIT
from ..core.exceptions import APIError, FileOperationError
from ..models.export import ExportResult
from ..models.group import Group
from ..models.member import ABSENT, MemberRecord
from ..utils.logging_utils import get_logger
from ..utils.url_utils import encode_group_id
from .attribute_ops import display_name

logger = get_logger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
LIST_SEPARATOR = ";"
CSV_LINE_TERMINATOR = "\r\n"

# Called after each page with (rows written so far, pages fetched so far).
ProgressCallback = Callable[[int, int], None]


def iter_member_pages(
    client: OktaClient, group_id: str, limit: int = MEMBER_PAGE_LIMIT
) -> Iterator[list[MemberRecord]]:
    """Yield pages of group members, following the Link header cursor.

    Stops on the first empty page or when a page carries no next link.

    Args:
        client: Okta API client
        group_id: Group whose members to list
        limit: Page size requested from the API

    Yields:
        List[MemberRecord]: One non-empty page of members

    Raises:
        APIError: If a page cannot be fetched or decoded
    """
    url: str | None = f"/api/v1/groups/{encode_group_id(group_id)}/users"
    params: dict[str, Any] | None = {"limit": limit}
    page_number = 0

    while url:
        response = client.get(url, params=params)
        # The next link already carries the query string.
        params = None
        page_number += 1

        if not isinstance(response.data, list):
            raise APIError(
                "Unexpected response format for group members",
                endpoint=url,
                details=f"expected list, got {type(response.data).__name__}",
            )
        if not response.data:
            logger.debug(
                f"Page {page_number} is empty; stopping",
                extra={"operation": "list_members", "page": page_number},
            )
            return

        logger.debug(
            f"Fetched page {page_number} with {len(response.data)} members",
            extra={
                "operation": "list_members",
                "group_id": group_id,
                "page": page_number,
            },
        )
        yield [
            MemberRecord.from_api(item)
            for item in response.data
            if isinstance(item, dict)
        ]
        url = response.next_url


def format_value(value: Any) -> str:
    """Coerce an attribute value into its CSV text form.

    Missing values become an empty string, timestamps ``YYYY-MM-DD HH:MM:SS``,
    lists are joined with ``;`` and everything else uses ``str``.
    """
    if value is ABSENT or value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime(TIMESTAMP_FORMAT)
    if isinstance(value, (list, tuple)):
        return LIST_SEPARATOR.join(format_value(item) for item in value)
    return str(value)


def flatten_member(member: MemberRecord, attributes: list[str]) -> list[str]:
    """Convert a member into one value per selected attribute."""
    return [format_value(member.get(name)) for name in attributes]


def header_row(attributes: list[str]) -> list[str]:
    """Column labels for the selected attributes."""
    return [display_name(name) for name in attributes]


def default_output_filename(group_name: str) -> str:
    """Build a timestamped output file name from a group name."""
    slug = re.sub(r"[^A-Za-z0-9._-]+", "_", group_name).strip("._-") or "group"
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{slug}_members_{timestamp}.csv"


def validate_output_path(output_file: str) -> None:
    """Check that the output file's directory exists and is writable.

    Raises:
        FileOperationError: If the file cannot be created there
    """
    output_dir = os.path.dirname(output_file) or "."
    if not os.path.isdir(output_dir):
        raise FileOperationError(
            "Output directory does not exist",
            file_path=output_file,
            operation="validate",
        )
    if not os.access(output_dir, os.W_OK):
        raise FileOperationError(
            "Output directory is not writable",
            file_path=output_file,
            operation="validate",
        )
    if os.path.isdir(output_file):
        raise FileOperationError(
            "Output path is a directory", file_path=output_file, operation="validate"
        )


def write_members(
    handle: TextIO,
    pages: Iterator[list[MemberRecord]],
    attributes: list[str],
    progress: ProgressCallback | None = None,
) -> tuple[int, int]:
    """Stream a header plus one CSV row per member into an open file.

    Returns:
        Tuple[int, int]: (rows written, pages consumed)
    """
    writer = csv.writer(handle, lineterminator=CSV_LINE_TERMINATOR)
    writer.writerow(header_row(attributes))

    row_count = 0
    page_count = 0
    for page in pages:
        page_count += 1
        writer.writerows(flatten_member(member, attributes) for member in page)
        row_count += len(page)
        if progress:
            progress(row_count, page_count)
    return row_count, page_count


def _discard(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


def export_group_members(
    client: OktaClient,
    group: Group,
    attributes: list[str],
    output_file: str,
    progress: ProgressCallback | None = None,
) -> ExportResult:
    """Export every member of a group to a CSV file.

    Rows are streamed page by page into a temporary file next to the target,
    which replaces ``output_file`` only once the last page is written. A
    failed export leaves no partial file behind.

    Args:
        client: Okta API client
        group: Resolved group
        attributes: Final ordered attribute selection
        output_file: Destination path
        progress: Optional callback invoked after each page

    Returns:
        ExportResult: Summary of the export

    Raises:
        FileOperationError: If the output file cannot be written
        APIError: If a page request fails
    """
    validate_output_path(output_file)
    logger.info(
        f"Exporting members of {group} to {output_file}",
        extra={
            "operation": "export_members",
            "group_id": group.id,
            "file_path": output_file,
        },
    )

    try:
        fd, temp_path = tempfile.mkstemp(
            prefix=".groupexport-",
            suffix=".csv.tmp",
            dir=os.path.dirname(output_file) or ".",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                row_count, page_count = write_members(
                    handle, iter_member_pages(client, group.id), attributes, progress
                )
            os.replace(temp_path, output_file)
        except BaseException:
            _discard(temp_path)
            raise
    except OSError as e:
        raise FileOperationError(
            "Error writing output file",
            file_path=output_file,
            operation="write",
            details=str(e),
        ) from e

    if row_count == 0:
        logger.warning(
            f"Group {group.name} has no members; wrote header only",
            extra={"operation": "export_members", "group_id": group.id},
        )
    else:
        logger.info(
            f"Exported {row_count} members across {page_count} page(s)",
            extra={
                "operation": "export_members",
                "group_id": group.id,
                "row_count": row_count,
            },
        )

    return ExportResult(
        output_file=output_file,
        row_count=row_count,
        page_count=page_count,
        columns=header_row(attributes),
    )

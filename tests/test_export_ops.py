"""Tests for pagination, row flattening and CSV output."""

import csv
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from conftest import BASE_URL, GROUP_ID, make_response, make_user

from groupexport.core.exceptions import APIError, FileOperationError
from groupexport.models import ABSENT, Group, MemberRecord
from groupexport.operations.export_ops import (
    default_output_filename,
    export_group_members,
    flatten_member,
    format_value,
    header_row,
    iter_member_pages,
)

GROUP = Group(id=GROUP_ID, name="Engineering")
MEMBERS_URL = f"{BASE_URL}/api/v1/groups/{GROUP_ID}/users"


def _read_rows(path):
    with open(path, encoding="utf-8", newline="") as handle:
        return list(csv.reader(handle))


def _page(start: int, size: int, next_url: str | None = None) -> MagicMock:
    return make_response(
        [make_user(start + i) for i in range(size)], next_url=next_url
    )


class TestIterMemberPages:
    """Test cursor-based pagination."""

    def test_first_request(self, client, mock_session):
        mock_session.get.return_value = make_response([])

        list(iter_member_pages(client, GROUP_ID))

        mock_session.get.assert_called_once_with(
            MEMBERS_URL, params={"limit": 200}, timeout=30
        )

    def test_follows_next_links_until_empty_page(self, client, mock_session):
        mock_session.get.side_effect = [
            _page(0, 200, f"{MEMBERS_URL}?after=a"),
            _page(200, 200, f"{MEMBERS_URL}?after=b"),
            _page(400, 47, f"{MEMBERS_URL}?after=c"),
            make_response([], next_url=f"{MEMBERS_URL}?after=d"),
        ]

        pages = list(iter_member_pages(client, GROUP_ID))

        assert [len(page) for page in pages] == [200, 200, 47]
        assert sum(len(page) for page in pages) == 447
        assert mock_session.get.call_count == 4
        second_call = mock_session.get.call_args_list[1]
        assert second_call[0][0] == f"{MEMBERS_URL}?after=a"
        assert second_call[1]["params"] is None

    def test_stops_when_next_link_missing(self, client, mock_session):
        mock_session.get.side_effect = [
            _page(0, 200, f"{MEMBERS_URL}?after=a"),
            _page(200, 200, f"{MEMBERS_URL}?after=b"),
            _page(400, 47),
        ]

        pages = list(iter_member_pages(client, GROUP_ID))

        assert sum(len(page) for page in pages) == 447
        assert mock_session.get.call_count == 3

    def test_empty_first_page(self, client, mock_session):
        mock_session.get.return_value = make_response([], next_url=f"{MEMBERS_URL}?x")

        assert list(iter_member_pages(client, GROUP_ID)) == []
        assert mock_session.get.call_count == 1

    def test_failed_page_aborts(self, client, mock_session):
        mock_session.get.side_effect = [
            _page(0, 2, f"{MEMBERS_URL}?after=a"),
            make_response({}, status_code=500),
        ]

        pages = iter_member_pages(client, GROUP_ID)
        assert len(next(pages)) == 2
        with pytest.raises(APIError):
            next(pages)

    def test_non_list_page_raises(self, client, mock_session):
        mock_session.get.return_value = make_response({"error": "bad"})

        with pytest.raises(APIError):
            list(iter_member_pages(client, GROUP_ID))


class TestFormatValue:
    """Test value coercion."""

    def test_absent_and_none(self):
        assert format_value(ABSENT) == ""
        assert format_value(None) == ""

    def test_datetime(self):
        value = datetime(2024, 3, 1, 8, 5, 9, tzinfo=timezone.utc)
        assert format_value(value) == "2024-03-01 08:05:09"

    def test_list(self):
        assert format_value(["east", "west"]) == "east;west"

    def test_empty_list(self):
        assert format_value([]) == ""

    def test_other_types(self):
        assert format_value(42) == "42"
        assert format_value(True) == "True"
        assert format_value("plain") == "plain"


class TestFlattenMember:
    """Test row flattening."""

    def test_row_aligned_with_attributes(self):
        member = MemberRecord.from_api(
            make_user(1, lastName="Smith, Jr.", regions=["east", "west"])
        )
        attributes = ["id", "lastName", "regions", "costCenter", "created"]

        row = flatten_member(member, attributes)

        assert len(row) == len(attributes)
        assert row == [
            make_user(1)["id"],
            "Smith, Jr.",
            "east;west",
            "",
            "2023-01-05 10:15:30",
        ]

    def test_missing_is_empty_not_null(self):
        member = MemberRecord.from_api({"id": "00u1", "profile": {}})

        row = flatten_member(member, ["title", "lastLogin"])

        assert row == ["", ""]
        assert "None" not in row


class TestHelpers:
    """Test header and file naming helpers."""

    def test_header_row_uses_display_names(self):
        assert header_row(["id", "lastLogin", "customField"]) == [
            "User ID",
            "Last Login",
            "customField",
        ]

    def test_default_output_filename(self):
        name = default_output_filename("Eng / Ops: Team")
        assert name.startswith("Eng_Ops_Team_members_")
        assert name.endswith(".csv")

    def test_default_output_filename_without_usable_chars(self):
        assert default_output_filename("///").startswith("group_members_")


class TestExportGroupMembers:
    """Test end-to-end CSV writing."""

    def test_writes_header_and_rows(self, client, mock_session, tmp_path):
        mock_session.get.side_effect = [
            make_response(
                [make_user(1, lastName="Smith, Jr."), make_user(2)],
                next_url=f"{MEMBERS_URL}?after=a",
            ),
            make_response([make_user(3)]),
        ]
        output = tmp_path / "out.csv"
        attributes = ["id", "lastName", "email"]

        result = export_group_members(client, GROUP, attributes, str(output))

        with open(output, encoding="utf-8", newline="") as handle:
            rows = list(csv.reader(handle))
        assert rows[0] == ["User ID", "Last Name", "Email"]
        assert len(rows) == 4
        assert rows[1][1] == "Smith, Jr."
        assert [row[0] for row in rows[1:]] == [
            make_user(1)["id"],
            make_user(2)["id"],
            make_user(3)["id"],
        ]
        assert all(len(row) == len(rows[0]) for row in rows)
        assert '"Smith, Jr."' in output.read_text(encoding="utf-8")
        assert result.row_count == 3
        assert result.page_count == 2
        assert result.columns == ["User ID", "Last Name", "Email"]

    def test_447_rows_across_pages(self, client, mock_session, tmp_path):
        mock_session.get.side_effect = [
            _page(0, 200, f"{MEMBERS_URL}?after=a"),
            _page(200, 200, f"{MEMBERS_URL}?after=b"),
            _page(400, 47, f"{MEMBERS_URL}?after=c"),
            make_response([]),
        ]
        output = tmp_path / "big.csv"

        result = export_group_members(client, GROUP, ["id"], str(output))

        with open(output, encoding="utf-8", newline="") as handle:
            rows = list(csv.reader(handle))
        assert result.row_count == 447
        assert len(rows) == 448

    def test_zero_members_writes_header_only(self, client, mock_session, tmp_path):
        mock_session.get.return_value = make_response([])
        output = tmp_path / "empty.csv"

        result = export_group_members(client, GROUP, ["id", "email"], str(output))

        assert output.read_text(encoding="utf-8") == "User ID,Email\r\n"
        assert result.is_empty
        assert result.page_count == 0

    def test_utf8_output(self, client, mock_session, tmp_path):
        mock_session.get.return_value = make_response([make_user(1, lastName="Müller")])
        output = tmp_path / "utf8.csv"

        export_group_members(client, GROUP, ["lastName"], str(output))

        assert "Müller" in output.read_bytes().decode("utf-8")

    def test_progress_callback(self, client, mock_session, tmp_path):
        mock_session.get.side_effect = [
            _page(0, 3, f"{MEMBERS_URL}?after=a"),
            _page(3, 2),
        ]
        progress = MagicMock()

        export_group_members(
            client, GROUP, ["id"], str(tmp_path / "p.csv"), progress=progress
        )

        assert [c.args for c in progress.call_args_list] == [(3, 1), (5, 2)]

    def test_missing_directory_raises(self, client, tmp_path):
        output = tmp_path / "missing" / "out.csv"

        with pytest.raises(FileOperationError) as exc_info:
            export_group_members(client, GROUP, ["id"], str(output))

        assert "does not exist" in str(exc_info.value)

    def test_output_path_is_directory(self, client, tmp_path):
        with pytest.raises(FileOperationError):
            export_group_members(client, GROUP, ["id"], str(tmp_path))

    def test_single_sparse_column_keeps_row_width(
        self, client, mock_session, tmp_path
    ):
        mock_session.get.return_value = make_response(
            [make_user(1), make_user(2, department="R&D"), make_user(3)]
        )
        output = tmp_path / "sparse.csv"

        result = export_group_members(client, GROUP, ["department"], str(output))

        rows = _read_rows(output)
        assert rows == [["Department"], [""], ["R&D"], [""]]
        assert all(len(row) == 1 for row in rows)
        assert result.row_count == 3
        assert output.read_bytes() == b'Department\r\n""\r\nR&D\r\n""\r\n'

    def test_all_fields_empty_keeps_row_width(self, client, mock_session, tmp_path):
        mock_session.get.return_value = make_response(
            [{"id": "00u1", "profile": {}}, {"id": "00u2", "profile": {}}]
        )
        output = tmp_path / "blank.csv"

        export_group_members(client, GROUP, ["title", "department"], str(output))

        rows = _read_rows(output)
        assert len(rows) == 3
        assert all(len(row) == 2 for row in rows)

    def test_special_characters_round_trip(self, client, mock_session, tmp_path):
        values = ["Smith, Jr.", 'say "hi"', "line1\nline2", "O'Neil"]
        mock_session.get.return_value = make_response(
            [make_user(i, title=value) for i, value in enumerate(values)]
        )
        output = tmp_path / "quoted.csv"

        export_group_members(client, GROUP, ["title"], str(output))

        assert [row[0] for row in _read_rows(output)[1:]] == values
        text = output.read_bytes().decode("utf-8")
        assert '"Smith, Jr."' in text
        assert '"say ""hi"""' in text

    def test_api_failure_mid_stream_leaves_no_file(
        self, client, mock_session, tmp_path
    ):
        mock_session.get.side_effect = [
            _page(0, 2, f"{MEMBERS_URL}?after=a"),
            make_response({}, status_code=500),
        ]
        output = tmp_path / "partial.csv"

        with pytest.raises(APIError):
            export_group_members(client, GROUP, ["id"], str(output))

        assert not output.exists()
        assert list(tmp_path.iterdir()) == []

    def test_failure_keeps_existing_file(self, client, mock_session, tmp_path):
        output = tmp_path / "existing.csv"
        output.write_text("previous export\n", encoding="utf-8")
        mock_session.get.return_value = make_response({}, status_code=500)

        with pytest.raises(APIError):
            export_group_members(client, GROUP, ["id"], str(output))

        assert output.read_text(encoding="utf-8") == "previous export\n"
        assert list(tmp_path.iterdir()) == [output]

    def test_success_replaces_existing_file(self, client, mock_session, tmp_path):
        output = tmp_path / "existing.csv"
        output.write_text("previous export\n", encoding="utf-8")
        mock_session.get.return_value = make_response([make_user(1)])

        export_group_members(client, GROUP, ["id"], str(output))

        assert _read_rows(output) == [["User ID"], [make_user(1)["id"]]]
        assert list(tmp_path.iterdir()) == [output]

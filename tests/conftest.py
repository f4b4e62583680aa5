from typing import Any
from unittest.mock import MagicMock

import pytest

from groupexport.core.client import OktaClient

BASE_URL = "https://acme.okta.com"
GROUP_ID = "00g1abcdEFGH2ijkl3m4"


def make_response(
    data: Any = None,
    status_code: int = 200,
    next_url: str | None = None,
    json_error: bool = False,
) -> MagicMock:
    """Create a mock requests response with Okta-style Link parsing."""
    response = MagicMock()
    response.status_code = status_code
    response.text = ""
    if json_error:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = data
    response.links = {"next": {"url": next_url, "rel": "next"}} if next_url else {}
    return response


def make_user(index: int, **profile: Any) -> dict[str, Any]:
    """Create an Okta user object."""
    base_profile = {
        "login": f"user{index}@example.com",
        "email": f"user{index}@example.com",
        "firstName": f"First{index}",
        "lastName": f"Last{index}",
    }
    base_profile.update(profile)
    return {
        "id": f"00u{index:017d}",
        "status": "ACTIVE",
        "created": "2023-01-05T10:15:30.000Z",
        "activated": "2023-01-05T10:16:00.000Z",
        "statusChanged": None,
        "lastLogin": "2024-03-01T08:00:00.000Z",
        "lastUpdated": "2024-02-01T12:00:00.000Z",
        "passwordChanged": None,
        "profile": base_profile,
    }


def make_group(group_id: str = GROUP_ID, name: str = "Engineering") -> dict[str, Any]:
    """Create an Okta group object."""
    return {
        "id": group_id,
        "type": "OKTA_GROUP",
        "profile": {"name": name, "description": f"{name} team"},
    }


@pytest.fixture
def mock_session():
    """Create a mock requests session."""
    session = MagicMock()
    session.headers = {}
    return session


@pytest.fixture
def client(mock_session):
    """Create an OktaClient backed by the mock session."""
    return OktaClient(BASE_URL, "test_token", session=mock_session)

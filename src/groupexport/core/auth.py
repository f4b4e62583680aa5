from typing import Any

from ..utils.logging_utils import get_logger
from .client import OktaClient
from .exceptions import AuthenticationError, GroupExportError

# Module logger
logger = get_logger(__name__)


def doctor(client: OktaClient) -> dict[str, Any]:
    """Test if the API token works by fetching the token owner.

    Args:
        client: Configured Okta client

    Returns:
        Dict[str, Any]: Status information including success status and details
    """
    logger.info(
        f"Testing credentials against {client.base_url}...",
        extra={"operation": "doctor_check"},
    )
    try:
        user = client.get_current_user()
    except AuthenticationError as e:
        logger.error(
            f"Authentication failed: {e}",
            extra={"operation": "doctor_check", "status_code": e.status_code},
        )
        return {
            "success": False,
            "base_url": client.base_url,
            "error": str(e),
            "details": "The API token was rejected",
        }
    except GroupExportError as e:
        logger.error(
            f"API check failed: {e}",
            extra={"operation": "doctor_check"},
        )
        return {
            "success": False,
            "base_url": client.base_url,
            "error": str(e),
            "details": "Could not reach the Okta API",
        }

    profile = user.get("profile") or {}
    login = profile.get("login") or user.get("id", "unknown")
    logger.info(
        "Doctor check completed successfully",
        extra={"operation": "doctor_check"},
    )
    return {
        "success": True,
        "base_url": client.base_url,
        "login": login,
        "details": "Credentials are working correctly",
    }

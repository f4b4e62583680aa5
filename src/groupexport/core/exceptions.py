"""Custom exception hierarchy for the Okta group member export tool."""


class GroupExportError(Exception):
    """Base exception for the group export tool.

    Subclasses add contextual fields and list them in ``_context`` so the
    rendered message reads ``message | Label: value | Details: ...``.
    """

    def __init__(self, message: str, details: str | None = None):
        """Initialize the exception.

        Args:
            message: The main error message
            details: Optional additional details about the error
        """
        self.message = message
        self.details = details
        super().__init__(self._format_message())

    def _context(self) -> list[tuple[str, object]]:
        """Labelled context values shown between the message and the details."""
        return []

    def _format_message(self) -> str:
        """Format the complete error message."""
        parts = [self.message]
        parts.extend(f"{label}: {value}" for label, value in self._context() if value)
        if self.details:
            parts.append(f"Details: {self.details}")
        return " | ".join(parts)


class ConfigurationError(GroupExportError):
    """Configuration errors.

    Raised when a required input (org, API token) is missing or malformed
    and no fallback could supply it. Always raised before any network call.
    """


class AuthenticationError(GroupExportError):
    """The API token was rejected (401) or lacks permission (403)."""

    def __init__(
        self,
        message: str = "Invalid API token",
        status_code: int | None = None,
        details: str | None = None,
    ):
        self.status_code = status_code
        super().__init__(message, details)

    def _context(self) -> list[tuple[str, object]]:
        return [("Status", self.status_code)]


class GroupResolutionError(GroupExportError):
    """A group identifier did not resolve to exactly one group.

    Covers both an identifier that matched nothing and a disambiguation
    choice that was not one of the offered candidates.
    """

    def __init__(
        self,
        message: str,
        identifier: str | None = None,
        details: str | None = None,
    ):
        """Initialize the group resolution error.

        Args:
            message: The main error message
            identifier: The group ID or name that failed to resolve
            details: Optional additional details about the error
        """
        self.identifier = identifier
        super().__init__(message, details)

    def _context(self) -> list[tuple[str, object]]:
        return [("Group", self.identifier)]


class FileOperationError(GroupExportError):
    """The output file could not be created or written."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        operation: str | None = None,
        details: str | None = None,
    ):
        """Initialize the file operation error.

        Args:
            message: The main error message
            file_path: Output path involved
            operation: Step that failed (validate, write)
            details: Optional additional details about the error
        """
        self.file_path = file_path
        self.operation = operation
        super().__init__(message, details)

    def _context(self) -> list[tuple[str, object]]:
        return [("Operation", self.operation), ("File", self.file_path)]


class APIError(GroupExportError):
    """Okta API errors.

    Raised when an API call fails for any reason other than authentication:
    transport failures, unexpected status codes or unparseable responses.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        endpoint: str | None = None,
        details: str | None = None,
    ):
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message, details)

    def _context(self) -> list[tuple[str, object]]:
        return [("Status", self.status_code), ("Endpoint", self.endpoint)]


class ValidationError(GroupExportError):
    """An empty attribute selection or a malformed checklist command."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: str | None = None,
        details: str | None = None,
    ):
        """Initialize the validation error.

        Args:
            message: The main error message
            field: Name of the input that failed validation
            value: The rejected input
            details: Optional additional details about the error
        """
        self.field = field
        self.value = value
        super().__init__(message, details)

    def _context(self) -> list[tuple[str, object]]:
        return [("Field", self.field), ("Value", self.value)]

"""Custom exceptions for policy operations."""


class PolicyError(Exception):
    """Base class for policy-related errors."""

    pass


class PolicyValidationError(PolicyError):
    """Raised when structured policy data cannot be turned into a policy."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class InvalidClauseError(PolicyError):
    """Raised when a clause cannot be written as valid policy text.

    The engine's string literals have no escape sequence, so a quote or a
    line break inside a quoted value would corrupt the rule. Required names
    that are empty are rejected as well.
    """

    def __init__(self, message: str, field: str) -> None:
        """Initialize the error.

        Args:
            message: Description of the problem.
            field: Location of the offending value, e.g. ``rules[1].list.name``.
        """
        self.message = message
        self.field = field
        super().__init__(f"{field}: {message}")

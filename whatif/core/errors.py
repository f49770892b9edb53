"""Error types raised by the scenario engine and its tax collaborators."""


class ScenarioError(Exception):
    """Base class for scenario recomputation failures."""


class ConfigurationError(ScenarioError):
    """Raised for an unrecognized filing status, state code, or tax year.

    These values are validated upstream, so reaching this error means an
    upstream validation bug. It is never replaced by a default.
    """


class ComputationError(ScenarioError):
    """Raised when a tax computation rejects its inputs.

    Attributes:
        field: Name of the offending input, when known.
        value: The rejected value, when known.
    """

    def __init__(
        self, message: str, field: str | None = None, value: object = None
    ) -> None:
        """Initialize with a message and the offending input.

        Args:
            message: Human-readable description of the violation.
            field: Name of the rejected input.
            value: The rejected value.
        """
        self.field = field
        self.value = value
        super().__init__(message)

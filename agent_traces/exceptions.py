class AgentTracesError(Exception):
    """Base exception for the agent traces package.

    This exception and its subclasses can be configured to expose their
    messages to a user-facing surface safely.
    """

    def __init__(self, message: str, user_facing: bool = False):
        """Initialize the agent traces error.

        Args:
            message: The error message.
            user_facing: Whether the message is safe to show to the user.
        """
        super().__init__(message)
        self.message = message
        self.user_facing = user_facing


class ConfigurationError(AgentTracesError):
    """Raised when generator settings or the failure policy are invalid."""

    def __init__(self, message: str):
        """Initialize a configuration error."""
        super().__init__(message, user_facing=True)


class SpanTreeError(AgentTracesError):
    """Raised when a span population does not form a valid set of trees."""


class TraceNotFoundError(AgentTracesError):
    """Exception raised when a trace id is not present in a span arena."""

    def __init__(self, trace_id: str):
        """Initialize a trace-not-found error."""
        super().__init__(f"Trace not found: {trace_id}", user_facing=True)
        self.trace_id = trace_id

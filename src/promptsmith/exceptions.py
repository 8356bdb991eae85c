class PromptsmithError(Exception):
    """Base exception for the prompt trainer service.

    Carries what the HTTP layer needs to render ``{error, details, message}``.
    """

    status_code: int = 500
    error: str = "Server error"
    message: str = "Something went wrong. Please try again later."

    def __init__(
        self, details: str = "", *, error: str | None = None, message: str | None = None
    ) -> None:
        super().__init__(details)
        self.details = details
        if error is not None:
            self.error = error
        if message is not None:
            self.message = message


class InvalidRequestError(PromptsmithError):
    """Raised when a required request field is missing or blank."""

    status_code = 400
    error = "Prompt and goal are required"
    message = "Please provide both a prompt and a goal."


class UpstreamError(PromptsmithError):
    """Raised when the upstream chat service is unreachable or returns non-2xx."""

    error = "API error"
    message = "Failed to get response from AI API. Please try again later."

    def __init__(self, details: str = "", *, status: int | None = None) -> None:
        super().__init__(details)
        self.status = status


class UpstreamTimeoutError(UpstreamError):
    """Raised once every retry of a timed-out upstream call has failed."""

    error = "Timeout"
    message = "The request timed out. The server might be busy. Please try again later."


class ExtractionError(PromptsmithError):
    """Raised when no displayable text can be pulled out of an upstream payload."""

    error = "Format error"
    message = "Failed to process AI response. Please try again later."

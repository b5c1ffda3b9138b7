class RecognizerUpstreamError(RuntimeError):
    """Raised when the language understanding provider fails (timeouts, network errors, service unavailable)."""
    pass


class RecognizerContractError(RuntimeError):
    """Raised when a recognizer adapter gets an answer of the wrong shape."""
    pass


class MalformedPayloadError(ValueError):
    """Raised when an event payload cannot be validated into its typed model."""
    pass


class DialogNotFoundError(LookupError):
    """Raised when a dialog id is not registered in the dialog set."""
    pass

"""API-level exceptions."""

from meal_proxy.models import FAILURE_MESSAGES, Operation


class OperationFailedError(Exception):
    """A logical operation failed; rendered as a generic 500 response.

    The underlying cause is chained via ``raise ... from`` and only logged.
    """

    status_code = 500

    def __init__(self, operation: Operation) -> None:
        self.operation = operation
        self.user_message = FAILURE_MESSAGES[operation]
        super().__init__(self.user_message)

"""
Custom exceptions for the application
"""


class RentalRequestNotFoundError(Exception):
    """Raised when a rental request id does not resolve to a document"""

    def __init__(self, request_id: str):
        self.request_id = request_id
        self.message = f"Rental request {request_id} not found"
        super().__init__(self.message)


class RentalRequestValidationError(Exception):
    """Raised when submitted rental request criteria are invalid"""

    def __init__(self, message: str, field: str = None):
        self.message = message
        self.field = field
        super().__init__(message)


class RentalRequestPermissionError(Exception):
    """Raised when a user touches a rental request they do not own"""

    def __init__(self, request_id: str, user_id: str):
        self.request_id = request_id
        self.user_id = user_id
        self.message = "Forbidden"
        super().__init__(f"User {user_id} does not own rental request {request_id}")


class InvalidStatusTransitionError(Exception):
    """Raised when a rental request status change is not allowed"""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        self.message = f"Cannot change rental request status from '{current}' to '{target}'"
        super().__init__(self.message)

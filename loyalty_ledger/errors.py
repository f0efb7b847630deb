class LoyaltyError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class Unauthorized(LoyaltyError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class InvalidInput(LoyaltyError):
    status_code = 400


class NotFound(LoyaltyError):
    status_code = 404


class Rejected(LoyaltyError):
    """Business rule refused the operation; the caller may retry after acting on `reason`."""

    status_code = 400

    UNAVAILABLE = "unavailable"
    OUT_OF_STOCK = "out_of_stock"
    INSUFFICIENT_POINTS = "insufficient_points"

    def __init__(self, reason: str, message: str):
        self.reason = reason
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error": self.message, "reason": self.reason}


class InternalError(LoyaltyError):
    status_code = 500

"""Error taxonomy. Each error carries the HTTP status it is reported with."""


class RealtyError(Exception):
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class BadRequestError(RealtyError):
    status_code = 400


class UnauthenticatedError(RealtyError):
    status_code = 401


class ForbiddenError(RealtyError):
    status_code = 403


class NotFoundError(RealtyError):
    status_code = 404


class UpstreamError(RealtyError):
    """The remote store or auth service returned an error."""
    status_code = 500

class FreightDeskError(Exception):
    """Base for errors that cross the service boundary.

    ``status_code`` is the HTTP status the API layer answers with.
    """

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(FreightDeskError):
    status_code = 404


class MissingRouteKeyError(FreightDeskError):
    status_code = 422


class AuthorizationError(FreightDeskError):
    status_code = 403


class InvalidPeriodError(FreightDeskError):
    status_code = 422

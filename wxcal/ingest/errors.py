"""Failure taxonomy for the three outbound queries."""


class CalendarQueryError(Exception):
    """Base for every expected query failure."""


class NotFound(CalendarQueryError):
    """Geocoding returned no match for the requested name."""


class EmptyResult(CalendarQueryError):
    """The call succeeded but carried no usable data."""


class TransportOrServerError(CalendarQueryError):
    """Non-success HTTP status, or the request never completed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

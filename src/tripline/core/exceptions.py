"""Custom exceptions for Tripline."""


class TriplineError(Exception):
    """Base exception for Tripline."""

    pass


class TripParseError(TriplineError):
    """Trip JSON could not be read or has an unexpected shape."""

    pass

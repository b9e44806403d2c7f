"""Custom exceptions for the plant tracker.

Each exception carries the HTTP status the API layer answers with.
"""


class TrackerError(Exception):
    """Base exception for all plant tracker errors."""

    status_code = 500

    def __init__(self, message, details=None):
        """
        Parameters
        ----------
        message : str
            Human-readable error message, returned to API clients.
        details : dict, optional
            Additional error context (e.g. the offending field).
        """
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(TrackerError):
    """Raised when request input is missing or malformed."""

    status_code = 400


class PlantNotFound(TrackerError):
    """Raised when no plant exists with the requested id."""

    status_code = 404

    def __init__(self, plant_id):
        super().__init__(
            "Plant {} not found".format(plant_id),
            details={"id": plant_id},
        )
        self.plant_id = plant_id

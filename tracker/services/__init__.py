"""
Plant tracker service layer: TrackerService ABC and ServiceRegistry.

Each resource exposed over the API is a TrackerService registered with
the ServiceRegistry. The registry provides lightweight dependency
injection: services are looked up by ID at runtime, and each service
owns its own API endpoints and input validation.

Classes:
    TrackerService  - Abstract base class for all API services
    ServiceRegistry - Central lookup container for registered services

Every API response, success or failure, is the envelope built by
respond(): {"success": bool, "message": str, "data": any}.
"""

from abc import ABC, abstractmethod

from flask import jsonify


def respond(success, message, data=None, status=200):
    """
    Build a JSON envelope response.

    Parameters
    ----------
    success : bool
    message : str
        Human-readable outcome shown by the browser UI.
    data : any, optional
        JSON-serializable payload.
    status : int
        HTTP status code.

    Returns
    -------
    tuple
        (flask.Response, status) as accepted by Flask views.
    """
    return jsonify({
        "success": success,
        "message": message,
        "data": data,
    }), status


class TrackerService(ABC):
    """
    Abstract base class for a plant tracker API service.

    Class Attributes
    ----------------
    id : str
        Unique service identifier (e.g. "plants").
    name : str
        Human-readable display name.
    description : str
        One-liner describing the resource.
    status : str
        "live" services get their routes mounted; anything else does not.
    route : str
        API path prefix owned by the service, relative to /api.
    """

    id = ""
    name = ""
    description = ""
    status = "live"
    route = ""

    @abstractmethod
    def validate(self, payload):
        """
        Validate raw input and return a normalized dict.

        Parameters
        ----------
        payload : dict
            Raw request payload.

        Returns
        -------
        dict
            Normalized, validated values.

        Raises
        ------
        tracker.exceptions.ValidationError
            If the payload is invalid.
        """

    def register_routes(self, blueprint):
        """
        Mount service-specific API endpoints onto a Flask blueprint.

        Parameters
        ----------
        blueprint : flask.Blueprint
            The API blueprint to mount routes on.
        """
        pass

    def metadata(self):
        """
        Return service metadata for the registry listing.

        Returns
        -------
        dict
            Service info: id, name, description, status, route.
        """
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "status": self.status,
            "route": self.route,
        }


class ServiceRegistry:
    """
    Central lookup container for registered TrackerService instances.

    Services register themselves at app startup. The registry provides
    lookup by ID, listing, and iteration over live services for API
    route mounting.
    """

    def __init__(self):
        self._services = {}

    def register(self, service):
        """
        Register a service instance.

        Raises
        ------
        ValueError
            If a service with the same id is already registered.
        """
        if service.id in self._services:
            raise ValueError(
                "Service '{}' is already registered".format(service.id)
            )
        self._services[service.id] = service

    def get(self, service_id):
        """Look up a service by id. Returns None if not found."""
        return self._services.get(service_id)

    def list_all(self):
        """Metadata for all registered services, in registration order."""
        return [s.metadata() for s in self._services.values()]

    def live(self):
        """All services with status 'live'."""
        return [s for s in self._services.values()
                if s.status == "live"]

"""
Flask API blueprint for the plant tracker.

create_api_blueprint() builds the /api blueprint, adds the shared
routes and error handlers, and mounts the routes of every
live service in the registry.

Shared endpoints:
  GET  /api/services       - list registered services
  GET  /api/services/<id>  - metadata of one service

Every response body, including errors, is the JSON envelope
{"success": bool, "message": str, "data": any}.
"""

import logging

from flask import Blueprint, request
from werkzeug.exceptions import HTTPException

from tracker.exceptions import TrackerError
from tracker.services import respond

log = logging.getLogger(__name__)

URL_PREFIX = "/api"


def _is_api_request():
    return request.path == URL_PREFIX or request.path.startswith(URL_PREFIX + "/")


def create_api_blueprint(registry):
    """
    Build the API blueprint.

    Parameters
    ----------
    registry : tracker.services.ServiceRegistry
        Services whose routes are mounted (live ones only).

    Returns
    -------
    flask.Blueprint
    """
    api = Blueprint("api", __name__, url_prefix=URL_PREFIX)

    @api.route("/services", methods=["GET"])
    def list_services():
        services = registry.list_all()
        return respond(True, "{} services registered".format(len(services)), services)

    @api.route("/services/<service_id>", methods=["GET"])
    def get_service(service_id):
        service = registry.get(service_id)
        if service is None:
            return respond(False, "Service '{}' not found".format(service_id), None, 404)
        return respond(True, "Service found", service.metadata())

    for service in registry.live():
        service.register_routes(api)

    @api.errorhandler(TrackerError)
    def handle_tracker_error(exc):
        log.warning("%s %s rejected: %s", request.method, request.path, exc.message)
        return respond(False, exc.message, exc.details, exc.status_code)

    @api.errorhandler(HTTPException)
    def handle_http_error(exc):
        return respond(False, exc.description, None, exc.code)

    @api.errorhandler(Exception)
    def handle_unexpected_error(exc):
        log.exception("%s %s failed", request.method, request.path)
        return respond(False, "Server error", None, 500)

    # Routing errors (unknown path, unsupported verb) never reach
    # blueprint handlers, so they are caught app-wide and answered
    # as JSON only under /api.
    @api.app_errorhandler(404)
    def handle_not_found(exc):
        if not _is_api_request():
            return exc
        return respond(False, "Not found", None, 404)

    @api.app_errorhandler(405)
    def handle_method_not_allowed(exc):
        if not _is_api_request():
            return exc
        response, status = respond(
            False, "Method {} not supported".format(request.method), None, 405)
        response.headers["Allow"] = ", ".join(exc.valid_methods or [])
        return response, status

    return api

"""
Plants Service for the plant tracker.

Implements the TrackerService interface for plant records and owns the
plant endpoints under /api/plants. The collection endpoint dispatches on
the HTTP verb the way the browser UI calls it; the item endpoints are the
same operations addressed by path.

Endpoints:
    GET    /api/plants            - list all plants, newest first
    POST   /api/plants            - create a plant
    PUT    /api/plants            - partial update, id in the JSON body
    DELETE /api/plants?id=<n>     - delete, id in the query string
    GET    /api/plants/<id>       - get a single plant
    PUT    /api/plants/<id>       - partial update, id in the path
    DELETE /api/plants/<id>       - delete, id in the path
"""

import logging

from flask import request

from tracker.database import Database
from tracker.dates import parse_date, parse_datetime
from tracker.exceptions import ValidationError
from tracker.repository import PlantRepository
from tracker.services import TrackerService, respond

log = logging.getLogger(__name__)

TEXT_MAX_LENGTH = 255

# Largest value SQLite stores in an INTEGER column
MAX_PLANT_ID = 2**63 - 1
MAX_INTERVAL_DAYS = 3650

ITEM_RULE = "/plants/<int(min=1, max={}):plant_id>".format(MAX_PLANT_ID)

REQUIRED_FIELDS = ("name", "purchase_date", "location", "watering_interval_days")


def _clean_text(field, value):
    if not isinstance(value, str):
        raise ValidationError(
            "{} must be a string".format(field), details={"field": field})
    text = value.strip()
    if not text:
        raise ValidationError(
            "{} must not be empty".format(field), details={"field": field})
    if len(text) > TEXT_MAX_LENGTH:
        raise ValidationError(
            "{} must be at most {} characters".format(field, TEXT_MAX_LENGTH),
            details={"field": field})
    return text


def _clean_interval(value):
    field = "watering_interval_days"
    if isinstance(value, bool):
        days = None
    elif isinstance(value, int):
        days = value
    elif isinstance(value, float) and value.is_integer():
        days = int(value)
    elif isinstance(value, str):
        try:
            days = int(value.strip())
        except ValueError:
            days = None
    else:
        days = None

    if days is None:
        raise ValidationError(
            "{} must be a whole number of days".format(field),
            details={"field": field})
    if days < 1:
        raise ValidationError(
            "{} must be at least 1".format(field), details={"field": field})
    if days > MAX_INTERVAL_DAYS:
        raise ValidationError(
            "{} must be at most {}".format(field, MAX_INTERVAL_DAYS),
            details={"field": field})
    return days


def _clean_purchase_date(value):
    try:
        return parse_date(value)
    except ValueError as e:
        raise ValidationError(str(e), details={"field": "purchase_date"}) from e


def _clean_last_watered(value):
    """None and "" clear the timestamp."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return parse_datetime(value)
    except ValueError as e:
        raise ValidationError(str(e), details={"field": "last_watered"}) from e


_CLEANERS = {
    "name": lambda v: _clean_text("name", v),
    "purchase_date": _clean_purchase_date,
    "location": lambda v: _clean_text("location", v),
    "watering_interval_days": _clean_interval,
}


def parse_plant_id(value):
    """
    Read a plant id from a request value.

    Raises
    ------
    ValidationError
        If the value is missing, not a positive integer, or larger
        than SQLite can store.
    """
    if value is None or value == "":
        raise ValidationError("Missing plant id")
    if isinstance(value, bool):
        raise ValidationError("Invalid plant id: {}".format(value))
    try:
        plant_id = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError("Invalid plant id: {}".format(value)) from None
    if not 1 <= plant_id <= MAX_PLANT_ID or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError("Invalid plant id: {}".format(value))
    return plant_id


def _json_object():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


class PlantService(TrackerService):
    """
    Plant record service.

    Validates request payloads and runs each operation in its own
    database transaction.
    """

    id = "plants"
    name = "Plants"
    description = "Plant records and their watering metadata"
    status = "live"
    route = "/plants"

    def __init__(self, database_path):
        self.database_path = database_path

    def validate(self, payload):
        """
        Validate a create payload.

        All of REQUIRED_FIELDS must be present and not null;
        last_watered is optional.
        """
        missing = [f for f in REQUIRED_FIELDS if payload.get(f) is None]
        if missing:
            raise ValidationError(
                "Missing required fields: {}".format(", ".join(missing)),
                details={"missing": missing})

        config = {field: _CLEANERS[field](payload[field])
                  for field in REQUIRED_FIELDS}
        config["last_watered"] = _clean_last_watered(payload.get("last_watered"))
        return config

    def validate_changes(self, payload):
        """
        Validate a partial-update payload.

        Required fields are applied only when present and not null.
        last_watered is applied whenever the key is present, so an
        explicit null clears it. Other keys, including "id", are ignored.
        """
        changes = {}
        for field, clean in _CLEANERS.items():
            if payload.get(field) is not None:
                changes[field] = clean(payload[field])
        if "last_watered" in payload:
            changes["last_watered"] = _clean_last_watered(payload["last_watered"])
        return changes

    # -- Operations (one transaction each) --

    def list_plants(self):
        with Database(self.database_path) as db:
            return PlantRepository(db).list()

    def get_plant(self, plant_id):
        with Database(self.database_path) as db:
            return PlantRepository(db).get(plant_id)

    def create_plant(self, payload):
        config = self.validate(payload)
        with Database(self.database_path) as db:
            return PlantRepository(db).create(**config)

    def update_plant(self, plant_id, payload):
        changes = self.validate_changes(payload)
        with Database(self.database_path) as db:
            return PlantRepository(db).update(plant_id, changes)

    def delete_plant(self, plant_id):
        with Database(self.database_path) as db:
            PlantRepository(db).delete(plant_id)

    def register_routes(self, bp):
        """Mount the plant endpoints."""
        service = self

        # -- Collection: dispatch on verb --
        @bp.route("/plants", methods=["GET"])
        def plants_list():
            plants = service.list_plants()
            return respond(
                True, "{} plants found".format(len(plants)),
                [p.to_dict() for p in plants])

        @bp.route("/plants", methods=["POST"])
        def plants_create():
            plant = service.create_plant(_json_object())
            return respond(True, "Plant created", plant.to_dict(), 201)

        @bp.route("/plants", methods=["PUT"])
        def plants_update():
            payload = _json_object()
            plant_id = parse_plant_id(payload.get("id"))
            plant = service.update_plant(plant_id, payload)
            return respond(True, "Plant updated", plant.to_dict())

        @bp.route("/plants", methods=["DELETE"])
        def plants_delete():
            plant_id = parse_plant_id(request.args.get("id"))
            service.delete_plant(plant_id)
            return respond(True, "Plant deleted")

        # -- Single plant addressed by path --
        @bp.route(ITEM_RULE, methods=["GET"])
        def plant_detail(plant_id):
            plant = service.get_plant(plant_id)
            return respond(True, "Plant found", plant.to_dict())

        @bp.route(ITEM_RULE, methods=["PUT"])
        def plant_update(plant_id):
            plant = service.update_plant(plant_id, _json_object())
            return respond(True, "Plant updated", plant.to_dict())

        @bp.route(ITEM_RULE, methods=["DELETE"])
        def plant_delete(plant_id):
            service.delete_plant(plant_id)
            return respond(True, "Plant deleted")

"""
Data access for plant records.

All values reach SQLite as bound parameters. The only SQL assembled at
runtime is the SET clause of a partial update, and its column names come
from UPDATABLE_COLUMNS, never from the caller.
"""

import logging

from tracker.dates import format_date, format_datetime
from tracker.exceptions import PlantNotFound, ValidationError
from tracker.models import Plant

log = logging.getLogger(__name__)

# Column order of generated SET clauses.
UPDATABLE_COLUMNS = (
    "name",
    "purchase_date",
    "location",
    "watering_interval_days",
    "last_watered",
)

_FORMATTERS = {
    "purchase_date": format_date,
    "last_watered": format_datetime,
}


def _to_sql(column, value):
    formatter = _FORMATTERS.get(column)
    return formatter(value) if formatter else value


class PlantRepository:
    """CRUD operations on the plants table within one open Database."""

    def __init__(self, database):
        self.db = database

    def create(self, name, purchase_date, location, watering_interval_days,
               last_watered=None):
        """
        Insert a plant and return it with its generated id.

        Parameters
        ----------
        purchase_date : datetime.date
        last_watered : datetime.datetime or None
        """
        cursor = self.db.connection.execute(
            "INSERT INTO plants "
            "(name, purchase_date, location, watering_interval_days, last_watered) "
            "VALUES (:name, :purchase_date, :location, :watering_interval_days, :last_watered)",
            {
                "name": name,
                "purchase_date": format_date(purchase_date),
                "location": location,
                "watering_interval_days": watering_interval_days,
                "last_watered": format_datetime(last_watered),
            },
        )
        plant_id = cursor.lastrowid
        log.info("Created plant %d (%s)", plant_id, name)
        return self.get(plant_id)

    def list(self):
        """All plants, newest first."""
        rows = self.db.connection.execute(
            "SELECT * FROM plants ORDER BY id DESC").fetchall()
        return [Plant.from_row(row) for row in rows]

    def get(self, plant_id):
        row = self.db.connection.execute(
            "SELECT * FROM plants WHERE id = :id", {"id": plant_id}).fetchone()
        if row is None:
            raise PlantNotFound(plant_id)
        return Plant.from_row(row)

    def update(self, plant_id, changes):
        """
        Apply a partial update and return the updated plant.

        Only keys of ``changes`` listed in UPDATABLE_COLUMNS are written;
        everything else on the row is left untouched.

        Raises
        ------
        ValidationError
            If ``changes`` names no updatable column.
        PlantNotFound
            If no plant has this id.
        """
        assignments = []
        params = {"id": plant_id}
        for column in UPDATABLE_COLUMNS:
            if column not in changes:
                continue
            assignments.append("{0} = :{0}".format(column))
            params[column] = _to_sql(column, changes[column])

        if not assignments:
            raise ValidationError("No fields to update")

        assignments.append("updated_at = CURRENT_TIMESTAMP")
        sql = "UPDATE plants SET {} WHERE id = :id".format(", ".join(assignments))
        cursor = self.db.connection.execute(sql, params)
        if cursor.rowcount == 0:
            raise PlantNotFound(plant_id)

        log.info("Updated plant %d: %s", plant_id,
                 ", ".join(c for c in UPDATABLE_COLUMNS if c in changes))
        return self.get(plant_id)

    def delete(self, plant_id):
        cursor = self.db.connection.execute(
            "DELETE FROM plants WHERE id = :id", {"id": plant_id})
        if cursor.rowcount == 0:
            raise PlantNotFound(plant_id)
        log.info("Deleted plant %d", plant_id)

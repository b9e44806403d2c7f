"""Plant record model."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from tracker.dates import format_date, format_datetime, parse_date, parse_datetime


@dataclass
class Plant:
    """One tracked plant and its watering metadata."""

    id: int
    name: str
    purchase_date: date
    location: str
    watering_interval_days: int
    last_watered: Optional[datetime] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row):
        """Build a Plant from a sqlite3.Row of the plants table."""
        last_watered = row["last_watered"]
        return cls(
            id=row["id"],
            name=row["name"],
            purchase_date=parse_date(row["purchase_date"]),
            location=row["location"],
            watering_interval_days=row["watering_interval_days"],
            last_watered=parse_datetime(last_watered) if last_watered else None,
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def to_dict(self):
        """JSON-serializable representation with canonical date strings."""
        return {
            "id": self.id,
            "name": self.name,
            "purchase_date": format_date(self.purchase_date),
            "location": self.location,
            "watering_interval_days": self.watering_interval_days,
            "last_watered": format_datetime(self.last_watered),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Holiday:
    holiday_id: int
    name: str
    date: date

    def to_dict(self) -> dict:
        return {"holiday_id": self.holiday_id, "name": self.name, "date": self.date.isoformat()}

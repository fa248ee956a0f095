"""Musician records: CSV loading and the comma-joined storage format."""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path

from src.services.errors import DatasetError
from src.services.lifespans import days_between

LOGGER = logging.getLogger(__name__)

FIELD_COUNT = 3


@dataclass(frozen=True)
class Musician:
    """One row of the dataset. Dates are kept as YYYY-MM-DD strings."""

    name: str
    date_of_birth: str
    date_of_death: str

    def serialize(self) -> str:
        # Not escaped: a comma inside the name breaks deserialize().
        return f"{self.name},{self.date_of_birth},{self.date_of_death}"

    @classmethod
    def deserialize(cls, member: str) -> "Musician":
        fields = member.split(",")
        if len(fields) < FIELD_COUNT:
            raise DatasetError(f"Stored member has fewer than {FIELD_COUNT} fields: {member!r}")
        return cls(name=fields[0], date_of_birth=fields[1], date_of_death=fields[2])

    def age_at_death(self) -> int:
        return days_between(self.date_of_birth, self.date_of_death)


def read_csv(path: Path) -> list[Musician]:
    """Load a headerless ``name,birth,death`` CSV file."""
    try:
        handle = path.open("r", encoding="utf-8", newline="")
    except OSError as exc:
        raise DatasetError(f"import: {exc}") from exc

    musicians: list[Musician] = []
    with handle:
        reader = csv.reader(handle, strict=True)
        try:
            for row in reader:
                if not row:
                    continue
                if len(row) != FIELD_COUNT:
                    raise DatasetError(
                        f"file parse: line {reader.line_num}: expected {FIELD_COUNT} fields, got {len(row)}"
                    )
                musicians.append(Musician(name=row[0], date_of_birth=row[1], date_of_death=row[2]))
        except csv.Error as exc:
            raise DatasetError(f"file parse: line {reader.line_num}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise DatasetError(f"file parse: {exc}") from exc
    LOGGER.debug("Read %s rows from %s", len(musicians), path)
    return musicians

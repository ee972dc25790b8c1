"""Simple table records kept in a :class:`JsonStore`."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, TypeVar

from .store import JsonStore

log = logging.getLogger(__name__)

R = TypeVar("R", bound="Record")


class RecordNotFound(LookupError):
    """No row with the requested id exists in the table."""

    def __init__(self, table: str, record_id: int) -> None:
        super().__init__(f"no {table} record with id {record_id}")
        self.table = table
        self.record_id = record_id


@dataclass
class Record:
    """A row of one table; fields map to JSON keys (``metadata['key']``)."""

    TABLE: ClassVar[str] = ""
    UPDATED: ClassVar[tuple[str, ...] | None] = None

    id: int

    @classmethod
    def _columns(cls) -> list[tuple[str, str]]:
        return [(f.name, f.metadata.get("key", f.name)) for f in dataclasses.fields(cls)]

    @classmethod
    def _from_row(cls: type[R], row: dict[str, Any]) -> R:
        return cls(**{name: row[key] for name, key in cls._columns()})

    def _to_row(self) -> dict[str, Any]:
        return {key: getattr(self, name) for name, key in self._columns()}

    def _updated_columns(self) -> list[tuple[str, str]]:
        wanted = self.UPDATED
        return [
            (name, key)
            for name, key in self._columns()
            if name != "id" and (wanted is None or name in wanted)
        ]

    @classmethod
    def _rows(cls, models: Any) -> list[dict[str, Any]] | None:
        if not isinstance(models, list):
            raise ValueError("stored models are not a JSON array")
        if not models or not isinstance(models[0], dict):
            return None
        rows = models[0].get(cls.TABLE)
        if rows is None:
            return None
        if not isinstance(rows, list):
            raise ValueError(f"{cls.TABLE!r} is not a JSON array")
        return rows

    @classmethod
    def all(cls: type[R], store: JsonStore) -> list[R]:
        """Every row of the table, in stored order."""
        models = store.load("models")
        if not isinstance(models, list):
            return []
        rows = cls._rows(models) or []
        return [cls._from_row(row) for row in rows]

    @classmethod
    def get(cls: type[R], store: JsonStore, record_id: int) -> R:
        """The first row with ``record_id``; raises :class:`RecordNotFound`."""
        for record in cls.all(store):
            if record.id == record_id:
                return record
        raise RecordNotFound(cls.TABLE, record_id)

    def save(self, store: JsonStore) -> None:
        """Append this record to its table."""
        models = store.load("models")
        if not isinstance(models, list):
            raise ValueError("stored models are not a JSON array")
        if not models:
            models.append({})
        if models[0] is None:
            models[0] = {}
        if not isinstance(models[0], dict):
            raise ValueError("stored models do not start with an object")
        rows = models[0].get(self.TABLE)
        if rows is None:
            rows = models[0][self.TABLE] = []
        if not isinstance(rows, list):
            raise ValueError(f"{self.TABLE!r} is not a JSON array")
        rows.append(self._to_row())
        store.save(models)

    def update(self, store: JsonStore) -> None:
        """Overwrite the first stored row with this id."""
        models = store.load("models")
        for row in self._rows(models) or []:
            if row["id"] == self.id:
                for name, key in self._updated_columns():
                    row[key] = getattr(self, name)
                store.save(models)
                log.info("%s %s updated", self.TABLE, self.id)
                return
        raise RecordNotFound(self.TABLE, self.id)

    def delete(self, store: JsonStore) -> None:
        """Remove every stored row with this id."""
        models = store.load("models")
        rows = self._rows(models)
        if rows is None:
            raise RecordNotFound(self.TABLE, self.id)
        kept = [row for row in rows if row["id"] != self.id]
        if len(kept) == len(rows):
            raise RecordNotFound(self.TABLE, self.id)
        models[0][self.TABLE] = kept
        store.save(models)
        log.info("%s %s deleted", self.TABLE, self.id)


@dataclass
class Race(Record):
    """One run of one player in one phase."""

    TABLE: ClassVar[str] = "Course"

    name: str = ""


@dataclass
class Department(Record):
    TABLE: ClassVar[str] = "dept"

    name: str = ""


@dataclass
class Tournament(Record):
    TABLE: ClassVar[str] = "Tournoi"

    name: str = ""


@dataclass
class TournamentPhase(Record):
    """Link between a tournament and one of its phases."""

    TABLE: ClassVar[str] = "TournoiPhase"

    tournament_id: int = field(metadata={"key": "idTournoi"})
    phase_id: int = field(metadata={"key": "idPhase"})


@dataclass
class PhaseGroup(Record):
    """Link between a phase and a group created for it."""

    TABLE: ClassVar[str] = "PhaseGroupe"

    phase_id: int = field(metadata={"key": "idPhase"})
    group_id: int = field(metadata={"key": "idGroupe"})
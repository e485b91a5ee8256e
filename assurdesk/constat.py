"""Accident reports (constats) and their storage in the CONSTATS table."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import Any, Mapping

from .db import QueryError, Table, ValidationError

_SELECT = (
    "SELECT ID, DATE_CONSTAT, LIEU_CONSTAT, TYPE_CONSTAT, DESCRIPTION, SIGNATURE "
    "FROM CONSTATS"
)

LIST_HEADERS = (
    "ID",
    "Date du Constat",
    "Lieu du Constat",
    "Type du Constat",
    "Description",
    "Signature",
)
RAW_HEADERS = ("ID", "DATE_CONSTAT", "LIEU_CONSTAT", "TYPE_CONSTAT", "DESCRIPTION", "SIGNATURE")
SORT_CLAUSES = {"TYPE_CONSTAT": "ORDER BY TYPE_CONSTAT"}


def _text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass
class Constat:
    """One accident report."""

    constat_id: str = ""
    date_constat: str = ""
    lieu_constat: str = ""
    type_constat: str = ""
    description: str = ""
    signature: str = ""


class ConstatRepository:
    """Reads and writes constats through a database connection."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def _execute(self, sql: str, params: Mapping[str, Any]) -> int:
        try:
            with self._connection:
                return self._connection.execute(sql, params).rowcount
        except sqlite3.Error as exc:
            raise QueryError(str(exc)) from exc

    def _select(
        self, sql: str, headers: tuple[str, ...], params: Mapping[str, Any] | None = None
    ) -> Table:
        try:
            rows = self._connection.execute(sql, params or {}).fetchall()
        except sqlite3.Error as exc:
            raise QueryError(str(exc)) from exc
        return Table(headers, (tuple(_text(cell) for cell in row) for row in rows))

    def add(self, constat: Constat) -> None:
        """Insert a constat."""
        self._execute(
            "INSERT INTO CONSTATS(ID, DATE_CONSTAT, LIEU_CONSTAT, TYPE_CONSTAT, "
            "DESCRIPTION, SIGNATURE) VALUES (:ID, :dateConstat, :lieuConstat, "
            ":typeConstat, :description, :signature)",
            {
                "ID": constat.constat_id,
                "dateConstat": constat.date_constat,
                "lieuConstat": constat.lieu_constat,
                "typeConstat": constat.type_constat,
                "description": constat.description,
                "signature": constat.signature,
            },
        )

    def update(self, constat_id: str, date: str, place: str, signature: str) -> int:
        """Change date, place and signature of a constat; return rows changed."""
        return self._execute(
            "UPDATE CONSTATS SET DATE_CONSTAT = :date, LIEU_CONSTAT = :place, "
            "SIGNATURE = :signature WHERE ID = :ID",
            {"date": date, "place": place, "signature": signature, "ID": constat_id},
        )

    def delete(self, constat_id: str) -> int:
        """Delete the constat with this ID; return how many rows went."""
        return self._execute("DELETE FROM CONSTATS WHERE ID = :ID", {"ID": constat_id})

    def list_all(self) -> Table:
        """Every constat, under display headers."""
        return self._select(_SELECT, LIST_HEADERS)

    def sorted_by(self, column: str) -> Table:
        """Every constat ordered by ``column``; only "TYPE_CONSTAT" is accepted."""
        try:
            clause = SORT_CLAUSES[column]
        except KeyError:
            raise ValidationError(f"Critère de tri invalide : {column}") from None
        return self._select(f"{_SELECT} {clause}", RAW_HEADERS)

    def search(self, text: str, by_id: bool = True) -> Table:
        """Constats whose ID equals ``text``; only search by ID is supported."""
        if not by_id:
            raise ValidationError("Critère de recherche invalide.")
        return self._select(
            f"{_SELECT} WHERE ID = :recherche", RAW_HEADERS, {"recherche": text}
        )
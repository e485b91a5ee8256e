"""Employees and their storage in the EMPLOYEEE table."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

from .db import QueryError, Table

HEADERS = (
    "Nom",
    "Prenom",
    "Email",
    "Salaire",
    "Cin",
    "Numero",
    "Fonction",
    "Date_Embauche",
)
# A search by CIN fills only the first six columns of each row.
_SEARCH_FILLED_COLUMNS = 6


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _to_int(text: str) -> int:
    """Read ``text`` as a whole number, giving 0 when it is not one."""
    stripped = text.strip()
    if "_" in stripped:
        return 0
    try:
        return int(stripped)
    except ValueError:
        return 0


def _date_value(value: date | None) -> str | None:
    return None if value is None else value.isoformat()


@dataclass
class Employe:
    """One employee record."""

    cin: int = 0
    date_emb: date | None = None
    num_tel: int = 0
    nom: str = ""
    prenom: str = ""
    email_emp: str = ""
    fonction: str = ""
    salaire: int = 0

    def _params(self) -> dict[str, Any]:
        return {
            "v1": self.nom,
            "v2": self.prenom,
            "v3": self.email_emp,
            "v4": self.salaire,
            "v5": self.cin,
            "v6": self.num_tel,
            "v7": self.fonction,
            "v8": _date_value(self.date_emb),
        }


class EmployeRepository:
    """Reads and writes employees through a database connection."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def _execute(self, sql: str, params: Mapping[str, Any]) -> int:
        try:
            with self._connection:
                return self._connection.execute(sql, params).rowcount
        except sqlite3.Error as exc:
            raise QueryError(str(exc)) from exc

    def _fetch(self, sql: str, params: Mapping[str, Any] | None = None) -> list[tuple]:
        try:
            return self._connection.execute(sql, params or {}).fetchall()
        except sqlite3.Error as exc:
            raise QueryError(str(exc)) from exc

    def add(self, employe: Employe) -> None:
        """Insert an employee."""
        self._execute(
            "INSERT INTO EMPLOYEEE(NOM, PRENOM, EMAIL_EMP, SALAIRE, CINE, NUM_TEL, "
            "FONCTION, DATE_EMB) VALUES (:v1, :v2, :v3, :v4, :v5, :v6, :v7, :v8)",
            employe._params(),
        )

    def list_all(self) -> Table:
        """Every employee, under display headers."""
        rows = self._fetch("SELECT * FROM EMPLOYEEE")
        return Table(
            HEADERS,
            (tuple(_text(cell) for cell in row[: len(HEADERS)]) for row in rows),
        )

    def delete(self, cin: int) -> int:
        """Delete the employee with this CIN; return how many rows went."""
        return self._execute("DELETE FROM EMPLOYEEE WHERE CINE = :CIN", {"CIN": cin})

    def update(self, employe: Employe) -> int:
        """Rewrite every field of the employee with the same CIN; return rows changed."""
        return self._execute(
            "UPDATE EMPLOYEEE SET NOM = :v1, PRENOM = :v2, EMAIL_EMP = :v3, "
            "SALAIRE = :v4, NUM_TEL = :v6, FONCTION = :v7, DATE_EMB = :v8 "
            "WHERE CINE = :v5",
            employe._params(),
        )

    def search_by_cin(self, text: str) -> Table:
        """Employees whose CIN equals ``text`` read as a number (0 if it is not one)."""
        rows = self._fetch(
            "SELECT * FROM EMPLOYEEE WHERE CINE = :x", {"x": _to_int(text)}
        )
        blanks = ("",) * (len(HEADERS) - _SEARCH_FILLED_COLUMNS)
        return Table(
            HEADERS,
            (
                tuple(_text(cell) for cell in row[:_SEARCH_FILLED_COLUMNS]) + blanks
                for row in rows
            ),
        )
"""Database connection, schema and tabular query results."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from os import PathLike
from typing import Iterator, Union

_SCHEMA = """
CREATE TABLE IF NOT EXISTS CLIENTS (
    CIN TEXT PRIMARY KEY,
    NOM TEXT,
    PRENOM TEXT,
    ADRESSE TEXT,
    NUMTEL TEXT,
    EMAIL TEXT
);
CREATE TABLE IF NOT EXISTS CONSTATS (
    ID TEXT PRIMARY KEY,
    DATE_CONSTAT TEXT,
    LIEU_CONSTAT TEXT,
    TYPE_CONSTAT TEXT,
    DESCRIPTION TEXT,
    SIGNATURE TEXT
);
CREATE TABLE IF NOT EXISTS FOOL (
    MATRICULE_FISCALE TEXT PRIMARY KEY,
    NOM_ENTREPRISE TEXT,
    ADRESSE TEXT,
    NUMERO_TELEPHONE TEXT,
    DEBUT_CONTRAT TEXT,
    FIN_CONTRAT TEXT,
    DUREE_CONTRAT TEXT,
    SECTEUR_ACTIVITE TEXT,
    INTERET TEXT,
    IMAGE BLOB
);
CREATE TABLE IF NOT EXISTS EMPLOYEEE (
    NOM TEXT,
    PRENOM TEXT,
    EMAIL_EMP TEXT,
    SALAIRE INTEGER,
    CINE INTEGER PRIMARY KEY,
    NUM_TEL INTEGER,
    FONCTION TEXT,
    DATE_EMB TEXT
);
"""


class ValidationError(ValueError):
    """A record or request was rejected before reaching the database."""


class QueryError(RuntimeError):
    """The database refused a statement or could not be opened."""


@dataclass(frozen=True)
class Table:
    """Rows of text cells under a row of column headers."""

    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", tuple(self.headers))
        object.__setattr__(self, "rows", tuple(tuple(row) for row in self.rows))

    def column(self, name: str) -> list[str]:
        """Return every cell of the column headed ``name``."""
        try:
            index = self.headers.index(name)
        except ValueError:
            raise KeyError(name) from None
        return [row[index] for row in self.rows]

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[tuple[str, ...]]:
        return iter(self.rows)


def open_database(path: Union[str, "PathLike[str]"]) -> sqlite3.Connection:
    """Open the database file at ``path``; ``":memory:"`` gives a private one."""
    try:
        return sqlite3.connect(path)
    except sqlite3.Error as exc:
        raise QueryError(f"connection failed: {exc}") from exc


def create_schema(connection: sqlite3.Connection) -> None:
    """Create the application's tables where they do not exist yet."""
    try:
        with connection:
            connection.executescript(_SCHEMA)
    except sqlite3.Error as exc:
        raise QueryError(str(exc)) from exc
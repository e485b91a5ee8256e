"""Insurance clients and their storage in the CLIENTS table."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import Any, Mapping

from .db import QueryError, Table, ValidationError

CIN_MAX_LENGTH = 20
PHONE_MIN_LENGTH = 8
PHONE_MAX_LENGTH = 15

_SELECT = "SELECT CIN, NOM, PRENOM, ADRESSE, NUMTEL, EMAIL FROM CLIENTS"

LIST_HEADERS = ("CIN", "Nom", "Prénom", "Adresse", "Numéro de Téléphone", "Email")
SEARCH_HEADERS = ("CIN", "NOM", "PRENOM", "ADRESSE", " NUMTEL,", "EMAIL")
SORT_HEADERS = ("CIN", "NOM", "PRENOM", "ADRESSE", "NUMTEL", "EMAIL")
SORT_CLAUSES = {"NOM": "ORDER BY NOM"}


def _text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass
class Client:
    """One client record."""

    cin: str = ""
    nom: str = ""
    prenom: str = ""
    adresse: str = ""
    numero_telephone: str = ""
    email: str = ""

    def validate(self) -> None:
        """Raise ValidationError if the CIN or phone number has a bad length."""
        if len(self.cin) > CIN_MAX_LENGTH:
            raise ValidationError("Le CIN ne peut pas dépasser 20 caractères.")
        if not PHONE_MIN_LENGTH <= len(self.numero_telephone) <= PHONE_MAX_LENGTH:
            raise ValidationError(
                "Le numéro de téléphone doit contenir entre 8 et 15 chiffres."
            )


class ClientRepository:
    """Reads and writes clients through a database connection."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def _execute(self, sql: str, params: Mapping[str, Any] | None = None) -> int:
        try:
            with self._connection:
                return self._connection.execute(sql, params or {}).rowcount
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

    def add(self, client: Client) -> None:
        """Validate and insert a client."""
        client.validate()
        self._execute(
            "INSERT INTO CLIENTS(CIN, NOM, PRENOM, ADRESSE, NUMTEL, EMAIL) "
            "VALUES (:cin, :nom, :prenom, :adresse, :numeroTelephone, :email)",
            {
                "cin": client.cin,
                "nom": client.nom,
                "prenom": client.prenom,
                "adresse": client.adresse,
                "numeroTelephone": client.numero_telephone,
                "email": client.email,
            },
        )

    def delete(self, cin: str) -> int:
        """Delete the client with this CIN; return how many rows went."""
        return self._execute("DELETE FROM CLIENTS WHERE CIN = :cin", {"cin": cin})

    def list_all(self) -> Table:
        """Every client, under display headers."""
        return self._select(_SELECT, LIST_HEADERS)

    def update(self, cin: str, phone: str, address: str, email: str) -> int:
        """Change phone, address and e-mail of a client; return rows changed."""
        return self._execute(
            "UPDATE CLIENTS SET NUMTEL = :phone, ADRESSE = :address, EMAIL = :email "
            "WHERE CIN = :cin",
            {"phone": phone, "address": address, "email": email, "cin": cin},
        )

    def search(self, text: str, by_cin: bool = True) -> Table:
        """Clients whose CIN equals ``text``; only search by CIN is supported."""
        if not by_cin:
            raise ValidationError("Critère de recherche invalide.")
        return self._select(
            f"{_SELECT} WHERE CIN = :recherche", SEARCH_HEADERS, {"recherche": text}
        )

    def sorted_by(self, column: str) -> Table:
        """Every client ordered by ``column``; only "NOM" is accepted."""
        try:
            clause = SORT_CLAUSES[column]
        except KeyError:
            raise ValidationError(f"Critère de tri invalide : {column}") from None
        return self._select(f"{_SELECT} {clause}", SORT_HEADERS)
"""Business partners and their contracts, stored in the FOOL table."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

from .db import QueryError, Table, ValidationError

MATRICULE_MAX_LENGTH = 10
PHONE_MIN_LENGTH = 8
PHONE_MAX_LENGTH = 15

_COLUMNS = (
    "MATRICULE_FISCALE, NOM_ENTREPRISE, ADRESSE, NUMERO_TELEPHONE, "
    "DEBUT_CONTRAT, FIN_CONTRAT, SECTEUR_ACTIVITE, INTERET"
)
_SELECT = f"SELECT {_COLUMNS} FROM FOOL"

LIST_HEADERS = (
    "Matricule Fiscale",
    "Nom de l'Entreprise",
    "Adresse",
    "Numéro de Téléphone",
    "Début Contrat",
    "Fin Contrat",
    "Secteur d'Activité",
    "Intérêt",
)
RAW_HEADERS = (
    "MATRICULE_FISCALE",
    "NOM_ENTREPRISE",
    "ADRESSE",
    "NUMERO_TELEPHONE",
    "DEBUT_CONTRAT",
    "FIN_CONTRAT",
    "SECTEUR_ACTIVITE",
    "INTERET",
)
SORT_COLUMNS = ("NOM_ENTREPRISE",)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _date_value(value: date | None) -> str | None:
    return None if value is None else value.isoformat()


@dataclass
class Partenaire:
    """One partner company and its contract."""

    matricule_fiscale: str = ""
    nom_entreprise: str = ""
    adresse: str = ""
    numero_telephone: str = ""
    debut_contrat: date | None = None
    fin_contrat: date | None = None
    secteur_activite: str = ""
    interet: str = ""
    chemin_image: str = ""

    def validate(self) -> None:
        """Raise ValidationError if the matricule or phone number has a bad length."""
        if len(self.matricule_fiscale) > MATRICULE_MAX_LENGTH:
            raise ValidationError(
                "La matricule fiscale ne peut pas dépasser 10 caractères."
            )
        if not PHONE_MIN_LENGTH <= len(self.numero_telephone) <= PHONE_MAX_LENGTH:
            raise ValidationError(
                "Le numéro de téléphone doit contenir entre 8 et 15 chiffres."
            )


class PartenaireRepository:
    """Reads and writes partners through a database connection."""

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

    def add(self, partenaire: Partenaire) -> None:
        """Validate and insert a partner together with its image file."""
        partenaire.validate()
        try:
            with open(partenaire.chemin_image, "rb") as image_file:
                image = image_file.read()
        except OSError as exc:
            raise ValidationError("Échec de l'ouverture de l'image.") from exc
        self._execute(
            "INSERT INTO FOOL(MATRICULE_FISCALE, NOM_ENTREPRISE, ADRESSE, "
            "NUMERO_TELEPHONE, DEBUT_CONTRAT, FIN_CONTRAT, SECTEUR_ACTIVITE, "
            "INTERET, IMAGE) VALUES (:matriculeFiscale, :nomEntreprise, :adresse, "
            ":numeroTelephone, :debutContrat, :finContrat, :secteurActivite, "
            ":interet, :image)",
            {
                "matriculeFiscale": partenaire.matricule_fiscale,
                "nomEntreprise": partenaire.nom_entreprise,
                "adresse": partenaire.adresse,
                "numeroTelephone": partenaire.numero_telephone,
                "debutContrat": _date_value(partenaire.debut_contrat),
                "finContrat": _date_value(partenaire.fin_contrat),
                "secteurActivite": partenaire.secteur_activite,
                "interet": partenaire.interet,
                "image": image,
            },
        )

    def delete(self, matricule: str) -> int:
        """Delete the partner with this matricule; return how many rows went."""
        return self._execute(
            "DELETE FROM FOOL WHERE MATRICULE_FISCALE = :matriculeFiscale",
            {"matriculeFiscale": matricule},
        )

    def list_all(self) -> Table:
        """Every partner, under display headers."""
        return self._select(_SELECT, LIST_HEADERS)

    def update_contract(self, matricule: str, name: str, address: str, phone: str) -> int:
        """Change name, address and phone of a partner; return rows changed."""
        return self._execute(
            "UPDATE FOOL SET NOM_ENTREPRISE = :name, ADRESSE = :address, "
            "NUMERO_TELEPHONE = :phone WHERE MATRICULE_FISCALE = :matricule",
            {"name": name, "address": address, "phone": phone, "matricule": matricule},
        )

    def sorted_by(self, column: str, ascending: bool = True) -> Table:
        """Every partner ordered by ``column``; only "NOM_ENTREPRISE" is accepted."""
        if column not in SORT_COLUMNS:
            raise ValidationError(f"Critère de tri invalide : {column}")
        direction = "ASC" if ascending else "DESC"
        return self._select(f"{_SELECT} ORDER BY {column} {direction}", RAW_HEADERS)

    def search(self, text: str, by_matricule: bool = True) -> Table:
        """Partners whose matricule equals ``text``, or whose name is LIKE it."""
        condition = (
            "MATRICULE_FISCALE = :recherche"
            if by_matricule
            else "NOM_ENTREPRISE LIKE :recherche"
        )
        return self._select(
            f"{_SELECT} WHERE {condition}", RAW_HEADERS, {"recherche": text}
        )
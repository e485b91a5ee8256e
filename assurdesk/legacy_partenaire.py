"""Partners with a contract duration, the earlier layout of the FOOL table."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import Any, Mapping

from .db import QueryError, Table, ValidationError

MATRICULE_MAX_LENGTH = 10
PHONE_MIN_LENGTH = 8
PHONE_MAX_LENGTH = 15

_COLUMNS = (
    "MATRICULE_FISCALE, NOM_ENTREPRISE, ADRESSE, NUMERO_TELEPHONE, "
    "DUREE_CONTRAT, SECTEUR_ACTIVITE, INTERET"
)
_SELECT = f"SELECT {_COLUMNS} FROM FOOL"

LIST_HEADERS = (
    "matriculeFiscale",
    " nomEntreprise",
    "adresse",
    "numeroTelephone",
    "dureeContrat",
    "secteurActivite",
    "interet",
)
RAW_HEADERS = (
    "MATRICULE_FISCALE",
    "NOM_ENTREPRISE",
    "ADRESSE",
    "NUMERO_TELEPHONE",
    "DUREE_CONTRAT",
    "SECTEUR_ACTIVITE",
    "INTERET",
)
SORT_CLAUSES = {"DUREE_CONTRAT": "ORDER BY DUREE_CONTRAT"}


def _text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass
class LegacyPartenaire:
    """One partner whose contract is described by a duration."""

    matricule_fiscale: str = ""
    nom_entreprise: str = ""
    adresse: str = ""
    numero_telephone: str = ""
    duree_contrat: str = ""
    secteur_activite: str = ""
    interet: str = ""

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


class LegacyPartenaireRepository:
    """Reads and writes duration-based partners through a database connection."""

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

    def add(self, partenaire: LegacyPartenaire) -> None:
        """Validate and insert a partner."""
        partenaire.validate()
        self._execute(
            "INSERT INTO FOOL(MATRICULE_FISCALE, NOM_ENTREPRISE, ADRESSE, "
            "NUMERO_TELEPHONE, DUREE_CONTRAT, SECTEUR_ACTIVITE, INTERET) "
            "VALUES (:matriculeFiscale, :nomEntreprise, :adresse, :numeroTelephone, "
            ":dureeContrat, :secteurActivite, :interet)",
            {
                "matriculeFiscale": partenaire.matricule_fiscale,
                "nomEntreprise": partenaire.nom_entreprise,
                "adresse": partenaire.adresse,
                "numeroTelephone": partenaire.numero_telephone,
                "dureeContrat": partenaire.duree_contrat,
                "secteurActivite": partenaire.secteur_activite,
                "interet": partenaire.interet,
            },
        )

    def delete(self, matricule: str) -> int:
        """Delete the partner with this matricule; return how many rows went."""
        return self._execute(
            "DELETE FROM FOOL WHERE MATRICULE_FISCALE = :matriculeFiscale",
            {"matriculeFiscale": matricule},
        )

    def update_duration(self, old_duration: str, new_duration: str) -> int:
        """Replace every contract duration equal to ``old_duration``; return rows changed."""
        return self._execute(
            "UPDATE FOOL SET DUREE_CONTRAT = :nouveauDureeContrat "
            "WHERE DUREE_CONTRAT = :ancienneDureeContrat",
            {"nouveauDureeContrat": new_duration, "ancienneDureeContrat": old_duration},
        )

    def list_all(self) -> Table:
        """Every partner, under display headers."""
        return self._select(_SELECT, LIST_HEADERS)

    def sorted_by(self, column: str) -> Table:
        """Every partner ordered by ``column``; only "DUREE_CONTRAT" is accepted."""
        try:
            clause = SORT_CLAUSES[column]
        except KeyError:
            raise ValidationError(f"Critère de tri invalide : {column}") from None
        return self._select(f"{_SELECT} {clause}", RAW_HEADERS)

    def search_by_matricule(self, text: str) -> Table:
        """Partners whose matricule equals ``text``."""
        return self._select(
            f"{_SELECT} WHERE MATRICULE_FISCALE = :matricule",
            RAW_HEADERS,
            {"matricule": text},
        )
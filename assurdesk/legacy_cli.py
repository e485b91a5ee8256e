"""Command line for managing duration-based partners."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from .db import QueryError, Table, ValidationError, create_schema, open_database
from .legacy_partenaire import LegacyPartenaire, LegacyPartenaireRepository
from .report import LayoutStyle, export_pdf

DEFAULT_DATABASE = "projetons.db"
DEFAULT_EXPORT = "listepartenaires.pdf"
EXPORT_STYLE = LayoutStyle(cell_height=30)


def build_parser() -> argparse.ArgumentParser:
    """The argument parser of the partner command."""
    parser = argparse.ArgumentParser(description="Gestion des partenaires.")
    parser.add_argument("--database", default=DEFAULT_DATABASE)
    commands = parser.add_subparsers(dest="command", required=True)

    add = commands.add_parser("add", help="ajouter un partenaire")
    add.add_argument("matricule")
    add.add_argument("--nom", default="")
    add.add_argument("--adresse", default="")
    add.add_argument("--telephone", default="")
    add.add_argument("--duree", default="")
    add.add_argument("--secteur", default="")
    add.add_argument("--interet", default="")

    delete = commands.add_parser("delete", help="supprimer un partenaire")
    delete.add_argument("matricule")

    commands.add_parser("list", help="afficher les partenaires")

    update = commands.add_parser("update-duration", help="modifier la durée du contrat")
    update.add_argument("old_duration")
    update.add_argument("new_duration")

    sort = commands.add_parser("sort", help="trier les partenaires")
    sort.add_argument("--column", default="DUREE_CONTRAT")

    search = commands.add_parser("search", help="rechercher par matricule fiscale")
    search.add_argument("matricule")

    export = commands.add_parser("export", help="enregistrer la liste en PDF")
    export.add_argument("path", nargs="?", default=DEFAULT_EXPORT)
    return parser


def _print_table(table: Table) -> None:
    print("\t".join(table.headers))
    for row in table:
        print("\t".join(row))


def _fail(*messages: str) -> int:
    for message in messages:
        print(message, file=sys.stderr)
    return 1


def _run(args: argparse.Namespace, repository: LegacyPartenaireRepository) -> int:
    if args.command == "add":
        partner = LegacyPartenaire(
            args.matricule,
            args.nom,
            args.adresse,
            args.telephone,
            args.duree,
            args.secteur,
            args.interet,
        )
        try:
            repository.add(partner)
        except (ValidationError, QueryError) as exc:
            return _fail(str(exc), "L'ajout n'a pas pu être effectué.")
        print("Ajout effectué avec succès!")
    elif args.command == "delete":
        try:
            repository.delete(args.matricule)
        except QueryError as exc:
            return _fail(str(exc), "La suppression n'a pas pu être effectuée.")
        print("Suppression effectuée avec succès!")
    elif args.command == "list":
        _print_table(repository.list_all())
    elif args.command == "update-duration":
        try:
            repository.update_duration(args.old_duration, args.new_duration)
        except QueryError as exc:
            return _fail(str(exc), "La modification du contrat  n'a pas pu être effectuée.")
        print("Modification de la durée du contrat réussie !")
    elif args.command == "sort":
        try:
            table = repository.sorted_by(args.column)
        except (ValidationError, QueryError) as exc:
            return _fail(str(exc), "Échec de la création du modèle de tri.")
        _print_table(table)
    elif args.command == "search":
        _print_table(repository.search_by_matricule(args.matricule))
    elif args.command == "export":
        try:
            export_pdf(repository.list_all(), args.path, EXPORT_STYLE)
        except OSError as exc:
            return _fail(f"Failed to open file, is it writable? {exc}")
        print("La liste a été enregistrée . Merci de consulter votre dossier.")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run one partner command; return the exit status."""
    args = build_parser().parse_args(argv)
    try:
        connection = open_database(args.database)
        create_schema(connection)
    except QueryError as exc:
        return _fail("connection failed.", str(exc))
    try:
        return _run(args, LegacyPartenaireRepository(connection))
    except QueryError as exc:
        return _fail(str(exc))
    finally:
        connection.close()


if __name__ == "__main__":
    sys.exit(main())
"""Command line for the insurance office: partners, clients, constats and staff."""

from __future__ import annotations

import argparse
import sys
from datetime import date, datetime
from typing import Callable, Sequence

from .chat import ChatBot
from .client import Client, ClientRepository
from .constat import Constat, ConstatRepository
from .db import QueryError, Table, ValidationError, create_schema, open_database
from .employe import Employe, EmployeRepository
from .notifications import expired_contracts, search_partners
from .partenaire import Partenaire, PartenaireRepository
from .report import EMPLOYEE_STYLE, LISTING_STYLE, export_pdf, table_layout
from .statistics import (
    CLIENT_TITLE,
    CONSTAT_TITLE,
    SECTOR_TITLE,
    client_shares,
    constat_shares,
    plot_bars,
    plot_pie,
    sector_shares,
    share_label,
)

DEFAULT_DATABASE = "projetons.db"
PARTNER_EXPORT = "listepartenaires.pdf"
CLIENT_EXPORT = "listeclients.pdf"
CONSTAT_EXPORT = "listeconstats.pdf"

ADD_OK = "Ajout effectué avec succès!"
ADD_FAILED = "L'ajout n'a pas pu être effectué."
IMAGE_MISSING = "Veuillez sélectionner une image avant de valider."
SORT_FAILED = "Impossible de trier les données."
EXPORT_OK = "La liste a été enregistrée. Merci de consulter votre dossier."
EXPORT_FAILED = "Failed to open file, is it writable?"
EMPLOYEE_ADD_FAILED = "Échec de l'ajout de l'employé."
EMPLOYEE_EXPORT_OK = "PDF file saved successfully!"


def _add_listing_actions(actions: argparse._SubParsersAction, default_export: str) -> None:
    actions.add_parser("list", help="afficher la liste")
    actions.add_parser("sort", help="trier la liste")
    export = actions.add_parser("export", help="enregistrer la liste en PDF")
    export.add_argument("path", nargs="?", default=default_export)


def build_parser() -> argparse.ArgumentParser:
    """The argument parser of the office command."""
    parser = argparse.ArgumentParser(description="Gestion du bureau d'assurance.")
    parser.add_argument("--database", default=DEFAULT_DATABASE)
    entities = parser.add_subparsers(dest="entity", required=True)

    partner = entities.add_parser("partner", help="partenaires")
    actions = partner.add_subparsers(dest="action", required=True)
    add = actions.add_parser("add", help="ajouter un partenaire")
    add.add_argument("matricule")
    add.add_argument("--nom", default="")
    add.add_argument("--adresse", default="")
    add.add_argument("--telephone", default="")
    add.add_argument("--debut", type=date.fromisoformat, default=None)
    add.add_argument("--fin", type=date.fromisoformat, default=None)
    add.add_argument("--secteur", default="")
    add.add_argument("--interet", default="")
    add.add_argument("--image", default="")
    delete = actions.add_parser("delete", help="supprimer un partenaire")
    delete.add_argument("matricule")
    update = actions.add_parser("update", help="modifier un contrat")
    update.add_argument("matricule")
    update.add_argument("--nom", default="")
    update.add_argument("--adresse", default="")
    update.add_argument("--telephone", default="")
    actions.add_parser("list", help="afficher la liste")
    sort = actions.add_parser("sort", help="trier par nom d'entreprise")
    sort.add_argument("--descending", action="store_true")
    search = actions.add_parser("search", help="rechercher un partenaire")
    search.add_argument("text")
    export = actions.add_parser("export", help="enregistrer la liste en PDF")
    export.add_argument("path", nargs="?", default=PARTNER_EXPORT)
    stats = actions.add_parser("stats", help="répartition par secteur")
    stats.add_argument("path")
    stats.add_argument("--bars", action="store_true")
    notify = actions.add_parser("notify", help="contrats arrivés à échéance")
    notify.add_argument("--now", type=datetime.fromisoformat, default=None)

    client = entities.add_parser("client", help="clients")
    actions = client.add_subparsers(dest="action", required=True)
    add = actions.add_parser("add", help="ajouter un client")
    add.add_argument("cin")
    add.add_argument("--nom", default="")
    add.add_argument("--prenom", default="")
    add.add_argument("--adresse", default="")
    add.add_argument("--telephone", default="")
    add.add_argument("--email", default="")
    delete = actions.add_parser("delete", help="supprimer un client")
    delete.add_argument("cin")
    update = actions.add_parser("update", help="modifier un client")
    update.add_argument("cin")
    update.add_argument("--telephone", default="")
    update.add_argument("--adresse", default="")
    update.add_argument("--email", default="")
    search = actions.add_parser("search", help="rechercher par CIN")
    search.add_argument("cin")
    _add_listing_actions(actions, CLIENT_EXPORT)
    stats = actions.add_parser("stats", help="répartition par lieu")
    stats.add_argument("path")

    constat = entities.add_parser("constat", help="constats")
    actions = constat.add_subparsers(dest="action", required=True)
    add = actions.add_parser("add", help="ajouter un constat")
    add.add_argument("id")
    add.add_argument("--date", default="")
    add.add_argument("--lieu", default="")
    add.add_argument("--type", default="")
    add.add_argument("--description", default="")
    add.add_argument("--signature", default="")
    delete = actions.add_parser("delete", help="supprimer un constat")
    delete.add_argument("id")
    update = actions.add_parser("update", help="modifier un constat")
    update.add_argument("id")
    update.add_argument("--date", default="")
    update.add_argument("--lieu", default="")
    update.add_argument("--signature", default="")
    search = actions.add_parser("search", help="rechercher par ID")
    search.add_argument("id")
    _add_listing_actions(actions, CONSTAT_EXPORT)
    stats = actions.add_parser("stats", help="répartition par lieu")
    stats.add_argument("path")

    employee = entities.add_parser("employee", help="employés")
    actions = employee.add_subparsers(dest="action", required=True)
    add = actions.add_parser("add", help="ajouter un employé")
    add.add_argument("cin", type=int)
    add.add_argument("--nom", default="")
    add.add_argument("--prenom", default="")
    add.add_argument("--date", type=date.fromisoformat, default=None)
    add.add_argument("--email", default="")
    add.add_argument("--numero", type=int, default=0)
    add.add_argument("--salaire", type=float, default=0.0)
    add.add_argument("--fonction", default="")
    actions.add_parser("list", help="afficher la liste")
    actions.add_parser("sort", help="trier par nom")
    search = actions.add_parser("search", help="rechercher par CIN")
    search.add_argument("text")
    export = actions.add_parser("export", help="enregistrer la liste en PDF")
    export.add_argument("path")

    chat = entities.add_parser("chat", help="poser des questions à l'assistant")
    chat.add_argument("messages", nargs="+")
    return parser


def _print_table(table: Table) -> None:
    print("\t".join(table.headers))
    for row in table:
        print("\t".join(row))


def _fail(*messages: str) -> int:
    for message in messages:
        print(message, file=sys.stderr)
    return 1


def _export(table: Table, path: str, ok_message: str, style=LISTING_STYLE) -> int:
    try:
        table_layout(table, style)
        export_pdf(table, path, style)
    except ValidationError as exc:
        return _fail(str(exc))
    except OSError as exc:
        return _fail(EXPORT_FAILED, str(exc))
    print(ok_message)
    return 0


def _stats(shares, title: str, path: str, bars: bool = False) -> int:
    try:
        (plot_bars if bars else plot_pie)(shares, title, path)
    except ValueError as exc:
        return _fail(str(exc))
    print(title)
    for share in shares:
        print(share_label(share))
    return 0


def _partner(args: argparse.Namespace, connection) -> int:
    repository = PartenaireRepository(connection)
    if args.action == "add":
        if not args.image:
            return _fail(IMAGE_MISSING)
        partner = Partenaire(
            args.matricule,
            args.nom,
            args.adresse,
            args.telephone,
            args.debut,
            args.fin,
            args.secteur,
            args.interet,
            args.image,
        )
        try:
            repository.add(partner)
        except (ValidationError, QueryError) as exc:
            return _fail(str(exc), ADD_FAILED)
        print(ADD_OK)
    elif args.action == "delete":
        try:
            repository.delete(args.matricule)
        except QueryError as exc:
            return _fail(str(exc), "La suppression n'a pas pu être effectuée.")
        print("Suppression effectuée avec succès!")
    elif args.action == "update":
        try:
            repository.update_contract(
                args.matricule, args.nom, args.adresse, args.telephone
            )
        except QueryError as exc:
            return _fail(
                str(exc), "La modification du contrat n'a pas pu être effectuée."
            )
        print("Modification du contrat réussie !")
    elif args.action == "list":
        _print_table(repository.list_all())
    elif args.action == "sort":
        try:
            table = repository.sorted_by("NOM_ENTREPRISE", not args.descending)
        except (ValidationError, QueryError) as exc:
            return _fail(str(exc), SORT_FAILED)
        _print_table(table)
    elif args.action == "search":
        _print_table(search_partners(repository, args.text))
    elif args.action == "export":
        return _export(repository.list_all(), args.path, EXPORT_OK)
    elif args.action == "stats":
        return _stats(sector_shares(connection), SECTOR_TITLE, args.path, args.bars)
    elif args.action == "notify":
        for notification in expired_contracts(connection, args.now):
            print(notification.title)
            print(notification.message)
    return 0


def _client(args: argparse.Namespace, connection) -> int:
    repository = ClientRepository(connection)
    if args.action == "add":
        client = Client(
            args.cin, args.nom, args.prenom, args.adresse, args.telephone, args.email
        )
        try:
            repository.add(client)
        except (ValidationError, QueryError) as exc:
            return _fail(str(exc), ADD_FAILED)
        print(ADD_OK)
    elif args.action == "delete":
        try:
            repository.delete(args.cin)
        except QueryError as exc:
            return _fail(
                str(exc), "La suppression du client n'a pas pu être effectuée."
            )
        print("Suppression du client effectuée avec succès !")
    elif args.action == "update":
        try:
            repository.update(args.cin, args.telephone, args.adresse, args.email)
        except QueryError as exc:
            return _fail(
                str(exc), "La modification du client n'a pas pu être effectuée."
            )
        print("Modification du client réussie !")
    elif args.action == "search":
        _print_table(repository.search(args.cin, True))
    elif args.action == "list":
        _print_table(repository.list_all())
    elif args.action == "sort":
        try:
            table = repository.sorted_by("NOM")
        except (ValidationError, QueryError) as exc:
            return _fail(str(exc), SORT_FAILED)
        _print_table(table)
    elif args.action == "export":
        return _export(repository.list_all(), args.path, EXPORT_OK)
    elif args.action == "stats":
        return _stats(client_shares(connection), CLIENT_TITLE, args.path)
    return 0


def _constat(args: argparse.Namespace, connection) -> int:
    repository = ConstatRepository(connection)
    if args.action == "add":
        constat = Constat(
            args.id, args.date, args.lieu, args.type, args.description, args.signature
        )
        try:
            repository.add(constat)
        except QueryError as exc:
            return _fail(str(exc), ADD_FAILED)
        print(ADD_OK)
    elif args.action == "delete":
        try:
            repository.delete(args.id)
        except QueryError as exc:
            return _fail(
                str(exc), "La suppression du constat n'a pas pu être effectuée."
            )
        print("Suppression du constat effectuée avec succès !")
    elif args.action == "update":
        try:
            repository.update(args.id, args.date, args.lieu, args.signature)
        except QueryError as exc:
            return _fail(
                str(exc), "La modification du constat n'a pas pu être effectuée."
            )
        print("Modification du constat réussie !")
    elif args.action == "search":
        _print_table(repository.search(args.id, True))
    elif args.action == "list":
        _print_table(repository.list_all())
    elif args.action == "sort":
        try:
            table = repository.sorted_by("TYPE_CONSTAT")
        except (ValidationError, QueryError) as exc:
            return _fail(str(exc), SORT_FAILED)
        _print_table(table)
    elif args.action == "export":
        return _export(repository.list_all(), args.path, EXPORT_OK)
    elif args.action == "stats":
        return _stats(constat_shares(connection), CONSTAT_TITLE, args.path)
    return 0


def _employee(args: argparse.Namespace, connection) -> int:
    repository = EmployeRepository(connection)
    if args.action == "add":
        employe = Employe(
            args.cin,
            args.date,
            args.numero,
            args.nom,
            args.prenom,
            args.email,
            args.fonction,
            int(args.salaire),
        )
        try:
            repository.add(employe)
        except QueryError as exc:
            return _fail(str(exc), EMPLOYEE_ADD_FAILED)
        _print_table(repository.list_all())
    elif args.action == "list":
        _print_table(repository.list_all())
    elif args.action == "sort":
        table = repository.list_all()
        _print_table(Table(table.headers, sorted(table.rows, key=lambda row: row[0])))
    elif args.action == "search":
        _print_table(repository.search_by_cin(args.text))
    elif args.action == "export":
        return _export(
            repository.list_all(), args.path, EMPLOYEE_EXPORT_OK, EMPLOYEE_STYLE
        )
    return 0


def _chat(args: argparse.Namespace, connection) -> int:
    bot = ChatBot(connection)
    for message in args.messages:
        answer = bot.ask(message)
        print(f"Utilisateur:\n{message}")
        print(f"Bot:\n{answer}")
    return 0


_HANDLERS: dict[str, Callable[[argparse.Namespace, object], int]] = {
    "partner": _partner,
    "client": _client,
    "constat": _constat,
    "employee": _employee,
    "chat": _chat,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run one office command; return the exit status."""
    args = build_parser().parse_args(argv)
    try:
        connection = open_database(args.database)
        create_schema(connection)
    except QueryError as exc:
        return _fail("connection failed.", str(exc))
    try:
        return _HANDLERS[args.entity](args, connection)
    except QueryError as exc:
        return _fail(str(exc))
    finally:
        connection.close()


if __name__ == "__main__":
    sys.exit(main())
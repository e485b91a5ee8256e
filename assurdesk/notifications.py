"""Contract-end notifications and the partner search of the partner screen."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import date, datetime, time

from .db import QueryError, Table
from .partenaire import PartenaireRepository

NOTIFICATION_TITLE = "Nouvelle notification"
# Contracts ending inside this window are checked for expiry.
CONTRACT_WINDOW = (date(2022, 1, 1), date(2024, 4, 28))
# Search text this long or shorter is taken for a matricule.
MATRICULE_SEARCH_MAX_LENGTH = 5

_DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%y")


@dataclass(frozen=True)
class Notification:
    """A partner whose contract has come to an end."""

    company: str
    end_date: str

    @property
    def title(self) -> str:
        return NOTIFICATION_TITLE

    @property
    def message(self) -> str:
        return f"Entreprise: {self.company}\nDate de fin du contrat: {self.end_date}"


def parse_contract_date(text: str) -> date | None:
    """Read a contract date written as YYYY-MM-DD or dd/MM/yy; None if unreadable."""
    stripped = text.strip()
    for pattern in _DATE_FORMATS:
        try:
            return datetime.strptime(stripped, pattern).date()
        except ValueError:
            continue
    return None


def _as_naive_datetime(moment: date) -> datetime:
    if isinstance(moment, datetime):
        return moment.replace(tzinfo=None)
    return datetime.combine(moment, time())


def is_expired(now: date, end_date: date | None) -> bool:
    """True when ``now`` is after the start of ``end_date``.

    An unreadable end date counts as past, as it sorts before every real date.
    """
    if end_date is None:
        return True
    return _as_naive_datetime(now) > datetime.combine(end_date, time())


def expired_contracts(
    connection: sqlite3.Connection, now: datetime | None = None
) -> list[Notification]:
    """Notifications for contracts ending inside the window and already over."""
    moment = datetime.now() if now is None else now
    try:
        rows = connection.execute(
            "SELECT NOM_ENTREPRISE, FIN_CONTRAT FROM FOOL"
        ).fetchall()
    except sqlite3.Error as exc:
        raise QueryError(str(exc)) from exc
    first, last = CONTRACT_WINDOW
    notifications = []
    for company, end_text in rows:
        end_text = "" if end_text is None else str(end_text)
        end_date = parse_contract_date(end_text)
        if end_date is None or not first <= end_date <= last:
            continue
        if is_expired(moment, end_date):
            notifications.append(
                Notification("" if company is None else str(company), end_text)
            )
    return notifications


def search_partners(repository: PartenaireRepository, text: str) -> Table:
    """Search by matricule for short text, by company name otherwise."""
    by_matricule = len(text) <= MATRICULE_SEARCH_MAX_LENGTH
    return repository.search(text, by_matricule)
"""Proportions of constats, clients and partners by category, and their charts."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Iterable, Sequence, Union

from matplotlib.figure import Figure

from .db import QueryError

CONSTAT_TITLE = "Répartition des constats par lieu"
CLIENT_TITLE = "Répartition des clients par lieu"
SECTOR_TITLE = "Répartition des secteurs d'activité selon leur nombre "

_CONSTAT_PLACES = (("tunis", "tunis"), ("benarous", "benarous"), ("gabes", "gabes"))
_CLIENT_PLACES = (("Tunis", "tunis"), ("Djerba", "djerba"), ("Zahra", "zahra"))
_SECTORS = (
    ("Commerce", "commerce", "#CE6A6B"),
    ("IT", "it", "#212E53"),
    ("Télécommunications", "telecommunication", "#4A919E"),
    ("Education", "education", "#BED3C3"),
)


@dataclass(frozen=True)
class Share:
    """The part of a whole that one category makes up, as a fraction."""

    label: str
    value: float
    color: str | None = None


def _count(connection: sqlite3.Connection, sql: str, params: Sequence[str] = ()) -> int:
    try:
        row = connection.execute(sql, tuple(params)).fetchone()
    except sqlite3.Error as exc:
        raise QueryError(str(exc)) from exc
    return int(row[0]) if row and row[0] is not None else 0


def _shares(
    connection: sqlite3.Connection,
    table: str,
    column: str,
    categories: Iterable[tuple[str, str, str | None]],
) -> list[Share]:
    total = _count(connection, f"SELECT count(*) FROM {table}")
    shares = []
    for label, value, color in categories:
        count = _count(
            connection, f"SELECT count(*) FROM {table} WHERE {column} = ?", (value,)
        )
        # An empty table gives every category a zero share.
        shares.append(Share(label, count / total if total else 0.0, color))
    return shares


def constat_shares(connection: sqlite3.Connection) -> list[Share]:
    """Fraction of constats drawn up in Tunis, Ben Arous and Gabès."""
    return _shares(
        connection,
        "CONSTATS",
        "LIEU_CONSTAT",
        ((label, value, None) for label, value in _CONSTAT_PLACES),
    )


def client_shares(connection: sqlite3.Connection) -> list[Share]:
    """Fraction of clients living in Tunis, Djerba and Zahra."""
    return _shares(
        connection,
        "CLIENTS",
        "ADRESSE",
        ((label, value, None) for label, value in _CLIENT_PLACES),
    )


def sector_shares(connection: sqlite3.Connection) -> list[Share]:
    """Fraction of partners in each business sector, with the sector's colour."""
    return _shares(connection, "FOOL", "SECTEUR_ACTIVITE", _SECTORS)


def share_label(share: Share) -> str:
    """The share's label followed by its percentage to two decimals."""
    return f"{share.label} ({share.value * 100:.2f}%)"


def _colors(shares: Sequence[Share]) -> list[str] | None:
    colors = [share.color for share in shares]
    return colors if all(colors) else None  # type: ignore[return-value]


def _check(shares: Sequence[Share]) -> None:
    if not any(share.value > 0 for share in shares):
        raise ValueError("nothing to plot: every share is zero")


def plot_pie(
    shares: Sequence[Share], title: str, path: Union[str, "PathLike[str]"]
) -> Path:
    """Draw the shares as a pie chart into the image file at ``path``."""
    shares = list(shares)
    _check(shares)
    figure = Figure(figsize=(5.7, 5.7))
    axes = figure.add_subplot()
    axes.pie(
        [share.value for share in shares],
        labels=[share_label(share) for share in shares],
        colors=_colors(shares),
    )
    axes.set_title(title)
    target = Path(path)
    figure.savefig(target)
    return target


def plot_bars(
    shares: Sequence[Share], title: str, path: Union[str, "PathLike[str]"]
) -> Path:
    """Draw the shares as a bar chart into the image file at ``path``."""
    shares = list(shares)
    _check(shares)
    figure = Figure(figsize=(5.7, 5.7))
    axes = figure.add_subplot()
    axes.bar(
        range(len(shares)),
        [share.value for share in shares],
        color=_colors(shares),
        tick_label=[share.label for share in shares],
    )
    axes.set_title(title)
    target = Path(path)
    figure.savefig(target)
    return target
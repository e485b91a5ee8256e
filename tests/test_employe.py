from datetime import date

import pytest

from assurdesk.db import QueryError, create_schema, open_database
from assurdesk.employe import HEADERS, Employe, EmployeRepository


@pytest.fixture
def repo():
    connection = open_database(":memory:")
    create_schema(connection)
    yield EmployeRepository(connection)
    connection.close()


def _sample(cin=1001, nom="Doe"):
    return Employe(
        cin=cin,
        date_emb=date(2023, 4, 1),
        num_tel=5550,
        nom=nom,
        prenom="John",
        email_emp="john@example.com",
        fonction="agent",
        salaire=1200,
    )


def test_headers_follow_source_order(repo):
    table = repo.list_all()
    assert table.headers == (
        "Nom", "Prenom", "Email", "Salaire", "Cin", "Numero", "Fonction", "Date_Embauche"
    )
    assert len(table) == 0


def test_add_then_list(repo):
    repo.add(_sample())
    table = repo.list_all()
    assert table.headers == HEADERS
    assert list(table) == [
        ("Doe", "John", "john@example.com", "1200", "1001", "5550", "agent", "2023-04-01")
    ]


def test_duplicate_cin_raises(repo):
    repo.add(_sample())
    with pytest.raises(QueryError):
        repo.add(_sample(nom="Other"))


def test_update_changes_fields(repo):
    repo.add(_sample())
    changed = _sample(nom="Smith")
    changed.salaire = 1500
    assert repo.update(changed) == 1
    table = repo.list_all()
    assert table.column("Nom") == ["Smith"]
    assert table.column("Salaire") == ["1500"]


def test_update_unknown_cin_changes_nothing(repo):
    repo.add(_sample())
    assert repo.update(_sample(cin=2002, nom="Ghost")) == 0
    assert repo.list_all().column("Nom") == ["Doe"]


def test_delete(repo):
    repo.add(_sample())
    assert repo.delete(1001) == 1
    assert len(repo.list_all()) == 0
    assert repo.delete(1001) == 0


def test_search_fills_first_six_columns(repo):
    repo.add(_sample())
    repo.add(_sample(cin=2002, nom="Roe"))
    table = repo.search_by_cin("2002")
    assert len(table) == 1
    row = table.rows[0]
    assert row[:6] == ("Roe", "John", "john@example.com", "1200", "2002", "5550")
    assert row[6:] == ("", "")


def test_search_non_numeric_reads_as_zero(repo):
    repo.add(_sample())
    repo.add(_sample(cin=0, nom="Zero"))
    assert repo.search_by_cin("abc").column("Nom") == ["Zero"]


def test_search_trims_whitespace(repo):
    repo.add(_sample())
    assert repo.search_by_cin(" 1001 ").column("Cin") == ["1001"]
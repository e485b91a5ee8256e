import pytest

from assurdesk.client import Client, ClientRepository
from assurdesk.db import QueryError, ValidationError, create_schema, open_database

PHONE = "0" * 8


@pytest.fixture
def repo():
    connection = open_database(":memory:")
    create_schema(connection)
    return ClientRepository(connection)


def _client(cin="C1", nom="Ben", phone=PHONE, adresse="tunis"):
    return Client(cin, nom, "Ali", adresse, phone, f"{cin.lower()}@example.com")


def test_add_then_list_all(repo):
    repo.add(_client())
    table = repo.list_all()
    assert table.headers == ("CIN", "Nom", "Prénom", "Adresse", "Numéro de Téléphone", "Email")
    assert list(table) == [("C1", "Ben", "Ali", "tunis", PHONE, "c1@example.com")]


def test_cin_longer_than_twenty_rejected(repo):
    with pytest.raises(ValidationError):
        repo.add(_client(cin="X" * 21))
    assert len(repo.list_all()) == 0


def test_cin_of_twenty_accepted(repo):
    repo.add(_client(cin="X" * 20))
    assert repo.list_all().column("CIN") == ["X" * 20]


@pytest.mark.parametrize("phone", ["0" * 7, "0" * 16, ""])
def test_bad_phone_length_rejected(phone):
    with pytest.raises(ValidationError):
        _client(phone=phone).validate()


@pytest.mark.parametrize("phone", ["0" * 8, "0" * 15])
def test_phone_length_bounds_accepted(repo, phone):
    repo.add(_client(phone=phone))
    assert repo.list_all().column("Numéro de Téléphone") == [phone]


def test_duplicate_cin_raises_query_error(repo):
    repo.add(_client())
    with pytest.raises(QueryError):
        repo.add(_client())


def test_delete_removes_client(repo):
    repo.add(_client("C1"))
    repo.add(_client("C2"))
    assert repo.delete("C1") == 1
    assert repo.list_all().column("CIN") == ["C2"]


def test_delete_missing_client_changes_nothing(repo):
    repo.add(_client())
    assert repo.delete("nobody") == 0
    assert len(repo.list_all()) == 1


def test_update_changes_contact_fields(repo):
    repo.add(_client())
    new_phone = "1" * 10
    assert repo.update("C1", new_phone, "djerba", "new@example.com") == 1
    row = repo.list_all().rows[0]
    assert row == ("C1", "Ben", "Ali", "djerba", new_phone, "new@example.com")


def test_search_by_cin(repo):
    repo.add(_client("C1"))
    repo.add(_client("C2", nom="Zed"))
    table = repo.search("C2", True)
    assert table.headers == ("CIN", "NOM", "PRENOM", "ADRESSE", " NUMTEL,", "EMAIL")
    assert table.column("NOM") == ["Zed"]


def test_search_without_match_is_empty(repo):
    repo.add(_client())
    assert len(repo.search("missing", True)) == 0


def test_search_other_criterion_rejected(repo):
    with pytest.raises(ValidationError):
        repo.search("C1", False)


def test_sorted_by_name(repo):
    for cin, nom in [("C1", "Mourad"), ("C2", "Amal"), ("C3", "Zied")]:
        repo.add(_client(cin, nom=nom))
    table = repo.sorted_by("NOM")
    names = table.column("NOM")
    assert names == sorted(names)
    assert table.headers == ("CIN", "NOM", "PRENOM", "ADRESSE", "NUMTEL", "EMAIL")
    assert len(table) == 3


def test_sorted_by_other_column_rejected(repo):
    with pytest.raises(ValidationError):
        repo.sorted_by("EMAIL")
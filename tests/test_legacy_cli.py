import pytest

from assurdesk.legacy_cli import build_parser, main


@pytest.fixture
def db(tmp_path):
    return str(tmp_path / "partners.db")


def _add(db, matricule, duree="12", telephone="29899854", nom="Dabchy"):
    return main(
        [
            "--database", db, "add", matricule,
            "--nom", nom, "--telephone", telephone, "--duree", duree,
        ]
    )


def _rows(out):
    return [line.split("\t") for line in out.strip().splitlines()[1:]]


def test_build_parser_reads_add_options():
    args = build_parser().parse_args(["add", "105p", "--nom", "Dabchy"])
    assert args.command == "add"
    assert args.matricule == "105p"
    assert args.nom == "Dabchy"
    assert args.database == "projetons.db"


def test_add_then_list(db, capsys):
    assert _add(db, "105p") == 0
    assert "Ajout effectué avec succès!" in capsys.readouterr().out
    assert main(["--database", db, "list"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0].split("\t")[0] == "matriculeFiscale"
    assert _rows(out)[0][:2] == ["105p", "Dabchy"]


def test_add_rejects_short_phone(db, capsys):
    assert _add(db, "105p", telephone="123") == 1
    err = capsys.readouterr().err
    assert "Le numéro de téléphone doit contenir entre 8 et 15 chiffres." in err
    assert "L'ajout n'a pas pu être effectué." in err


def test_add_duplicate_fails(db, capsys):
    assert _add(db, "105p") == 0
    assert _add(db, "105p") == 1


def test_delete_removes_partner(db, capsys):
    _add(db, "105p")
    assert main(["--database", db, "delete", "105p"]) == 0
    assert "Suppression effectuée avec succès!" in capsys.readouterr().out
    main(["--database", db, "search", "105p"])
    assert _rows(capsys.readouterr().out) == []


def test_update_duration(db, capsys):
    _add(db, "105p", duree="12")
    assert main(["--database", db, "update-duration", "12", "24"]) == 0
    capsys.readouterr()
    main(["--database", db, "search", "105p"])
    assert _rows(capsys.readouterr().out)[0][4] == "24"


def test_sort_by_duration(db, capsys):
    _add(db, "A", duree="3")
    _add(db, "B", duree="1")
    _add(db, "C", duree="2")
    capsys.readouterr()
    assert main(["--database", db, "sort"]) == 0
    durations = [row[4] for row in _rows(capsys.readouterr().out)]
    assert durations == sorted(durations)
    assert len(durations) == 3


def test_sort_rejects_other_column(db, capsys):
    assert main(["--database", db, "sort", "--column", "NOM"]) == 1
    assert "Échec de la création du modèle de tri." in capsys.readouterr().err


def test_export_writes_pdf(db, tmp_path, capsys):
    _add(db, "105p")
    target = tmp_path / "liste.pdf"
    assert main(["--database", db, "export", str(target)]) == 0
    assert target.read_bytes().startswith(b"%PDF")


def test_connection_failure(tmp_path, capsys):
    bad = str(tmp_path / "missing" / "dir" / "x.db")
    assert main(["--database", bad, "list"]) == 1
    assert "connection failed." in capsys.readouterr().err
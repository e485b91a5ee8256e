import pytest

from assurdesk.chat import GREETING
from assurdesk.cli import ADD_OK, IMAGE_MISSING, build_parser, main
from assurdesk.report import NO_DATA_MESSAGE


@pytest.fixture
def run(tmp_path):
    database = str(tmp_path / "office.db")

    def _run(*args):
        return main(["--database", database, *args])

    return _run


def _lines(capsys):
    return capsys.readouterr().out.splitlines()


def test_client_add_then_list(run, capsys):
    assert run("client", "add", "C100", "--nom", "Ben", "--telephone", "12345678") == 0
    assert ADD_OK in capsys.readouterr().out
    assert run("client", "list") == 0
    lines = _lines(capsys)
    assert len(lines) == 2
    assert lines[1].split("\t")[:2] == ["C100", "Ben"]


def test_client_add_rejects_short_phone(run, capsys):
    assert run("client", "add", "C1", "--telephone", "123") == 1
    err = capsys.readouterr().err
    assert "entre 8 et 15" in err
    run("client", "list")
    assert len(_lines(capsys)) == 1


def test_client_update_then_search(run, capsys):
    run("client", "add", "C7", "--telephone", "12345678")
    capsys.readouterr()
    assert run(
        "client", "update", "C7", "--telephone", "87654321",
        "--adresse", "tunis", "--email", "someone@example.com",
    ) == 0
    capsys.readouterr()
    run("client", "search", "C7")
    row = _lines(capsys)[1].split("\t")
    assert row[3] == "tunis"
    assert row[4] == "87654321"
    assert row[5] == "someone@example.com"


def test_client_delete_removes_row(run, capsys):
    run("client", "add", "C9", "--telephone", "12345678")
    run("client", "delete", "C9")
    capsys.readouterr()
    run("client", "search", "C9")
    assert len(_lines(capsys)) == 1


def test_client_sort_orders_by_name(run, capsys):
    run("client", "add", "C1", "--nom", "Zed", "--telephone", "12345678")
    run("client", "add", "C2", "--nom", "Alice", "--telephone", "12345678")
    capsys.readouterr()
    run("client", "sort")
    names = [line.split("\t")[1] for line in _lines(capsys)[1:]]
    assert names == ["Alice", "Zed"]


def test_constat_add_update_search(run, capsys):
    assert run("constat", "add", "K1", "--lieu", "gabes", "--type", "auto") == 0
    assert run("constat", "update", "K1", "--date", "2024-01-02", "--lieu", "tunis",
               "--signature", "ok") == 0
    capsys.readouterr()
    run("constat", "search", "K1")
    row = _lines(capsys)[1].split("\t")
    assert row == ["K1", "2024-01-02", "tunis", "auto", "", "ok"]


def test_partner_add_needs_image(run, capsys):
    assert run("partner", "add", "M1", "--telephone", "12345678") == 1
    assert IMAGE_MISSING in capsys.readouterr().err


def test_partner_add_update_and_short_search(run, capsys, tmp_path):
    image = tmp_path / "logo.png"
    image.write_bytes(b"image-bytes")
    assert run("partner", "add", "M1", "--nom", "Acme", "--telephone", "12345678",
               "--image", str(image)) == 0
    assert run("partner", "update", "M1", "--nom", "Acme2", "--adresse", "lac",
               "--telephone", "87654321") == 0
    capsys.readouterr()
    run("partner", "search", "M1")
    row = _lines(capsys)[1].split("\t")
    assert row[:4] == ["M1", "Acme2", "lac", "87654321"]


def test_partner_notify_reports_expired_contract(run, capsys, tmp_path):
    image = tmp_path / "logo.png"
    image.write_bytes(b"x")
    run("partner", "add", "M2", "--nom", "Oldco", "--telephone", "12345678",
        "--fin", "2023-01-01", "--image", str(image))
    capsys.readouterr()
    assert run("partner", "notify", "--now", "2024-01-01") == 0
    out = capsys.readouterr().out
    assert "Entreprise: Oldco" in out
    assert "Nouvelle notification" in out


def test_employee_add_and_search(run, capsys):
    assert run("employee", "add", "42", "--nom", "Nour", "--salaire", "1500.7") == 0
    capsys.readouterr()
    run("employee", "search", "42")
    row = _lines(capsys)[1].split("\t")
    assert row[0] == "Nour"
    assert row[3] == "1500"
    assert row[4] == "42"


def test_employee_sort_orders_by_name(run, capsys):
    run("employee", "add", "1", "--nom", "Yasmine")
    run("employee", "add", "2", "--nom", "Amine")
    capsys.readouterr()
    run("employee", "sort")
    names = [line.split("\t")[0] for line in _lines(capsys)[1:]]
    assert names == ["Amine", "Yasmine"]


def test_employee_export_empty_fails(run, capsys, tmp_path):
    target = tmp_path / "staff.pdf"
    assert run("employee", "export", str(target)) == 1
    assert NO_DATA_MESSAGE in capsys.readouterr().err
    assert not target.exists()


def test_client_export_writes_pdf(run, tmp_path):
    run("client", "add", "C1", "--telephone", "12345678")
    target = tmp_path / "clients.pdf"
    assert run("client", "export", str(target)) == 0
    assert target.read_bytes().startswith(b"%PDF")


def test_chat_greets(run, capsys):
    assert run("chat", "Bonjour") == 0
    assert f"Bot:\n{GREETING}" in capsys.readouterr().out


def test_client_stats(run, capsys, tmp_path):
    run("client", "add", "C1", "--adresse", "tunis", "--telephone", "12345678")
    capsys.readouterr()
    target = tmp_path / "clients.png"
    assert run("client", "stats", str(target)) == 0
    assert "Tunis (100.00%)" in capsys.readouterr().out
    assert target.exists()


def test_stats_on_empty_table_fails(run, tmp_path):
    target = tmp_path / "empty.png"
    assert run("constat", "stats", str(target)) == 1
    assert not target.exists()


def test_parser_requires_entity():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
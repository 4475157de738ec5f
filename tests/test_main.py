"""End-to-end tests for the command line, against a temporary data directory."""

import json

import pytest

import main


@pytest.fixture
def cli(monkeypatch, tmp_path):
    monkeypatch.setenv("QUOTEBOOK_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("QUOTEBOOK_OUTPUT_DIR", str(tmp_path / "output"))
    monkeypatch.setenv("QUOTEBOOK_SETTLE_DELAY", "0")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    return tmp_path


def _run(capsys, *argv: str) -> str:
    main.main(list(argv))
    return capsys.readouterr().out


def _add_address(capsys) -> str:
    out = _run(
        capsys,
        "add-address",
        "--name", "ACME s.r.o.",
        "--street", "Krátká",
        "--house-number", "3",
        "--city", "Brno",
        "--postal-code", "602 00",
        "--country", "Česko",
    )
    return out.split()[-1]


def test_address_and_template_round_trip_through_files(cli, capsys) -> None:
    """Saved entries land in JSON slot files and are listed again."""
    address_id = _add_address(capsys)
    template_out = _run(capsys, "add-template", "--description", "Konzultace (1 h)", "--unit-price", "1200")
    template_id = template_out.split()[-1]

    saved = json.loads((cli / "data" / "clientAddresses.json").read_text(encoding="utf-8"))
    assert saved[0]["id"] == address_id
    assert saved[0]["houseNumber"] == "3"

    assert "ACME s.r.o." in _run(capsys, "addresses")
    assert template_id in _run(capsys, "templates")

    assert _run(capsys, "delete-template", template_id).strip() == "Deleted."
    assert _run(capsys, "delete-template", template_id).strip() == "Nothing to delete."


def test_new_quote_uses_client_and_templates(cli, capsys) -> None:
    """A quote built from an address and a template is listed with its total."""
    address_id = _add_address(capsys)
    template_id = _run(capsys, "add-template", "--description", "Konzultace", "--unit-price", "1000").split()[-1]

    out = _run(capsys, "new-quote", "--client", address_id, "--item", template_id, "--date", "2024-05-17")
    assert out.startswith("Created quote 0001")

    listing = json.loads(_run(capsys, "list", "--json"))
    assert len(listing) == 1
    assert listing[0]["quote_number"] == "0001"
    assert listing[0]["client"] == "ACME s.r.o."
    assert listing[0]["total"] == pytest.approx(1210.0)

    shown = _run(capsys, "show", listing[0]["id"])
    assert "Konzultace" in shown
    assert "Krátká 3" in shown

    assert _run(capsys, "next-number").strip() == "0002"


def test_list_filters_and_delete(cli, capsys) -> None:
    _run(capsys, "new-quote", "--number", "0007", "--date", "2024-01-02")
    _run(capsys, "new-quote", "--number", "0012", "--date", "2024-03-04")

    numbers = [row["quote_number"] for row in json.loads(_run(capsys, "list", "--json"))]
    assert numbers == ["0012", "0007"]
    filtered = json.loads(_run(capsys, "list", "--json", "--number", "07"))
    assert [row["quote_number"] for row in filtered] == ["0007"]
    assert _run(capsys, "list", "--client", "nobody").strip() == "No quotes match."

    assert _run(capsys, "delete-quote", filtered[0]["id"]).strip() == "Deleted."
    assert _run(capsys, "next-number").strip() == "0013"


def test_empty_listing(cli, capsys) -> None:
    assert _run(capsys, "list").strip() == "No quotes yet."


def test_invalid_input_exits_with_problems(cli, capsys) -> None:
    """Validation failures end the command with the list of problems."""
    with pytest.raises(SystemExit) as excinfo:
        main.main(["new-quote", "--tax-rate=-5"])
    assert "tax_rate must not be negative" in str(excinfo.value.code)

    with pytest.raises(SystemExit) as excinfo:
        main.main(
            ["add-address", "--name=", "--street=a", "--house-number=1", "--city=b", "--postal-code=1", "--country=c"]
        )
    assert "name is required" in str(excinfo.value.code)


def test_unknown_id_exits_with_message(cli) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main.main(["show", "id_missing"])
    assert "id_missing" in str(excinfo.value.code)


def test_suggestions_without_key_print_message(cli, capsys) -> None:
    """Missing credentials are reported, not raised."""
    assert _run(capsys, "suggest-terms").strip() == "API klíč není nakonfigurován."
    assert _run(capsys, "suggest-description", "web").strip() == "API klíč není nakonfigurován."


def test_export_writes_pdf(cli, capsys) -> None:
    pytest.importorskip("reportlab")
    pytest.importorskip("PIL")
    _run(capsys, "new-quote", "--number", "2024/5", "--date", "2024-05-17")
    quote_id = json.loads(_run(capsys, "list", "--json"))[0]["id"]

    out = _run(capsys, "export", quote_id)

    path = cli / "output" / "Nabidka-2024-5.pdf"
    assert str(path) in out
    assert path.read_bytes().startswith(b"%PDF")


def _quote_id(out: str) -> str:
    return out.strip().rsplit("(", 1)[-1].rstrip(")")


def _stored_quote(cli, quote_id: str) -> dict:
    quotes = json.loads((cli / "data" / "quotes.json").read_text(encoding="utf-8"))
    return next(record for record in quotes if record["id"] == quote_id)


def test_edit_quote_changes_lines_client_and_fields(cli, capsys) -> None:
    """Editing keeps the id and applies line, address and field changes."""
    address_id = _add_address(capsys)
    template_id = _run(capsys, "add-template", "--description", "Konzultace", "--unit-price", "1000").split()[-1]
    quote_id = _quote_id(_run(capsys, "new-quote", "--add-line", "Web", "2", "1000", "--date", "2024-05-17"))

    out = _run(
        capsys,
        "edit-quote", quote_id,
        "--client", address_id,
        "--add-item", template_id,
        "--update-line", "1", "quantity", "3",
        "--notes", "Cena platí 30 dní.",
    )
    assert out.startswith("Updated quote 0001")

    stored = _stored_quote(cli, quote_id)
    assert [(item["description"], item["quantity"]) for item in stored["lineItems"]] == [("Web", 3.0), ("Konzultace", 1)]
    assert stored["toName"] == "ACME s.r.o."
    assert stored["notes"] == "Cena platí 30 dní."
    assert json.loads(_run(capsys, "list", "--json"))[0]["total"] == pytest.approx(4840.0)

    _run(capsys, "edit-quote", quote_id, "--remove-line", "1", "--update-line", "2", "description", "Konzultace (1 h)")
    stored = _stored_quote(cli, quote_id)
    assert [item["description"] for item in stored["lineItems"]] == ["Konzultace (1 h)"]
    assert len(json.loads(_run(capsys, "list", "--json"))) == 1


def test_edit_quote_sets_and_removes_logo(cli, capsys, tmp_path) -> None:
    logo = tmp_path / "logo.png"
    logo.write_bytes(b"\x89PNG\r\n\x1a\nfake")
    quote_id = _quote_id(_run(capsys, "new-quote"))

    _run(capsys, "edit-quote", quote_id, "--logo", str(logo))
    assert _stored_quote(cli, quote_id)["logoImage"].startswith("data:image/png;base64,")

    _run(capsys, "edit-quote", quote_id, "--no-logo")
    assert "logoImage" not in _stored_quote(cli, quote_id)


def test_edit_quote_rejects_bad_input(cli, capsys) -> None:
    """Unknown ids, missing lines and invalid values end with a message."""
    quote_id = _quote_id(_run(capsys, "new-quote"))

    with pytest.raises(SystemExit) as excinfo:
        main.main(["edit-quote", "id_missing", "--notes", "x"])
    assert "id_missing" in str(excinfo.value.code)

    with pytest.raises(SystemExit) as excinfo:
        main.main(["edit-quote", quote_id, "--update-line", "5", "quantity", "1"])
    assert "no line 5" in str(excinfo.value.code)

    with pytest.raises(SystemExit) as excinfo:
        main.main(["edit-quote", quote_id, "--update-line", "1", "unit_price", "-3"])
    assert "line 1: unit_price must not be negative" in str(excinfo.value.code)


def test_non_finite_tax_rate_is_rejected(cli, capsys) -> None:
    """NaN never reaches the store, so listing keeps working."""
    with pytest.raises(SystemExit) as excinfo:
        main.main(["new-quote", "--tax-rate", "nan"])
    assert "tax_rate must be a finite number" in str(excinfo.value.code)
    assert _run(capsys, "list").strip() == "No quotes yet."


def test_edit_address_and_template(cli, capsys) -> None:
    address_id = _add_address(capsys)
    template_id = _run(capsys, "add-template", "--description", "Konzultace", "--unit-price", "1000").split()[-1]

    assert _run(capsys, "edit-address", address_id, "--city", "Praha").strip() == f"Updated address {address_id}"
    addresses = json.loads((cli / "data" / "clientAddresses.json").read_text(encoding="utf-8"))
    assert [(a["id"], a["name"], a["city"]) for a in addresses] == [(address_id, "ACME s.r.o.", "Praha")]

    _run(capsys, "edit-template", template_id, "--unit-price", "1500")
    templates = json.loads((cli / "data" / "quoteItemTemplates.json").read_text(encoding="utf-8"))
    assert [(t["description"], t["unitPrice"]) for t in templates] == [("Konzultace", 1500.0)]

    with pytest.raises(SystemExit) as excinfo:
        main.main(["edit-address", address_id, "--name="])
    assert "name is required" in str(excinfo.value.code)


def test_show_pdf_exports_the_printed_preview(cli, capsys) -> None:
    """``show --pdf`` prints the quote and saves the same preview as PDF."""
    pytest.importorskip("reportlab")
    pytest.importorskip("PIL")
    quote_id = _quote_id(_run(capsys, "new-quote", "--number", "0042", "--date", "2024-05-17"))

    out = _run(capsys, "show", quote_id, "--pdf", "--output-dir", str(cli / "previews"))

    path = cli / "previews" / "Nabidka-0042.pdf"
    assert "0042" in out
    assert f"Saved {path}" in out
    assert path.read_bytes().startswith(b"%PDF")

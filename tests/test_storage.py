"""Unit tests for the JSON file slots."""

from quotebook.store import Draft, EntityStore, JsonFileStorage


def test_missing_slot_reads_as_none(tmp_path) -> None:
    """A slot that was never written has no payload."""
    storage = JsonFileStorage(tmp_path / "data")
    assert storage.read("quotes") is None


def test_write_replaces_the_slot_file(tmp_path) -> None:
    """Writes land in <key>.json and leave no temporary files behind."""
    storage = JsonFileStorage(tmp_path / "data")
    storage.write("quotes", "[1]")
    storage.write("quotes", "[1, 2]")

    assert storage.read("quotes") == "[1, 2]"
    assert sorted(path.name for path in (tmp_path / "data").iterdir()) == ["quotes.json"]


def test_store_round_trip_on_disk(tmp_path, sample_quote) -> None:
    """A store reopened on the same directory sees the saved quotes."""
    store = EntityStore(JsonFileStorage(tmp_path)).init()
    saved = store.quotes.save(Draft(sample_quote))

    reopened = EntityStore(JsonFileStorage(tmp_path)).init()
    assert reopened.quotes.list() == (saved,)


def test_corrupt_file_loads_as_empty(tmp_path) -> None:
    """A damaged slot file yields an empty collection."""
    (tmp_path / "quotes.json").write_text("{not json", encoding="utf-8")
    store = EntityStore(JsonFileStorage(tmp_path)).init()
    assert store.quotes.list() == ()

from __future__ import annotations

from convene.storage.local import LocalFileStorage
from convene.storage.persistence import PersistenceEngine
from convene.store.event_store import EventStore


def _engine(path) -> PersistenceEngine:
    return PersistenceEngine(LocalFileStorage(path))


def _populated_store() -> EventStore:
    store = EventStore()
    store.create_event(2, "Jazz | Blues Night", "14/02/2026", "20:00", "Auditorium", 2)
    store.create_event(1, "Career Fair", "03/03/2026", "10:00", "Hall A|B", 1)
    store.create_event(3, "Cancelled Talk", "01/01/2026", "12:00", "Room 5", 3)
    for participant in ["dana", "eli", "fay", "gus"]:
        store.register(2, participant)
    store.register(1, "hal")
    store.register(1, "ivy")
    store.register(3, "jo")
    store.cancel_event(3)
    return store


def test_load_missing_file_is_fresh_start(tmp_path):
    store = EventStore()

    report = _engine(tmp_path / "absent" / "convene_data.txt").load(store)

    assert report.ok
    assert report.events == 0
    assert report.diagnostics == []
    assert store.count_total() == 0


def test_save_creates_directory_and_writes_records(tmp_path):
    path = tmp_path / "nested" / "data" / "convene_data.txt"

    result = _engine(path).save(_populated_store())

    assert result.ok
    assert result.events == 3
    assert path.read_text(encoding="utf-8").splitlines() == [
        "EVENT|2|Jazz \\| Blues Night|14/02/2026|20:00|Auditorium|2|false",
        "REG|2|dana",
        "REG|2|eli",
        "WAIT|2|fay",
        "WAIT|2|gus",
        "EVENT|1|Career Fair|03/03/2026|10:00|Hall A\\|B|1|false",
        "REG|1|hal",
        "WAIT|1|ivy",
        "EVENT|3|Cancelled Talk|01/01/2026|12:00|Room 5|3|true",
        "REG|3|jo",
    ]


def test_round_trip_preserves_events_and_order(tmp_path):
    path = tmp_path / "convene_data.txt"
    original = _populated_store()
    _engine(path).save(original)

    restored = EventStore()
    report = _engine(path).load(restored)

    assert report.ok
    assert report.diagnostics == []
    assert report.events == 3
    assert report.registrations == 4
    assert report.waitlisted == 3
    assert restored.list_all() == original.list_all()

    # Restored events keep working as live entities.
    assert restored.cancel_registration(2, "dana").promoted == "fay"


def test_save_overwrites_previous_contents(tmp_path):
    path = tmp_path / "convene_data.txt"
    engine = _engine(path)
    store = _populated_store()
    engine.save(store)

    smaller = EventStore()
    smaller.create_event(9, "Only One", "01/01/2026", "09:00", "Gym", 1)
    engine.save(smaller)

    assert path.read_text(encoding="utf-8") == "EVENT|9|Only One|01/01/2026|09:00|Gym|1|false\n"


def test_corrupted_reg_line_is_skipped_with_one_diagnostic(tmp_path):
    path = tmp_path / "convene_data.txt"
    path.write_text(
        "\n".join(
            [
                "EVENT|1|Career Fair|03/03/2026|10:00|Hall|2|false",
                "REG|1|hal",
                "REG|one|ivy",
                "WAIT|1|jo",
                "",
                "EVENT|2|Chess|04/03/2026|18:00|Club|1|false",
                "REG|2|kim",
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    store = EventStore()

    report = _engine(path).load(store)

    assert report.ok
    assert len(report.diagnostics) == 1
    assert report.diagnostics[0].line_number == 3
    assert report.diagnostics[0].kind == "malformed_record"
    assert store.get_event(1).registered == ("hal",)
    assert store.get_event(1).waitlist == ("jo",)
    assert store.get_event(2).registered == ("kim",)


def test_load_reports_each_bad_line_and_keeps_going(tmp_path):
    path = tmp_path / "convene_data.txt"
    path.write_text(
        "\n".join(
            [
                "REG|1|early",
                "EVENT|1|Career Fair|03/03/2026|10:00|Hall|1|false",
                "NOTE|1|hello",
                "EVENT|1|Duplicate|03/03/2026|10:00|Hall|1|false",
                "REG|1|hal",
                "REG|1|hal",
                "REG|1|ivy",
                "WAIT|1|hal",
                "WAIT|7|zed",
                "EVENT|2|Broken|03/03/2026|10:00|Hall|x|false",
            ]
        ),
        encoding="utf-8",
    )
    store = EventStore()

    report = _engine(path).load(store)

    assert report.ok
    assert [(d.line_number, d.kind) for d in report.diagnostics] == [
        (1, "dangling_record"),
        (3, "unknown_record_kind"),
        (4, "duplicate_event"),
        (6, "rejected_membership"),
        (7, "rejected_membership"),
        (8, "rejected_membership"),
        (9, "dangling_record"),
        (10, "malformed_record"),
    ]
    view = store.get_event(1)
    assert view.name == "Career Fair"
    assert view.registered == ("hal",)
    assert view.waitlist == ()
    assert store.count_total() == 1


def test_failed_save_leaves_previous_file_untouched(tmp_path, monkeypatch):
    path = tmp_path / "convene_data.txt"
    engine = _engine(path)
    engine.save(_populated_store())
    before = path.read_text(encoding="utf-8")

    def _boom(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("convene.storage.local.os.replace", _boom)
    store = EventStore()
    store.create_event(5, "New", "01/01/2026", "09:00", "Gym", 1)

    result = engine.save(store)

    assert result.ok is False
    assert "disk full" in result.error
    assert path.read_text(encoding="utf-8") == before
    assert [p.name for p in tmp_path.iterdir()] == ["convene_data.txt"]


def test_unreadable_storage_reports_failure(tmp_path):
    path = tmp_path / "convene_data.txt"
    path.mkdir()
    store = EventStore()

    report = _engine(path).load(store)

    assert report.ok is False
    assert report.error
    assert store.count_total() == 0


def test_round_trip_keeps_participant_whitespace(tmp_path):
    path = tmp_path / "convene_data.txt"
    original = EventStore()
    original.create_event(1, "Padded", "01/01/2026", "09:00", "Hall", 2)
    for participant in ["A", "A ", " B", "C  "]:
        original.register(1, participant)
    _engine(path).save(original)

    restored = EventStore()
    report = _engine(path).load(restored)

    assert report.diagnostics == []
    assert restored.get_event(1).registered == ("A", "A ")
    assert restored.get_event(1).waitlist == (" B", "C  ")
    assert restored.list_all() == original.list_all()

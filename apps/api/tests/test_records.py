from __future__ import annotations

import pytest

from convene.models.event import EventView
from convene.storage.records import (
    EventRecord,
    MalformedRecord,
    MembershipRecord,
    RecordKind,
    UnknownRecordKind,
    encode_event,
    escape_field,
    parse_line,
    split_fields,
)


def _view(**overrides) -> EventView:
    fields = dict(
        id=7,
        name="Open Day",
        date="01/09/2026",
        time="08:15",
        location="Quad",
        capacity=2,
        registered=("alice", "bob"),
        waitlist=("carol",),
        cancelled=False,
    )
    fields.update(overrides)
    return EventView(**fields)


def test_encode_event_writes_event_then_reg_then_wait():
    assert encode_event(_view()) == [
        "EVENT|7|Open Day|01/09/2026|08:15|Quad|2|false",
        "REG|7|alice",
        "REG|7|bob",
        "WAIT|7|carol",
    ]


def test_encode_escapes_separator_in_text_fields():
    lines = encode_event(_view(name="Rock|Paper", location="A|B", registered=(), waitlist=(), cancelled=True))

    assert lines == ["EVENT|7|Rock\\|Paper|01/09/2026|08:15|A\\|B|2|true"]


def test_split_fields_unescapes_separator():
    assert split_fields("EVENT|1|a\\|b|c") == ["EVENT", "1", "a|b", "c"]
    assert split_fields("REG|1|back\\slash") == ["REG", "1", "back\\slash"]
    assert escape_field("x|y|z") == "x\\|y\\|z"


def test_parse_event_record():
    record = parse_line("EVENT|3|Rock\\|Paper|01/09/2026|08:15|Quad|25|true")

    assert record == EventRecord(
        id=3,
        name="Rock|Paper",
        date="01/09/2026",
        time="08:15",
        location="Quad",
        capacity=25,
        cancelled=True,
    )


def test_parse_membership_records():
    assert parse_line("REG|3|alice") == MembershipRecord(RecordKind.REG, 3, "alice")
    assert parse_line("WAIT|3|bob") == MembershipRecord(RecordKind.WAIT, 3, "bob")


@pytest.mark.parametrize(
    "line",
    [
        "EVENT|1|Name|01/01/2026|09:00|Hall|5",
        "EVENT|x|Name|01/01/2026|09:00|Hall|5|false",
        "EVENT|1|Name|01/01/2026|09:00|Hall|five|false",
        "EVENT|1|Name|01/01/2026|09:00|Hall|5|maybe",
        "EVENT|0|Name|01/01/2026|09:00|Hall|5|false",
        "EVENT|1|Name|01/01/2026|09:00|Hall|-2|false",
        "REG|1",
        "REG|abc|alice",
        "WAIT|1|alice|extra",
        "WAIT|1|",
    ],
)
def test_parse_rejects_malformed_lines(line):
    with pytest.raises(MalformedRecord):
        parse_line(line)


def test_parse_rejects_unknown_kind():
    with pytest.raises(UnknownRecordKind) as excinfo:
        parse_line("USER|1|alice")

    assert excinfo.value.kind == "USER"

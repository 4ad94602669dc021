from __future__ import annotations

from convene.models.event import Event, ParticipantState


def _event(capacity: int = 2) -> Event:
    return Event(
        id=1,
        name="Robotics Expo",
        date="12/05/2026",
        time="10:00",
        location="Hall A",
        capacity=capacity,
    )


def test_add_participant_respects_capacity_and_uniqueness():
    event = _event(capacity=1)

    assert event.add_participant("alice") is True
    assert event.add_participant("alice") is False
    assert event.add_participant("bob") is False
    assert event.registered == ["alice"]
    assert event.has_space is False


def test_waitlist_rejects_existing_members():
    event = _event(capacity=1)
    event.add_participant("alice")

    assert event.add_to_waitlist("alice") is False
    assert event.add_to_waitlist("bob") is True
    assert event.add_to_waitlist("bob") is False
    assert list(event.waitlist) == ["bob"]


def test_promote_next_takes_waitlist_head_only_when_seat_is_free():
    event = _event(capacity=1)
    event.add_participant("alice")
    event.add_to_waitlist("bob")
    event.add_to_waitlist("carol")

    assert event.promote_next() is None

    event.remove_participant("alice")
    assert event.promote_next() == "bob"
    assert event.registered == ["bob"]
    assert list(event.waitlist) == ["carol"]


def test_remove_unknown_participant_returns_false():
    event = _event()

    assert event.remove_participant("ghost") is False
    assert event.remove_from_waitlist("ghost") is False


def test_waitlist_position_is_one_based():
    event = _event(capacity=1)
    event.add_participant("alice")
    event.add_to_waitlist("bob")
    event.add_to_waitlist("carol")

    assert event.waitlist_position("bob") == 1
    assert event.waitlist_position("carol") == 2
    assert event.waitlist_position("alice") is None


def test_snapshot_is_detached_copy():
    event = _event(capacity=1)
    event.add_participant("alice")
    event.add_to_waitlist("bob")

    view = event.snapshot()
    event.remove_participant("alice")
    event.name = "Renamed"

    assert view.registered == ("alice",)
    assert view.waitlist == ("bob",)
    assert view.name == "Robotics Expo"
    assert view.registered_count == 1
    assert view.waitlist_count == 1
    assert view.available_seats == 0
    assert view.has_space is False


def test_view_state_of():
    event = _event(capacity=1)
    event.add_participant("alice")
    event.add_to_waitlist("bob")
    view = event.snapshot()

    assert view.state_of("alice") is ParticipantState.REGISTERED
    assert view.state_of("bob") is ParticipantState.WAITLISTED
    assert view.state_of("carol") is ParticipantState.UNREGISTERED

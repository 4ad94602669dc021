from convene.models.event import Event, EventView, ParticipantState

__all__ = ["Event", "EventView", "ParticipantState"]

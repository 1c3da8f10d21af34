from datetime import datetime, timezone

from notekeeper.client.notifications import ChannelState, NotificationChannel
from notekeeper.client.state import NotesState
from notekeeper.schemas import Note


def note(note_id, title="t", content="c"):
    return Note(id=note_id, title=title, content=content, created_at=datetime(2025, 1, 1, tzinfo=timezone.utc))


class TestNotesState:
    def test_replace_all_discards_previous_state(self):
        state = NotesState([note(1), note(2)])
        state.replace_all([note(3)])
        assert [n.id for n in state.notes] == [3]

    def test_append_keeps_insertion_order(self):
        state = NotesState()
        for i in (5, 2, 9):
            state.append(note(i))
        assert [n.id for n in state.notes] == [5, 2, 9]
        assert [n.id for n in state.newest_first()] == [9, 2, 5]

    def test_replace_by_id_preserves_position(self):
        state = NotesState([note(1), note(2), note(3)])
        assert state.replace(note(2, title="edited")) is True
        assert [n.id for n in state.notes] == [1, 2, 3]
        assert state.get(2).title == "edited"

    def test_replace_unknown_id_is_ignored(self):
        state = NotesState([note(1)])
        assert state.replace(note(7)) is False
        assert 7 not in state

    def test_remove(self):
        state = NotesState([note(1), note(2)])
        assert state.remove(1).id == 1
        assert state.remove(1) is None
        assert len(state) == 1

    def test_search_slot_reset(self):
        state = NotesState()
        state.search.result = note(1)
        state.search.error = "x"
        state.search.reset("abc")
        assert state.search.query == "abc"
        assert state.search.result is None
        assert state.search.error is None


class TestNotificationChannel:
    def test_starts_hidden(self, clock):
        channel = NotificationChannel(clock=clock)
        assert channel.state is ChannelState.HIDDEN
        assert channel.current is None

    def test_visible_for_three_seconds(self, clock):
        channel = NotificationChannel(duration=3.0, clock=clock)
        channel.success("Note added")
        assert channel.visible
        assert channel.current.text == "Note added"

        clock.advance(2.5)
        assert channel.visible
        clock.advance(0.5)
        assert channel.state is ChannelState.HIDDEN

    def test_new_notification_preempts_and_restarts_timer(self, clock):
        channel = NotificationChannel(duration=3.0, clock=clock)
        channel.success("first")
        clock.advance(2.0)
        channel.error("second")
        assert channel.current.text == "second"
        assert channel.current.kind == "error"

        clock.advance(2.0)
        assert channel.current.text == "second"
        clock.advance(1.0)
        assert channel.current is None

    def test_dismiss(self, clock):
        channel = NotificationChannel(clock=clock)
        channel.info("hello")
        channel.dismiss()
        assert not channel.visible

"""Tests for loop reset and moment ingestion."""

from nihilism.loops import append_moment, reset_loop
from nihilism.memory import record_choice
from nihilism.models import create_player
from tests.helpers import moment, player_with


class TestResetLoop:
    def test_increments_total_loops_and_numbers_next_loop(self) -> None:
        p = create_player()
        reset_loop(p)
        assert p.memory.total_loops == 1
        assert p.current_loop.number == 2
        reset_loop(p)
        assert p.current_loop.number == p.memory.total_loops + 1 == 3

    def test_clears_history_and_choices(self) -> None:
        p = create_player()
        record_choice(p, "a", True)
        append_moment(p, moment("A door."))
        reset_loop(p)
        assert p.narrative_history == []
        assert p.current_loop.choices_made == []
        assert p.current_loop.outcome is None
        assert p.current_loop.ended_at is None

    def test_keeps_other_counters(self) -> None:
        p = create_player()
        record_choice(p, "a", True)
        record_choice(p, "b", False)
        p.memory.character_deaths["Mara"] = 1
        p.memory.truths_discovered.append("She knew.")
        before = p.memory.model_copy(deep=True)

        reset_loop(p)

        after = p.memory
        assert after.total_choices == before.total_choices
        assert after.dark_choices == before.dark_choices
        assert after.light_choices == before.light_choices
        assert after.nihilism_score == before.nihilism_score
        assert after.character_deaths == before.character_deaths
        assert after.truths_discovered == before.truths_discovered

    def test_last_moment_becomes_key_memory(self) -> None:
        p = create_player()
        append_moment(p, moment("first"))
        append_moment(p, moment("last"))
        reset_loop(p)
        assert p.memory.key_memories == ["last"]

    def test_no_memory_without_moments(self) -> None:
        p = create_player()
        reset_loop(p)
        assert p.memory.key_memories == []

    def test_duplicate_memory_not_stored_twice(self) -> None:
        p = create_player()
        for _ in range(3):
            append_moment(p, moment("same ending"))
            reset_loop(p)
        assert p.memory.key_memories == ["same ending"]
        assert p.memory.total_loops == 3

    def test_memories_capped_at_twenty_first_come(self) -> None:
        p = create_player()
        for i in range(30):
            append_moment(p, moment(f"memory {i}"))
            reset_loop(p)
        assert len(p.memory.key_memories) == 20
        assert p.memory.key_memories == [f"memory {i}" for i in range(20)]
        assert len(set(p.memory.key_memories)) == 20

    def test_full_memory_ignores_new_text(self) -> None:
        p = player_with(key_memories=[f"m{i}" for i in range(20)])
        append_moment(p, moment("brand new"))
        reset_loop(p)
        assert "brand new" not in p.memory.key_memories
        assert p.memory.total_loops == 1


def test_append_moment_keeps_order_and_content():
    p = create_player()
    a, b = moment("a"), moment("b")
    append_moment(p, a)
    append_moment(p, b)
    assert p.narrative_history == [a, b]

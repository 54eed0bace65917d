"""Tests for nihilism.registry."""

import asyncio
from uuid import uuid4

import pytest

from nihilism.memory import record_choice
from nihilism.models import create_player
from nihilism.registry import PlayerNotFound, PlayerRegistry


@pytest.fixture
def registry() -> PlayerRegistry:
    return PlayerRegistry()


def test_create_registers_player(registry: PlayerRegistry):
    p = registry.create("Madeline")
    assert p.id in registry
    assert len(registry) == 1
    assert registry.get(p.id).name == "Madeline"


def test_get_returns_snapshot(registry: PlayerRegistry):
    p = registry.create()
    snap = registry.get(p.id)
    record_choice(snap, "x", True)
    assert registry.get(p.id).memory.total_choices == 0


def test_get_missing_returns_none(registry: PlayerRegistry):
    assert registry.get(uuid4()) is None


def test_add_replaces(registry: PlayerRegistry):
    p = create_player()
    registry.add(p)
    p.name = "Loaded"
    registry.add(p)
    assert registry.get(p.id).name == "Loaded"
    assert registry.ids() == [p.id]


def test_remove(registry: PlayerRegistry):
    p = registry.create()
    assert registry.remove(p.id) is True
    assert registry.remove(p.id) is False
    assert p.id not in registry


async def test_readd_during_edit_shares_lock(registry: PlayerRegistry):
    p = registry.create()
    order: list[str] = []

    async def first() -> None:
        async with registry.edit(p.id):
            order.append("first-in")
            registry.remove(p.id)
            registry.add(p)
            await asyncio.sleep(0.01)
            order.append("first-out")

    async def second() -> None:
        await asyncio.sleep(0)
        async with registry.edit(p.id):
            order.append("second-in")

    await asyncio.gather(first(), second())
    assert order == ["first-in", "first-out", "second-in"]


async def test_edit_mutates_live_record(registry: PlayerRegistry):
    p = registry.create()
    async with registry.edit(p.id) as live:
        record_choice(live, "dark", True)
    assert registry.get(p.id).memory.dark_choices == 1


async def test_edit_unknown_raises(registry: PlayerRegistry):
    with pytest.raises(PlayerNotFound):
        async with registry.edit(uuid4()):
            pass


async def test_edits_on_same_player_are_serialised(registry: PlayerRegistry):
    p = registry.create()
    order: list[str] = []

    async def writer(tag: str) -> None:
        async with registry.edit(p.id) as live:
            order.append(f"{tag}-in")
            await asyncio.sleep(0.01)
            record_choice(live, tag, False)
            order.append(f"{tag}-out")

    await asyncio.gather(writer("a"), writer("b"))
    assert order == ["a-in", "a-out", "b-in", "b-out"]
    assert registry.get(p.id).memory.total_choices == 2


async def test_different_players_do_not_block(registry: PlayerRegistry):
    a, b = registry.create(), registry.create()
    order: list[str] = []

    async def writer(pid, tag: str) -> None:
        async with registry.edit(pid):
            order.append(f"{tag}-in")
            await asyncio.sleep(0.01)
            order.append(f"{tag}-out")

    await asyncio.gather(writer(a.id, "a"), writer(b.id, "b"))
    assert order[:2] == ["a-in", "b-in"]

"""Tests for the deferred-callback schedulers."""

import asyncio

import pytest

from core.scheduler import AsyncioScheduler, ManualScheduler


class TestManualScheduler:
    def test_fires_when_due(self):
        scheduler = ManualScheduler()
        calls = []
        scheduler.schedule(1.0, lambda: calls.append("a"))
        assert scheduler.advance(0.5) == 0
        assert scheduler.advance(0.5) == 1
        assert calls == ["a"]
        assert scheduler.now == pytest.approx(1.0)

    def test_order_by_due_then_insertion(self):
        scheduler = ManualScheduler()
        calls = []
        scheduler.schedule(2.0, lambda: calls.append("late"))
        scheduler.schedule(1.0, lambda: calls.append("first"))
        scheduler.schedule(1.0, lambda: calls.append("second"))
        scheduler.run_all()
        assert calls == ["first", "second", "late"]

    def test_cancelled_task_skipped(self):
        scheduler = ManualScheduler()
        calls = []
        task = scheduler.schedule(1.0, lambda: calls.append("x"))
        task.cancel()
        assert task.cancelled
        assert scheduler.pending_count == 0
        assert scheduler.run_all() == 0
        assert calls == []

    def test_task_runs_once(self):
        scheduler = ManualScheduler()
        calls = []
        task = scheduler.schedule(0.0, lambda: calls.append(1))
        scheduler.advance(0)
        task.run()
        assert calls == [1]
        assert task.fired

    def test_callbacks_may_schedule(self):
        scheduler = ManualScheduler()
        calls = []

        def first():
            calls.append("first")
            scheduler.schedule(0.5, lambda: calls.append("chained"))

        scheduler.schedule(0.5, first)
        assert scheduler.advance(1.0) == 2
        assert calls == ["first", "chained"]

    def test_negative_values_raise(self):
        scheduler = ManualScheduler()
        with pytest.raises(ValueError):
            scheduler.schedule(-0.1, lambda: None)
        with pytest.raises(ValueError):
            scheduler.advance(-1)


class TestAsyncioScheduler:
    def test_fires_on_loop(self):
        calls = []

        async def main():
            scheduler = AsyncioScheduler()
            scheduler.schedule(0.01, lambda: calls.append("done"))
            await asyncio.sleep(0.05)

        asyncio.run(main())
        assert calls == ["done"]

    def test_cancel_before_fire(self):
        calls = []

        async def main():
            scheduler = AsyncioScheduler()
            task = scheduler.schedule(0.01, lambda: calls.append("done"))
            task.cancel()
            await asyncio.sleep(0.05)

        asyncio.run(main())
        assert calls == []

    def test_drives_memory_game(self):
        from games.memory.deck import Card
        from games.memory.game import MemoryGame

        async def main():
            game = MemoryGame(
                num_pairs=1,
                scheduler=AsyncioScheduler(),
                resolve_delay=0.01,
                deck_factory=lambda: (Card(id=0), Card(id=1)),
            )
            game.start()
            game.flip(0)
            game.flip(1)
            assert game.is_resolving
            await asyncio.sleep(0.05)
            return game

        game = asyncio.run(main())
        assert game.is_over()

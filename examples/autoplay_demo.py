#!/usr/bin/env python3
"""
Demo: A scripted player finishing a Memory game on an asyncio loop.

This script demonstrates the engine with real delays:
1. A game is wired to an AsyncioScheduler and an in-memory session store
2. The player flips cards, remembering every symbol it has seen
3. Each guess resolves after the configured delay
4. A second engine resumes from the session store halfway through

Run: python examples/autoplay_demo.py
"""

import asyncio
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.scheduler import AsyncioScheduler
from core.session_store import InMemorySessionStore
from games.memory import MemoryGame, Phase


DELAY = 0.2


def pick_guess(game: MemoryGame, seen: dict) -> tuple:
    """Return two face-down indices: a known pair if any, else unexplored cards."""
    face_down = [i for i, c in enumerate(game.cards) if not c.face_up]
    for indices in seen.values():
        open_indices = sorted(i for i in indices if i in face_down)
        if len(open_indices) == 2:
            return open_indices[0], open_indices[1]
    known = set().union(*seen.values()) if seen else set()
    unseen = [i for i in face_down if i not in known]
    first = unseen[0] if unseen else face_down[0]
    rest = [i for i in face_down if i != first]
    return first, rest[0]


async def play(game: MemoryGame, seen: dict, max_guesses: int) -> None:
    for _ in range(max_guesses):
        if game.phase is not Phase.PLAYING:
            return
        a, b = pick_guess(game, seen)
        game.flip(a)
        game.flip(b)
        for i in (a, b):
            seen.setdefault(game.cards[i].pair_key, set()).add(i)
        print(
            f"    flipped {a:>2} ({game.cards[a].symbol.icon})"
            f" and {b:>2} ({game.cards[b].symbol.icon})"
        )
        while game.is_resolving:
            await asyncio.sleep(DELAY / 4)


async def main():
    print("=" * 70)
    print("MEMORY ARENA - AUTOPLAY DEMO")
    print("=" * 70)

    store = InMemorySessionStore()
    seen: dict = {}

    print("\n[1] Starting game...")
    game = MemoryGame(seed=7, scheduler=AsyncioScheduler(), store=store, resolve_delay=DELAY)
    game.start()

    print("\n[2] Playing four guesses...")
    await play(game, seen, max_guesses=4)
    print(f"    matches so far: {game.match_count}/{game.total_pairs}")

    print("\n[3] Simulating a reload...")
    resumed = MemoryGame(
        scheduler=AsyncioScheduler(),
        store=store,
        resolve_delay=DELAY,
        on_complete=lambda score: print(f"\n[4] Final score: {score}"),
    )
    print(f"    resumed: {resumed.resume()} ({resumed.match_count} matches)")

    await play(resumed, seen, max_guesses=100)
    resumed.complete()


if __name__ == "__main__":
    asyncio.run(main())

"""Tests for the pure resolve() decision and ResolutionScheduler."""

import pytest

from core.scheduler import ManualScheduler
from games.memory.deck import Card
from games.memory.resolution import Outcome, ResolutionScheduler, resolve


def _deck(*flipped):
    return tuple(Card(id=i, is_flipped=i in flipped) for i in range(6))


class TestResolve:
    def test_match(self):
        deck = _deck(2, 3)
        outcome, updated = resolve(deck, deck[2], deck[3])
        assert outcome is Outcome.MATCH
        assert updated[2].is_matched and updated[3].is_matched
        assert updated[2].is_flipped and updated[3].is_flipped

    def test_mismatch(self):
        deck = _deck(1, 2)
        outcome, updated = resolve(deck, deck[1], deck[2])
        assert outcome is Outcome.MISMATCH
        assert not updated[1].is_flipped and not updated[2].is_flipped
        assert not updated[1].is_matched

    def test_other_cards_untouched(self):
        deck = _deck(0, 1, 4)
        _, updated = resolve(deck, deck[0], deck[1])
        assert updated[4] == deck[4]
        assert updated[5] == deck[5]

    def test_input_deck_not_modified(self):
        deck = _deck(2, 3)
        resolve(deck, deck[2], deck[3])
        assert deck == _deck(2, 3)

    def test_same_card_raises(self):
        deck = _deck(2)
        with pytest.raises(ValueError):
            resolve(deck, deck[2], deck[2])

    def test_unknown_card_raises(self):
        with pytest.raises(ValueError):
            resolve(_deck(), Card(id=0), Card(id=40))


class TestResolutionScheduler:
    def test_commit_after_delay(self):
        scheduler = ManualScheduler()
        resolver = ResolutionScheduler(scheduler, delay=0.8)
        deck = _deck(0, 1)
        commits = []
        resolver.schedule(3, deck, deck[0], deck[1], commits.append)
        scheduler.advance(0.79)
        assert commits == []
        assert resolver.pending
        scheduler.advance(0.01)
        assert len(commits) == 1
        assert commits[0].generation == 3
        assert commits[0].is_match
        assert (commits[0].first_id, commits[0].second_id) == (0, 1)
        assert not resolver.pending

    def test_cancel(self):
        scheduler = ManualScheduler()
        resolver = ResolutionScheduler(scheduler)
        deck = _deck(0, 2)
        commits = []
        resolver.schedule(1, deck, deck[0], deck[2], commits.append)
        resolver.cancel()
        scheduler.run_all()
        assert commits == []

    def test_one_pending_at_a_time(self):
        resolver = ResolutionScheduler(ManualScheduler())
        deck = _deck(0, 2)
        resolver.schedule(1, deck, deck[0], deck[2], lambda r: None)
        with pytest.raises(RuntimeError):
            resolver.schedule(1, deck, deck[0], deck[2], lambda r: None)

    def test_negative_delay_raises(self):
        with pytest.raises(ValueError):
            ResolutionScheduler(ManualScheduler(), delay=-1)

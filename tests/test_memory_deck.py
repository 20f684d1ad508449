"""Tests for Memory deck construction and the symbol table."""

import random
from dataclasses import FrozenInstanceError
from collections import Counter

import pytest

from games.memory.deck import (
    Card,
    create_deck,
    matched_pair_count,
    pending_cards,
    validate_deck,
)
from games.memory.symbols import MAX_PAIRS, SYMBOLS, symbol_for_pair


class TestCard:
    def test_pair_key_is_id_halved(self):
        assert [Card(id=i).pair_key for i in range(6)] == [0, 0, 1, 1, 2, 2]

    def test_symbol_derived_from_pair_key(self):
        assert Card(id=4).symbol == SYMBOLS[2]
        assert Card(id=5).symbol == SYMBOLS[2]

    def test_matched_card_is_face_up(self):
        card = Card(id=0, is_flipped=True, is_matched=True)
        assert card.face_up
        assert not card.is_pending

    def test_flipped_card_is_pending(self):
        assert Card(id=0, is_flipped=True).is_pending

    def test_cards_are_immutable(self):
        card = Card(id=0)
        with pytest.raises(FrozenInstanceError):
            card.is_flipped = True


class TestCreateDeck:
    @pytest.mark.parametrize("num_pairs", range(1, MAX_PAIRS + 1))
    def test_each_pair_key_appears_twice(self, num_pairs):
        deck = create_deck(num_pairs, random.Random(num_pairs))
        assert len(deck) == 2 * num_pairs
        counts = Counter(c.pair_key for c in deck)
        assert set(counts) == set(range(num_pairs))
        assert all(n == 2 for n in counts.values())

    def test_cards_start_face_down(self):
        deck = create_deck(6, random.Random(0))
        assert not any(c.is_flipped or c.is_matched for c in deck)

    def test_ids_unique(self):
        deck = create_deck(6, random.Random(0))
        assert sorted(c.id for c in deck) == list(range(12))

    def test_same_seed_same_order(self):
        d1 = create_deck(6, random.Random(123))
        d2 = create_deck(6, random.Random(123))
        assert d1 == d2

    def test_shuffle_changes_order(self):
        orders = {tuple(c.id for c in create_deck(6, random.Random(s))) for s in range(20)}
        assert len(orders) > 1

    def test_default_is_six_pairs(self):
        assert len(create_deck()) == 12

    @pytest.mark.parametrize("num_pairs", [0, -1, MAX_PAIRS + 1])
    def test_out_of_range_raises(self, num_pairs):
        with pytest.raises(ValueError):
            create_deck(num_pairs)

    def test_first_position_roughly_uniform(self):
        rng = random.Random(2024)
        firsts = Counter(create_deck(3, rng)[0].id for _ in range(6000))
        assert set(firsts) == set(range(6))
        for count in firsts.values():
            assert 800 < count < 1200


class TestValidateDeck:
    def test_valid_deck_passes(self):
        validate_deck(create_deck(4, random.Random(1)), 4)

    def test_missing_card_raises(self):
        deck = create_deck(3, random.Random(1))
        with pytest.raises(ValueError):
            validate_deck(deck[:-1], 3)

    def test_duplicate_id_raises(self):
        cards = [Card(id=0), Card(id=0), Card(id=2), Card(id=3)]
        with pytest.raises(ValueError):
            validate_deck(cards, 2)

    def test_wrong_size_raises(self):
        with pytest.raises(ValueError):
            validate_deck(create_deck(3, random.Random(1)), 4)

    def test_half_matched_pair_raises(self):
        cards = [Card(id=0, is_flipped=True, is_matched=True), Card(id=1), Card(id=2), Card(id=3)]
        with pytest.raises(ValueError):
            validate_deck(cards, 2)

    def test_helpers(self):
        cards = [
            Card(id=0, is_flipped=True, is_matched=True),
            Card(id=1, is_flipped=True, is_matched=True),
            Card(id=2, is_flipped=True),
            Card(id=3),
        ]
        assert matched_pair_count(cards) == 1
        assert [c.id for c in pending_cards(cards)] == [2]


class TestSymbols:
    def test_six_symbols_indexed_in_order(self):
        assert len(SYMBOLS) == 6
        assert [s.index for s in SYMBOLS] == list(range(6))

    def test_reference_table(self):
        assert SYMBOLS[0].icon == "heart"
        assert SYMBOLS[0].color == "text-rose-500"
        assert SYMBOLS[5].icon == "flower"

    def test_unknown_pair_key_raises(self):
        with pytest.raises(ValueError):
            symbol_for_pair(MAX_PAIRS)

"""Tests for the memory-arena command line, driven with scripted input."""

import json

import pytest

from arena import cli
from core.session_store import JsonFileSessionStore
from games.memory.deck import Card
from games.memory.persistence import SessionPersistence
from games.memory.state import GameSnapshot, Phase


def _script(monkeypatch, lines):
    answers = iter(lines)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    monkeypatch.setattr(cli.time, "sleep", lambda seconds: None)


class TestPlay:
    def test_one_pair_game(self, monkeypatch, capsys, tmp_path):
        session = tmp_path / "memory.json"
        _script(monkeypatch, ["", "0", "1"])
        cli.main(["play", "--pairs", "1", "--session-file", str(session)])
        out = capsys.readouterr().out
        assert "All pairs found!" in out
        assert "Score: 100" in out
        assert json.loads(session.read_text()) == {}

    def test_quit_keeps_progress(self, monkeypatch, tmp_path):
        session = tmp_path / "memory.json"
        _script(monkeypatch, ["", "0", "q"])
        cli.main(["play", "--pairs", "2", "--seed", "3", "--session-file", str(session)])
        snapshot = SessionPersistence(JsonFileSessionStore(session), num_pairs=2).load()
        assert snapshot.phase is Phase.PLAYING
        assert sum(c.is_flipped for c in snapshot.cards) == 1

    def test_invalid_input_reprompts(self, monkeypatch, capsys):
        _script(monkeypatch, ["", "x", "42", "q"])
        cli.main(["play", "--pairs", "2"])
        assert "Pick a face-down card" in capsys.readouterr().out


class TestShow:
    def test_show_saved_game(self, capsys, tmp_path):
        session = tmp_path / "memory.json"
        cards = tuple(Card(id=i, is_flipped=i < 2, is_matched=i < 2) for i in range(4))
        SessionPersistence(JsonFileSessionStore(session), num_pairs=2).save(
            GameSnapshot(phase=Phase.PLAYING, match_count=1, is_resolving=False, cards=cards)
        )
        cli.main(["show", "--session-file", str(session), "--pairs", "2"])
        out = capsys.readouterr().out
        assert "heart" in out
        assert "matched" in out

    def test_show_reads_pairs_and_prefix_from_config(self, capsys, tmp_path):
        session = tmp_path / "memory.json"
        cards = tuple(Card(id=i, is_flipped=i < 2, is_matched=i < 2) for i in range(4))
        SessionPersistence(JsonFileSessionStore(session), prefix="custom", num_pairs=2).save(
            GameSnapshot(phase=Phase.PLAYING, match_count=1, is_resolving=False, cards=cards)
        )
        config = tmp_path / "session.json"
        config.write_text(json.dumps({
            "session_file": str(session),
            "game_config": {"num_pairs": 2, "storage_prefix": "custom"},
        }))
        cli.main(["show", "--config", str(config)])
        out = capsys.readouterr().out
        assert "heart" in out
        assert "matched" in out

    def test_show_flags_override_config(self, capsys, tmp_path):
        session = tmp_path / "memory.json"
        cards = tuple(Card(id=i) for i in range(4))
        SessionPersistence(JsonFileSessionStore(session), num_pairs=2).save(
            GameSnapshot(phase=Phase.PLAYING, match_count=0, is_resolving=False, cards=cards)
        )
        config = tmp_path / "session.json"
        config.write_text(json.dumps({"game_config": {"num_pairs": 3, "storage_prefix": "custom"}}))
        cli.main([
            "show", "--config", str(config), "--session-file", str(session),
            "--pairs", "2", "--prefix", "memory",
        ])
        assert "No saved game" not in capsys.readouterr().out

    def test_show_without_session_file(self):
        with pytest.raises(SystemExit):
            cli.main(["show"])

    def test_show_missing(self, tmp_path):
        with pytest.raises(SystemExit):
            cli.main(["show", "--session-file", str(tmp_path / "none.json")])


class TestBuildConfig:
    def test_overrides_merge_with_file(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text(json.dumps({"seed": 1, "game_config": {"points_per_match": 10}}))
        parser_args = type("Args", (), dict(
            config=str(path), pairs=3, delay_ms=0, seed=None,
            session_file=None, verbose=False,
        ))
        config = cli.build_config(parser_args)
        assert config.seed == 1
        assert config.game_config == {"points_per_match": 10, "num_pairs": 3, "resolve_delay_ms": 0}

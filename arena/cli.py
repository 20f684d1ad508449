#!/usr/bin/env python3
"""
Command-line interface for Memory Arena.

Usage:
    memory-arena play
    memory-arena play --pairs 4 --seed 7 --session-file .session/memory.json
    memory-arena play --config session.yaml
    memory-arena show --session-file .session/memory.json
    memory-arena show --config session.yaml
"""

import argparse
import logging
import sys
import time

from rich.console import Console

console = Console()


def build_config(args):
    """Merge a config file (if any) with command-line overrides."""
    from arena.config import SessionConfig, load_config

    config = load_config(args.config) if args.config else SessionConfig()
    updates = {}
    game_config = dict(config.game_config or {})

    if args.pairs is not None:
        game_config["num_pairs"] = args.pairs
    if args.delay_ms is not None:
        game_config["resolve_delay_ms"] = args.delay_ms
    if game_config:
        updates["game_config"] = game_config
    if args.seed is not None:
        updates["seed"] = args.seed
    if args.session_file:
        updates["session_file"] = args.session_file
    if args.verbose:
        updates["verbose"] = True

    return SessionConfig(**{**config.model_dump(), **updates})


def open_store(session_file):
    from core.session_store import InMemorySessionStore, JsonFileSessionStore

    if session_file:
        return JsonFileSessionStore(session_file)
    return InMemorySessionStore()


def cmd_play(args):
    """Play a game in the terminal, resuming a saved one if present."""
    from arena.display import render_board, render_result
    from arena.registry import get_game_factory
    from core.scheduler import ManualScheduler
    from games.memory.state import Phase

    config = build_config(args)
    if config.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    scheduler = ManualScheduler()
    factory = get_game_factory(config.game_type)
    game = factory(
        config,
        scheduler=scheduler,
        store=open_store(config.session_file),
        on_complete=lambda score: render_result(score, game.total_pairs, console),
    )

    if game.resume():
        console.print("[dim]Resuming saved game.[/]")
    if game.phase is Phase.READY:
        console.print("Game: Find all matching pairs of cards!")
        try:
            input("Press Enter to start ")
        except (EOFError, KeyboardInterrupt):
            return
        game.start()

    delay = game.resolve_delay
    while game.phase is Phase.PLAYING:
        if game.is_resolving:
            # Both cards of the guess stay on screen for the delay.
            render_board(game.get_public_state(), console)
            time.sleep(delay)
            scheduler.advance(delay)
            continue

        render_board(game.get_public_state(), console)
        try:
            raw = input("Card # (q to quit): ").strip()
        except (EOFError, KeyboardInterrupt):
            raw = "q"
        if raw.lower() in ("q", "quit"):
            if config.session_file:
                console.print(f"[dim]Progress saved to {config.session_file}[/]")
            return
        if not raw.isdigit() or not game.flip(int(raw)):
            console.print("[yellow]Pick a face-down card by its number.[/]")

    render_board(game.get_public_state(), console)
    game.complete()


def cmd_show(args):
    """Print the snapshot saved in a session file."""
    from arena.config import SessionConfig, load_config
    from arena.display import render_snapshot
    from core.session_store import JsonFileSessionStore
    from games.memory.persistence import SessionPersistence

    config = load_config(args.config) if args.config else SessionConfig()
    game_config = config.get_game_config()
    session_file = args.session_file or config.session_file
    if not session_file:
        console.print("No session file given (use --session-file or a config file)")
        sys.exit(2)

    persistence = SessionPersistence(
        JsonFileSessionStore(session_file),
        prefix=args.prefix if args.prefix is not None else game_config.storage_prefix,
        num_pairs=args.pairs if args.pairs is not None else game_config.num_pairs,
    )
    snapshot = persistence.load()
    if snapshot is None:
        console.print(f"No saved game in {session_file}")
        sys.exit(1)
    render_snapshot(snapshot, console)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Memory Arena: flip cards, find the pairs"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game")
    play_parser.add_argument("--config", "-c", help="Config file (YAML or JSON)")
    play_parser.add_argument("--pairs", type=int, help="Number of pairs")
    play_parser.add_argument("--seed", type=int, help="Random seed")
    play_parser.add_argument("--delay-ms", type=int, help="Resolution delay in ms")
    play_parser.add_argument("--session-file", help="JSON file used as session storage")
    play_parser.add_argument("--verbose", "-v", action="store_true")

    # Show command
    show_parser = subparsers.add_parser("show", help="Show a saved game")
    show_parser.add_argument("--config", "-c", help="Config file (YAML or JSON)")
    show_parser.add_argument("--session-file", help="JSON file used as session storage")
    show_parser.add_argument("--pairs", type=int, help="Number of pairs (overrides config)")
    show_parser.add_argument("--prefix", help="Storage key prefix (overrides config)")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(levelname)s - [%(name)s] - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if args.command == "play":
        cmd_play(args)
    elif args.command == "show":
        cmd_show(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()

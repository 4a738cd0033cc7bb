"""
Play Space Vibes in an arcade window

    python -m game.space_vibes --config player.json --assets .
"""

import argparse
import sys

from .config import GAME_CONFIG, ConfigError, load_player_config


def main(argv=None):
    parser = argparse.ArgumentParser(description="Play Space Vibes")
    parser.add_argument(
        "--config",
        type=str,
        default="player.json",
        help="Player configuration document (default: player.json)",
    )
    parser.add_argument(
        "--assets",
        type=str,
        default=None,
        help="Directory holding sprites/ and sounds/ (default: none, primitive shapes only)",
    )
    parser.add_argument("--width", type=int, default=GAME_CONFIG["width"])
    parser.add_argument("--height", type=int, default=GAME_CONFIG["height"])
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--quiet", action="store_true", help="No console output")

    args = parser.parse_args(argv)

    try:
        player_config = load_player_config(args.config)
    except ConfigError as exc:
        print(f"[SpaceVibes] Cannot start: {exc}", file=sys.stderr)
        return 1

    # Imported here so the core stays usable without a display
    from .window import run_game

    run_game(
        player_config,
        args.width,
        args.height,
        assets_dir=args.assets,
        seed=args.seed,
        verbose=not args.quiet,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

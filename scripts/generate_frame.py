#!/usr/bin/env python3
"""
Generate a story frame from the command line.

Usage:
    python scripts/generate_frame.py --type Brave --seed 7
    python scripts/generate_frame.py --type Friendship --friend "Pip the kitten" --location "Sunny beach"
    python scripts/generate_frame.py --catalog my_triads.json --type Funny

The same arguments always print the same document.
"""

import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from storytram.storyteller import (
    ConfigurationError,
    StoryOptions,
    default_catalog,
    generate_story,
    load_triad_catalog,
    seeded_source,
)
from storytram.utils.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a silent cinematic story frame")
    parser.add_argument("--type", dest="story_type", default=None, help="Story type (default: Adventure)")
    parser.add_argument("--location", default=None, help="Location text")
    parser.add_argument("--weather", default=None, help="Weather/time text")
    parser.add_argument("--friend", dest="friends", action="append", default=None,
                        help="Explicit companion (repeatable); skips random friend selection")
    parser.add_argument("--seed", type=int, default=0, help="Seed for the randomness source")
    parser.add_argument("--catalog", default=None, help="JSON triad catalog (default: built-in)")
    parser.add_argument("--verbose", action="store_true", help="Log attempts to stderr")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "WARNING")

    options = StoryOptions(
        story_type=args.story_type,
        location=args.location,
        weather=args.weather,
        friends=args.friends,
    )

    try:
        triads = load_triad_catalog(args.catalog) if args.catalog else default_catalog()
        result = generate_story(options, triads, seeded_source(args.seed))
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    print(result.document)
    if not result.validated:
        print(f"\n(emitted after {result.attempts} attempts without passing validation)", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())

# giftojson.py
"""Render every frame of a GIF and save the result as JSON.

Output is a list of ``{"asciiFrame": str, "delay": int}`` objects, delay in
milliseconds, ready to be replayed without the original GIF.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from . import config
from .decoder import GifDecoder
from .errors import GifAsciiError
from .logs import setup_logging
from .profiles import DetailTier, select_tier
from .sequencer import AnimationSequencer

log = logging.getLogger(__name__)


def gif_to_frames(data: bytes, tier: DetailTier) -> List[Dict[str, Union[str, int]]]:
    decoder = GifDecoder(data)
    try:
        sequencer = AnimationSequencer(decoder, tier.profile)
        frames = []
        for i in range(sequencer.frame_count):
            rendered = sequencer.request_frame(i)
            frames.append({"asciiFrame": rendered.ascii_frame, "delay": rendered.delay_ms})
        return frames
    finally:
        decoder.close()


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert a GIF into JSON ASCII frames.")
    parser.add_argument("gif_path", type=Path, help="Path to the source GIF")
    parser.add_argument(
        "--tier",
        default=config.DEFAULT_TIER,
        help="Standard, High Resolution or Ultra HD (default: %(default)s)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Where to write the JSON (default: <gif_path> with _ascii.json suffix)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(config.LOG_LEVEL)
    output = args.output or args.gif_path.with_name(args.gif_path.stem + "_ascii.json")
    tier = select_tier(args.tier)

    try:
        data = args.gif_path.read_bytes()
    except OSError as exc:
        print(f"Error: cannot read {args.gif_path}: {exc}", file=sys.stderr)
        return 1
    try:
        frames = gif_to_frames(data, tier)
    except GifAsciiError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1

    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump(frames, f, ensure_ascii=False)
    log.info("Wrote %d %s frame(s) to %s", len(frames), tier.value, output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

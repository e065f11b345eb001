"""Command line demo: sort newline-separated integers with stooge sort."""

import argparse
import logging
import sys

from stoogesort import sort_by, sort_natural

logger = logging.getLogger(__name__)

USAGE_HINT = "Pipe in a newline-separated list of ints"


def read_ints(lines):
    """Parse one integer per line. Any bad line aborts the whole read."""
    nums = []
    for lineno, line in enumerate(lines, 1):
        tok = line.rstrip("\r\n")
        try:
            nums.append(int(tok))
        except ValueError:
            raise SystemExit(f"stoogesort: error: line {lineno}: invalid integer {tok!r}") from None
    return nums


def cmd_sort(args):
    if sys.stdin.isatty():
        print(USAGE_HINT)
        return
    nums = read_ints(sys.stdin)
    logger.debug("Read %d integers", len(nums))
    if args.reverse:
        sort_by(nums, lambda a, b: b - a)
    else:
        sort_natural(nums)
    for n in nums:
        print(n)


def cmd_visualize(args):
    # pygame is only needed here; keep plain sorting import-light
    import visualizer

    cfg = visualizer.load_settings(args.settings)
    cfg = visualizer.merge_settings(cfg, dict(
        size=args.size,
        speed=args.speed,
        sound=False if args.no_sound else None,
    ))
    visualizer.run(cfg)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="stoogesort",
        description="Sort integers read from stdin using stooge sort",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-r", "--reverse", action="store_true", help="Print in descending order")
    parser.add_argument("--visualize", action="store_true", help="Animate the sort in a window")
    parser.add_argument("--size", type=int, help="Visualizer: number of bars")
    parser.add_argument("--speed", type=float, help="Visualizer: speed multiplier")
    parser.add_argument("--no-sound", action="store_true", help="Visualizer: mute tones")
    parser.add_argument("--settings", help="Visualizer: settings JSON path")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.visualize:
        cmd_visualize(args)
    else:
        cmd_sort(args)


if __name__ == "__main__":
    main(sys.argv[1:])

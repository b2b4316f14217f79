"""CLI entry point: star-quiz render|quiz|info subcommands."""

from __future__ import annotations

import argparse
import logging
import os
import random
import sys
from typing import NoReturn, TextIO

from star_quiz.angle_utils import format_dec, format_ra
from star_quiz.catalog import StarCatalog, read_catalog
from star_quiz.config import get_catalog_path, get_default_max_magnitude, get_random_seed
from star_quiz.constants import AUTO_CLOSE_DELAY_MS, LOGICAL_HEIGHT, LOGICAL_WIDTH
from star_quiz.controller import StarQuizController
from star_quiz.quiz import OptionMark
from star_quiz.rendering.matplotlib_view import draw_frame_mpl

logger = logging.getLogger(__name__)

_BRIGHTEST_SHOWN = 10


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or STAR_QUIZ_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = os.environ.get('STAR_QUIZ_LOG', '').upper()
    if env_level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )
    # matplotlib font discovery is noisy at DEBUG.
    logging.getLogger('matplotlib').setLevel(logging.WARNING)


def _load(args: argparse.Namespace) -> StarCatalog:
    return read_catalog(args.catalog or get_catalog_path())


def _render_cmd(args: argparse.Namespace) -> int:
    """Draw the star chart to an image file (render subcommand).

    Parameters:
        args: Parsed args; catalog, output, width, height, max_mag, grid, zoom, center.

    Returns:
        Exit code 0 on success, 1 on error.
    """
    try:
        catalog = _load(args)
        controller = StarQuizController(
            catalog,
            width=args.width,
            height=args.height,
            max_magnitude=args.max_mag,
        )
        controller.set_grid_visible(args.grid)
        viewport = controller.viewport
        if not viewport.min_zoom <= args.zoom <= viewport.max_zoom:
            raise ValueError(
                f'--zoom must be within [{viewport.min_zoom}, {viewport.max_zoom}]'
            )
        viewport.zoom = args.zoom
        if args.center is not None:
            ra, dec = args.center
            viewport.center_on(ra, dec, args.width / 2.0, args.height / 2.0)
        frame = controller.render()
        draw_frame_mpl(frame, args.output)
    except (OSError, ValueError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    print(f'{len(frame.visible_ids)} stars drawn to {args.output}')
    return 0


def run_quiz(
    controller: StarQuizController,
    questions: int,
    rng: random.Random,
    stdin: TextIO,
    stdout: TextIO,
) -> None:
    """Interactive terminal quiz.

    Each round clicks on a random visible star through the controller (so hit
    testing picks the star), prints the options, and reads a number, 's' to
    skip, or 'q' to quit.
    """
    candidates = [
        s for s in controller.catalog.visible(controller.max_magnitude) if s.is_named
    ]
    if not candidates:
        stdout.write('No named stars brighter than the magnitude limit.\n')
        return
    asked = 0
    while asked < questions:
        star = rng.choice(candidates)
        x, y = controller.viewport.project(star)
        controller.on_pointer_down(x, y)
        controller.on_pointer_up(x, y)
        options = controller.on_click(x, y)
        if options is None:
            continue
        asked += 1
        target = controller.quiz.state.current_target
        if target is None:
            continue
        stdout.write(
            f'\nQuestion {asked}: which star is at RA {format_ra(target.ra)}, '
            f'Dec {format_dec(target.dec)} (mag {target.mag:.2f})?\n'
        )
        for i, option in enumerate(options, start=1):
            stdout.write(f'  {i}. {option.name}\n')
        while True:
            stdout.write(f'Answer [1-{len(options)}, s=skip, q=quit]: ')
            stdout.flush()
            line = stdin.readline()
            if not line:
                controller.skip_quiz()
                return
            reply = line.strip().lower()
            if reply == 'q':
                controller.skip_quiz()
                return
            if reply == 's':
                controller.skip_quiz()
                stdout.write(f'Skipped: it was {target.name}.\n')
                break
            if reply.isdigit() and 1 <= int(reply) <= len(options):
                result = controller.select_quiz_option(options[int(reply) - 1].id)
                if result is None:
                    break
                if result.is_correct:
                    stdout.write('Correct!\n')
                else:
                    stdout.write(f'Incorrect! It was {result.correct_name}\n')
                for i, option in enumerate(controller.quiz.options, start=1):
                    if option.mark is not OptionMark.UNMARKED:
                        stdout.write(f'  {i}. {option.name} [{option.mark.value}]\n')
                controller.tick(AUTO_CLOSE_DELAY_MS)
                break
            stdout.write('Please enter an option number.\n')


def _quiz_cmd(args: argparse.Namespace) -> int:
    """Run the terminal quiz (quiz subcommand).

    Returns:
        Exit code 0 on success, 1 on error.
    """
    seed = args.seed if args.seed is not None else get_random_seed()
    rng = random.Random(seed)
    try:
        catalog = _load(args)
    except (OSError, ValueError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    controller = StarQuizController(catalog, max_magnitude=args.max_mag, rng=rng)
    run_quiz(controller, args.questions, rng, sys.stdin, sys.stdout)
    score = controller.score
    print(f'\nYou got {score.correct} out of {score.total} correct ({score.percentage}%)')
    return 0


def _info_cmd(args: argparse.Namespace) -> int:
    """Print a catalog summary (info subcommand).

    Returns:
        Exit code 0 on success, 1 on error.
    """
    try:
        catalog = _load(args)
    except (OSError, ValueError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    visible = list(catalog.visible(args.max_mag))
    print(f'Stars in catalog: {len(catalog)}')
    print(f'Stars with mag <= {args.max_mag:g}: {len(visible)}')
    for star in sorted(visible, key=lambda s: s.mag)[:_BRIGHTEST_SHOWN]:
        print(
            f'  {star.name:<16} {star.constellation:<4} {format_ra(star.ra):>12} '
            f'{format_dec(star.dec):>11}  mag {star.mag:5.2f}'
        )
    return 0


def main() -> int:
    """Entry point for star-quiz CLI (render | quiz | info).

    Returns:
        Exit code 0 on success, 1 on failure.
    """
    parser = argparse.ArgumentParser(
        prog='star-quiz',
        description='Star chart rendering and star identification quiz.',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    def add_common(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            '--catalog',
            type=str,
            default=None,
            help='Named-star CSV or CSV.gz; env: STAR_QUIZ_CATALOG',
        )
        sub.add_argument(
            '--max-mag',
            type=float,
            default=get_default_max_magnitude(),
            help='Faintest magnitude shown; env: STAR_QUIZ_MAX_MAGNITUDE',
        )
        sub.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')

    render_parser = subparsers.add_parser('render', help='Draw the star chart to an image')
    add_common(render_parser)
    render_parser.add_argument(
        '-o', '--output', type=str, required=True, help='Output image (.png, .svg, .pdf)'
    )
    render_parser.add_argument('--width', type=float, default=LOGICAL_WIDTH, help='Pixels')
    render_parser.add_argument('--height', type=float, default=LOGICAL_HEIGHT, help='Pixels')
    render_parser.add_argument('--grid', action='store_true', help='Draw RA/Dec grid')
    render_parser.add_argument('--zoom', type=float, default=1.0, help='Zoom factor (0.5-10)')
    render_parser.add_argument(
        '--center',
        type=float,
        nargs=2,
        metavar=('RA_HOURS', 'DEC_DEG'),
        default=None,
        help='Sky point placed at the image center',
    )
    render_parser.set_defaults(handler=_render_cmd)

    quiz_parser = subparsers.add_parser('quiz', help='Interactive star identification quiz')
    add_common(quiz_parser)
    quiz_parser.add_argument('-n', '--questions', type=int, default=10, help='Rounds to play')
    quiz_parser.add_argument(
        '--seed', type=int, default=None, help='Random seed; env: STAR_QUIZ_SEED'
    )
    quiz_parser.set_defaults(handler=_quiz_cmd)

    info_parser = subparsers.add_parser('info', help='Catalog summary')
    add_common(info_parser)
    info_parser.set_defaults(handler=_info_cmd)

    args = parser.parse_args()
    _configure_logging(args.verbose)
    return int(args.handler(args))


def cli_main() -> NoReturn:
    """Entry point for console_scripts; calls main() and exits with its return code."""
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())

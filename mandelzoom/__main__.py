"""
Command line entry point: python -m mandelzoom
"""
import logging
import sys
from argparse import ArgumentParser

from .app import run
from .config import STRATEGIES, ConfigurationError, ZoomConfig
from .logging_config import setup_logging
from .viewport import Viewport

logger = logging.getLogger("mandelzoom")


def build_parser():
    parser = ArgumentParser(prog='mandelzoom',
                            description='Continuously zooming view of the Mandelbrot set.')

    parser.add_argument('--config', dest='config', metavar='PATH',
                        help='JSON file with configuration values (overrides the packaged settings.json)')
    parser.add_argument('--iterations', type=int, dest='iterations', metavar='ITERATIONS',
                        help='maximum number of iterations before a point counts as inside the set')
    parser.add_argument('--graph-scale', type=float, dest='graph_scale', metavar='GRAPH_SCALE',
                        help='pixels per unit of the complex plane in the first frame')
    parser.add_argument('--anchor-re', type=float, dest='anchor_re', metavar='X',
                        help='real part of the zoom target')
    parser.add_argument('--anchor-im', type=float, dest='anchor_im', metavar='Y',
                        help='imaginary part of the zoom target')
    parser.add_argument('--strategy', choices=STRATEGIES, dest='strategy',
                        help='evaluate rows in parallel or sequentially')
    parser.add_argument('--workers', type=int, dest='workers', metavar='N',
                        help='upper bound on evaluator threads')
    parser.add_argument('--fps', type=int, dest='fps', metavar='FPS',
                        help='frame clock rate of the window')
    parser.add_argument('--max-frames', type=int, dest='max_frames', metavar='N',
                        help='close the window after N rendered frames')
    parser.add_argument('--log-level', default='INFO', dest='log_level',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='logging verbosity')
    parser.add_argument('--log-file', dest='log_file', metavar='PATH',
                        help='also write logs to this file')
    parser.add_argument('--dump', action='store_true',
                        help='print the initial viewport diagnostics and exit')

    return parser


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    setup_logging(getattr(logging, opt.log_level), opt.log_file)

    try:
        config = ZoomConfig.from_settings(
            opt.config,
            iterations=opt.iterations,
            graph_scale=opt.graph_scale,
            anchor_re=opt.anchor_re,
            anchor_im=opt.anchor_im,
            strategy=opt.strategy,
            workers=opt.workers,
            fps=opt.fps,
            max_frames=opt.max_frames,
        )
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return 2

    logger.debug("Using %r", config)

    if opt.dump:
        print(Viewport.from_config(config).describe(config.graph_scale))
        return 0

    run(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())

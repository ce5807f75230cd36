#!/usr/bin/env python3
#

import argparse
import logging

from sparselab import logger, options
from sparselab.logs import use_stdout
from sparselab.sparse import vmult_check


## 参数解析
parser = argparse.ArgumentParser(description=
        """
        Fill an N x N tridiagonal stencil matrix through indexed writes,
        multiply it by x = [0, 1, ..., N-1] and check the result.
        """)

parser.add_argument('--N',
        default=10000, type=int,
        help='size of the stencil matrix, default 10000.')

parser.add_argument('--layout',
        default='map', type=str, choices=['map', 'coo'],
        help='storage layout of the matrix, default map.')

parser.add_argument('--dtype',
        default='float64', type=str,
        help='scalar type of the matrix entries, default float64.')

parser.add_argument('--threshold',
        default=10, type=int,
        help='print the matrix only when N is below this value, default 10.')

parser.add_argument('--progress',
        action='store_true',
        help='show a progress bar while filling the matrix.')

parser.add_argument('--verbose',
        action='store_true',
        help='log at INFO level on stdout.')

args = parser.parse_args()

if args.verbose:
    use_stdout(logger, progress=args.progress)
    options.log_level = logging.INFO

options.print_threshold = args.threshold

result = vmult_check(args.N, layout=args.layout, dtype=args.dtype,
                     progress=args.progress)

if not all(result.values()):
    raise SystemExit(1)

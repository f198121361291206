"""
Command line interface.

    cooccur INPUT [--threshold N] [--delimiter C] [--output PATH] [--encoding E] [--verbose]

Prints every matched pair as "itemA,itemB", writes the same lines to the output file
and ends with a "<n> matches found in <ms> milliseconds" summary.
"""
import argparse
import logging
import sys
import time

from cooccur.config import Configuration
from cooccur.errors import InputUnavailable, OutputWriteFailure, UsageError
from cooccur.pipeline import CooccurrenceRun

__all__ = [
    "main", "parse_args"
]

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="cooccur",
        description="Find pairs of items that appear together in at least THRESHOLD lines of a file."
    )
    parser.add_argument("input", help="Text file, one group per line, items separated by the delimiter")
    parser.add_argument("--threshold", default=None,
                        help="Minimum number of shared groups (env COOCCUR_THRESHOLD, default 50)")
    parser.add_argument("--delimiter", default=None,
                        help="Item separator within a line (env COOCCUR_DELIMITER, default ',')")
    parser.add_argument("--output", default=None,
                        help="File receiving the matches (env COOCCUR_OUTPUT_PATH, default output.txt)")
    parser.add_argument("--encoding", default=None,
                        help="Input file encoding (env COOCCUR_ENCODING, default utf-8)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    return parser, parser.parse_args(argv)


def main(argv=None) -> int:
    start_time = time.monotonic()
    parser, args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = Configuration.resolve(
            input_path=args.input, threshold=args.threshold, delimiter=args.delimiter,
            output_path=args.output, encoding=args.encoding
        )
    except UsageError as error:
        parser.print_usage(sys.stderr)
        print("{0}: error: {1}".format(parser.prog, error), file=sys.stderr)
        return EXIT_USAGE

    try:
        result = CooccurrenceRun(config).run(start_time=start_time)
    except (InputUnavailable, OutputWriteFailure) as error:
        print("Error: {0}".format(error), file=sys.stderr)
        return EXIT_FAILURE

    print("{0} matches found in {1} milliseconds".format(len(result.matches), result.elapsed_ms))
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())

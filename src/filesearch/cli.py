"""
Command-line front end for filesearch.

Reads a single command line from standard input, for example::

    search report -d ~/Documents --max-depth 3 --max-results 20

and prints one ``[<index>]<path>`` line per matching file followed by a
search summary. Diagnostics go to standard error through ``logging``.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional, TextIO

from . import __version__
from .config import ConfigurationError, load_config
from .models.config import LOG_LEVELS, SearchConfig
from .models.search_results import MatchResult, SearchSummary
from .tools.dir_searcher import DirectorySearcher
from .tools.request_parser import (
    ArgumentError,
    HELP_HINT,
    RequestParser,
    SEARCH_COMMAND,
    tokenize_line,
)


logger = logging.getLogger(__name__)


USAGE_TEXT = (
    "Usage:\n"
    "  search <pattern> -d <directory> [options]\n\n"
    "Arguments:\n"
    "  <pattern>            File name or part of the file name to search for\n\n"
    "Options:\n"
    "  -d <directory>       Root directory to search in (required)\n"
    "  --max-depth <n>      Do not descend more than <n> directory levels below the root\n"
    "  --max-results <n>    Stop searching after <n> matching files\n"
    "  -h, --help           Display this help message\n"
)


def setup_logging(level: str = "WARNING", fmt: Optional[str] = None) -> None:
    """Send log records to stderr so they never mix with result lines."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=fmt or "%(asctime)s | %(levelname)s | %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def format_match(match: MatchResult) -> str:
    return match.to_line()


def write_line(out: TextIO, text: str) -> None:
    """
    Write one line of output that may hold file system text.

    Paths with undecodable name bytes carry surrogate escapes. When the
    stream cannot encode them, the line is written as the original bytes to
    the stream's binary buffer, or with backslash escapes if it has none.
    """
    try:
        out.write(text + "\n")
    except UnicodeEncodeError:
        buffer = getattr(out, 'buffer', None)
        if buffer is None:
            escaped = text.encode('utf-8', 'surrogateescape').decode('utf-8', 'backslashreplace')
            out.write(escaped + "\n")
            return
        out.flush()
        buffer.write(os.fsencode(text) + b"\n")
        buffer.flush()


def format_summary(summary: SearchSummary, show_stats: bool = False) -> str:
    """
    Render the summary block printed after the matches.

    Args:
        summary: Summary of the search
        show_stats: Append the walk counters

    Returns:
        Summary text, starting with a blank line
    """
    text = "\n" + summary.to_text()
    if show_stats and summary.stats:
        lines = [f"  {name.replace('_', ' ').capitalize()}: {value}"
                 for name, value in summary.stats.items()]
        text += "\n".join(lines) + "\n"
    return text


def run_command(tokens: List[str], config: SearchConfig,
                out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> int:
    """
    Execute one tokenized command.

    Args:
        tokens: Command tokens, starting with the subcommand name
        config: Active configuration
        out: Stream for usage text, matches and the summary
        err: Stream for error messages

    Returns:
        Process exit code
    """
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err

    if not tokens:
        return 1

    if tokens[0] != SEARCH_COMMAND:
        logger.debug(f"Ignoring unknown command: {tokens[0]!r}")
        return 0

    try:
        result = RequestParser(config).parse(tokens)
    except ArgumentError as e:
        err.write(f"Error: {e}.\n")
        err.write(f"{HELP_HINT}\n")
        return 0

    for message in result.errors:
        err.write(f"Warning: {message}\n")

    if result.show_help or result.request is None:
        out.write(USAGE_TEXT + "\n")
        return 0

    request = result.request
    if config.output.echo_request:
        write_line(out, f"Search pattern: {request.pattern}")
        write_line(out, f"Search directory: {request.root_directory}")
        out.write("\n")

    matches, summary = DirectorySearcher().search(request)

    for match in matches:
        write_line(out, format_match(match))
    out.write(format_summary(summary, config.output.show_stats))
    out.flush()

    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filesearch",
        description="Reads one 'search' command from standard input and lists matching files.",
        epilog=USAGE_TEXT,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", "-c", type=str, default=None,
                        help="YAML configuration file with default limits and output options")
    parser.add_argument("--log-level", type=str.upper, default=None, choices=LOG_LEVELS,
                        help="Log level for diagnostics on stderr (overrides the configuration)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None) -> int:
    """
    Entry point of the ``filesearch`` command.

    Args:
        argv: Process arguments (defaults to sys.argv[1:])
        stdin: Stream the command line is read from (defaults to sys.stdin)

    Returns:
        Process exit code
    """
    args = build_arg_parser().parse_args(argv)

    try:
        config = load_config(args.config).config
    except ConfigurationError as e:
        sys.stderr.write(f"Error: {e}\n")
        return 2

    setup_logging(args.log_level or config.logging.level, config.logging.format)

    line = (stdin or sys.stdin).readline()
    return run_command(tokenize_line(line), config)


if __name__ == "__main__":
    sys.exit(main())

"""
Command token parser for filesearch.

This module turns the tokens of a ``search`` command line into a validated
SearchRequest. It also provides the tokenizer used by the interactive front
end, which splits a line on spaces after dropping every double quote.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence
import logging

from ..models.config import SearchConfig
from ..models.search_request import SearchRequest


logger = logging.getLogger(__name__)


SEARCH_COMMAND = "search"

HELP_FLAGS = ("-h", "--help")
DIRECTORY_FLAG = "-d"
MAX_DEPTH_FLAG = "--max-depth"
MAX_RESULTS_FLAG = "--max-results"

HELP_HINT = f"Use '{SEARCH_COMMAND} -h' to display help."


class ArgumentError(Exception):
    """Raised when a command does not carry enough tokens to be parsed."""
    pass


@dataclass
class ParseResult:
    """
    Outcome of parsing a search command.

    Attributes:
        request: The validated request, or None when usage should be shown
        show_help: Whether the caller should print usage instead of searching
        errors: Recoverable problems reported while parsing
    """
    request: Optional[SearchRequest]
    show_help: bool = False
    errors: List[str] = field(default_factory=list)

    def has_errors(self) -> bool:
        """Check if any recoverable errors were reported."""
        return len(self.errors) > 0


def tokenize_line(line: str) -> List[str]:
    """
    Split an input line into command tokens.

    Double quotes are removed wherever they appear and the remainder is split
    on single spaces, so consecutive spaces produce empty tokens and quoted
    text containing a space is still split. A trailing empty token is dropped.

    Args:
        line: Raw input line, with or without its line terminator

    Returns:
        List of tokens (empty for an empty line)
    """
    text = line.rstrip("\r\n").replace('"', '')
    tokens = text.split(' ')
    if tokens and tokens[-1] == '':
        tokens.pop()
    return tokens


class RequestParser:
    """
    Parser for the tokens of a ``search`` command.

    Token 0 is the subcommand name and is not interpreted here. Token 1 is
    always the pattern, even if it looks like a flag. The remaining tokens
    may set the root directory, the depth and result limits, or request help.
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        """
        Initialize the parser.

        Args:
            config: Optional configuration whose limits fill in unset flags
        """
        self.config = config

    def parse(self, tokens: Sequence[str]) -> ParseResult:
        """
        Parse command tokens into a search request.

        Args:
            tokens: Command tokens, starting with the subcommand name

        Returns:
            ParseResult with either a request or the help signal set

        Raises:
            ArgumentError: If fewer than two tokens are given
        """
        if len(tokens) < 2:
            raise ArgumentError("missing required arguments")

        pattern = tokens[1]
        directory = ""
        max_depth = None
        max_results = None
        show_help = False
        errors: List[str] = []

        i = 2
        while i < len(tokens):
            token = tokens[i]

            if token in HELP_FLAGS:
                show_help = True
            elif token == DIRECTORY_FLAG:
                if i + 1 < len(tokens):
                    directory = tokens[i + 1]
                    i += 1
                else:
                    logger.debug(f"Ignoring {DIRECTORY_FLAG} without a value")
            elif token in (MAX_DEPTH_FLAG, MAX_RESULTS_FLAG):
                if i + 1 < len(tokens):
                    value = self._parse_limit(token, tokens[i + 1], errors)
                    i += 1
                else:
                    self._report(errors, f"Missing value for {token}")
                    value = None

                if value is not None:
                    if token == MAX_DEPTH_FLAG:
                        max_depth = value
                    else:
                        max_results = value
            else:
                logger.debug(f"Ignoring unrecognized argument: {token!r}")

            i += 1

        if show_help or not pattern or not directory:
            return ParseResult(request=None, show_help=True, errors=errors)

        request = SearchRequest(
            pattern=pattern,
            root_directory=directory,
            max_depth=max_depth,
            max_results=max_results
        )
        request = self.apply_defaults(request)

        logger.info(f"Parsed search request: {request}")
        return ParseResult(request=request, show_help=False, errors=errors)

    def apply_defaults(self, request: SearchRequest) -> SearchRequest:
        """
        Fill in limits the command line left unset from the configuration.

        Args:
            request: Request as parsed from the command line

        Returns:
            The request with configured default limits applied
        """
        if self.config is None:
            return request

        limits = self.config.limits
        return request.with_limits(max_depth=limits.max_depth, max_results=limits.max_results)

    def _parse_limit(self, flag: str, value: str, errors: List[str]) -> Optional[int]:
        """
        Parse the value of a limit flag.

        Returns:
            The positive integer value, or None if it is not one
        """
        # Plain ASCII decimal digits only: no sign, spaces, underscores or other scripts
        if not (value.isascii() and value.isdigit()):
            self._report(errors, f"Invalid value for {flag}: {value!r} is not a positive integer")
            return None

        number = int(value)

        if number <= 0:
            self._report(errors, f"Invalid value for {flag}: {number} must be greater than 0")
            return None

        return number

    def _report(self, errors: List[str], message: str) -> None:
        logger.warning(message)
        errors.append(message)


def parse_command(tokens: Sequence[str], config: Optional[SearchConfig] = None) -> ParseResult:
    """
    Convenience function to parse command tokens.

    Args:
        tokens: Command tokens, starting with the subcommand name
        config: Optional configuration providing default limits

    Returns:
        ParseResult for the command

    Raises:
        ArgumentError: If fewer than two tokens are given
    """
    return RequestParser(config).parse(tokens)

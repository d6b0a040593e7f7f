"""High level parser tying an option table to a program name."""

import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence, Union

from .exceptions import MissingRequiredValueError, UnmatchedOptionError
from .matcher import (
    End,
    Matched,
    MatchResult,
    Matcher,
    MissingValue,
    UnmatchReason,
    Unmatched,
    as_token_source,
)
from .option_table import ArgPolicy, OptionTable, is_sentinel_char
from .token_source import TokenSource
from .types import ArgsList, DescriptorList, OptionPairList

ParseFailure = Union[Unmatched, MissingValue]


@dataclass
class ParseResult:
    """Everything one pass over the tokens produced."""

    matches: list[Matched] = field(default_factory=list)
    errors: list[ParseFailure] = field(default_factory=list)
    residual_index: int = 0
    positionals: ArgsList = field(default_factory=list)

    @property
    def options(self) -> OptionPairList:
        return [(m.option_char, m.value) for m in self.matches]

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def ok(self) -> bool:
        return not self.errors

    def _selects(self, match: Matched, key: str) -> bool:
        if len(key) == 1 and not is_sentinel_char(key) and match.option_char == key:
            return True
        definition = match.definition
        return (
            definition is not None
            and definition.has_long_form
            and definition.long_name.lower() == key.lower()
        )

    def has(self, key: str) -> bool:
        """Check whether an option (short char or full long name) was given."""
        return any(self._selects(m, key) for m in self.matches)

    def values(self, key: str) -> list[Optional[str]]:
        """All values given for an option, in command-line order."""
        return [m.value for m in self.matches if self._selects(m, key)]


class OptionParser:
    """
    Parse argument tokens against a compiled option table.

    Errors found in the tokens are counted and reported through the logging
    module as soon as they are seen. With ``strict=True`` the first error is
    raised instead, as UnmatchedOptionError or MissingRequiredValueError.
    """

    def __init__(
        self,
        program_name: str,
        options: Union[OptionTable, DescriptorList],
        strict: bool = False,
    ):
        self.program_name = program_name
        if isinstance(options, OptionTable):
            self.table = options
        else:
            self.table = OptionTable.compile(options)
        self.matcher = Matcher(self.table)
        self.strict = strict

    def matches(
        self, tokens: Union[TokenSource, Sequence[str]]
    ) -> Iterator[MatchResult]:
        """Lazily yield raw match results, ending with End."""
        return self.matcher.iter_matches(tokens)

    def parse(self, tokens: Union[TokenSource, Sequence[str]]) -> ParseResult:
        source = as_token_source(tokens)
        result = ParseResult(residual_index=source.index)

        for match in self.matcher.iter_matches(source):
            if isinstance(match, Matched):
                result.matches.append(match)
            elif isinstance(match, End):
                result.residual_index = match.residual_index
                source.seek(match.residual_index)
                result.positionals = source.remaining()
            else:
                self._report(match)
                result.errors.append(match)

        return result

    def parse_argv(self, argv: Sequence[str]) -> ParseResult:
        """Parse a full argv, skipping the program name in argv[0]."""
        return self.parse(TokenSource.from_argv(argv))

    def describe_error(self, failure: ParseFailure) -> str:
        """Human readable message for an Unmatched or MissingValue result."""
        if isinstance(failure, MissingValue):
            definition = failure.definition
            if definition.arg_policy is ArgPolicy.ONE_OR_MORE:
                return (
                    f"option '{failure.raw_token}' requires at least one "
                    f"{definition.value_name}"
                )
            return f"option '{failure.raw_token}' requires {definition.value_name}"

        message = f"{failure.reason.value} '{failure.raw_token}'"
        if failure.reason is UnmatchReason.AMBIGUOUS:
            possibilities = " ".join(f"'--{name}'" for name in failure.candidates)
            message += f"; possibilities: {possibilities}"
        return message

    def _report(self, failure: ParseFailure) -> None:
        message = self.describe_error(failure)
        if self.strict:
            if isinstance(failure, MissingValue):
                raise MissingRequiredValueError(
                    failure.raw_token, message, failure.missing_char
                )
            raise UnmatchedOptionError(failure.raw_token, message)
        logging.error(f"{self.program_name}: {message}")

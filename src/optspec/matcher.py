"""Token matching state machine for optspec.

The Matcher walks a TokenSource one result at a time. Every call to
``Matcher.next`` returns exactly one of:

* ``Matched``      an option (and its value, if any) was recognized,
* ``Unmatched``    the token looked like an option but no entry fits,
* ``MissingValue`` an option that needs a value did not get one,
* ``End``          options are over; positionals start at ``residual_index``.

Everything needed to resume lives in ``ParseState``, so the caller can stop
and continue at any point.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterator, Optional, Sequence, Union

from .environment_helper import debug_log
from .option_table import ArgPolicy, OptionDefinition, OptionTable
from .token_source import TokenSource

ERROR_CHAR = "?"
"""Option character reported for results that are errors rather than options."""


class UnmatchReason(Enum):
    UNKNOWN = "unrecognized option"
    AMBIGUOUS = "ambiguous option"
    UNEXPECTED_VALUE = "option does not take a value"


@dataclass(frozen=True)
class Matched:
    option_char: str
    value: Optional[str] = None
    definition: Optional[OptionDefinition] = field(default=None, compare=False)


@dataclass(frozen=True)
class Unmatched:
    raw_token: str
    reason: UnmatchReason = UnmatchReason.UNKNOWN
    candidates: tuple[str, ...] = ()

    option_char: ClassVar[str] = ERROR_CHAR


@dataclass(frozen=True)
class MissingValue:
    definition: OptionDefinition
    raw_token: str

    option_char: ClassVar[str] = ERROR_CHAR

    @property
    def missing_char(self) -> str:
        """Short character of the option that went without a value."""
        return self.definition.short_char


@dataclass(frozen=True)
class End:
    residual_index: int


MatchResult = Union[Matched, Unmatched, MissingValue, End]


@dataclass
class ParseState:
    """Resumable state of one parse session."""

    token_cursor: int = 0
    pending_option: Optional[OptionDefinition] = None
    pending_count: int = 0
    cluster_remainder: str = ""
    seen_double_dash: bool = False


def looks_like_option(token: str, table: OptionTable) -> bool:
    """
    Decide whether a token starts a new option rather than being a value.

    True for a bare ``--``, for ``--name[=value]`` when the name is a known
    long option or prefix of one, and for ``-c...`` when ``c`` is a known
    short option. Anything else (``-``, ``-5`` with no ``5`` option, plain
    words) can be taken as the value of a required option.
    """
    if token == "--":
        return True
    if token.startswith("--"):
        name = token[2:].partition("=")[0]
        return bool(table.find_long(name).candidates)
    if token.startswith("-") and len(token) > 1:
        return table.find_short(token[1]) is not None
    return False


def as_token_source(tokens: Union[TokenSource, Sequence[str]]) -> TokenSource:
    if isinstance(tokens, TokenSource):
        return tokens
    return TokenSource(tokens)


class Matcher:
    """Matches tokens against an OptionTable, one result per call."""

    def __init__(self, table: OptionTable):
        self.table = table

    def looks_like_option(self, token: str) -> bool:
        return looks_like_option(token, self.table)

    def next(self, source: TokenSource, state: ParseState) -> MatchResult:
        """Advance the parse by one result."""
        if source.index != state.token_cursor:
            source.seek(state.token_cursor)

        result = self._step(source, state)
        state.token_cursor = source.index
        debug_log(f"next: {result!r} cursor={state.token_cursor}")
        return result

    def iter_matches(
        self,
        tokens: Union[TokenSource, Sequence[str]],
        state: Optional[ParseState] = None,
    ) -> Iterator[MatchResult]:
        """Yield results until, and including, the terminating End."""
        source = as_token_source(tokens)
        if state is None:
            state = ParseState(token_cursor=source.index)
        while True:
            result = self.next(source, state)
            yield result
            if isinstance(result, End):
                return

    def _step(self, source: TokenSource, state: ParseState) -> MatchResult:
        while True:
            if state.cluster_remainder:
                result = self._match_cluster(source, state)
            elif state.pending_option is not None:
                result = self._continue_values(source, state)
            else:
                token = source.peek()
                if token is None or state.seen_double_dash:
                    return End(source.index)
                if token == "--":
                    source.advance()
                    state.seen_double_dash = True
                    return End(source.index)
                if not token.startswith("-") or token == "-":
                    return End(source.index)

                source.advance()
                if token.startswith("--"):
                    result = self._match_long(token, source, state)
                else:
                    state.cluster_remainder = token[1:]
                    result = self._match_cluster(source, state)

            # None means a multi-valued option was opened (or closed) without
            # producing a result yet
            if result is not None:
                return result

    def _match_long(
        self, token: str, source: TokenSource, state: ParseState
    ) -> Optional[MatchResult]:
        name, sep, inline = token[2:].partition("=")
        inline_value = inline if sep else None

        lookup = self.table.find_long(name)
        if not lookup.found:
            reason = (
                UnmatchReason.AMBIGUOUS if lookup.ambiguous else UnmatchReason.UNKNOWN
            )
            return Unmatched(
                token, reason, tuple(d.long_name for d in lookup.candidates)
            )

        definition = lookup.definition
        policy = definition.arg_policy

        if policy is ArgPolicy.NONE:
            if inline_value is not None:
                return Unmatched(
                    token, UnmatchReason.UNEXPECTED_VALUE, (definition.long_name,)
                )
            return Matched(definition.short_char, None, definition)

        if policy is ArgPolicy.OPTIONAL or inline_value is not None:
            if definition.is_multi_valued:
                self._open_values(state, definition, 1)
            return Matched(definition.short_char, inline_value, definition)

        if policy is ArgPolicy.REQUIRED:
            return self._take_required_value(definition, token, source)

        self._open_values(state, definition, 0)
        return None

    def _match_cluster(
        self, source: TokenSource, state: ParseState
    ) -> Optional[MatchResult]:
        char, rest = state.cluster_remainder[0], state.cluster_remainder[1:]
        state.cluster_remainder = ""

        definition = self.table.find_short(char)
        if definition is None:
            state.cluster_remainder = rest
            return Unmatched(f"-{char}")

        policy = definition.arg_policy

        if policy is ArgPolicy.NONE:
            state.cluster_remainder = rest
            return Matched(char, None, definition)

        if rest:
            # The rest of the cluster is the value, even if it starts with '-'
            if definition.is_multi_valued:
                self._open_values(state, definition, 1)
            return Matched(char, rest, definition)

        if policy is ArgPolicy.OPTIONAL:
            return Matched(char, None, definition)

        if policy is ArgPolicy.REQUIRED:
            return self._take_required_value(definition, f"-{char}", source)

        self._open_values(state, definition, 0)
        return None

    def _take_required_value(
        self, definition: OptionDefinition, token: str, source: TokenSource
    ) -> MatchResult:
        value = source.peek()
        if value is None or self.looks_like_option(value):
            return MissingValue(definition, token)
        source.advance()
        return Matched(definition.short_char, value, definition)

    def _open_values(
        self, state: ParseState, definition: OptionDefinition, count: int
    ) -> None:
        debug_log(f"collecting values for {definition.display_name()}")
        state.pending_option = definition
        state.pending_count = count

    def _is_extra_value(self, token: str) -> bool:
        """Dash-prefixed words end a value list; only a lone "-" is kept."""
        if token.startswith("-") and token != "-":
            return False
        return not self.looks_like_option(token)

    def _continue_values(
        self, source: TokenSource, state: ParseState
    ) -> Optional[MatchResult]:
        definition = state.pending_option
        token = source.peek()
        if token is not None and self._is_extra_value(token):
            source.advance()
            state.pending_count += 1
            return Matched(definition.short_char, token, definition)

        count = state.pending_count
        state.pending_option = None
        state.pending_count = 0
        debug_log(f"{definition.display_name()} took {count} value(s)")

        if count:
            return None
        if definition.arg_policy is ArgPolicy.ONE_OR_MORE:
            return MissingValue(definition, definition.display_name())
        return Matched(definition.short_char, None, definition)

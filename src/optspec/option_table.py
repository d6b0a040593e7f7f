"""Option table compilation and lookup for optspec."""

import re
from bisect import bisect_left
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Optional

from .environment_helper import debug_log
from .exceptions import (
    DuplicateLongOptionError,
    DuplicateShortOptionError,
    MalformedDescriptorError,
)
from .types import DescriptorList

HIDDEN_MARKER = "-"
DEFAULT_VALUE_NAME = "ARG"


class ArgPolicy(Enum):
    """How many values an option takes and whether they are mandatory."""

    NONE = "|"
    OPTIONAL = "?"
    REQUIRED = ":"
    ZERO_OR_MORE = "*"
    ONE_OR_MORE = "+"

    @classmethod
    def from_char(cls, char: str) -> Optional["ArgPolicy"]:
        """Return the policy selected by a descriptor character, if any."""
        for policy in cls:
            if policy.value == char:
                return policy
        return None


def is_sentinel_char(char: str) -> bool:
    """Whitespace and non-printable short characters mean "no short form"."""
    return char.isspace() or not char.isprintable()


@dataclass(frozen=True)
class OptionDefinition:
    """A single recognized option, as compiled from its descriptor."""

    short_char: str
    arg_policy: ArgPolicy = ArgPolicy.NONE
    long_name: str = ""
    value_name: str = DEFAULT_VALUE_NAME
    hidden: bool = False
    descriptor: str = field(default="", compare=False)

    @property
    def has_short_form(self) -> bool:
        return not is_sentinel_char(self.short_char)

    @property
    def has_long_form(self) -> bool:
        return bool(self.long_name)

    @property
    def takes_value(self) -> bool:
        return self.arg_policy is not ArgPolicy.NONE

    @property
    def is_multi_valued(self) -> bool:
        return self.arg_policy in (ArgPolicy.ZERO_OR_MORE, ArgPolicy.ONE_OR_MORE)

    def display_name(self) -> str:
        """Name used in messages: ``--long`` when available, else ``-c``."""
        if self.has_long_form:
            return f"--{self.long_name}"
        return f"-{self.short_char}"


@dataclass(frozen=True)
class LongLookup:
    """Outcome of resolving a (possibly abbreviated) long option name."""

    definition: Optional[OptionDefinition]
    candidates: tuple[OptionDefinition, ...] = ()

    @property
    def found(self) -> bool:
        return self.definition is not None

    @property
    def ambiguous(self) -> bool:
        return self.definition is None and len(self.candidates) > 1


def parse_descriptor(descriptor: str) -> OptionDefinition:
    """
    Parse one descriptor string into an OptionDefinition.

    The layout is ``[-]<short><policy>[ ]<long>[<whitespace><value name>]``:

    * a leading ``-`` hides the option from usage output,
    * the policy character is one of ``| ? : * +``,
    * everything after the policy is the long name, optionally followed by
      whitespace and the display name of the value.

    Raises:
        MalformedDescriptorError: If the descriptor does not follow that layout
    """
    if not descriptor:
        raise MalformedDescriptorError(descriptor, "empty descriptor")

    hidden = descriptor[0] == HIDDEN_MARKER
    pos = 1 if hidden else 0
    if len(descriptor) <= pos:
        raise MalformedDescriptorError(
            descriptor, "hidden marker without a short option character"
        )

    short_char = descriptor[pos]
    if short_char == "-":
        raise MalformedDescriptorError(descriptor, "'-' cannot be a short option")

    policy_char = descriptor[pos + 1 : pos + 2]
    if not policy_char:
        return OptionDefinition(short_char, hidden=hidden, descriptor=descriptor)

    policy = ArgPolicy.from_char(policy_char)
    if policy is None:
        raise MalformedDescriptorError(
            descriptor, f"unknown argument policy character {policy_char!r}"
        )

    rest = descriptor[pos + 2 :]
    if rest.startswith(" "):
        rest = rest[1:]
    parts = re.split(r"\s+", rest, maxsplit=1)
    long_name = parts[0].strip()
    value_name = parts[1].strip() if len(parts) > 1 else ""

    if "=" in long_name or long_name.startswith("-"):
        raise MalformedDescriptorError(
            descriptor, f"invalid long option name {long_name!r}"
        )

    return OptionDefinition(
        short_char,
        policy,
        long_name,
        value_name or DEFAULT_VALUE_NAME,
        hidden,
        descriptor,
    )


class OptionTable:
    """Immutable catalog of option definitions with short and long lookups."""

    def __init__(self, definitions: Iterable[OptionDefinition]):
        accepted: list[OptionDefinition] = []
        self._by_short: dict[str, OptionDefinition] = {}
        self._by_long: dict[str, OptionDefinition] = {}

        for definition in definitions:
            accepted.append(definition)
            if definition.has_short_form:
                if definition.short_char in self._by_short:
                    raise DuplicateShortOptionError(
                        definition.descriptor, definition.short_char
                    )
                self._by_short[definition.short_char] = definition

            if definition.has_long_form:
                key = definition.long_name.lower()
                if key in self._by_long:
                    raise DuplicateLongOptionError(
                        definition.descriptor, definition.long_name
                    )
                self._by_long[key] = definition

        self._definitions = tuple(accepted)
        # Sorted keys let prefix lookups find all candidates in one contiguous run
        self._long_keys = sorted(self._by_long)

    @classmethod
    def compile(cls, descriptors: DescriptorList) -> "OptionTable":
        """
        Compile descriptor strings into a table.

        Args:
            descriptors: Descriptor strings in declaration order

        Returns:
            The compiled OptionTable

        Raises:
            ConfigError: On the first malformed or duplicate descriptor
        """
        if isinstance(descriptors, str):
            descriptors = [descriptors]
        table = cls(parse_descriptor(d) for d in descriptors)
        debug_log(
            f"compile: {len(table)} options, "
            f"short={''.join(sorted(table._by_short))!r}, long={table._long_keys}"
        )
        return table

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[OptionDefinition]:
        return iter(self._definitions)

    def __contains__(self, definition) -> bool:
        return definition in self._definitions

    @property
    def definitions(self) -> tuple[OptionDefinition, ...]:
        return self._definitions

    def visible(self) -> list[OptionDefinition]:
        """Definitions a usage renderer may show (hidden ones are left out)."""
        return [d for d in self._definitions if not d.hidden]

    def find_short(self, char: str) -> Optional[OptionDefinition]:
        """Look up a short option character; sentinels never match."""
        return self._by_short.get(char)

    def find_long(self, name: str) -> LongLookup:
        """
        Resolve a long option name or unique prefix, ignoring case.

        An exact name match wins over longer names sharing it as a prefix.
        Otherwise the prefix must select exactly one name; with several
        candidates the lookup is ambiguous and ``definition`` is None.
        """
        key = name.lower()
        if not key:
            return LongLookup(None)

        exact = self._by_long.get(key)
        if exact is not None:
            return LongLookup(exact, (exact,))

        candidates = []
        i = bisect_left(self._long_keys, key)
        while i < len(self._long_keys) and self._long_keys[i].startswith(key):
            candidates.append(self._by_long[self._long_keys[i]])
            i += 1

        if len(candidates) == 1:
            return LongLookup(candidates[0], (candidates[0],))
        return LongLookup(None, tuple(candidates))

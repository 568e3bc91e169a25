"""Mutation rules: parsing, canonical descriptors and application.

A rule descriptor is either a bare name (``reverse``) or a name with a
parenthesized, comma-separated argument list (``replace(o, 0)``). Arguments
are stripped of surrounding whitespace; wrap an argument in double quotes to
keep commas, parentheses or leading/trailing spaces (``append(", ")``).
Inside quotes ``\\"`` and ``\\\\`` escape a quote and a backslash.

The set of rule kinds is closed. Each kind has a fixed argument signature in
``_SIGNATURES`` and one branch in ``Mutation.apply``.
"""

from __future__ import annotations

import operator
import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Dict, List, Tuple, Union

from mangler.errors import MutationParseError

__all__ = [
    "MutationKind",
    "Mutation",
    "LEET_TABLE",
    "parse_mutation",
    "parse_mutation_string",
    "split_descriptors",
]

Arg = Union[str, int]


class MutationKind(IntEnum):
    """Every transformation a rule can perform."""

    NOTHING = 1
    REVERSE = 2
    UPPERCASE_ALL = 3
    LOWERCASE_ALL = 4
    UPPERCASE_FIRST = 5
    LOWERCASE_FIRST = 6
    SWAP_CASE = 7
    APPEND = 8
    PREPEND = 9
    INSERT = 10
    REMOVE_FIRST = 11
    REMOVE_LAST = 12
    REPEAT = 13
    REPLACE = 14
    BRANCH_REPLACE = 15
    LEET = 16
    APPEND_ANY = 17
    PREPEND_ANY = 18
    IF_LENGTH = 19
    IF_CONTAINS = 20
    UNLESS_CONTAINS = 21

    @property
    def descriptor_name(self) -> str:
        return self.name.lower()

    @classmethod
    def from_string(cls, value: str) -> "MutationKind":
        """Parse a rule name (case-insensitive) into a MutationKind.

        Raises:
            MutationParseError: If the name is not a known rule.
        """
        try:
            return cls[value.upper()]
        except KeyError:
            raise MutationParseError("Unknown mutation rule", value) from None


# Argument signature per kind: "str", "int", "op" (comparison operator),
# or "str*" (one or more strings, only as the sole entry).
_SIGNATURES: Dict[MutationKind, Tuple[str, ...]] = {
    MutationKind.NOTHING: (),
    MutationKind.REVERSE: (),
    MutationKind.UPPERCASE_ALL: (),
    MutationKind.LOWERCASE_ALL: (),
    MutationKind.UPPERCASE_FIRST: (),
    MutationKind.LOWERCASE_FIRST: (),
    MutationKind.SWAP_CASE: (),
    MutationKind.APPEND: ("str",),
    MutationKind.PREPEND: ("str",),
    MutationKind.INSERT: ("int", "str"),
    MutationKind.REMOVE_FIRST: ("int",),
    MutationKind.REMOVE_LAST: ("int",),
    MutationKind.REPEAT: ("int",),
    MutationKind.REPLACE: ("str", "str"),
    MutationKind.BRANCH_REPLACE: ("str", "str"),
    MutationKind.LEET: (),
    MutationKind.APPEND_ANY: ("str*",),
    MutationKind.PREPEND_ANY: ("str*",),
    MutationKind.IF_LENGTH: ("op", "int"),
    MutationKind.IF_CONTAINS: ("str",),
    MutationKind.UNLESS_CONTAINS: ("str",),
}

_COMPARISONS: Dict[str, Callable[[int, int], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "==": operator.eq,
    "!=": operator.ne,
}

_LEET_MAP = {
    "a": "4",
    "b": "8",
    "e": "3",
    "g": "9",
    "i": "1",
    "o": "0",
    "s": "5",
    "t": "7",
    "z": "2",
}

#: Single-substitution leet table applied to both letter cases.
LEET_TABLE = str.maketrans(
    {**_LEET_MAP, **{k.upper(): v for k, v in _LEET_MAP.items()}}
)

_DESCRIPTOR_RE = re.compile(r"^([A-Za-z_]+)\s*(?:\((.*)\))?$", re.DOTALL)

_DIGITS_RE = re.compile(r"[0-9]+")

# Characters that force an argument to be quoted in canonical form
_NEEDS_QUOTING = re.compile(r'[,()"\\]')


@dataclass(frozen=True)
class Mutation:
    """One parsed rule.

    Attributes:
        kind: Transformation kind.
        args: Typed arguments matching the kind's signature.
    """

    kind: MutationKind
    args: Tuple[Arg, ...] = ()

    @property
    def descriptor(self) -> str:
        """Canonical descriptor; ``parse_mutation`` inverts it."""
        name = self.kind.descriptor_name
        if not _SIGNATURES[self.kind]:
            return name
        return f"{name}({', '.join(_format_arg(a) for a in self.args)})"

    @property
    def branch_factor(self) -> int:
        """Maximum number of words ``apply`` returns for one input."""
        if self.kind in (MutationKind.APPEND_ANY, MutationKind.PREPEND_ANY):
            return len(self.args)
        if self.kind in (MutationKind.LEET, MutationKind.BRANCH_REPLACE):
            return 2
        return 1

    def __str__(self) -> str:
        return self.descriptor

    def apply(self, word: str) -> List[str]:
        """Transform ``word`` into zero, one or many candidates.

        Branching kinds list the unchanged word first, then the variants.
        """
        kind = self.kind
        args = self.args

        if kind == MutationKind.NOTHING:
            return [word]
        elif kind == MutationKind.REVERSE:
            return [word[::-1]]
        elif kind == MutationKind.UPPERCASE_ALL:
            return [word.upper()]
        elif kind == MutationKind.LOWERCASE_ALL:
            return [word.lower()]
        elif kind == MutationKind.UPPERCASE_FIRST:
            return [word[:1].upper() + word[1:]]
        elif kind == MutationKind.LOWERCASE_FIRST:
            return [word[:1].lower() + word[1:]]
        elif kind == MutationKind.SWAP_CASE:
            return [word.swapcase()]
        elif kind == MutationKind.APPEND:
            return [word + str(args[0])]
        elif kind == MutationKind.PREPEND:
            return [str(args[0]) + word]
        elif kind == MutationKind.INSERT:
            index = int(args[0])
            return [word[:index] + str(args[1]) + word[index:]]
        elif kind == MutationKind.REMOVE_FIRST:
            return [word[int(args[0]) :]]
        elif kind == MutationKind.REMOVE_LAST:
            count = int(args[0])
            return [word[: len(word) - count] if count < len(word) else ""]
        elif kind == MutationKind.REPEAT:
            return [word * int(args[0])]
        elif kind == MutationKind.REPLACE:
            return [word.replace(str(args[0]), str(args[1]))]
        elif kind == MutationKind.BRANCH_REPLACE:
            return [word, word.replace(str(args[0]), str(args[1]))]
        elif kind == MutationKind.LEET:
            return [word, word.translate(LEET_TABLE)]
        elif kind == MutationKind.APPEND_ANY:
            return [word + str(suffix) for suffix in args]
        elif kind == MutationKind.PREPEND_ANY:
            return [str(prefix) + word for prefix in args]
        elif kind == MutationKind.IF_LENGTH:
            compare = _COMPARISONS[str(args[0])]
            return [word] if compare(len(word), int(args[1])) else []
        elif kind == MutationKind.IF_CONTAINS:
            return [word] if str(args[0]) in word else []
        elif kind == MutationKind.UNLESS_CONTAINS:
            return [word] if str(args[0]) not in word else []
        else:
            raise ValueError(f"Unsupported mutation kind: {kind!r}")


def _format_arg(arg: Arg) -> str:
    if isinstance(arg, int):
        return str(arg)
    if arg == "" or arg != arg.strip() or _NEEDS_QUOTING.search(arg):
        escaped = arg.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return arg


def _split_args(body: str, descriptor: str) -> List[str]:
    """Split an argument list on top-level commas, honouring double quotes."""
    if not body.strip():
        return []

    args: List[str] = []
    current: List[str] = []
    quoted = False  # current argument was quoted
    in_quote = False
    pos = 0
    while pos < len(body):
        ch = body[pos]
        if in_quote:
            if ch == "\\" and pos + 1 < len(body):
                current.append(body[pos + 1])
                pos += 2
                continue
            if ch == '"':
                in_quote = False
            else:
                current.append(ch)
        elif ch == '"':
            if quoted or "".join(current).strip():
                raise MutationParseError("Unexpected quote in arguments", descriptor)
            current = []
            quoted = True
            in_quote = True
        elif ch in "()":
            raise MutationParseError(
                f"Unquoted {ch!r} in arguments; quote the argument", descriptor
            )
        elif ch == ",":
            args.append("".join(current) if quoted else "".join(current).strip())
            current = []
            quoted = False
        elif quoted:
            if not ch.isspace():
                raise MutationParseError(
                    "Unexpected text after quoted argument", descriptor
                )
        else:
            current.append(ch)
        pos += 1

    if in_quote:
        raise MutationParseError("Unterminated quote in arguments", descriptor)
    args.append("".join(current) if quoted else "".join(current).strip())
    return args


def _convert_args(
    kind: MutationKind, raw: List[str], descriptor: str
) -> Tuple[Arg, ...]:
    signature = _SIGNATURES[kind]

    if signature == ("str*",):
        if not raw:
            raise MutationParseError(
                f"'{kind.descriptor_name}' needs at least one argument", descriptor
            )
        return tuple(raw)

    if len(raw) != len(signature):
        raise MutationParseError(
            f"'{kind.descriptor_name}' takes {len(signature)} argument(s), got {len(raw)}",
            descriptor,
        )

    converted: List[Arg] = []
    for expected, value in zip(signature, raw):
        if expected == "int":
            if value.startswith("-") and _DIGITS_RE.fullmatch(value[1:]):
                raise MutationParseError("Integer arguments must be >= 0", descriptor)
            if not _DIGITS_RE.fullmatch(value):
                raise MutationParseError(
                    f"Expected an integer argument, got {value!r}", descriptor
                )
            converted.append(int(value))
        elif expected == "op":
            if value not in _COMPARISONS:
                raise MutationParseError(
                    f"Unknown comparison {value!r}; expected one of {sorted(_COMPARISONS)}",
                    descriptor,
                )
            converted.append(value)
        else:
            converted.append(value)

    if kind == MutationKind.REPEAT and converted[0] == 0:
        raise MutationParseError("'repeat' count must be >= 1", descriptor)
    if kind in (MutationKind.REPLACE, MutationKind.BRANCH_REPLACE) and not converted[0]:
        raise MutationParseError("Replacement source must not be empty", descriptor)
    return tuple(converted)


def parse_mutation(descriptor: str) -> Mutation:
    """Parse one rule descriptor.

    Args:
        descriptor: Text such as ``uppercase_first`` or ``append_any(1, 12)``.

    Returns:
        The parsed Mutation.

    Raises:
        MutationParseError: On malformed syntax, an unknown rule name or
            arguments that do not fit the rule.
    """
    text = descriptor.strip()
    match = _DESCRIPTOR_RE.match(text)
    if match is None:
        raise MutationParseError("Malformed mutation rule", descriptor)

    kind = MutationKind.from_string(match.group(1))
    body = match.group(2)
    raw_args = _split_args(body, descriptor) if body is not None else []
    return Mutation(kind=kind, args=_convert_args(kind, raw_args, descriptor))


def split_descriptors(text: str) -> List[str]:
    """Split inline rule text on whitespace outside parentheses and quotes.

    Raises:
        MutationParseError: On unbalanced parentheses or quotes.
    """
    parts: List[str] = []
    current: List[str] = []
    depth = 0
    in_quote = False
    pos = 0
    while pos < len(text):
        ch = text[pos]
        if in_quote:
            current.append(ch)
            if ch == "\\" and pos + 1 < len(text):
                current.append(text[pos + 1])
                pos += 1
            elif ch == '"':
                in_quote = False
        elif ch == '"':
            in_quote = True
            current.append(ch)
        elif ch == "(":
            depth += 1
            current.append(ch)
        elif ch == ")":
            depth -= 1
            if depth < 0:
                raise MutationParseError("Unbalanced ')'", text)
            current.append(ch)
        elif ch.isspace() and depth == 0:
            if current:
                parts.append("".join(current))
                current = []
        else:
            current.append(ch)
        pos += 1

    if in_quote:
        raise MutationParseError("Unterminated quote", text)
    if depth != 0:
        raise MutationParseError("Unbalanced '('", text)
    if current:
        parts.append("".join(current))
    return parts


def parse_mutation_string(text: str) -> List[Mutation]:
    """Parse whitespace-delimited inline rules, e.g. ``"leet append(!)"``."""
    return [parse_mutation(part) for part in split_descriptors(text)]

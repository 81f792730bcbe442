"""Rule-table tokenizer with an explicit state stack.

Rules are grouped into named states; the first matching rule of the top
state wins, so declaration order is part of each grammar's contract.
Block constructs push/pop states to track nesting.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from pygments.token import _TokenType

from ..errors import TokenizeError

ROOT_STATE = "root"


@dataclass(frozen=True)
class Push:
    """Enter ``state`` on top of the current stack."""

    state: str


@dataclass(frozen=True)
class Pop:
    """Leave ``count`` states; the root frame is never removed."""

    count: int = 1


Transition = Push | Pop | None


@dataclass(frozen=True)
class Rule:
    pattern: re.Pattern[str]
    kind: _TokenType
    transition: Transition = None


RuleTable = Mapping[str, tuple[Rule, ...]]


@dataclass(frozen=True)
class Token:
    """Classified slice of source text starting at ``offset``."""

    kind: _TokenType
    text: str
    offset: int


@dataclass(frozen=True)
class ScanResult:
    tokens: tuple[Token, ...]
    stack: tuple[str, ...]

    @property
    def depth(self) -> int:
        return len(self.stack)


def rule(pattern: str, kind: _TokenType, transition: Transition = None, flags: int = re.MULTILINE) -> Rule:
    """Compile ``pattern`` into a :class:`Rule`."""
    return Rule(re.compile(pattern, flags), kind, transition)


def build_table(states: Mapping[str, Iterable[Rule]]) -> dict[str, tuple[Rule, ...]]:
    """Freeze a state mapping and check that push targets exist."""
    table = {name: tuple(rules) for name, rules in states.items()}
    if ROOT_STATE not in table:
        raise ValueError(f"rule table has no {ROOT_STATE!r} state")
    for name, rules in table.items():
        for entry in rules:
            if isinstance(entry.transition, Push) and entry.transition.state not in table:
                raise ValueError(f"state {name!r} pushes unknown state {entry.transition.state!r}")
    return table


def _apply_transition(stack: list[str], transition: Transition) -> None:
    if isinstance(transition, Push):
        stack.append(transition.state)
    elif isinstance(transition, Pop):
        keep = max(1, len(stack) - max(0, transition.count))
        del stack[keep:]


def iter_tokens(source: str, table: RuleTable, stack: list[str] | None = None) -> Iterator[Token]:
    """Yield tokens for ``source`` while mutating ``stack`` in place.

    Raises :class:`TokenizeError` at the first offset no rule of the active
    state can match. Callers that need the final stack pass their own list.
    """
    if stack is None:
        stack = [ROOT_STATE]
    pos = 0
    end = len(source)
    while pos < end:
        state = stack[-1]
        for entry in table[state]:
            match = entry.pattern.match(source, pos)
            if match is None or match.end() == pos:
                continue
            yield Token(entry.kind, match.group(0), pos)
            _apply_transition(stack, entry.transition)
            pos = match.end()
            break
        else:
            raise TokenizeError(pos, state)


def scan(source: str, table: RuleTable) -> ScanResult:
    """Tokenize ``source`` and report the state stack left at the end."""
    stack = [ROOT_STATE]
    tokens = tuple(iter_tokens(source, table, stack))
    return ScanResult(tokens=tokens, stack=tuple(stack))


def tokenize(source: str, table: RuleTable) -> list[Token]:
    return list(iter_tokens(source, table))

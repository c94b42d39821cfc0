"""Pass-through policy: decide whether a processed line is forwarded.

Two flags fixed at startup, one decision per line:

    eat_all  eat_matches  matched  -> forward
    True     any          any         False
    False    True         True        False
    False    otherwise                True

No memory of prior lines.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PassThroughPolicy:
    eat_all: bool = False
    eat_matches: bool = False

    def should_forward(self, matched: bool) -> bool:
        if self.eat_all:
            return False
        if matched and self.eat_matches:
            return False
        return True

    def describe(self) -> str:
        if self.eat_all:
            return "eat all lines"
        if self.eat_matches:
            return "eat matched lines"
        return "forward all lines"


__all__ = ["PassThroughPolicy"]

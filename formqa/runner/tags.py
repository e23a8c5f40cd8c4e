"""Tag expressions for selecting scenarios.

Syntax:
    "smoke login"        smoke OR login (whitespace or commas separate groups)
    "smoke+login"        smoke AND login
    "smoke -slow"        smoke OR anything not tagged slow
    "smoke+-slow"        smoke AND NOT slow

An empty expression selects every scenario. A leading "@" on a tag is
ignored, so "@smoke" and "smoke" are the same tag.
"""

import re
from typing import Iterable, List, Tuple

# (tag, negated)
Term = Tuple[str, bool]


def _normalize(tag: str) -> str:
    return tag.strip().lstrip("@").lower()


class TagExpression:
    def __init__(self, groups: List[List[Term]]):
        self.groups = groups

    @classmethod
    def parse(cls, text: str) -> "TagExpression":
        groups: List[List[Term]] = []
        for chunk in re.split(r"[\s,]+", (text or "").strip()):
            if not chunk:
                continue
            terms: List[Term] = []
            for part in chunk.split("+"):
                negated = part.startswith("-")
                tag = _normalize(part[1:] if negated else part)
                if tag:
                    terms.append((tag, negated))
            if terms:
                groups.append(terms)
        return cls(groups)

    def is_empty(self) -> bool:
        return not self.groups

    def matches(self, tags: Iterable[str]) -> bool:
        if self.is_empty():
            return True
        present = {_normalize(tag) for tag in tags}
        return any(all((tag in present) != negated for tag, negated in group) for group in self.groups)

    def __repr__(self):
        return f"TagExpression({self.groups!r})"

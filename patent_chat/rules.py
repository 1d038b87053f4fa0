"""Ordered extraction rules.

Each field that has several heuristics (patent number, title, abstract) is
described by a tuple of ``ExtractionRule`` values tried in sequence; the first
rule whose pattern matches and whose cleaned value is accepted wins.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable


@dataclass(frozen=True)
class ExtractionRule:
    name: str
    pattern: re.Pattern[str]
    group: int = 1
    clean: Callable[[str], str] | None = None
    accept: Callable[[str], bool] | None = None

    def apply(self, text: str) -> str | None:
        match = self.pattern.search(text)
        if not match or not match.group(self.group):
            return None
        value = match.group(self.group)
        if self.clean is not None:
            value = self.clean(value)
        if not value:
            return None
        if self.accept is not None and not self.accept(value):
            return None
        return value


def first_match(rules: Iterable[ExtractionRule], text: str) -> tuple[str, str] | None:
    for rule in rules:
        value = rule.apply(text)
        if value is not None:
            return rule.name, value
    return None

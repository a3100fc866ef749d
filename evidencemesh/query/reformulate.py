# evidencemesh/query/reformulate.py
"""Terminology rewrites tried, in order, when a query finds nothing."""

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Reformulation:
    """A case-insensitive phrase substitution toward scientific terminology."""

    name: str
    pattern: re.Pattern[str]
    replacement: str

    def rewrite(self, query: str) -> str:
        return self.pattern.sub(self.replacement, query)


def rule(name: str, pattern: str, replacement: str) -> Reformulation:
    return Reformulation(name, re.compile(pattern, re.IGNORECASE), replacement)


REFORMULATIONS: tuple[Reformulation, ...] = (
    rule("energy_value", r"caloric content|calorie content", "energy value"),
    rule("safety", r"long[- ]?term health effects", "safety"),
    rule("measurement", r"determined and verified", "measurement"),
    rule("composition", r"ingredients", "composition"),
    rule("research_consensus", r"current scientific research say", "systematic review"),
    rule("nutritional_analysis", r"do they contribute calories", "nutritional analysis"),
    rule("systematic_review", r"review", "systematic review"),
    rule("effect", r"impact", "effect"),
)


def reformulations(
    query: str,
    tried: Iterable[str] = (),
    rules: Iterable[Reformulation] = REFORMULATIONS,
) -> Iterator[tuple[Reformulation, str]]:
    """Yield (rule, rewritten query) for each rule that yields a new query.

    Every rule rewrites the original query, not the previous rewrite. Rules
    whose output equals the query or anything already tried are skipped.
    Queries yielded here count as tried for the rules that follow.
    """
    seen = {query, *tried}
    for reformulation in rules:
        candidate = reformulation.rewrite(query)
        if candidate in seen:
            continue
        seen.add(candidate)
        yield reformulation, candidate

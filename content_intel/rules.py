"""
Pattern rules and the two classification primitives built on them.

A PatternRule is data: a name, a predicate over a piece of text and some
optional display metadata. Analyzers never hard-code regexes; they receive
an ordered rule sequence from the caller.

Two ways to apply a rule sequence:
- match_all: every matching rule name. Frequency-style analyses (title
  patterns, content gaps) count a video once per pattern it shows.
- classify_first: first match wins, "Other" when nothing matches.
  Mutually exclusive classification (content type) uses this one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

OTHER_LABEL = "Other"


@dataclass(frozen=True)
class PatternRule:
    name: str
    predicate: Callable[[str], bool]
    weight_hint: Optional[str] = None
    insight: str = ""

    def matches(self, text: str) -> bool:
        return bool(self.predicate(text or ""))

    @staticmethod
    def from_regex(
        name: str,
        pattern: str,
        flags: int = 0,
        weight_hint: Optional[str] = None,
        insight: str = "",
    ) -> "PatternRule":
        compiled = re.compile(pattern, flags)
        return PatternRule(
            name=name,
            predicate=lambda text: compiled.search(text) is not None,
            weight_hint=weight_hint,
            insight=insight,
        )


def match_all(text: str, rules: Sequence[PatternRule]) -> List[str]:
    """Names of every rule that matches, in rule order."""
    return [rule.name for rule in rules if rule.matches(text)]


def classify_first(text: str, rules: Sequence[PatternRule], fallback: str = OTHER_LABEL) -> str:
    """Name of the first matching rule, or the fallback label."""
    for rule in rules:
        if rule.matches(text):
            return rule.name
    return fallback


def default_title_rules() -> Tuple[PatternRule, ...]:
    """Stylistic title patterns compared between top performers and the full catalog."""
    return (
        PatternRule.from_regex("Question Titles", r"\?", weight_hint="❓",
                               insight="Questions create curiosity gaps"),
        PatternRule.from_regex("Numbers/Lists", r"\d+", weight_hint="🔢",
                               insight="Data-driven titles build credibility"),
        PatternRule.from_regex("ALL CAPS Words", r"\b[A-Z]{3,}\b", weight_hint="📢",
                               insight="Emphasis creates visual contrast"),
        PatternRule.from_regex("Parentheses/Brackets", r"[\(\[\{]", weight_hint="📎",
                               insight="Adds context or urgency"),
        PatternRule.from_regex("First Person (I/My)", r"\b(I|My|We|Our)\b", re.IGNORECASE, weight_hint="👤",
                               insight="Personal connection with audience"),
        PatternRule.from_regex("Negative Words", r"\b(never|stop|avoid|worst|fail|bad|terrible|don't)\b",
                               re.IGNORECASE, weight_hint="⚠️",
                               insight="Problem-focused content drives clicks"),
        PatternRule.from_regex("Power Words", r"\b(secret|ultimate|best|perfect|complete|easy|simple|amazing)\b",
                               re.IGNORECASE, weight_hint="💪",
                               insight="High-impact adjectives boost CTR"),
    )


def default_content_type_rules() -> Tuple[PatternRule, ...]:
    """Ordered content-type rules; order matters because the first match wins."""
    return (
        PatternRule.from_regex("Tutorial/How-To",
                               r"\b(tutorial|how to|guide|learn|teach|step by step|tips|tricks)\b",
                               re.IGNORECASE, weight_hint="#3b82f6"),
        PatternRule.from_regex("Review/Reaction",
                               r"\b(review|reaction|reacts?|responds?|first time|listening to|watching)\b",
                               re.IGNORECASE, weight_hint="#ec4899"),
        PatternRule.from_regex("Vlog/Behind-the-Scenes",
                               r"\b(vlog|behind|day in|life|personal|story|journey|update)\b",
                               re.IGNORECASE, weight_hint="#f59e0b"),
        PatternRule.from_regex("Comparison/VS", r"\b(vs\.?|versus|compare|comparison|battle)\b",
                               re.IGNORECASE, weight_hint="#10b981"),
        PatternRule.from_regex("Listicle/Top X", r"\b(top \d+|best|worst|\d+ (things|ways|tips|reasons))\b",
                               re.IGNORECASE, weight_hint="#8b5cf6"),
        PatternRule.from_regex("Challenge", r"\b(challenge|try|attempt|test|experiment)\b",
                               re.IGNORECASE, weight_hint="#ef4444"),
    )


def default_gap_rules() -> Tuple[PatternRule, ...]:
    """Topical/format patterns looked for across competitor catalogs."""
    return (
        PatternRule.from_regex("Question-based hooks", r"\?"),
        PatternRule.from_regex("How-to tutorials", r"how to|how do", re.IGNORECASE),
        PatternRule.from_regex("Numbered lists", r"\d+\s+(ways|things|tips|reasons|steps)", re.IGNORECASE),
        PatternRule.from_regex("Beginner content", r"beginner|basics|101|introduction|getting started",
                               re.IGNORECASE),
        PatternRule.from_regex("Advanced content", r"advanced|pro|expert|master", re.IGNORECASE),
        PatternRule.from_regex("Reviews & Comparisons", r"review|vs|comparison|better than", re.IGNORECASE),
        PatternRule.from_regex("Q&A sessions", r"q&a|questions|ask me|ama", re.IGNORECASE),
        PatternRule.from_regex("Behind-the-scenes", r"behind|bts|making of|setup|routine", re.IGNORECASE),
    )

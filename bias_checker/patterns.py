"""Bias pattern registry and the matchers that drive it.

The registry is a fixed, ordered table of bias categories.  Each category
owns an ordered list of :class:`PatternRule` entries and one explanation
string.  Rules match whole words only, case-insensitively, so ``"he"``
never fires inside ``"the"``.

Matching is abstracted behind the :class:`Matcher` protocol so the
scoring algorithm never touches regular expressions directly.  The
default :class:`RegexMatcher` is built from literal term lists joined into
a single bounded alternation, which keeps every scan linear in the input
length.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Protocol


class Category(str, Enum):
    """The four bias buckets, in declaration order."""

    GENDER = "gender"
    POLITICAL = "political"
    RACIAL = "racial"
    OTHER = "other"


# ---------------------------------------------------------------------------
# Matchers
# ---------------------------------------------------------------------------

class Matcher(Protocol):
    """Anything that can locate non-overlapping occurrences in text."""

    def find_all(self, text: str) -> list[tuple[int, int]]:
        """Return ``(start, length)`` pairs, left to right."""
        ...


@dataclass(frozen=True)
class RegexMatcher:
    """Case-insensitive whole-word matcher over a set of literal terms.

    Example
    -------
    >>> m = RegexMatcher.from_terms(["chairman", "fireman"])
    >>> m.find_all("The Chairman and the fireman")
    [(4, 8), (21, 7)]
    """

    pattern: re.Pattern[str]

    @classmethod
    def from_terms(cls, terms: Iterable[str]) -> RegexMatcher:
        terms = [t for t in terms if t]
        if not terms:
            raise ValueError("a matcher needs at least one term")
        # Longest first so "inner city" wins over a shorter shared prefix.
        ordered = sorted(terms, key=len, reverse=True)
        alternation = "|".join(re.escape(t) for t in ordered)
        return cls(re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE))

    def find_all(self, text: str) -> list[tuple[int, int]]:
        return [(m.start(), m.end() - m.start()) for m in self.pattern.finditer(text)]


# ---------------------------------------------------------------------------
# Rules and registry
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PatternRule:
    """One detection rule: what to match, how much it counts, what to say."""

    matcher: Matcher
    weight: float
    suggestion: str

    def __post_init__(self) -> None:
        if not 0.0 < self.weight <= 1.0:
            raise ValueError(f"rule weight must be in (0, 1], got {self.weight!r}")


def rule(terms: Iterable[str], weight: float, suggestion: str) -> PatternRule:
    """Build a whole-word :class:`PatternRule` from literal terms."""
    return PatternRule(RegexMatcher.from_terms(terms), weight, suggestion)


@dataclass(frozen=True)
class CategoryRules:
    category: Category
    rules: tuple[PatternRule, ...]
    explanation: str
    label: str = ""


@dataclass(frozen=True)
class PatternRegistry:
    """Read-only, ordered table of :class:`CategoryRules`.

    Iteration yields categories in the order they were given, which is
    also the order bias types appear in analysis results.
    """

    entries: tuple[CategoryRules, ...]
    _index: dict[Category, CategoryRules] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: dict[Category, CategoryRules] = {}
        for entry in self.entries:
            if entry.category in index:
                raise ValueError(f"duplicate category in registry: {entry.category.value}")
            index[entry.category] = entry
        object.__setattr__(self, "_index", index)

    def __iter__(self) -> Iterator[CategoryRules]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def categories(self) -> list[Category]:
        return [e.category for e in self.entries]

    def rules_for(self, category: Category) -> tuple[PatternRule, ...]:
        return self._index[category].rules

    def explanation_for(self, category: Category) -> str:
        return self._index[category].explanation

    def label_for(self, category: Category) -> str:
        return self._index[category].label

    def list_rules(self) -> list[dict[str, str | int | float]]:
        """Return a human-readable list of every rule in the registry."""
        return [
            {
                "category": entry.category.value,
                "index": i,
                "weight": r.weight,
                "suggestion": r.suggestion,
            }
            for entry in self.entries
            for i, r in enumerate(entry.rules)
        ]


# ---------------------------------------------------------------------------
# Built-in rule set
# ---------------------------------------------------------------------------

_POLITICAL_LABELS = (
    "These political labels can be loaded terms. Consider more specific policy descriptions."
)

_GENDER = CategoryRules(
    category=Category.GENDER,
    rules=(
        rule(
            ["mankind", "manpower", "manmade", "chairman", "policeman", "fireman",
             "stewardess", "waitress", "actress"],
            0.6,
            "Consider using gender-neutral terms like 'humanity', 'workforce', "
            "'artificial', 'chair', 'police officer', 'firefighter', "
            "'flight attendant', 'server', 'actor'.",
        ),
        rule(
            ["he", "his", "him"],
            0.2,
            "If not referring to a specific man, consider using 'they/their/them' "
            "for gender neutrality.",
        ),
        rule(
            ["she", "her", "hers"],
            0.2,
            "If not referring to a specific woman, consider using 'they/their/them' "
            "for gender neutrality.",
        ),
        rule(
            ["girls", "ladies", "gals", "guys", "boys", "men", "women"],
            0.3,
            "When referring to mixed gender groups, consider using 'people', "
            "'folks', 'team', or 'everyone'.",
        ),
        rule(
            ["hysterical", "emotional", "bossy", "shrill", "nagging", "bitchy"],
            0.8,
            "These terms are often applied in a gender-biased way. "
            "Consider more neutral descriptors.",
        ),
        rule(
            ["man up", "grow a pair", "don't be a girl", "like a girl"],
            0.9,
            "These phrases reinforce gender stereotypes. Consider more inclusive language.",
        ),
    ),
    explanation=(
        "Gender bias involves language that treats genders unequally or "
        "reinforces gender stereotypes."
    ),
    label="Gender bias detected",
)

_POLITICAL = CategoryRules(
    category=Category.POLITICAL,
    rules=(
        rule(["leftist", "left-wing", "liberal", "socialist", "communist"], 0.5, _POLITICAL_LABELS),
        rule(["right-wing", "conservative", "fascist", "alt-right"], 0.5, _POLITICAL_LABELS),
        rule(
            ["radical", "extremist", "fanatic"],
            0.7,
            "These terms can be politically charged. Consider more neutral "
            "descriptions of specific positions.",
        ),
        rule(
            ["snowflake", "libtard", "republicant", "trumptard", "democrap"],
            0.9,
            "These are derogatory political terms. Consider respectful language "
            "when discussing different viewpoints.",
        ),
        rule(
            ["mainstream media", "fake news", "deep state", "elites"],
            0.6,
            "These terms often carry political bias. Consider more specific and "
            "neutral descriptions.",
        ),
        rule(
            ["woke", "cancel culture", "political correctness"],
            0.6,
            "These terms have become politically charged. Consider more specific "
            "descriptions of the issues.",
        ),
    ),
    explanation=(
        "Political bias involves language that favors one political viewpoint "
        "over others or uses politically charged terminology."
    ),
    label="Political bias detected",
)

_RACIAL = CategoryRules(
    category=Category.RACIAL,
    rules=(
        rule(
            ["thug", "ghetto", "urban", "inner city", "welfare queen"],
            0.7,
            "These terms can carry racial connotations. Consider more specific "
            "and neutral language.",
        ),
        rule(
            ["illegal alien", "illegal immigrant"],
            0.6,
            "Consider 'undocumented immigrant' or 'person without legal status' "
            "for more neutral language.",
        ),
        rule(
            ["articulate", "well-spoken"],
            0.4,
            "When applied to minorities, these terms can imply surprise at their "
            "abilities. Consider whether you would use this descriptor for everyone.",
        ),
        rule(
            ["exotic", "oriental", "colored", "ethnic"],
            0.8,
            "These terms can otherize racial groups. Consider more specific and "
            "respectful terminology.",
        ),
        rule(
            ["civilized", "primitive", "savage", "tribal"],
            0.7,
            "These terms often carry colonial and racial bias. Consider more "
            "neutral and specific descriptions.",
        ),
        rule(
            ["model minority", "credit to their race"],
            0.8,
            "These phrases reinforce racial stereotypes. Consider discussing "
            "individual achievements without racial framing.",
        ),
    ),
    explanation=(
        "Racial bias involves language that treats racial groups unequally or "
        "reinforces racial stereotypes."
    ),
    label="Racial bias detected",
)

_OTHER = CategoryRules(
    category=Category.OTHER,
    rules=(
        rule(
            ["crazy", "insane", "psycho", "schizo", "retarded", "lame"],
            0.7,
            "These terms can be ableist. Consider more specific and respectful language.",
        ),
        rule(
            ["old", "elderly", "senior citizen"],
            0.3,
            "Consider 'older adult' or specific age ranges when relevant.",
        ),
        rule(
            ["fat", "obese", "overweight", "skinny"],
            0.5,
            "Body-related terms can carry bias. Consider whether physical "
            "descriptions are necessary.",
        ),
        rule(
            ["third world", "developing country"],
            0.5,
            "Consider 'low-income country' or naming specific regions/countries.",
        ),
        rule(
            ["poor", "poverty-stricken", "disadvantaged"],
            0.4,
            "Consider 'economically marginalized' or more specific descriptions "
            "of economic conditions.",
        ),
        rule(
            ["normal", "abnormal", "natural", "unnatural"],
            0.5,
            "These terms can imply value judgments. Consider more specific and "
            "neutral descriptions.",
        ),
    ),
    explanation=(
        "Other biases include ableism, ageism, classism, and other forms of "
        "prejudice in language."
    ),
    label="Other bias detected (ableism, ageism, etc.)",
)

DEFAULT_REGISTRY = PatternRegistry((_GENDER, _POLITICAL, _RACIAL, _OTHER))

"""Rule-based bias scoring with span highlighting.

The scorer walks every rule of every category in a
:class:`~bias_checker.patterns.PatternRegistry`, accumulates a per-category
confidence, collects suggestions, and rebuilds the input as a list of
:class:`TextSpan` objects that mark the matched words.

Results are advisory.  Nothing here blocks content; see
:mod:`bias_checker.toxicity_gate` for the blocking check.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, NamedTuple

from pydantic import BaseModel

from bias_checker.logging import get_logger
from bias_checker.patterns import DEFAULT_REGISTRY, Category, PatternRegistry

logger = get_logger("bias_scorer")

SIGNIFICANT_BIAS = "Consider revising your text to reduce significant bias."
SOME_BIAS = "Your text contains some bias. Consider the suggestions below."
MINIMAL_BIAS = (
    "Your text contains minimal bias, but could be improved with the suggestions below."
)
NO_BIAS = "No significant bias detected in your text."


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------

class BiasTypeResult(BaseModel):
    """Per-category outcome of one analysis."""

    type: Category
    confidence: float
    """Accumulated confidence in [0.0, 1.0]."""

    examples: list[str]
    """Up to three distinct matched substrings, in discovery order."""

    explanation: str


class TextSpan(BaseModel):
    """A slice of the input, tagged with a category when it matched a rule."""

    text: str
    category: Category | None = None
    rule_index: int | None = None


class BiasAnalysisResult(BaseModel):
    """Structured result of a bias scan."""

    overall_score: float
    """Mean confidence of the categories that matched, in [0.0, 1.0]."""

    bias_types: list[BiasTypeResult]
    suggestions: list[str]
    highlighted_text: list[TextSpan]
    """Spans that concatenate back to the exact input."""


class _Match(NamedTuple):
    start: int
    length: int
    category: Category
    rule_index: int


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _banner(score: float) -> str:
    if score > 0.7:
        return SIGNIFICANT_BIAS
    if score > 0.3:
        return SOME_BIAS
    return MINIMAL_BIAS


def _highlight(text: str, matches: list[_Match]) -> list[TextSpan]:
    """Split *text* into plain and categorised spans.

    Matches are taken earliest start first; ties keep discovery order.  A
    match that starts inside an already emitted span is dropped from the
    highlighting so spans never overlap.
    """
    if not matches:
        return [TextSpan(text=text)]

    # sorted() is stable, so equal starts keep category/rule scan order.
    ordered = sorted(matches, key=lambda m: m.start)
    spans: list[TextSpan] = []
    cursor = 0
    for m in ordered:
        if m.start < cursor:
            continue
        if m.start > cursor:
            spans.append(TextSpan(text=text[cursor:m.start]))
        end = m.start + m.length
        spans.append(
            TextSpan(text=text[m.start:end], category=m.category, rule_index=m.rule_index)
        )
        cursor = end
    if cursor < len(text):
        spans.append(TextSpan(text=text[cursor:]))
    return spans


def bias_level(score: float) -> str:
    """Bucket an overall score into ``"low"``, ``"medium"`` or ``"high"``."""
    if score < 0.3:
        return "low"
    if score < 0.7:
        return "medium"
    return "high"


# ---------------------------------------------------------------------------
# Scorer
# ---------------------------------------------------------------------------

@dataclass
class BiasScorer:
    """Score free-form text against a pattern registry.

    Parameters
    ----------
    registry : PatternRegistry
        Rules to scan with.  Defaults to the built-in registry.
    """

    registry: PatternRegistry = DEFAULT_REGISTRY

    _MAX_EXAMPLES: ClassVar[int] = 3

    def analyze(self, text: str) -> BiasAnalysisResult:
        """Analyse *text* and return a :class:`BiasAnalysisResult`."""
        if not text or not text.strip():
            return BiasAnalysisResult(
                overall_score=0.0,
                bias_types=[],
                suggestions=[NO_BIAS],
                highlighted_text=[TextSpan(text=text)] if text else [],
            )

        suggestions: dict[str, None] = {}
        matches: list[_Match] = []
        bias_types: list[BiasTypeResult] = []

        for entry in self.registry:
            confidence = 0.0
            examples: list[str] = []
            for index, pattern_rule in enumerate(entry.rules):
                increment = min(0.1 + pattern_rule.weight * 0.1, 1.0)
                for start, length in pattern_rule.matcher.find_all(text):
                    # Clamped per increment, not once at the end.
                    confidence = min(confidence + increment, 1.0)
                    found = text[start:start + length]
                    if len(examples) < self._MAX_EXAMPLES and found not in examples:
                        examples.append(found)
                    matches.append(_Match(start, length, entry.category, index))
                    suggestions.setdefault(pattern_rule.suggestion, None)

            if confidence > 0:
                bias_types.append(
                    BiasTypeResult(
                        type=entry.category,
                        confidence=confidence,
                        examples=examples,
                        explanation=entry.explanation,
                    )
                )

        if bias_types:
            overall = sum(b.confidence for b in bias_types) / len(bias_types)
            ordered_suggestions = [_banner(overall), *suggestions]
        else:
            overall = 0.0
            ordered_suggestions = [NO_BIAS]

        logger.debug(
            "Bias analysis complete",
            extra={
                "overall_score": round(overall, 4),
                "categories": [b.type.value for b in bias_types],
                "text_length": len(text),
            },
        )

        return BiasAnalysisResult(
            overall_score=overall,
            bias_types=bias_types,
            suggestions=ordered_suggestions,
            highlighted_text=_highlight(text, matches),
        )


_default_scorer = BiasScorer()


def analyze(text: str) -> BiasAnalysisResult:
    """Analyse *text* with the built-in registry."""
    return _default_scorer.analyze(text)

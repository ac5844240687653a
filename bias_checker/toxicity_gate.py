"""Toxicity gate for user submissions.

A deterministic, first-match-wins check that runs **before** a comment or
post is accepted.  A toxic verdict is a hard block; callers must not
persist the content.

Checks run in order and stop at the first hit:

1. Category-tagged disallowed-content patterns, in list order.
2. Shouting: mostly all-caps words in a text of five or more words.
3. Runs of five or more ``!``, ``?`` or ``.`` characters.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import ClassVar

from pydantic import BaseModel

from bias_checker.logging import get_logger

logger = get_logger("toxicity_gate")

SHOUTING = "Excessive capitalization (shouting)"
EXCESSIVE_PUNCTUATION = "Excessive punctuation"


class ToxicityVerdict(BaseModel):
    """Outcome of a toxicity check."""

    is_toxic: bool
    reason: str | None = None
    """Human-readable reason code; ``None`` when the text is clean."""


@dataclass(frozen=True)
class ToxicRule:
    reason: str
    pattern: re.Pattern[str]


def _words(*terms: str) -> re.Pattern[str]:
    return re.compile(r"\b(?:" + "|".join(terms) + r")\b", re.IGNORECASE)


# Up to three intervening words, e.g. "i really hate all of you".
_GAP = r"(?:\s+\w+){0,3}\s+"


@dataclass
class ToxicityGate:
    """Classify text as acceptable or blocked.

    Parameters
    ----------
    rules : list[ToxicRule]
        Disallowed-content rules, checked in order.
    """

    _RULES: ClassVar[list[ToxicRule]] = [
        ToxicRule(
            "Profanity",
            _words(
                "fuck", "shit", "ass", "bitch", "cunt", "dick", "pussy", "cock",
                "whore", "slut", "asshole", "motherfuck", "bullshit", "piss", "damn",
            ),
        ),
        ToxicRule(
            "Racial slurs",
            _words(
                "nigger", "nigga", "chink", "spic", "kike", "wetback", "gook",
                "towelhead", "raghead", "redskin", "beaner", "coon", "gringo", "jap",
            ),
        ),
        ToxicRule(
            "Homophobic/transphobic slurs",
            _words("fag", "faggot", "dyke", "tranny", "homo", "queer", "sissy",
                   "ladyboy", "shemale"),
        ),
        ToxicRule(
            "Ableist slurs",
            _words("retard", "retarded", "spaz", "spastic", "cripple", "vegetable",
                   "mongoloid", "moron", "idiot", "imbecile"),
        ),
        ToxicRule(
            "Self-harm encouragement",
            _words(r"kill\s+yourself", "kys", r"commit\s+suicide", r"neck\s+yourself",
                   r"end\s+your\s+life", r"jump\s+off", r"slit\s+your", r"hang\s+yourself"),
        ),
        ToxicRule(
            "Violent content",
            _words(f"i{_GAP}hate{_GAP}you", "die", r"death\s+to", r"should\s+be\s+killed",
                   r"hope\s+you\s+die", r"deserve\s+to\s+die", r"will\s+kill\s+you"),
        ),
        ToxicRule(
            "Sexual violence",
            _words("rape", "molest", r"sexually\s+assault", "grope",
                   r"force\s+yourself", "non-consensual"),
        ),
        ToxicRule(
            "Threatening language",
            _words(f"i{_GAP}will{_GAP}find{_GAP}you", r"come\s+for\s+you",
                   r"hunt\s+you\s+down", r"track\s+you", r"stalk\s+you"),
        ),
        ToxicRule(
            "Personal information/doxxing",
            _words(r"your\s+address\s+is", r"your\s+ip\s+is", r"i\s+know\s+where\s+you\s+live",
                   r"i\s+found\s+your\s+home", r"your\s+location\s+is"),
        ),
        ToxicRule(
            "Harassment",
            _words(r"keep\s+crying", "triggered", "snowflake", r"nobody\s+cares",
                   r"nobody\s+asked", r"attention\s+seeker"),
        ),
    ]

    _SHOUT_MIN_WORDS: ClassVar[int] = 5
    _SHOUT_MIN_LENGTH: ClassVar[int] = 3
    _SHOUT_RATIO: ClassVar[float] = 0.6
    _REPEATED_PUNCTUATION: ClassVar[re.Pattern[str]] = re.compile(r"([!?.])\1{4,}")

    rules: list[ToxicRule] = field(default_factory=lambda: list(ToxicityGate._RULES))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def check(self, text: str) -> ToxicityVerdict:
        """Return a :class:`ToxicityVerdict` for *text*."""
        if not text or not text.strip():
            return ToxicityVerdict(is_toxic=False)

        reason = self._first_reason(text)
        if reason is None:
            return ToxicityVerdict(is_toxic=False)

        logger.debug("Toxic content detected", extra={"reason": reason, "text_length": len(text)})
        return ToxicityVerdict(is_toxic=True, reason=reason)

    def is_toxic(self, text: str) -> bool:
        return self.check(text).is_toxic

    def list_rules(self) -> list[dict[str, str]]:
        """Return the reason and pattern source of every content rule."""
        return [{"reason": r.reason, "pattern": r.pattern.pattern} for r in self.rules]

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _first_reason(self, text: str) -> str | None:
        for toxic_rule in self.rules:
            if toxic_rule.pattern.search(text):
                return toxic_rule.reason
        if self._is_shouting(text):
            return SHOUTING
        if self._REPEATED_PUNCTUATION.search(text):
            return EXCESSIVE_PUNCTUATION
        return None

    def _is_shouting(self, text: str) -> bool:
        words = text.split()
        if len(words) < self._SHOUT_MIN_WORDS:
            return False
        caps = [w for w in words if len(w) >= self._SHOUT_MIN_LENGTH and w == w.upper()]
        return len(caps) / len(words) > self._SHOUT_RATIO


_default_gate = ToxicityGate()


def check_toxic(text: str) -> ToxicityVerdict:
    """Check *text* with the built-in rule list."""
    return _default_gate.check(text)

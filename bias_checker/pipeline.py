"""ReviewPipeline -- the check a comment composer runs before submitting.

Typical usage::

    pipeline = ReviewPipeline()

    review = pipeline.review(comment_text)
    if review.blocked:
        show_warning(review.message)
    else:
        save_comment(comment_text)
        show_bias_hints(review.bias)

The toxicity gate is a hard block.  Bias analysis is advisory and never
stops a submission.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel

from bias_checker.bias_scorer import BiasAnalysisResult, BiasScorer
from bias_checker.config import settings
from bias_checker.logging import get_logger
from bias_checker.toxicity_gate import ToxicityGate, ToxicityVerdict

logger = get_logger("pipeline")

EMPTY_SUBMISSION = "Empty submission"


class SubmissionReview(BaseModel):
    """Outcome of reviewing one submission."""

    accepted: bool
    """If ``True`` the caller may persist the content."""

    blocked: bool
    """``True`` only when the toxicity gate rejected the text."""

    message: str | None = None
    """User-facing explanation when the submission is not accepted."""

    toxicity: ToxicityVerdict
    bias: BiasAnalysisResult | None = None


def blocked_message(reason: str | None) -> str:
    detail = reason.lower() if reason else "inappropriate content"
    return f"Your comment contains {detail}. Please revise your comment."


@dataclass
class ReviewPipeline:
    """Configurable toxicity-then-bias review.

    Parameters
    ----------
    toxicity_enabled : bool
        Run the toxicity gate.
    bias_enabled : bool
        Run bias analysis on text that was not blocked.
    block_toxic : bool
        Turn a toxic verdict into a block.  When ``False`` the verdict is
        reported but the submission is accepted.
    """

    toxicity_enabled: bool = True
    bias_enabled: bool = True
    block_toxic: bool = settings.BLOCK_TOXIC

    scorer: BiasScorer = field(default_factory=BiasScorer, repr=False)
    gate: ToxicityGate = field(default_factory=ToxicityGate, repr=False)

    def review(self, text: str) -> SubmissionReview:
        """Run the gate and the scorer over *text*.

        Steps
        -----
        1. Refuse empty or whitespace-only text.
        2. Toxicity gate (if enabled).
        3. Bias analysis (if enabled and not blocked).
        """
        clean = ToxicityVerdict(is_toxic=False)

        # 1. Empty text
        if not text or not text.strip():
            return SubmissionReview(
                accepted=False, blocked=False, message=EMPTY_SUBMISSION, toxicity=clean
            )

        # 2. Toxicity
        verdict = self.gate.check(text) if self.toxicity_enabled else clean
        blocked = verdict.is_toxic and self.block_toxic
        if blocked:
            logger.info(
                "Submission blocked",
                extra={"reason": verdict.reason, "blocked": True, "text_length": len(text)},
            )
            return SubmissionReview(
                accepted=False,
                blocked=True,
                message=blocked_message(verdict.reason),
                toxicity=verdict,
            )

        # 3. Bias
        bias = self.scorer.analyze(text) if self.bias_enabled else None

        return SubmissionReview(accepted=True, blocked=False, toxicity=verdict, bias=bias)

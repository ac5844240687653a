"""Bias Checker -- rule-based bias scoring and toxicity gating for text.

``analyze`` scores text for gender, political, racial and other bias and
returns highlighted spans.  ``check_toxic`` decides whether a submission
must be blocked.
"""

from bias_checker.bias_scorer import BiasAnalysisResult, BiasScorer, analyze, bias_level
from bias_checker.patterns import DEFAULT_REGISTRY, Category, PatternRegistry, PatternRule
from bias_checker.pipeline import ReviewPipeline, SubmissionReview
from bias_checker.toxicity_gate import ToxicityGate, ToxicityVerdict, check_toxic

__all__ = [
    "analyze",
    "check_toxic",
    "bias_level",
    "BiasScorer",
    "BiasAnalysisResult",
    "ToxicityGate",
    "ToxicityVerdict",
    "Category",
    "PatternRule",
    "PatternRegistry",
    "DEFAULT_REGISTRY",
    "ReviewPipeline",
    "SubmissionReview",
]

"""Tests for the bias-scoring module."""

import pytest

from bias_checker.bias_scorer import (
    MINIMAL_BIAS,
    NO_BIAS,
    SIGNIFICANT_BIAS,
    SOME_BIAS,
    BiasScorer,
    TextSpan,
    analyze,
    bias_level,
)
from bias_checker.patterns import Category, CategoryRules, PatternRegistry, PatternRule, rule


def _joined(result) -> str:
    return "".join(span.text for span in result.highlighted_text)


def _registry(*entries: tuple[Category, list[str], float]) -> PatternRegistry:
    return PatternRegistry(
        tuple(
            CategoryRules(category, (rule(terms, weight, f"fix {category.value}"),), "why")
            for category, terms, weight in entries
        )
    )


class TestEmptyInput:
    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    def test_short_circuit(self, text):
        result = analyze(text)
        assert result.overall_score == 0
        assert result.bias_types == []
        assert result.suggestions == [NO_BIAS]
        assert _joined(result) == text

    def test_empty_has_no_spans(self):
        assert analyze("").highlighted_text == []


class TestNeutralText:
    def test_no_matches(self):
        text = "The weather today is sunny with a high of 75 degrees."
        result = analyze(text)
        assert result.overall_score == 0.0
        assert result.bias_types == []
        assert result.suggestions == [NO_BIAS]
        assert result.highlighted_text == [TextSpan(text=text)]


class TestCategoryDetection:
    def test_gender(self):
        result = analyze("The chairman will arrive.")
        assert [b.type for b in result.bias_types] == [Category.GENDER]
        gender = result.bias_types[0]
        assert gender.examples == ["chairman"]
        assert gender.confidence == pytest.approx(0.16)
        assert gender.explanation.startswith("Gender bias")

    def test_political(self):
        result = analyze("leftist ideas here")
        assert [b.type for b in result.bias_types] == [Category.POLITICAL]
        assert result.bias_types[0].confidence == pytest.approx(0.15)

    def test_racial_phrase(self):
        result = analyze("She called them an illegal alien.")
        types = {b.type for b in result.bias_types}
        assert Category.RACIAL in types
        assert Category.GENDER in types

    def test_other(self):
        result = analyze("That plan is crazy.")
        assert result.bias_types[0].type == Category.OTHER
        assert result.bias_types[0].examples == ["crazy"]

    def test_declaration_order_not_text_order(self):
        result = analyze("A leftist chairman.")
        assert [b.type for b in result.bias_types] == [Category.GENDER, Category.POLITICAL]

    def test_zero_confidence_categories_dropped(self):
        result = analyze("The chairman will arrive.")
        assert all(b.confidence > 0 for b in result.bias_types)
        assert Category.RACIAL not in {b.type for b in result.bias_types}


class TestScoring:
    def test_overall_is_mean_of_categories(self):
        result = analyze("The chairman met a leftist.")
        assert len(result.bias_types) == 2
        gender, political = result.bias_types
        assert gender.confidence == pytest.approx(0.16)
        assert political.confidence == pytest.approx(0.15)
        assert result.overall_score == pytest.approx((0.16 + 0.15) / 2)

    def test_confidence_accumulates_per_match(self):
        result = analyze("chairman and chairman")
        assert result.bias_types[0].confidence == pytest.approx(0.32)

    def test_confidence_clamped(self):
        result = analyze(" ".join(["man up"] * 10))
        assert result.bias_types[0].confidence == 1.0
        assert result.overall_score == 1.0

    def test_score_always_in_range(self):
        text = "Crazy radical thug chairman " * 50
        result = analyze(text)
        assert 0.0 <= result.overall_score <= 1.0
        for b in result.bias_types:
            assert 0.0 < b.confidence <= 1.0


class TestExamples:
    def test_capped_at_three(self):
        result = analyze("mankind manpower chairman fireman")
        assert result.bias_types[0].examples == ["mankind", "manpower", "chairman"]

    def test_verbatim_and_unique(self):
        result = analyze("he said he and He")
        assert result.bias_types[0].examples == ["he", "He"]


class TestSuggestions:
    def test_minimal_banner_first(self):
        result = analyze("The chairman met a leftist.")
        assert result.suggestions[0] == MINIMAL_BIAS
        assert len(result.suggestions) == 3

    def test_suggestions_deduplicated(self):
        # Both political label rules share one suggestion.
        result = analyze("leftist and conservative")
        assert len(result.suggestions) == 2
        assert len(set(result.suggestions)) == 2

    def test_significant_banner(self):
        result = analyze(" ".join(["man up"] * 10))
        assert result.suggestions[0] == SIGNIFICANT_BIAS

    def test_some_bias_banner(self):
        scorer = BiasScorer(_registry((Category.GENDER, ["x"], 1.0)))
        result = scorer.analyze("x x")
        assert result.overall_score == pytest.approx(0.4)
        assert result.suggestions == [SOME_BIAS, "fix gender"]


class TestHighlighting:
    def test_spans(self):
        result = analyze("The chairman met a leftist.")
        assert result.highlighted_text == [
            TextSpan(text="The "),
            TextSpan(text="chairman", category=Category.GENDER, rule_index=0),
            TextSpan(text=" met a "),
            TextSpan(text="leftist", category=Category.POLITICAL, rule_index=0),
            TextSpan(text="."),
        ]

    def test_match_at_edges(self):
        result = analyze("chairman")
        assert result.highlighted_text == [
            TextSpan(text="chairman", category=Category.GENDER, rule_index=0)
        ]

    @pytest.mark.parametrize(
        "text",
        [
            "The chairman met a leftist.",
            "Crazy, crazy old  men\nand hysterical women!",
            "No bias in this sentence at all.",
            "x",
        ],
    )
    def test_round_trip(self, text):
        assert _joined(analyze(text)) == text

    def test_overlap_first_start_wins(self):
        scorer = BiasScorer(
            _registry(
                (Category.GENDER, ["new york"], 0.5),
                (Category.OTHER, ["york city"], 0.5),
            )
        )
        result = scorer.analyze("new york city")
        assert [b.type for b in result.bias_types] == [Category.GENDER, Category.OTHER]
        assert result.highlighted_text == [
            TextSpan(text="new york", category=Category.GENDER, rule_index=0),
            TextSpan(text=" city"),
        ]

    def test_overlap_same_start_keeps_discovery_order(self):
        scorer = BiasScorer(
            _registry(
                (Category.GENDER, ["big"], 0.5),
                (Category.OTHER, ["big apple"], 0.5),
            )
        )
        result = scorer.analyze("big apple")
        assert result.highlighted_text[0].category == Category.GENDER
        assert _joined(result) == "big apple"


class TestInjectedMatcher:
    def test_custom_matcher(self):
        class EveryVowel:
            def find_all(self, text):
                return [(i, 1) for i, ch in enumerate(text) if ch in "aeiou"]

        registry = PatternRegistry(
            (CategoryRules(Category.OTHER, (PatternRule(EveryVowel(), 0.5, "vowels"),), "v"),)
        )
        result = BiasScorer(registry).analyze("bat")
        assert result.bias_types[0].examples == ["a"]
        assert result.suggestions == [MINIMAL_BIAS, "vowels"]
        assert _joined(result) == "bat"


class TestIdempotence:
    def test_same_result_twice(self):
        text = "The chairman met a leftist thug."
        assert analyze(text) == analyze(text)


class TestBiasLevel:
    @pytest.mark.parametrize(
        "score,level",
        [(0.0, "low"), (0.29, "low"), (0.3, "medium"), (0.69, "medium"), (0.7, "high"), (1.0, "high")],
    )
    def test_buckets(self, score, level):
        assert bias_level(score) == level

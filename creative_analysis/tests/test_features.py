"""
Headline Feature Extraction Test Module

Tests for creative_analysis.services.features:
- Totality: None, non-strings, empty and letterless strings
- Purity: repeated calls give identical results
- Each detection rule (numerals, currency, question, ALL-CAPS, vocabulary)
- Vocabulary tables compiled independently of the extractor
"""

import pytest

from creative_analysis.models import FeatureCategory, HeadlineFeatures
from creative_analysis.services.features import (
    HEADLINE_VOCABULARY,
    compile_vocabulary,
    extract_features,
    is_all_caps,
    normalize_headline,
)


# =============================================================================
# Test Class: TestTotality
# =============================================================================

class TestTotality:
    """Every input produces a well-formed features object."""

    @pytest.mark.parametrize("headline", ["", "   ", None])
    def test_blank_input_has_no_features(self, headline) -> None:
        assert extract_features(headline) == HeadlineFeatures()

    def test_non_string_is_coerced(self) -> None:
        features = extract_features(12345)
        assert features.length == 5
        assert features.hasNumeral is True

    def test_length_is_measured_after_trimming(self) -> None:
        assert extract_features("  Hello  ").length == 5

    def test_normalize_headline(self) -> None:
        assert normalize_headline(None) == ""
        assert normalize_headline("  a b ") == "a b"

    @pytest.mark.parametrize("headline", [
        "SAVE $300 ON INSURANCE TODAY",
        "Over 55? Cut Bills in 3 Steps",
        "!!!",
        "",
    ])
    def test_extraction_is_pure(self, headline: str) -> None:
        assert extract_features(headline) == extract_features(headline)


# =============================================================================
# Test Class: TestDetectionRules
# =============================================================================

class TestDetectionRules:
    """Individual detection rules."""

    def test_unicode_digit_counts_as_numeral(self) -> None:
        assert extract_features("Save ٣ ways").hasNumeral is True

    @pytest.mark.parametrize("headline", ["Only $5", "Just €9", "Save £300"])
    def test_currency_symbols(self, headline: str) -> None:
        assert extract_features(headline).hasCurrency is True

    def test_no_currency(self) -> None:
        assert extract_features("Save 300 dollars").hasCurrency is False

    @pytest.mark.parametrize("headline,expected", [
        ("Is this a question?", True),
        ("Over 55? Cut Bills in 3 Steps", True),
        ("No question here", False),
        ("Why?Because", False),
    ])
    def test_question(self, headline: str, expected: bool) -> None:
        assert extract_features(headline).isQuestion is expected

    @pytest.mark.parametrize("headline,expected", [
        ("HELLO 2025!", True),
        ("Hello", False),
        ("123", False),
        ("$$$", False),
        ("", False),
        ("ÉÉ", False),  # accented capitals only, no Latin A-Z
        ("ПРИВЕТ", False),
        ("ÉTÉ", True),
    ])
    def test_all_caps(self, headline: str, expected: bool) -> None:
        assert is_all_caps(headline) is expected
        assert extract_features(headline).isAllCaps is expected

    @pytest.mark.parametrize("headline", [
        "Sign up today",
        "Quotes in minutes",
        "Results in 10 seconds",
        "Ready in 3days",
        "One simple step",
    ])
    def test_time_words(self, headline: str) -> None:
        assert extract_features(headline).hasTimeWord is True

    def test_no_time_word(self) -> None:
        assert extract_features("A quiet headline").hasTimeWord is False

    @pytest.mark.parametrize("headline", [
        "Costco members love this",
        "Lowe's shoppers are switching",
        "Shop at BEST BUY",
        "Spotted at Home Depot",
    ])
    def test_retailer(self, headline: str) -> None:
        assert extract_features(headline).hasRetailer is True

    @pytest.mark.parametrize("headline", [
        "The secret banks hide",
        "You won't believe this",
        "What happens next is surprising",
    ])
    def test_curiosity_tone(self, headline: str) -> None:
        assert extract_features(headline).toneCuriosity is True

    @pytest.mark.parametrize("headline", [
        "Save on energy",
        "Boost your savings",
        "Cutting costs made easy",
    ])
    def test_benefit_tone(self, headline: str) -> None:
        assert extract_features(headline).toneBenefit is True

    def test_plain_headline_has_no_tone(self) -> None:
        features = extract_features("Plain words only")
        assert features.toneBenefit is False
        assert features.toneCuriosity is False
        assert features.hasRetailer is False


# =============================================================================
# Test Class: TestScenarios
# =============================================================================

@pytest.mark.scenario
class TestScenarios:
    """End-to-end headlines from the product examples."""

    def test_all_caps_offer(self) -> None:
        features = extract_features("SAVE $300 ON INSURANCE TODAY")
        assert features.hasCurrency is True
        assert features.hasNumeral is True
        assert features.hasTimeWord is True
        assert features.isAllCaps is True
        assert features.length == 28

    def test_question_with_benefit(self) -> None:
        features = extract_features("Over 55? Cut Bills in 3 Steps")
        assert features.isQuestion is True
        assert features.hasNumeral is True
        assert features.toneBenefit is True
        assert features.isAllCaps is False


# =============================================================================
# Test Class: TestVocabulary
# =============================================================================

class TestVocabulary:
    """Vocabulary tables are data and can be swapped."""

    def test_default_vocabulary_covers_every_category(self) -> None:
        assert set(HEADLINE_VOCABULARY) == set(FeatureCategory)
        assert all(HEADLINE_VOCABULARY[category] for category in FeatureCategory)

    def test_custom_vocabulary(self) -> None:
        patterns = compile_vocabulary({FeatureCategory.RETAILER: ("tesco",)})

        features = extract_features("Tesco deals today", patterns)

        assert features.hasRetailer is True
        assert features.toneBenefit is False  # category absent from the table
        assert features.hasTimeWord is False

    def test_custom_vocabulary_keeps_numeric_time_rule(self) -> None:
        patterns = compile_vocabulary({})
        assert extract_features("Done in 5 minutes", patterns).hasTimeWord is True

    def test_keywords_are_matched_literally(self) -> None:
        patterns = compile_vocabulary({FeatureCategory.CURIOSITY: ("what?",)})
        assert extract_features("So what? Read on", patterns).toneCuriosity is True
        assert extract_features("So wha Read on", patterns).toneCuriosity is False

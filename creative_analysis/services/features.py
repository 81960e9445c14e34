"""
Headline Feature Extraction Service

Derives structured signals from a raw headline string: length, numerals,
currency symbols, question form, ALL-CAPS, time/urgency words, retailer
mentions and curiosity/benefit tone.

The keyword lists are data (HEADLINE_VOCABULARY) rather than inline regex
literals, so they can be localized or swapped in tests by compiling a custom
vocabulary with compile_vocabulary() and passing it to extract_features().

Extraction is pure and total: every input, including None, non-strings and
the empty string, produces a well-formed HeadlineFeatures object.
"""

import re
from typing import Any, Dict, Mapping, Optional, Pattern, Sequence

from creative_analysis.models.enums import FeatureCategory
from creative_analysis.models.schemas import HeadlineFeatures, coerce_headline_text


# =============================================================================
# Vocabulary
# =============================================================================

# Keywords are matched case-insensitively as substrings ("cut" matches "Cutting").
HEADLINE_VOCABULARY: Dict[FeatureCategory, Sequence[str]] = {
    FeatureCategory.TIME: (
        "today", "now", "minutes", "hours", "days", "weeks", "step", "steps",
    ),
    FeatureCategory.RETAILER: (
        "walmart", "target", "amazon", "best buy", "costco", "walgreens",
        "cvs", "home depot", "lowe's", "lowes",
    ),
    FeatureCategory.CURIOSITY: (
        "you won't believe", "secret", "what happens", "surprising", "hidden",
    ),
    FeatureCategory.BENEFIT: (
        "save", "discount", "deal", "lower", "cut", "protect", "improve",
        "boost", "reduce",
    ),
}

# A numeral followed by a time unit ("10 minutes", "3days") is a time reference
# regardless of the TIME keyword list.
TIME_QUANTITY_PATTERN = r"\d+\s*(?:seconds?|minutes?|hours?|days?|weeks?)"

_NEVER_MATCHES = re.compile(r"(?!)")
_DIGIT = re.compile(r"\d")
_CURRENCY = re.compile(r"[$€£]")
_LATIN_UPPER = re.compile(r"[A-Z]")
# A question clause: "?" closing the text or followed by whitespace ("Over 55? Cut ...")
_QUESTION_CLAUSE = re.compile(r"\?(?=\s|$)")


def compile_vocabulary(
    vocabulary: Mapping[FeatureCategory, Sequence[str]],
) -> Dict[FeatureCategory, Pattern]:
    """
    Compile a category -> keywords table into case-insensitive patterns.

    Categories missing from the table (or with no keywords) compile to a
    pattern that never matches, except TIME which always keeps the
    numeral + unit rule.

    Args:
        vocabulary: Mapping of FeatureCategory to keyword/phrase lists

    Returns:
        Dict mapping every FeatureCategory to a compiled pattern
    """
    compiled: Dict[FeatureCategory, Pattern] = {}
    for category in FeatureCategory:
        alternatives = [re.escape(keyword) for keyword in vocabulary.get(category, ()) if keyword]
        if category == FeatureCategory.TIME:
            alternatives.append(TIME_QUANTITY_PATTERN)
        if alternatives:
            compiled[category] = re.compile("|".join(alternatives), re.IGNORECASE)
        else:
            compiled[category] = _NEVER_MATCHES
    return compiled


DEFAULT_PATTERNS: Dict[FeatureCategory, Pattern] = compile_vocabulary(HEADLINE_VOCABULARY)


# =============================================================================
# Extraction
# =============================================================================


def normalize_headline(headline: Any) -> str:
    """Coerce any headline value to trimmed text; None becomes ''."""
    return coerce_headline_text(headline).strip()


def is_all_caps(text: str) -> bool:
    """
    True when text is non-empty, has at least one Latin letter and equals
    its uppercase form. Strings without letters are never ALL-CAPS.
    """
    return bool(text) and text == text.upper() and _LATIN_UPPER.search(text) is not None


def extract_features(
    headline: Any,
    patterns: Optional[Mapping[FeatureCategory, Pattern]] = None,
) -> HeadlineFeatures:
    """
    Extract HeadlineFeatures from a headline.

    Args:
        headline: Headline text; None and non-strings are normalized
        patterns: Compiled vocabulary from compile_vocabulary(); defaults to
            the built-in English vocabulary

    Returns:
        HeadlineFeatures for the trimmed headline

    Example:
        >>> f = extract_features("Over 55? Cut Bills in 3 Steps")
        >>> f.isQuestion, f.hasNumeral, f.toneBenefit
        (True, True, True)
    """
    text = normalize_headline(headline)
    if patterns is None:
        patterns = DEFAULT_PATTERNS

    def matches(category: FeatureCategory) -> bool:
        pattern = patterns.get(category, _NEVER_MATCHES)
        return pattern.search(text) is not None

    return HeadlineFeatures(
        length=len(text),
        hasNumeral=_DIGIT.search(text) is not None,
        hasCurrency=_CURRENCY.search(text) is not None,
        isQuestion=_QUESTION_CLAUSE.search(text) is not None,
        isAllCaps=is_all_caps(text),
        hasTimeWord=matches(FeatureCategory.TIME),
        hasRetailer=matches(FeatureCategory.RETAILER),
        toneCuriosity=matches(FeatureCategory.CURIOSITY),
        toneBenefit=matches(FeatureCategory.BENEFIT),
    )

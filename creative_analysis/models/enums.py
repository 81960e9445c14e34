"""
Enumeration definitions for the Creative Analysis backend.

All enums inherit from both `str` and `Enum` so that they serialize as plain
strings in Pydantic models and JSON responses.

Enumerations:
- FeatureCategory: vocabulary categories used by the headline feature extractor
- Driver: qualitative tags explaining why a creative outperforms its peers
- RankKey: orderings accepted when ranking report items before templating
"""

from enum import Enum


class FeatureCategory(str, Enum):
    """
    Vocabulary categories matched against headline text.

    Each category maps to a keyword list in
    creative_analysis.services.features.HEADLINE_VOCABULARY:
    - TIME: urgency/duration words (today, minutes, steps, ...)
    - RETAILER: retail brand mentions (walmart, costco, ...)
    - CURIOSITY: curiosity-gap phrasing (secret, hidden, ...)
    - BENEFIT: savings/benefit phrasing (save, cut, boost, ...)
    """
    TIME = "time"
    RETAILER = "retailer"
    CURIOSITY = "curiosity"
    BENEFIT = "benefit"


class Driver(str, Enum):
    """
    Driver tags attached to an annotated item.

    Declaration order is the order drivers are reported in:
    numeral, retailer, currency, time word.
    """
    NUMBER_IN_TITLE = "number in title"
    RETAILER_MENTION = "retailer mention"
    PRICE_ANCHOR = "price anchor"
    TIME_REFERENCE = "time reference"


class RankKey(str, Enum):
    """
    Item orderings (all descending).

    - ROAS: return on ad spend, items without ROAS sort last
    - CONVERSIONS: conversion count
    - CTR: click-through rate
    - SPEND: spend
    """
    ROAS = "roas"
    CONVERSIONS = "conversions"
    CTR = "ctr"
    SPEND = "spend"

"""Localized, display-ready explanations for match results."""

from __future__ import annotations

from typing import Literal

from .models import MatchExplanation, MatchResult

Locale = Literal["en", "ar"]

SUPPORTED_LOCALES: tuple[str, ...] = ("en", "ar")
DEFAULT_LOCALE: Locale = "en"
HIGHLIGHT_THRESHOLD = 80

TITLES = {
    "excellent": {"en": "Excellent Match", "ar": "توافق ممتاز"},
    "good": {"en": "Good Match", "ar": "توافق جيد"},
    "fair": {"en": "Fair Match", "ar": "توافق متوسط"},
    "low": {"en": "Limited Match", "ar": "توافق محدود"},
}

DESCRIPTIONS = {
    "excellent": {
        "en": (
            "This provider is highly suited for your needs "
            "with strong expertise and availability."
        ),
        "ar": "مقدم الخدمة هذا مناسب جداً لاحتياجاتك مع خبرة قوية وتوافر.",
    },
    "good": {
        "en": "This provider meets most of your requirements and has relevant experience.",
        "ar": "مقدم الخدمة هذا يلبي معظم متطلباتك ولديه خبرة ذات صلة.",
    },
    "fair": {
        "en": "This provider partially matches your criteria. Consider reviewing their profile.",
        "ar": "مقدم الخدمة هذا يتوافق جزئياً مع معاييرك. يُنصح بمراجعة ملفه.",
    },
    "low": {
        "en": "Limited match. You may want to expand your search criteria.",
        "ar": "توافق محدود. قد ترغب في توسيع معايير البحث.",
    },
}

# Breakdown field -> highlight text, in display order
HIGHLIGHTS = (
    ("specialization", {"en": "Expert in required specialty", "ar": "خبرة في التخصص المطلوب"}),
    ("performance", {"en": "Excellent ratings", "ar": "تقييمات ممتازة"}),
    ("availability", {"en": "Available now", "ar": "متاح الآن"}),
    ("budget", {"en": "Within budget", "ar": "ضمن الميزانية"}),
    ("response_time", {"en": "Fast response", "ar": "استجابة سريعة"}),
)


def resolve_locale(locale: str | None) -> Locale:
    """Normalise a locale selector such as ``ar-AE`` to a supported locale, else English."""
    text = (locale or "").strip().lower()
    if text.startswith("ar"):
        return "ar"
    return DEFAULT_LOCALE


def build_match_explanation(
    result: MatchResult, locale: str | None = DEFAULT_LOCALE
) -> MatchExplanation:
    """Build title, description and highlights for one match.

    Highlights list every strong dimension (score >= 80); when there are none the
    match's own reasons are shown instead.
    """
    lang = resolve_locale(locale)
    breakdown = result.breakdown.as_dict()
    highlights = tuple(
        texts[lang]
        for field_name, texts in HIGHLIGHTS
        if breakdown[field_name] >= HIGHLIGHT_THRESHOLD
    )
    return MatchExplanation(
        title=TITLES[result.compatibility_level][lang],
        description=DESCRIPTIONS[result.compatibility_level][lang],
        highlights=highlights or result.reasons,
    )

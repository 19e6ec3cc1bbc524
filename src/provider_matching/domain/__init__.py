"""Domain modules for the matching engine."""

from .aggregation import calculate_match_score
from .explanation import build_match_explanation
from .models import CandidateProfile, MatchQuery, MatchResult
from .ranking import rank_candidates
from .tiers import ProviderMetrics, TierProgress, calculate_tier, calculate_tier_progress

__all__ = [
    "CandidateProfile",
    "MatchQuery",
    "MatchResult",
    "ProviderMetrics",
    "TierProgress",
    "build_match_explanation",
    "calculate_match_score",
    "calculate_tier",
    "calculate_tier_progress",
    "rank_candidates",
]

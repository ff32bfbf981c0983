"""
Points per country. Less populous countries are harder to recognise and
score more:

    Tier 1: ~20 most populous countries   -> 10 pts
    Tier 2: next ~50 by population        -> 25 pts
    Tier 3: everything else               -> 50 pts
"""

import logging
import math
from types import MappingProxyType

from globe_quiz.config import INVALID_ISO

logger = logging.getLogger(__name__)

TIER1_POINTS = 10
TIER2_POINTS = 25
TIER3_POINTS = 50

TIER1_ISO = frozenset({
    "IN", "CN", "US", "ID", "PK", "NG", "BR", "BD", "RU", "ET",
    "MX", "JP", "PH", "EG", "CD", "VN", "TR", "IR", "DE", "TH",
})

TIER2_ISO = frozenset({
    "GB", "TZ", "FR", "ZA", "KE", "KR", "ES", "AR", "UG", "DZ",
    "SD", "UA", "IQ", "CA", "PL", "MA", "SA", "UZ", "PE", "AF",
    "MY", "AO", "MZ", "GH", "YE", "NP", "VE", "AU", "MG", "KP",
    "CM", "CI", "NE", "TW", "LK", "BF", "ML", "RO", "MW", "CL",
    "KZ", "ZM", "GT", "EC", "SY", "NL", "SN", "KH", "TD", "SO",
})


def points_for_country(iso):
    if iso in TIER1_ISO:
        return TIER1_POINTS
    if iso in TIER2_ISO:
        return TIER2_POINTS
    return TIER3_POINTS


def build_points_map(features):
    points = {}
    for f in features:
        if f.iso and f.iso != INVALID_ISO:
            points[f.iso] = points_for_country(f.iso)
    return MappingProxyType(points)


def award_points(base_points, spelling_corrected=False, hint_used=False):
    """Halve (rounding up) once if either penalty applies; the two never stack."""
    if spelling_corrected or hint_used:
        return math.ceil(base_points / 2)
    return base_points


def points_for_guess(points_map, iso, spelling_corrected=False, hint_used=False):
    base = points_map.get(iso, TIER3_POINTS)
    pts = award_points(base, spelling_corrected, hint_used)
    logger.debug("Award for %s: base %d -> %d (spelling=%s, hint=%s)",
                 iso, base, pts, spelling_corrected, hint_used)
    return pts

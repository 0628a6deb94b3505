#!/usr/bin/env python3
"""
Job Score - compatibility score between a candidate and a listing.

Weighted heuristic, computed once when a match is created:
- job type equality: 10
- working pattern found in the listing schedule: 10
- pay/salary overlap: 40
- candidate has a search radius and coordinates: 10
- practice has at least one saved location: 10

Pure: no I/O, same inputs always give the same integer in [0, 100].
"""

import math
import re
from typing import Any, Optional, Tuple

JOB_TYPE_POINTS = 10
WORKING_PATTERN_POINTS = 10
PAY_POINTS = 40
LOCATION_AWARE_POINTS = 10
PRACTICE_LOCATION_POINTS = 10
MAX_SCORE = 100

_NUMBER_TOKEN = re.compile(r'[\d,]+')


def normalize_str(value: Any) -> str:
    """Lowercase and strip; None becomes an empty string."""
    if value is None:
        return ''
    return str(value).strip().lower()


def _number(value: Any) -> float:
    """Treat None/empty/0 uniformly as 0."""
    if value is None or value == '':
        return 0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0


def parse_salary_range(text: Optional[str]) -> Tuple[float, float]:
    """
    Extract a numeric range from free-text salary, e.g. "£30,000 - £40,000".

    All digit/comma tokens are collected with thousands separators removed;
    the range is their min and max. No numbers gives (0, 0).
    """
    if not text:
        return 0, 0

    values = []
    for token in _NUMBER_TOKEN.findall(str(text)):
        digits = token.replace(',', '')
        if digits:
            values.append(float(digits))

    if not values:
        return 0, 0
    return min(values), max(values)


def _round_half_away_from_zero(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _listing_pay_range(listing: Any, listing_kind: str) -> Tuple[float, float]:
    if listing_kind == 'permanent':
        return parse_salary_range(getattr(listing, 'salary_range', None))

    rate = _number(getattr(listing, 'hourly_rate', None)) or _number(getattr(listing, 'day_rate', None))
    return rate, rate


def _pay_compatible(preferences: Any, listing: Any, listing_kind: str) -> bool:
    cand_min = _number(getattr(preferences, 'pay_min', None))
    cand_max = _number(getattr(preferences, 'pay_max', None)) or _number(getattr(preferences, 'hourly_rate', None))

    # No stated preference counts as compatible
    if not cand_min and not cand_max:
        return True

    job_min, job_max = _listing_pay_range(listing, listing_kind)
    if not job_max:
        return False

    upper = cand_max if cand_max else math.inf
    return job_max >= cand_min and job_min <= upper


def _pattern_compatible(preferences: Any, listing: Any) -> bool:
    pattern = normalize_str(getattr(preferences, 'working_pattern', None))
    schedule = normalize_str(getattr(listing, 'working_hours', None) or getattr(listing, 'time', None))
    if not pattern or not schedule:
        return False
    return pattern.split('-')[0] in schedule or pattern in schedule


def score_candidate_to_job(
    preferences: Any,
    listing: Any,
    listing_kind: str,
    practice_location_count: int = 0
) -> int:
    """
    Score how well a listing fits a candidate's job preferences.

    Args:
        preferences: JobPreference row (or any object with the same
            attributes); None is treated as an empty preference record
        listing: LocumShift or PermanentJob
        listing_kind: 'locum' or 'permanent'
        practice_location_count: saved locations of the owning practice

    Returns:
        Integer score in [0, 100]
    """
    score = 0

    pref_type = normalize_str(getattr(preferences, 'job_type', None))
    job_type = normalize_str(getattr(listing, 'job_type', None))
    if pref_type and job_type and pref_type == job_type:
        score += JOB_TYPE_POINTS

    if _pattern_compatible(preferences, listing):
        score += WORKING_PATTERN_POINTS

    if _pay_compatible(preferences, listing, listing_kind):
        score += PAY_POINTS

    if (getattr(preferences, 'search_radius_km', None)
            and getattr(preferences, 'latitude', None)
            and getattr(preferences, 'longitude', None)):
        score += LOCATION_AWARE_POINTS

    if practice_location_count and practice_location_count > 0:
        score += PRACTICE_LOCATION_POINTS

    return _round_half_away_from_zero(min(score, MAX_SCORE))

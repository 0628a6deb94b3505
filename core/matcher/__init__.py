"""Matcher Module - like ledger and mutual match resolution."""
from core.matcher.models import (
    TargetType, Decision, MatchStatus, LISTING_TARGET_TYPES,
    parse_target_type, parse_decision
)
from core.matcher.service import LikeLedger, MatchResolver, has_confirmed_interview_or_match

__all__ = [
    'LikeLedger', 'MatchResolver', 'has_confirmed_interview_or_match',
    'TargetType', 'Decision', 'MatchStatus', 'LISTING_TARGET_TYPES',
    'parse_target_type', 'parse_decision'
]

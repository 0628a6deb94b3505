#!/usr/bin/env python3
"""
Matcher Models - enums for the like ledger and matches.
"""

from enum import Enum
from typing import Any

from core.exceptions import ValidationException


class TargetType(str, Enum):
    """What a like points at: one of the two listing kinds, or a candidate user."""
    LOCUM = "locum"
    PERMANENT = "permanent"
    CANDIDATE = "candidate"

    @property
    def is_listing(self) -> bool:
        return self in LISTING_TARGET_TYPES


LISTING_TARGET_TYPES = (TargetType.LOCUM, TargetType.PERMANENT)


class Decision(str, Enum):
    LIKE = "like"
    PASS = "pass"


class MatchStatus(str, Enum):
    MATCHED = "matched"
    ARCHIVED = "archived"


def parse_target_type(value: Any) -> TargetType:
    try:
        return TargetType(value)
    except ValueError:
        raise ValidationException("invalid targetType")


def parse_decision(value: Any) -> Decision:
    try:
        return Decision(value)
    except ValueError:
        raise ValidationException("invalid decision")

#!/usr/bin/env python3
"""
Interview Models - enums, time validation and read projections.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from database.models import Interview

TIME_PATTERN = re.compile(r'^([01]?[0-9]|2[0-3]):[0-5][0-9]$')


class MeetingType(str, Enum):
    VIDEO = "Video"
    INPERSON = "Inperson"
    CALL = "Call"


class InterviewLocation(str, Enum):
    ONLINE = "Online"
    OFFICE = "Office"


class InterviewStatus(str, Enum):
    """
    scheduled -> confirmed -> completed, and scheduled|confirmed -> cancelled
    on decline. Approving a reschedule sends confirmed back to scheduled.
    """
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


def is_valid_time(value: Optional[str]) -> bool:
    """24-hour HH:MM (single-digit hour allowed)."""
    if not isinstance(value, str):
        return False
    return TIME_PATTERN.match(value) is not None


@dataclass
class InterviewView:
    """An interview plus the public projection of the other participant."""
    interview: Interview
    practice: Optional[Dict[str, Any]] = None
    candidate: Optional[Dict[str, Any]] = None

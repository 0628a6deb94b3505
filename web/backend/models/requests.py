#!/usr/bin/env python3
"""
Request models for API endpoints.

Bodies use camelCase on the wire; enum fields stay plain strings so the
services can report invalid values with their own messages.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from uuid import UUID


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LikeRequest(CamelModel):
    """Swipe decision on a listing or a candidate."""
    target_type: str = Field(..., description="locum, permanent or candidate")
    target_id: UUID
    decision: str = Field(..., description="like or pass")


class ScheduleInterviewRequest(CamelModel):
    """Practice invites a candidate to an interview."""
    candidate_user_id: Optional[UUID] = None
    meeting_type: Optional[str] = Field(None, description="Video, Inperson or Call")
    location: Optional[str] = Field(None, description="Online or Office")
    date: Optional[str] = None
    time: Optional[str] = Field(None, description="HH:MM, 24-hour")
    notes: Optional[str] = None


class RescheduleRequest(CamelModel):
    requested_date: Optional[str] = None
    requested_time: Optional[str] = Field(None, description="HH:MM, 24-hour")
    reason: Optional[str] = None


class ApproveRescheduleRequest(CamelModel):
    """Explicit values override the candidate's requested date/time."""
    date: Optional[str] = None
    time: Optional[str] = None


class DeclineRequest(CamelModel):
    reason: Optional[str] = None

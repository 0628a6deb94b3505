#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional
from uuid import UUID


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


class LikeOut(CamelModel):
    id: UUID
    actor_user_id: UUID
    target_type: str
    target_id: UUID
    decision: str
    created_at: Optional[datetime] = None


class MatchOut(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "candidateUserId": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
                "practiceUserId": "6ba7b811-9dad-11d1-80b4-00c04fd430c8",
                "targetType": "locum",
                "targetId": "6ba7b812-9dad-11d1-80b4-00c04fd430c8",
                "score": 70,
                "status": "matched",
                "createdAt": "2026-02-01T12:00:00Z"
            }
        }
    )

    id: UUID
    candidate_user_id: UUID
    practice_user_id: UUID
    target_type: str
    target_id: UUID
    score: int = Field(ge=0, le=100)
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TargetInfo(CamelModel):
    """Display info for whoever (or whatever listing) was liked."""
    name: Optional[str] = None
    avatar: Optional[str] = None


class LikeResponse(CamelModel):
    like: LikeOut
    match: Optional[MatchOut] = None
    target: Optional[TargetInfo] = None


class ListingProjection(CamelModel):
    id: UUID
    user_id: UUID
    role: Optional[str] = None
    job_type: Optional[str] = None
    job_title: Optional[str] = None
    location: Optional[str] = None
    contract_type: Optional[str] = None
    time: Optional[str] = None
    working_hours: Optional[str] = None
    day_rate: Optional[float] = None
    hourly_rate: Optional[float] = None
    salary_range: Optional[str] = None
    status: Optional[str] = None


class CandidateProjection(CamelModel):
    user_id: UUID
    full_name: Optional[str] = None
    job_title: Optional[str] = None
    current_status: Optional[str] = None
    avatar: Optional[str] = None


class PracticeProjection(CamelModel):
    user_id: UUID
    name: Optional[str] = None
    clinic_type: Optional[str] = None
    phone_number: Optional[str] = None
    website: Optional[str] = None
    avatar: Optional[str] = None


class EnrichedMatch(MatchOut):
    target: Optional[ListingProjection] = None
    candidate: Optional[CandidateProjection] = None
    practice: Optional[PracticeProjection] = None


class Pagination(CamelModel):
    page: int
    limit: int
    total_pages: int


class MatchesData(CamelModel):
    total: int
    matches: List[EnrichedMatch]
    pagination: Pagination


class MatchesResponse(CamelModel):
    success: bool = True
    data: MatchesData


class ArchiveMatchResponse(CamelModel):
    success: bool = True
    match: MatchOut


class CanMessageResponse(CamelModel):
    success: bool = True
    permitted: bool


class InterviewPracticeInfo(CamelModel):
    id: UUID
    email: Optional[str] = None
    name: Optional[str] = None
    clinic_type: Optional[str] = None
    phone_number: Optional[str] = None


class InterviewCandidateInfo(CamelModel):
    id: UUID
    email: Optional[str] = None
    full_name: Optional[str] = None
    job_title: Optional[str] = None


class InterviewOut(CamelModel):
    id: UUID
    practice_user_id: UUID
    candidate_user_id: UUID
    meeting_type: str
    location: str
    date: str
    time: str
    status: str
    notes: Optional[str] = None
    reschedule_requested: bool = False
    reschedule_request_date: Optional[datetime] = None
    reschedule_request_reason: Optional[str] = None
    reschedule_requested_date: Optional[str] = None
    reschedule_requested_time: Optional[str] = None
    declined: bool = False
    declined_at: Optional[datetime] = None
    decline_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    practice: Optional[InterviewPracticeInfo] = None
    candidate: Optional[InterviewCandidateInfo] = None


class InterviewResponse(CamelModel):
    message: str
    interview: InterviewOut


class InterviewListResponse(CamelModel):
    interviews: List[InterviewOut]
    count: int


class MyInterviewsResponse(InterviewListResponse):
    role: str


class HealthResponse(BaseModel):
    status: str
    service: str

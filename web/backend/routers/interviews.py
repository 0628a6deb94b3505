#!/usr/bin/env python3
"""
Interview endpoints - scheduling, reschedule negotiation, accept/decline.
"""

import logging
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..dependencies import get_db, get_current_user, require_role, CurrentUser
from ..services.interview_service import InterviewService
from ..models.requests import (
    ScheduleInterviewRequest,
    RescheduleRequest,
    ApproveRescheduleRequest,
    DeclineRequest
)
from ..models.responses import (
    InterviewResponse,
    InterviewListResponse,
    MyInterviewsResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/interview", tags=["interviews"])

require_practice = require_role("practice")
require_candidate = require_role("candidate")
require_scheduler = require_role("practice", "Only practices can schedule interviews")


@router.post("", response_model=InterviewResponse, status_code=status.HTTP_201_CREATED)
def schedule_interview(
    body: ScheduleInterviewRequest,
    current_user: CurrentUser = Depends(require_scheduler),
    db: Session = Depends(get_db)
):
    """Practice schedules an interview with a candidate."""
    return InterviewService(db).schedule(current_user.id, body)


@router.get("", response_model=MyInterviewsResponse)
def get_my_interviews(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Caller's interviews; the counterpart projection depends on the caller's role."""
    return InterviewService(db).get_my_interviews(current_user.id)


@router.get("/candidate", response_model=InterviewListResponse)
def get_candidate_interviews(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return InterviewService(db).get_candidate_interviews(current_user.id)


@router.get("/practice", response_model=InterviewListResponse)
def get_practice_interviews(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return InterviewService(db).get_practice_interviews(current_user.id)


@router.post("/{interview_id}/reschedule-request", response_model=InterviewResponse)
def request_reschedule(
    interview_id: UUID,
    body: RescheduleRequest,
    current_user: CurrentUser = Depends(require_candidate),
    db: Session = Depends(get_db)
):
    """Candidate asks for a different date/time."""
    return InterviewService(db).request_reschedule(current_user.id, interview_id, body)


@router.put("/{interview_id}/reschedule", response_model=InterviewResponse)
def approve_reschedule(
    interview_id: UUID,
    body: Optional[ApproveRescheduleRequest] = None,
    current_user: CurrentUser = Depends(require_practice),
    db: Session = Depends(get_db)
):
    """Practice approves a pending reschedule request."""
    return InterviewService(db).approve_reschedule(
        current_user.id, interview_id, body or ApproveRescheduleRequest()
    )


@router.post("/{interview_id}/decline", response_model=InterviewResponse)
def decline_interview(
    interview_id: UUID,
    body: Optional[DeclineRequest] = None,
    current_user: CurrentUser = Depends(require_candidate),
    db: Session = Depends(get_db)
):
    """Candidate declines; the interview is cancelled."""
    return InterviewService(db).decline(current_user.id, interview_id, body or DeclineRequest())


@router.post("/{interview_id}/accept", response_model=InterviewResponse)
def accept_interview(
    interview_id: UUID,
    current_user: CurrentUser = Depends(require_candidate),
    db: Session = Depends(get_db)
):
    """Candidate confirms. Accepting twice is a no-op."""
    return InterviewService(db).accept(current_user.id, interview_id)


@router.post("/{interview_id}/complete", response_model=InterviewResponse)
def complete_interview(
    interview_id: UUID,
    current_user: CurrentUser = Depends(require_practice),
    db: Session = Depends(get_db)
):
    """Practice marks a confirmed interview as held."""
    return InterviewService(db).complete(current_user.id, interview_id)

#!/usr/bin/env python3
"""
Interview service - commits state machine transitions and shapes responses.
"""

import logging
from typing import Callable, List
from uuid import UUID

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from core.exceptions import StorageException
from core.interview import InterviewStateMachine, InterviewView
from database.models import Interview
from database.repositories import InterviewRepository, DirectoryRepository
from ..models.requests import (
    ScheduleInterviewRequest, RescheduleRequest, ApproveRescheduleRequest, DeclineRequest
)
from ..models.responses import (
    InterviewOut, InterviewResponse, InterviewListResponse, MyInterviewsResponse,
    InterviewPracticeInfo, InterviewCandidateInfo
)

logger = logging.getLogger(__name__)


def _to_interview_out(view: InterviewView) -> InterviewOut:
    out = InterviewOut.model_validate(view.interview)
    if view.practice is not None:
        out.practice = InterviewPracticeInfo(**view.practice)
    if view.candidate is not None:
        out.candidate = InterviewCandidateInfo(**view.candidate)
    return out


class InterviewService:
    """Service for interview scheduling and transitions."""

    def __init__(self, db: Session):
        self.db = db
        self.machine = InterviewStateMachine(InterviewRepository(db), DirectoryRepository(db))

    def _commit(self, action: Callable[[], Interview], message: str) -> InterviewResponse:
        """Run a transition, commit it and wrap the result."""
        try:
            interview = action()
            self.db.commit()
            return InterviewResponse(message=message, interview=InterviewOut.model_validate(interview))
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Interview transition failed: {e}", exc_info=True)
            raise StorageException(str(e))
        except Exception:
            self.db.rollback()
            raise

    def schedule(self, practice_user_id: UUID, request: ScheduleInterviewRequest) -> InterviewResponse:
        return self._commit(
            lambda: self.machine.schedule(
                practice_user_id,
                candidate_user_id=request.candidate_user_id,
                meeting_type=request.meeting_type,
                location=request.location,
                date=request.date,
                time=request.time,
                notes=request.notes,
            ),
            "Interview scheduled successfully",
        )

    def request_reschedule(
        self,
        candidate_user_id: UUID,
        interview_id: UUID,
        request: RescheduleRequest
    ) -> InterviewResponse:
        return self._commit(
            lambda: self.machine.request_reschedule(
                candidate_user_id,
                interview_id,
                requested_date=request.requested_date,
                requested_time=request.requested_time,
                reason=request.reason,
            ),
            "Reschedule request submitted successfully",
        )

    def approve_reschedule(
        self,
        practice_user_id: UUID,
        interview_id: UUID,
        request: ApproveRescheduleRequest
    ) -> InterviewResponse:
        return self._commit(
            lambda: self.machine.approve_reschedule(
                practice_user_id, interview_id, date=request.date, time=request.time
            ),
            "Interview rescheduled successfully",
        )

    def decline(self, candidate_user_id: UUID, interview_id: UUID, request: DeclineRequest) -> InterviewResponse:
        return self._commit(
            lambda: self.machine.decline(candidate_user_id, interview_id, reason=request.reason),
            "Interview declined successfully",
        )

    def accept(self, candidate_user_id: UUID, interview_id: UUID) -> InterviewResponse:
        return self._commit(
            lambda: self.machine.accept(candidate_user_id, interview_id),
            "Interview accepted successfully",
        )

    def complete(self, practice_user_id: UUID, interview_id: UUID) -> InterviewResponse:
        return self._commit(
            lambda: self.machine.complete(practice_user_id, interview_id),
            "Interview marked as completed",
        )

    def get_my_interviews(self, user_id: UUID) -> MyInterviewsResponse:
        views, role = self.machine.get_my_interviews(user_id)
        interviews = [_to_interview_out(v) for v in views]
        return MyInterviewsResponse(interviews=interviews, count=len(interviews), role=role)

    def get_candidate_interviews(self, user_id: UUID) -> InterviewListResponse:
        return self._list(self.machine.get_candidate_interviews(user_id))

    def get_practice_interviews(self, user_id: UUID) -> InterviewListResponse:
        return self._list(self.machine.get_practice_interviews(user_id))

    def _list(self, views: List[InterviewView]) -> InterviewListResponse:
        interviews = [_to_interview_out(v) for v in views]
        return InterviewListResponse(interviews=interviews, count=len(interviews))

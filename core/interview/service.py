#!/usr/bin/env python3
"""
Interview Service - lifecycle of a practice/candidate interview.

Practices schedule, approve reschedules and complete; candidates request
reschedules, decline and accept. Every transition checks who is acting
before it checks the interview's state.
"""
from datetime import datetime, timezone
from typing import List, Optional, Tuple
from uuid import UUID
import logging

from database.models import Interview
from database.repositories import InterviewRepository, DirectoryRepository
from core.exceptions import (
    ValidationException, AuthorizationException,
    NotFoundException, ConflictException
)
from core.interview.models import (
    MeetingType, InterviewLocation, InterviewStatus,
    InterviewView, is_valid_time
)

logger = logging.getLogger(__name__)

TIME_FORMAT_MESSAGE = "Invalid time format. Use HH:MM (24-hour format)"

RESCHEDULE_CLEARED = {
    'reschedule_requested': False,
    'reschedule_request_date': None,
    'reschedule_request_reason': None,
    'reschedule_requested_date': None,
    'reschedule_requested_time': None,
}


class InterviewStateMachine:
    """
    Applies interview transitions.

    Methods flush but never commit; the caller owns the transaction.
    """

    def __init__(self, interview_repo: InterviewRepository, directory_repo: DirectoryRepository):
        self.interview_repo = interview_repo
        self.directory_repo = directory_repo

    # ------------------------------------------------------------------
    # Practice actions
    # ------------------------------------------------------------------

    def schedule(
        self,
        practice_user_id: UUID,
        candidate_user_id: Optional[UUID],
        meeting_type: Optional[str],
        location: Optional[str],
        date: Optional[str],
        time: Optional[str],
        notes: Optional[str] = None
    ) -> Interview:
        if self.directory_repo.find_user_role(practice_user_id) != 'practice':
            raise AuthorizationException("Only practices can schedule interviews")

        required = {
            'candidateUserId': candidate_user_id,
            'meetingType': meeting_type,
            'location': location,
            'date': date,
            'time': time,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise ValidationException(f"Missing required fields: {', '.join(missing)}")

        try:
            meeting_type = MeetingType(meeting_type)
        except ValueError:
            raise ValidationException("Invalid meeting type. Must be Video, Inperson, or Call")

        try:
            location = InterviewLocation(location)
        except ValueError:
            raise ValidationException("Invalid location. Must be Online or Office")

        if not is_valid_time(time):
            raise ValidationException(TIME_FORMAT_MESSAGE)

        if self.directory_repo.find_user_role(candidate_user_id) != 'candidate':
            raise NotFoundException("Candidate not found")

        interview = self.interview_repo.create(
            practice_user_id=practice_user_id,
            candidate_user_id=candidate_user_id,
            meeting_type=meeting_type.value,
            location=location.value,
            date=date,
            time=time,
            notes=notes,
            status=InterviewStatus.SCHEDULED.value,
            reschedule_requested=False,
            declined=False,
        )
        logger.info(f"Interview {interview.id} scheduled by {practice_user_id} with {candidate_user_id} on {date} {time}")
        return interview

    def approve_reschedule(
        self,
        practice_user_id: UUID,
        interview_id: UUID,
        date: Optional[str] = None,
        time: Optional[str] = None
    ) -> Interview:
        interview = self._get_for_practice(practice_user_id, interview_id)

        if interview.declined or interview.status in (
            InterviewStatus.CANCELLED.value, InterviewStatus.COMPLETED.value
        ):
            raise ConflictException(f"Cannot reschedule an interview that is {interview.status}")
        if not interview.reschedule_requested:
            raise ConflictException("No pending reschedule request")

        new_date = date or interview.reschedule_requested_date
        new_time = time or interview.reschedule_requested_time
        if not new_date or not new_time:
            raise ValidationException("New date and time are required")
        if not is_valid_time(new_time):
            raise ValidationException(TIME_FORMAT_MESSAGE)

        changes = dict(RESCHEDULE_CLEARED)
        changes.update({
            'date': new_date,
            'time': new_time,
            'status': InterviewStatus.SCHEDULED.value,
        })
        self.interview_repo.update(interview, changes)
        logger.info(f"Interview {interview.id} rescheduled to {new_date} {new_time}")
        return interview

    def complete(self, practice_user_id: UUID, interview_id: UUID) -> Interview:
        interview = self._get_for_practice(practice_user_id, interview_id)

        if interview.status == InterviewStatus.COMPLETED.value:
            return interview
        if interview.status != InterviewStatus.CONFIRMED.value:
            raise ConflictException("Only confirmed interviews can be completed")

        self.interview_repo.update(interview, {'status': InterviewStatus.COMPLETED.value})
        logger.info(f"Interview {interview.id} completed")
        return interview

    # ------------------------------------------------------------------
    # Candidate actions
    # ------------------------------------------------------------------

    def request_reschedule(
        self,
        candidate_user_id: UUID,
        interview_id: UUID,
        requested_date: Optional[str],
        requested_time: Optional[str],
        reason: Optional[str] = None
    ) -> Interview:
        interview = self._get_for_candidate(candidate_user_id, interview_id)

        if interview.declined:
            raise ConflictException("Cannot reschedule a declined interview")
        if not requested_date or not requested_time:
            raise ValidationException("Requested date and time are required")
        if not is_valid_time(requested_time):
            raise ValidationException(TIME_FORMAT_MESSAGE)

        self.interview_repo.update(interview, {
            'reschedule_requested': True,
            'reschedule_request_date': datetime.now(timezone.utc),
            'reschedule_request_reason': reason,
            'reschedule_requested_date': requested_date,
            'reschedule_requested_time': requested_time,
        })
        logger.info(f"Reschedule requested for interview {interview.id}: {requested_date} {requested_time}")
        return interview

    def decline(self, candidate_user_id: UUID, interview_id: UUID, reason: Optional[str] = None) -> Interview:
        interview = self._get_for_candidate(candidate_user_id, interview_id)

        if interview.declined:
            raise ConflictException("Interview already declined")

        changes = dict(RESCHEDULE_CLEARED)
        changes.update({
            'declined': True,
            'declined_at': datetime.now(timezone.utc),
            'decline_reason': reason,
            'status': InterviewStatus.CANCELLED.value,
        })
        self.interview_repo.update(interview, changes)
        logger.info(f"Interview {interview.id} declined by candidate")
        return interview

    def accept(self, candidate_user_id: UUID, interview_id: UUID) -> Interview:
        interview = self._get_for_candidate(candidate_user_id, interview_id)

        if interview.declined or interview.status in (
            InterviewStatus.CANCELLED.value, InterviewStatus.COMPLETED.value
        ):
            raise ConflictException(f"Cannot accept an interview that is {interview.status}")

        if interview.status == InterviewStatus.CONFIRMED.value:
            return interview

        changes = dict(RESCHEDULE_CLEARED)
        changes['status'] = InterviewStatus.CONFIRMED.value
        self.interview_repo.update(interview, changes)
        logger.info(f"Interview {interview.id} confirmed")
        return interview

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_my_interviews(self, user_id: UUID) -> Tuple[List[InterviewView], str]:
        """Interviews for the caller, shaped by the caller's role."""
        role = self.directory_repo.find_user_role(user_id)
        if role == 'candidate':
            return self._candidate_views(user_id), role
        if role == 'practice':
            return self._practice_views(user_id), role
        raise AuthorizationException("Invalid user role")

    def get_candidate_interviews(self, user_id: UUID) -> List[InterviewView]:
        if self.directory_repo.find_user_role(user_id) != 'candidate':
            raise AuthorizationException("Only candidates can view candidate interviews")
        return self._candidate_views(user_id)

    def get_practice_interviews(self, user_id: UUID) -> List[InterviewView]:
        if self.directory_repo.find_user_role(user_id) != 'practice':
            raise AuthorizationException("Only practices can view practice interviews")
        return self._practice_views(user_id)

    def _candidate_views(self, candidate_user_id: UUID) -> List[InterviewView]:
        rows = self.interview_repo.get_for_candidate_with_practice(candidate_user_id)
        return [
            InterviewView(
                interview=interview,
                practice={
                    'id': user.id,
                    'email': user.email,
                    'name': user.full_name,
                    'clinic_type': profile.clinic_type if profile else None,
                    'phone_number': profile.phone_number if profile else None,
                },
            )
            for interview, user, profile in rows
        ]

    def _practice_views(self, practice_user_id: UUID) -> List[InterviewView]:
        rows = self.interview_repo.get_for_practice_with_candidate(practice_user_id)
        return [
            InterviewView(
                interview=interview,
                candidate={
                    'id': user.id,
                    'email': user.email,
                    'full_name': (profile.full_name if profile else None) or user.full_name,
                    'job_title': profile.job_title if profile else None,
                },
            )
            for interview, user, profile in rows
        ]

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    def _get(self, interview_id: UUID) -> Interview:
        interview = self.interview_repo.get_by_id(interview_id)
        if interview is None:
            raise NotFoundException("Interview not found")
        return interview

    def _require_role(self, user_id: UUID, role: str) -> None:
        if self.directory_repo.find_user_role(user_id) != role:
            raise AuthorizationException(f"Only {role}s can perform this action")

    def _get_for_candidate(self, candidate_user_id: UUID, interview_id: UUID) -> Interview:
        """Role, then existence, then ownership."""
        self._require_role(candidate_user_id, 'candidate')
        interview = self._get(interview_id)
        if interview.candidate_user_id != candidate_user_id:
            raise AuthorizationException("Not authorized to act on this interview")
        return interview

    def _get_for_practice(self, practice_user_id: UUID, interview_id: UUID) -> Interview:
        self._require_role(practice_user_id, 'practice')
        interview = self._get(interview_id)
        if interview.practice_user_id != practice_user_id:
            raise AuthorizationException("Not authorized to act on this interview")
        return interview

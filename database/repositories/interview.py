import logging
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, or_, and_

from database.models import Interview, User, PracticeProfile, CandidateProfile
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class InterviewRepository(BaseRepository):
    def create(self, **fields: Any) -> Interview:
        interview = Interview(**fields)
        self.db.add(interview)
        self.db.flush()
        return interview

    def get_by_id(self, interview_id: UUID) -> Optional[Interview]:
        stmt = select(Interview).where(Interview.id == interview_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_for_candidate_with_practice(
        self,
        candidate_user_id: UUID
    ) -> List[Tuple[Interview, User, Optional[PracticeProfile]]]:
        """Candidate's interviews joined with the scheduling practice, by date then time."""
        stmt = (
            select(Interview, User, PracticeProfile)
            .join(User, User.id == Interview.practice_user_id)
            .outerjoin(PracticeProfile, PracticeProfile.user_id == Interview.practice_user_id)
            .where(Interview.candidate_user_id == candidate_user_id)
            .order_by(Interview.date, Interview.time)
        )
        return [tuple(row) for row in self.db.execute(stmt).all()]

    def get_for_practice_with_candidate(
        self,
        practice_user_id: UUID
    ) -> List[Tuple[Interview, User, Optional[CandidateProfile]]]:
        """Practice's interviews joined with the invited candidate, by date then time."""
        stmt = (
            select(Interview, User, CandidateProfile)
            .join(User, User.id == Interview.candidate_user_id)
            .outerjoin(CandidateProfile, CandidateProfile.user_id == Interview.candidate_user_id)
            .where(Interview.practice_user_id == practice_user_id)
            .order_by(Interview.date, Interview.time)
        )
        return [tuple(row) for row in self.db.execute(stmt).all()]

    def has_interview_between(
        self,
        user_a: UUID,
        user_b: UUID,
        statuses: Tuple[str, ...] = ('confirmed', 'completed')
    ) -> bool:
        stmt = select(Interview.id).where(
            Interview.status.in_(statuses),
            or_(
                and_(Interview.practice_user_id == user_a, Interview.candidate_user_id == user_b),
                and_(Interview.practice_user_id == user_b, Interview.candidate_user_id == user_a),
            )
        ).limit(1)
        return self.db.execute(stmt).scalar_one_or_none() is not None

    def update(self, interview: Interview, changes: Dict[str, Any]) -> Interview:
        for key, value in changes.items():
            setattr(interview, key, value)
        self.db.flush()
        return interview

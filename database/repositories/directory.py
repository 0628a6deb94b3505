import logging
from typing import Any, Dict, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, func

from database.models import (
    User, CandidateProfile, JobPreference, Media,
    PracticeProfile, PracticeLocation
)
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class DirectoryRepository(BaseRepository):
    """Read-only lookups over users, profiles and media."""

    def find_user(self, user_id: UUID) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def find_user_role(self, user_id: UUID) -> Optional[str]:
        stmt = select(User.role).where(User.id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_candidate_profile(self, user_id: UUID) -> Optional[CandidateProfile]:
        stmt = select(CandidateProfile).where(CandidateProfile.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def has_candidate_profile(self, user_id: UUID) -> bool:
        return self.get_candidate_profile(user_id) is not None

    def find_candidate_profile_with_preferences(
        self,
        user_id: UUID
    ) -> Optional[Tuple[CandidateProfile, Optional[JobPreference]]]:
        profile = self.get_candidate_profile(user_id)
        if profile is None:
            return None
        stmt = select(JobPreference).where(JobPreference.user_id == user_id)
        preferences = self.db.execute(stmt).scalar_one_or_none()
        return profile, preferences

    def get_practice_profile(self, user_id: UUID) -> Optional[PracticeProfile]:
        stmt = select(PracticeProfile).where(PracticeProfile.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def count_practice_locations(self, user_id: UUID) -> int:
        stmt = select(func.count()).select_from(PracticeLocation).where(PracticeLocation.user_id == user_id)
        return self.db.execute(stmt).scalar_one()

    def get_media_url(self, user_id: UUID, kind: str) -> Optional[str]:
        stmt = select(Media.url).where(
            Media.user_id == user_id,
            Media.kind == kind
        ).order_by(Media.created_at.desc()).limit(1)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_display_info(self, user_id: UUID) -> Dict[str, Any]:
        """
        Name and avatar to show for a user on the other side of a like.

        Candidates show their profile picture, practices their logo.
        Name falls back to "Someone" for unknown users.
        """
        user = self.find_user(user_id)
        is_candidate = self.has_candidate_profile(user_id)
        avatar = self.get_media_url(user_id, 'profile_picture' if is_candidate else 'logo')
        return {
            'name': user.full_name if user and user.full_name else 'Someone',
            'avatar': avatar,
            'is_candidate': is_candidate,
        }

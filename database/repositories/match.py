import logging
import uuid
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, func, or_, and_
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError

from database.models import Match
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

MATCH_CONSTRAINT = 'uq_match_candidate_practice_target'
MATCH_KEY_COLUMNS = ['candidate_user_id', 'practice_user_id', 'target_type', 'target_id']


class MatchRepository(BaseRepository):
    def get_by_id(self, match_id: UUID) -> Optional[Match]:
        stmt = select(Match).where(Match.id == match_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_existing_match(
        self,
        candidate_user_id: UUID,
        practice_user_id: UUID,
        target_type: str,
        target_id: UUID
    ) -> Optional[Match]:
        stmt = select(Match).where(
            Match.candidate_user_id == candidate_user_id,
            Match.practice_user_id == practice_user_id,
            Match.target_type == target_type,
            Match.target_id == target_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def create_if_absent(
        self,
        candidate_user_id: UUID,
        practice_user_id: UUID,
        target_type: str,
        target_id: UUID,
        score: int
    ) -> Tuple[Match, bool]:
        """
        Insert a match unless one already exists for the same tuple.

        Uses ON CONFLICT DO NOTHING against the unique constraint, then
        re-selects, so the loser of a concurrent insert gets the winner's
        row back instead of an IntegrityError.

        Returns: (match, created)
        """
        values = {
            'id': uuid.uuid4(),
            'candidate_user_id': candidate_user_id,
            'practice_user_id': practice_user_id,
            'target_type': target_type,
            'target_id': target_id,
            'score': score,
            'status': 'matched',
        }

        dialect = self.db.get_bind().dialect.name
        if dialect == 'postgresql':
            stmt = postgresql.insert(Match).values(**values).on_conflict_do_nothing(
                constraint=MATCH_CONSTRAINT
            )
            created = self.db.execute(stmt).rowcount == 1
        elif dialect == 'sqlite':
            stmt = sqlite.insert(Match).values(**values).on_conflict_do_nothing(
                index_elements=MATCH_KEY_COLUMNS
            )
            created = self.db.execute(stmt).rowcount == 1
        else:
            created = self._insert_in_savepoint(values)

        match = self.get_existing_match(candidate_user_id, practice_user_id, target_type, target_id)
        if match is None:
            raise RuntimeError(
                f"Match for candidate {candidate_user_id} on {target_type}:{target_id} vanished after insert"
            )

        if created:
            logger.info(
                f"Created match {match.id} (candidate={candidate_user_id}, practice={practice_user_id}, "
                f"{target_type}={target_id}, score={score})"
            )
        else:
            logger.debug(f"Match already existed for {target_type}:{target_id}, reusing {match.id}")
        return match, created

    def _insert_in_savepoint(self, values: dict) -> bool:
        try:
            with self.db.begin_nested():
                self.db.add(Match(**values))
            return True
        except IntegrityError:
            return False

    def get_matches_for_user(
        self,
        user_id: UUID,
        page: int = 1,
        limit: int = 10,
        status: str = 'matched'
    ) -> Tuple[List[Match], int]:
        participant = or_(Match.candidate_user_id == user_id, Match.practice_user_id == user_id)

        count_stmt = select(func.count()).select_from(Match).where(participant, Match.status == status)
        total = self.db.execute(count_stmt).scalar_one()

        stmt = select(Match).where(participant, Match.status == status).order_by(
            Match.created_at.desc(), Match.id
        ).offset((page - 1) * limit).limit(limit)
        return list(self.db.execute(stmt).scalars().all()), total

    def exists_between(self, user_a: UUID, user_b: UUID, status: str = 'matched') -> bool:
        stmt = select(Match.id).where(
            Match.status == status,
            or_(
                and_(Match.candidate_user_id == user_a, Match.practice_user_id == user_b),
                and_(Match.candidate_user_id == user_b, Match.practice_user_id == user_a),
            )
        ).limit(1)
        return self.db.execute(stmt).scalar_one_or_none() is not None

    def archive(self, match: Match) -> Match:
        if match.status != 'archived':
            match.status = 'archived'
            self.db.flush()
            logger.info(f"Archived match {match.id}")
        return match

import logging
from typing import Dict, List, Sequence
from uuid import UUID

from sqlalchemy import select

from database.models import MatchLike
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class LikeRepository(BaseRepository):
    def add(self, actor_user_id: UUID, target_type: str, target_id: UUID, decision: str) -> MatchLike:
        like = MatchLike(
            actor_user_id=actor_user_id,
            target_type=target_type,
            target_id=target_id,
            decision=decision,
        )
        self.db.add(like)
        self.db.flush()
        return like

    def has_like(self, actor_user_id: UUID, target_type: str, target_id: UUID) -> bool:
        stmt = select(MatchLike.id).where(
            MatchLike.actor_user_id == actor_user_id,
            MatchLike.target_type == target_type,
            MatchLike.target_id == target_id,
            MatchLike.decision == 'like'
        ).limit(1)
        return self.db.execute(stmt).scalar_one_or_none() is not None

    def get_liked_target_ids(
        self,
        actor_user_id: UUID,
        target_types: Sequence[str]
    ) -> Dict[str, List[UUID]]:
        """
        Target ids the actor has liked, grouped by target type.

        Order follows like creation, duplicates removed. Likes sharing a
        timestamp fall back to id order, which is stable across calls but
        not insertion order.
        """
        stmt = select(MatchLike.target_type, MatchLike.target_id).where(
            MatchLike.actor_user_id == actor_user_id,
            MatchLike.target_type.in_(list(target_types)),
            MatchLike.decision == 'like'
        ).order_by(MatchLike.created_at, MatchLike.id)

        grouped: Dict[str, List[UUID]] = {t: [] for t in target_types}
        for target_type, target_id in self.db.execute(stmt).all():
            if target_id not in grouped[target_type]:
                grouped[target_type].append(target_id)
        return grouped

import logging
from typing import Iterable, List
from uuid import UUID

from sqlalchemy import select, delete

from database.models import UserFCMToken
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class PushTokenRepository(BaseRepository):
    def get_tokens_for_user(self, user_id: UUID) -> List[str]:
        stmt = select(UserFCMToken.fcm_token).where(
            UserFCMToken.user_id == user_id
        ).order_by(UserFCMToken.last_used_at.desc())
        return list(self.db.execute(stmt).scalars().all())

    def delete_tokens(self, tokens: Iterable[str]) -> int:
        tokens = list(tokens)
        if not tokens:
            return 0
        stmt = delete(UserFCMToken).where(UserFCMToken.fcm_token.in_(tokens))
        count = self.db.execute(stmt).rowcount
        if count:
            logger.info(f"Removed {count} invalid push token(s)")
        return count

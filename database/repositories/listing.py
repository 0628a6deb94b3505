import logging
from typing import Iterable, List, Optional, Union
from uuid import UUID

from sqlalchemy import select

from database.models import LocumShift, PermanentJob
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

Listing = Union[LocumShift, PermanentJob]

LISTING_MODELS = {
    'locum': LocumShift,
    'permanent': PermanentJob,
}


class ListingRepository(BaseRepository):
    def _model_for(self, kind: str):
        model = LISTING_MODELS.get(kind)
        if model is None:
            raise ValueError(f"Unknown listing kind: {kind}")
        return model

    def get_listing(self, kind: str, listing_id: UUID) -> Optional[Listing]:
        model = self._model_for(kind)
        stmt = select(model).where(model.id == listing_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def find_listings_owned_by(
        self,
        practice_user_id: UUID,
        kind: str,
        ids: Optional[Iterable[UUID]] = None
    ) -> List[Listing]:
        """Listings of one kind owned by a practice, optionally restricted to ids.

        Results come back in the order of `ids` when given, otherwise by
        creation time.
        """
        model = self._model_for(kind)
        stmt = select(model).where(model.user_id == practice_user_id)

        if ids is not None:
            ids = list(ids)
            if not ids:
                return []
            stmt = stmt.where(model.id.in_(ids))
            rows = self.db.execute(stmt).scalars().all()
            position = {listing_id: i for i, listing_id in enumerate(ids)}
            return sorted(rows, key=lambda row: position.get(row.id, len(position)))

        stmt = stmt.order_by(model.created_at, model.id)
        return list(self.db.execute(stmt).scalars().all())

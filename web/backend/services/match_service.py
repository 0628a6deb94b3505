#!/usr/bin/env python3
"""
Match service - like flow, match listing and messaging permission.
"""

import logging
import math
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from core.exceptions import StorageException, NotFoundException, AuthorizationException
from core.matcher import (
    LikeLedger, MatchResolver, Decision, TargetType,
    parse_target_type, parse_decision, has_confirmed_interview_or_match
)
from database.models import Match
from database.repositories import (
    LikeRepository, ListingRepository, MatchRepository,
    DirectoryRepository, InterviewRepository
)
from notification.service import PushNotificationService
from ..models.requests import LikeRequest
from ..models.responses import (
    LikeOut, MatchOut, TargetInfo, LikeResponse,
    EnrichedMatch, ListingProjection, CandidateProjection, PracticeProjection,
    MatchesData, MatchesResponse, Pagination
)

logger = logging.getLogger(__name__)


class LikeFlowService:
    """
    Records a swipe and everything that follows from it.

    Order: ledger -> resolver -> commit -> push (best effort) -> target info.
    Only the first three can fail the request.
    """

    def __init__(self, db: Session, notifier: Optional[PushNotificationService] = None):
        self.db = db
        self.notifier = notifier
        self.like_repo = LikeRepository(db)
        self.listing_repo = ListingRepository(db)
        self.match_repo = MatchRepository(db)
        self.directory_repo = DirectoryRepository(db)
        self.ledger = LikeLedger(self.like_repo)
        self.resolver = MatchResolver(self.like_repo, self.listing_repo, self.match_repo, self.directory_repo)

    def like(self, actor_user_id: UUID, request: LikeRequest) -> LikeResponse:
        target_type = parse_target_type(request.target_type)
        decision = parse_decision(request.decision)

        try:
            like = self.ledger.record_decision(actor_user_id, target_type, request.target_id, decision)
            match = None
            if decision == Decision.LIKE:
                match = self.resolver.ensure_match_if_mutual(actor_user_id, target_type, request.target_id)
            self.db.commit()
            like_out = LikeOut.model_validate(like)
            match_out = MatchOut.model_validate(match) if match else None
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to record like from {actor_user_id}: {e}", exc_info=True)
            raise StorageException(str(e))

        if decision == Decision.LIKE:
            self._notify_like(actor_user_id, target_type, request.target_id)

        return LikeResponse(
            like=like_out,
            match=match_out,
            target=self._target_info(target_type, request.target_id),
        )

    def _notify_like(self, actor_user_id: UUID, target_type: TargetType, target_id: UUID) -> None:
        if self.notifier is None:
            return
        try:
            if target_type == TargetType.CANDIDATE:
                recipient_user_id = target_id
            else:
                listing = self.listing_repo.get_listing(target_type.value, target_id)
                recipient_user_id = listing.user_id if listing else None

            if recipient_user_id is None:
                return

            liker = self.directory_repo.get_display_info(actor_user_id)
            self.notifier.notify_like(
                recipient_user_id,
                liker_id=actor_user_id,
                liker_type='candidate' if liker['is_candidate'] else 'practice',
                liker_name=liker['name'],
                liker_avatar=liker['avatar'],
                on_listing=target_type.is_listing,
            )
            # Persist token pruning
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error sending like notification: {e}", exc_info=True)

    def _target_info(self, target_type: TargetType, target_id: UUID) -> Optional[TargetInfo]:
        """Name and avatar of the liked candidate, or of the practice owning the liked listing."""
        try:
            if target_type == TargetType.CANDIDATE:
                user = self.directory_repo.find_user(target_id)
                return TargetInfo(
                    name=user.full_name if user else None,
                    avatar=self.directory_repo.get_media_url(target_id, 'profile_picture'),
                )

            listing = self.listing_repo.get_listing(target_type.value, target_id)
            if listing is None:
                return None
            practice = self.directory_repo.find_user(listing.user_id)
            return TargetInfo(
                name=practice.full_name if practice else None,
                avatar=self.directory_repo.get_media_url(listing.user_id, 'logo'),
            )
        except SQLAlchemyError as e:
            logger.error(f"Error fetching target info: {e}")
            return None


class MatchService:
    """Service for reading and archiving matches."""

    def __init__(self, db: Session):
        self.db = db
        self.match_repo = MatchRepository(db)
        self.listing_repo = ListingRepository(db)
        self.directory_repo = DirectoryRepository(db)
        self.interview_repo = InterviewRepository(db)

    def get_matches(self, user_id: UUID, page: int = 1, limit: int = 10) -> MatchesResponse:
        """
        Active matches the user takes part in, newest first.

        Each match carries the listing plus both participants' public
        profile info.
        """
        matches, total = self.match_repo.get_matches_for_user(user_id, page=page, limit=limit)

        return MatchesResponse(
            success=True,
            data=MatchesData(
                total=total,
                matches=[self._enrich(m) for m in matches],
                pagination=Pagination(
                    page=page,
                    limit=limit,
                    total_pages=math.ceil(total / limit) if limit else 0,
                ),
            ),
        )

    def archive_match(self, user_id: UUID, match_id: UUID) -> MatchOut:
        match = self.match_repo.get_by_id(match_id)
        if match is None:
            raise NotFoundException("Match not found")
        if user_id not in (match.candidate_user_id, match.practice_user_id):
            raise AuthorizationException("Not a participant in this match")

        try:
            self.match_repo.archive(match)
            self.db.commit()
            return MatchOut.model_validate(match)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageException(str(e))

    def can_message(self, user_id: UUID, other_user_id: UUID) -> bool:
        return has_confirmed_interview_or_match(
            self.interview_repo, self.match_repo, user_id, other_user_id
        )

    def _enrich(self, match: Match) -> EnrichedMatch:
        enriched = EnrichedMatch.model_validate(match)

        listing = None
        try:
            listing = self.listing_repo.get_listing(match.target_type, match.target_id)
        except ValueError:
            logger.warning(f"Match {match.id} has unknown target type {match.target_type}")
        if listing is not None:
            enriched.target = ListingProjection.model_validate(listing)

        candidate = self.directory_repo.get_candidate_profile(match.candidate_user_id)
        if candidate is not None:
            enriched.candidate = CandidateProjection.model_validate(candidate)
            enriched.candidate.avatar = self.directory_repo.get_media_url(match.candidate_user_id, 'profile_picture')

        practice = self.directory_repo.get_practice_profile(match.practice_user_id)
        if practice is not None:
            practice_user = self.directory_repo.find_user(match.practice_user_id)
            enriched.practice = PracticeProjection.model_validate(practice)
            enriched.practice.avatar = self.directory_repo.get_media_url(match.practice_user_id, 'logo')
            enriched.practice.name = practice_user.full_name if practice_user else None

        return enriched

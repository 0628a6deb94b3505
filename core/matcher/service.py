#!/usr/bin/env python3
"""
Matcher Service - like ledger and mutual-interest resolution.

A candidate likes listings; a practice likes candidates. A match exists
for every (candidate, practice, listing) where the candidate liked the
listing and the listing's owner liked the candidate. Whichever like
arrives second creates the match.
"""
from typing import List, Optional, Tuple
from uuid import UUID
import logging

from database.models import MatchLike, Match
from database.repositories import (
    LikeRepository, ListingRepository, MatchRepository,
    DirectoryRepository, InterviewRepository
)
from core.matcher.models import (
    TargetType, LISTING_TARGET_TYPES, parse_target_type, parse_decision
)
from core.scorer import score_candidate_to_job

logger = logging.getLogger(__name__)


class LikeLedger:
    """Append-only record of swipe decisions."""

    def __init__(self, like_repo: LikeRepository):
        self.like_repo = like_repo

    def record_decision(self, actor_user_id: UUID, target_type, target_id: UUID, decision) -> MatchLike:
        """
        Append one decision row and return it.

        Raises:
            ValidationException: unknown target type or decision
        """
        target_type = parse_target_type(target_type)
        decision = parse_decision(decision)

        like = self.like_repo.add(actor_user_id, target_type.value, target_id, decision.value)
        logger.debug(f"Recorded {decision.value} from {actor_user_id} on {target_type.value}:{target_id}")
        return like


class MatchResolver:
    """
    Creates (or returns) a match once both sides have liked each other.

    Idempotent: repeated calls for the same pair return the existing row.
    """

    def __init__(
        self,
        like_repo: LikeRepository,
        listing_repo: ListingRepository,
        match_repo: MatchRepository,
        directory_repo: DirectoryRepository
    ):
        self.like_repo = like_repo
        self.listing_repo = listing_repo
        self.match_repo = match_repo
        self.directory_repo = directory_repo

    def ensure_match_if_mutual(self, actor_user_id: UUID, target_type, target_id: UUID) -> Optional[Match]:
        """
        Resolve a freshly recorded like into a match, if the other side
        already liked back.

        Only call for `like` decisions.

        Returns:
            The created or existing Match, or None when interest is one-sided
        """
        target_type = parse_target_type(target_type)

        if target_type.is_listing:
            return self._resolve_candidate_like(actor_user_id, target_type, target_id)
        return self._resolve_practice_like(actor_user_id, target_id)

    def _resolve_candidate_like(
        self,
        candidate_user_id: UUID,
        kind: TargetType,
        listing_id: UUID
    ) -> Optional[Match]:
        listing = self.listing_repo.get_listing(kind.value, listing_id)
        if listing is None:
            return None

        practice_user_id = listing.user_id
        if not self.like_repo.has_like(practice_user_id, TargetType.CANDIDATE.value, candidate_user_id):
            return None

        candidate = self.directory_repo.find_candidate_profile_with_preferences(candidate_user_id)
        if candidate is None:
            logger.warning(f"Mutual like for {candidate_user_id} but no candidate profile; skipping match")
            return None
        _, preferences = candidate

        match, _ = self._ensure_match(candidate_user_id, practice_user_id, kind, listing, preferences)
        return match

    def _resolve_practice_like(self, practice_user_id: UUID, candidate_user_id: UUID) -> Optional[Match]:
        liked = self.like_repo.get_liked_target_ids(
            candidate_user_id, [t.value for t in LISTING_TARGET_TYPES]
        )
        if not any(liked.values()):
            return None

        owned: List[Tuple[TargetType, object]] = []
        for kind in LISTING_TARGET_TYPES:
            ids = liked.get(kind.value) or []
            if not ids:
                continue
            for listing in self.listing_repo.find_listings_owned_by(practice_user_id, kind.value, ids):
                owned.append((kind, listing))

        if not owned:
            return None

        candidate = self.directory_repo.find_candidate_profile_with_preferences(candidate_user_id)
        if candidate is None:
            logger.warning(f"Mutual like for {candidate_user_id} but no candidate profile; skipping match")
            return None
        _, preferences = candidate

        first: Optional[Match] = None
        for kind, listing in owned:
            match, _ = self._ensure_match(candidate_user_id, practice_user_id, kind, listing, preferences)
            if first is None:
                first = match
        return first

    def _ensure_match(
        self,
        candidate_user_id: UUID,
        practice_user_id: UUID,
        kind: TargetType,
        listing,
        preferences
    ) -> Tuple[Match, bool]:
        existing = self.match_repo.get_existing_match(
            candidate_user_id, practice_user_id, kind.value, listing.id
        )
        if existing is not None:
            return existing, False

        location_count = self.directory_repo.count_practice_locations(practice_user_id)
        score = score_candidate_to_job(preferences, listing, kind.value, location_count)

        return self.match_repo.create_if_absent(
            candidate_user_id, practice_user_id, kind.value, listing.id, score
        )


def has_confirmed_interview_or_match(
    interview_repo: InterviewRepository,
    match_repo: MatchRepository,
    user_a: UUID,
    user_b: UUID
) -> bool:
    """
    Whether two users may message each other directly.

    True when they share a confirmed/completed interview or an active
    match, in either orientation.
    """
    if user_a == user_b:
        return False
    if interview_repo.has_interview_between(user_a, user_b):
        return True
    return match_repo.exists_between(user_a, user_b)

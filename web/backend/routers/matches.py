#!/usr/bin/env python3
"""
Match endpoints - swipe, list and archive matches, messaging permission.
"""

import logging
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from ..config import get_config
from ..dependencies import get_db, get_current_user, get_push_service, CurrentUser
from ..rate_limit import limiter
from ..services.match_service import LikeFlowService, MatchService
from notification.service import PushNotificationService
from ..models.requests import LikeRequest
from ..models.responses import (
    LikeResponse,
    MatchesResponse,
    ArchiveMatchResponse,
    CanMessageResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/match", tags=["matches"])


@router.post("/like", response_model=LikeResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("120/minute")
def like_target(
    request: Request,
    body: LikeRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    notifier: PushNotificationService = Depends(get_push_service)
):
    """
    Record a like or pass on a listing or a candidate.

    A like that completes mutual interest returns the match; the other
    side is sent a push notification either way.
    """
    service = LikeFlowService(db, notifier)
    return service.like(current_user.id, body)


@router.get("/matches", response_model=MatchesResponse)
def get_matches(
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Active matches for the caller, newest first, paginated."""
    matching = get_config().matching
    effective_limit = min(limit or matching.default_page_size, matching.max_page_size)

    service = MatchService(db)
    return service.get_matches(current_user.id, page=page, limit=effective_limit)


@router.post("/matches/{match_id}/archive", response_model=ArchiveMatchResponse)
def archive_match(
    match_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Archive a match the caller takes part in."""
    service = MatchService(db)
    match = service.archive_match(current_user.id, match_id)
    return ArchiveMatchResponse(success=True, match=match)


@router.get("/can-message/{user_id}", response_model=CanMessageResponse)
def can_message(
    user_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Whether the caller may message the given user directly."""
    service = MatchService(db)
    return CanMessageResponse(success=True, permitted=service.can_message(current_user.id, user_id))

"""Business logic services."""

from .match_service import LikeFlowService, MatchService
from .interview_service import InterviewService

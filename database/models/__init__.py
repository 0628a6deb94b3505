from .base import Base
from .user import User
from .profile import CandidateProfile, JobPreference, Media
from .practice import PracticeProfile, PracticeLocation
from .listing import LocumShift, PermanentJob
from .match import MatchLike, Match
from .interview import Interview
from .notification import UserFCMToken

__all__ = [
    'Base',
    'User',
    'CandidateProfile',
    'JobPreference',
    'Media',
    'PracticeProfile',
    'PracticeLocation',
    'LocumShift',
    'PermanentJob',
    'MatchLike',
    'Match',
    'Interview',
    'UserFCMToken',
]

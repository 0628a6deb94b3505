from database.repositories.base import BaseRepository
from database.repositories.directory import DirectoryRepository
from database.repositories.listing import ListingRepository
from database.repositories.like import LikeRepository
from database.repositories.match import MatchRepository
from database.repositories.interview import InterviewRepository
from database.repositories.push_token import PushTokenRepository

__all__ = [
    'BaseRepository',
    'DirectoryRepository',
    'ListingRepository',
    'LikeRepository',
    'MatchRepository',
    'InterviewRepository',
    'PushTokenRepository',
]

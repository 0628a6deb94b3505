"""Interview Module - scheduling and lifecycle transitions."""
from core.interview.models import (
    MeetingType, InterviewLocation, InterviewStatus, InterviewView, is_valid_time
)
from core.interview.service import InterviewStateMachine

__all__ = [
    'InterviewStateMachine', 'InterviewView',
    'MeetingType', 'InterviewLocation', 'InterviewStatus', 'is_valid_time'
]

#!/usr/bin/env python3
"""
Scoring Module - match compatibility score.

Public API:
- score_candidate_to_job: integer score in [0, 100]
- parse_salary_range: numeric range from free-text salary
"""

from core.scorer.job_score import score_candidate_to_job, parse_salary_range, normalize_str

__all__ = ['score_candidate_to_job', 'parse_salary_range', 'normalize_str']

#!/usr/bin/env python3
"""
Tests for the like ledger repository.
"""

import unittest
import uuid
from datetime import datetime, timezone

from database.repositories import LikeRepository
from tests import (
    create_test_session, close_test_session,
    make_candidate, make_practice, make_locum, make_permanent, make_like
)


class TestLikeRepository(unittest.TestCase):

    def setUp(self):
        self.db = create_test_session()
        self.repo = LikeRepository(self.db)
        self.candidate = make_candidate(self.db)
        self.practice = make_practice(self.db)

    def tearDown(self):
        close_test_session(self.db)

    def test_liked_target_ids_grouped_and_deduplicated(self):
        shift = make_locum(self.db, self.practice)
        job = make_permanent(self.db, self.practice)
        make_like(self.db, self.candidate, 'locum', shift.id)
        make_like(self.db, self.candidate, 'locum', shift.id)
        make_like(self.db, self.candidate, 'permanent', job.id)
        make_like(self.db, self.candidate, 'permanent', uuid.uuid4(), decision='pass')

        liked = self.repo.get_liked_target_ids(self.candidate.id, ['locum', 'permanent'])

        self.assertEqual(liked, {'locum': [shift.id], 'permanent': [job.id]})

    def test_same_instant_likes_ordered_by_id(self):
        stamp = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
        likes = [
            make_like(self.db, self.candidate, 'locum', make_locum(self.db, self.practice).id)
            for _ in range(3)
        ]
        for like in likes:
            like.created_at = stamp
        self.db.flush()

        expected = [like.target_id for like in sorted(likes, key=lambda like: like.id)]
        for _ in range(2):
            self.assertEqual(self.repo.get_liked_target_ids(self.candidate.id, ['locum'])['locum'], expected)

    def test_has_like_ignores_passes(self):
        shift = make_locum(self.db, self.practice)
        make_like(self.db, self.practice, 'candidate', self.candidate.id, decision='pass')

        self.assertFalse(self.repo.has_like(self.practice.id, 'candidate', self.candidate.id))
        self.repo.add(self.practice.id, 'candidate', self.candidate.id, 'like')
        self.assertTrue(self.repo.has_like(self.practice.id, 'candidate', self.candidate.id))
        self.assertFalse(self.repo.has_like(self.practice.id, 'locum', shift.id))


if __name__ == '__main__':
    unittest.main()

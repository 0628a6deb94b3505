#!/usr/bin/env python3
"""
Tests for user directory lookups.
"""

import unittest
import uuid

from database.repositories import DirectoryRepository
from tests import create_test_session, close_test_session, make_candidate, make_practice


class TestDirectoryRepository(unittest.TestCase):

    def setUp(self):
        self.db = create_test_session()
        self.repo = DirectoryRepository(self.db)
        self.candidate = make_candidate(self.db)
        self.practice = make_practice(self.db)

    def tearDown(self):
        close_test_session(self.db)

    def test_display_info(self):
        anonymous = self.repo.get_display_info(uuid.uuid4())

        self.assertEqual(anonymous['name'], "Someone")
        self.assertFalse(anonymous['is_candidate'])
        self.assertTrue(self.repo.get_display_info(self.candidate.id)['is_candidate'])

    def test_find_user_role(self):
        self.assertEqual(self.repo.find_user_role(self.candidate.id), 'candidate')
        self.assertEqual(self.repo.find_user_role(self.practice.id), 'practice')
        self.assertIsNone(self.repo.find_user_role(uuid.uuid4()))


if __name__ == '__main__':
    unittest.main()

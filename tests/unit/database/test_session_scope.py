#!/usr/bin/env python3
"""
Tests for the transactional session scope.
"""

import unittest

from sqlalchemy import select, func
from sqlalchemy.orm import sessionmaker

from database.database import session_scope
from database.models import User
from tests import create_test_session, close_test_session, make_candidate


class TestSessionScope(unittest.TestCase):

    def setUp(self):
        self.db = create_test_session()
        self.factory = sessionmaker(bind=self.db.get_bind(), autoflush=False)

    def tearDown(self):
        close_test_session(self.db)

    def test_commits_on_success(self):
        with session_scope(self.factory) as session:
            make_candidate(session, "Committed")

        self.assertEqual(
            self.db.execute(select(func.count()).select_from(User)).scalar_one(), 1
        )

    def test_rolls_back_on_error(self):
        with self.assertRaises(RuntimeError):
            with session_scope(self.factory) as session:
                make_candidate(session, "Rolled Back")
                raise RuntimeError("abort")

        self.assertEqual(
            self.db.execute(select(func.count()).select_from(User)).scalar_one(), 0
        )


if __name__ == '__main__':
    unittest.main()

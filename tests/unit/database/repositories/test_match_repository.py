#!/usr/bin/env python3
"""
Tests for match storage.
"""

import unittest
import uuid
from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import create_engine, select, func
from sqlalchemy.orm import sessionmaker

from database.models import Base, Match
from database.repositories import MatchRepository
from tests import (
    create_test_session, close_test_session,
    make_candidate, make_practice, make_locum, make_permanent
)


class TestMatchRepository(unittest.TestCase):

    def setUp(self):
        self.db = create_test_session()
        self.repo = MatchRepository(self.db)
        self.candidate = make_candidate(self.db)
        self.practice = make_practice(self.db)
        self.shift = make_locum(self.db, self.practice)

    def tearDown(self):
        close_test_session(self.db)

    def test_create_if_absent_inserts_once(self):
        first, created_first = self.repo.create_if_absent(
            self.candidate.id, self.practice.id, 'locum', self.shift.id, 60
        )
        second, created_second = self.repo.create_if_absent(
            self.candidate.id, self.practice.id, 'locum', self.shift.id, 10
        )

        self.assertTrue(created_first)
        self.assertFalse(created_second)
        self.assertEqual(first.id, second.id)
        self.assertEqual(second.score, 60)
        self.assertEqual(self.db.execute(select(func.count()).select_from(Match)).scalar_one(), 1)

    def test_same_listing_different_kind_is_distinct(self):
        self.repo.create_if_absent(self.candidate.id, self.practice.id, 'locum', self.shift.id, 60)
        _, created = self.repo.create_if_absent(self.candidate.id, self.practice.id, 'permanent', self.shift.id, 60)
        self.assertTrue(created)

    def test_get_matches_for_user_pages_and_counts(self):
        for _ in range(5):
            job = make_permanent(self.db, self.practice)
            self.repo.create_if_absent(self.candidate.id, self.practice.id, 'permanent', job.id, 40)

        page, total = self.repo.get_matches_for_user(self.candidate.id, page=2, limit=2)
        self.assertEqual(total, 5)
        self.assertEqual(len(page), 2)

        last, _ = self.repo.get_matches_for_user(self.practice.id, page=3, limit=2)
        self.assertEqual(len(last), 1)

    def test_archived_matches_excluded(self):
        match, _ = self.repo.create_if_absent(self.candidate.id, self.practice.id, 'locum', self.shift.id, 60)
        self.repo.archive(match)

        matches, total = self.repo.get_matches_for_user(self.candidate.id)
        self.assertEqual((matches, total), ([], 0))
        self.assertFalse(self.repo.exists_between(self.candidate.id, self.practice.id))

    def test_exists_between_is_symmetric(self):
        self.repo.create_if_absent(self.candidate.id, self.practice.id, 'locum', self.shift.id, 60)

        self.assertTrue(self.repo.exists_between(self.candidate.id, self.practice.id))
        self.assertTrue(self.repo.exists_between(self.practice.id, self.candidate.id))
        self.assertFalse(self.repo.exists_between(self.candidate.id, uuid.uuid4()))


@pytest.mark.db
def test_concurrent_inserts_produce_one_match(postgres_url):
    """Two sessions racing on the same tuple end with one row and the same id."""
    engine = create_engine(postgres_url)
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine, autoflush=False)

    setup = Session()
    candidate = make_candidate(setup, "Race Candidate")
    practice = make_practice(setup, "Race Dental")
    shift = make_locum(setup, practice)
    setup.commit()
    key = (candidate.id, practice.id, 'locum', shift.id)
    setup.close()

    def insert(_):
        session = Session()
        try:
            match, _ = MatchRepository(session).create_if_absent(*key, 60)
            session.commit()
            return match.id
        finally:
            session.close()

    try:
        with ThreadPoolExecutor(max_workers=4) as pool:
            ids = set(pool.map(insert, range(8)))

        assert len(ids) == 1
        check = Session()
        count = check.execute(
            select(func.count()).select_from(Match).where(Match.target_id == shift.id)
        ).scalar_one()
        check.close()
        assert count == 1
    finally:
        Base.metadata.drop_all(engine)
        engine.dispose()

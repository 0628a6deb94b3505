#!/usr/bin/env python3
"""
Tests for listing lookups.
"""

import unittest
import uuid

from database.repositories import ListingRepository
from tests import create_test_session, close_test_session, make_practice, make_locum


class TestListingRepository(unittest.TestCase):

    def setUp(self):
        self.db = create_test_session()
        self.repo = ListingRepository(self.db)
        self.practice = make_practice(self.db)

    def tearDown(self):
        close_test_session(self.db)

    def test_listings_owned_by_filters_owner_and_keeps_id_order(self):
        other = make_practice(self.db, "Other Dental")
        a = make_locum(self.db, self.practice)
        b = make_locum(self.db, self.practice)
        foreign = make_locum(self.db, other)

        found = self.repo.find_listings_owned_by(self.practice.id, 'locum', [b.id, foreign.id, a.id])

        self.assertEqual([listing.id for listing in found], [b.id, a.id])
        self.assertEqual(self.repo.find_listings_owned_by(self.practice.id, 'locum', []), [])

    def test_unknown_listing_kind(self):
        with self.assertRaises(ValueError):
            self.repo.get_listing('candidate', uuid.uuid4())


if __name__ == '__main__':
    unittest.main()

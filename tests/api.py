"""
Shared setup for HTTP-level tests.

Builds the app with the request session swapped for an in-memory SQLite
session and the push notifier bound to a log channel.
"""

import unittest
from unittest.mock import Mock

from fastapi.testclient import TestClient
from jose import jwt

from database.repositories import PushTokenRepository
from notification import PushNotificationService, LogChannel
from web.backend.app import create_app
from web.backend.config import get_config
from web.backend.dependencies import get_db, get_push_service
from web.backend.rate_limit import limiter
from tests import create_test_session, close_test_session


def make_auth_token(user, role=None) -> str:
    auth = get_config().auth
    claims = {'sub': str(user.id), 'role': role or user.role}
    return jwt.encode(claims, auth.jwt_secret, algorithm=auth.jwt_algorithm)


class ApiTestCase(unittest.TestCase):

    def setUp(self):
        self.db = create_test_session()
        self.channel = Mock(wraps=LogChannel())
        self.app = create_app()

        def override_get_db():
            yield self.db

        def override_get_push_service():
            return PushNotificationService(PushTokenRepository(self.db), channel=self.channel)

        self.app.dependency_overrides[get_db] = override_get_db
        self.app.dependency_overrides[get_push_service] = override_get_push_service
        limiter.reset()
        self.client = TestClient(self.app)

    def tearDown(self):
        self.app.dependency_overrides.clear()
        close_test_session(self.db)

    def auth(self, user):
        return {"Authorization": f"Bearer {make_auth_token(user)}"}

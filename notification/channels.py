#!/usr/bin/env python3
"""
Push Channels

Each channel delivers one payload to one device token and reports the
outcome as a PushResult instead of raising.

Usage:
    from notification.channels import NotificationChannelFactory

    channel = NotificationChannelFactory.get_channel('fcm')
    result = channel.send(token, payload)
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional
import json
import logging
import os
import uuid

import firebase_admin
from firebase_admin import credentials, messaging, exceptions as firebase_exceptions

from notification.message_builder import PushPayload, PushResult

logger = logging.getLogger(__name__)

INVALID_TOKEN = "INVALID_TOKEN"
FCM_ERROR = "FCM_ERROR"


def _is_dry_run_mode() -> bool:
    """Check if notification channels should run in dry-run (log-only) mode."""
    return os.environ.get('NOTIFICATION_DRY_RUN', '').lower() in ('true', '1', 'yes')


def _mask_token(token: str) -> str:
    """
    Mask a device token for safe logging.

    Shows only the last 6 characters, e.g. "***a1b2c3"
    """
    if not token or len(token) <= 6:
        return "***"
    return f"***{token[-6:]}"


class NotificationChannel(ABC):
    """
    Abstract base class for all push channels.

    send() never raises for delivery problems; it returns a failed
    PushResult so callers can settle every token independently.
    """

    @property
    @abstractmethod
    def channel_type(self) -> str:
        """Return the channel type identifier."""
        pass

    @abstractmethod
    def send(self, token: str, payload: PushPayload) -> PushResult:
        """
        Send a notification to one device.

        Args:
            token: Device registration token
            payload: Title, body, optional image and string data map

        Returns:
            PushResult with success flag, and error code on failure
        """
        pass

    def validate_config(self) -> bool:
        return True


class FCMChannel(NotificationChannel):
    """Firebase Cloud Messaging via firebase-admin."""

    def __init__(self, firebase_credentials: Optional[str] = None, project_id: Optional[str] = None):
        self.firebase_credentials = firebase_credentials or os.environ.get('FIREBASE_SERVICE_ACCOUNT')
        self.project_id = project_id or os.environ.get('FIREBASE_PROJECT_ID')

    @property
    def channel_type(self) -> str:
        return "fcm"

    def validate_config(self) -> bool:
        return bool(self.firebase_credentials or self.project_id)

    def _ensure_app(self) -> firebase_admin.App:
        """Initialize the default Firebase app once per process."""
        try:
            return firebase_admin.get_app()
        except ValueError:
            pass

        if self.firebase_credentials:
            try:
                service_account = json.loads(self.firebase_credentials)
            except json.JSONDecodeError:
                # Not JSON: treat as a path to the service account file
                service_account = self.firebase_credentials
            app = firebase_admin.initialize_app(credentials.Certificate(service_account))
        elif self.project_id:
            app = firebase_admin.initialize_app(options={'projectId': self.project_id})
        else:
            raise RuntimeError("FCM not configured: set FIREBASE_SERVICE_ACCOUNT or FIREBASE_PROJECT_ID")

        logger.info("FCM initialized")
        return app

    def _build_message(self, token: str, payload: PushPayload) -> messaging.Message:
        return messaging.Message(
            token=token,
            notification=messaging.Notification(
                title=payload.title or "New Message",
                body=payload.body or "",
                image=payload.image_url,
            ),
            data=payload.data,
            android=messaging.AndroidConfig(priority='high'),
            apns=messaging.APNSConfig(headers={'apns-priority': '10'}),
        )

    def send(self, token: str, payload: PushPayload) -> PushResult:
        if not token:
            return PushResult(token="", success=False, error=INVALID_TOKEN, message="FCM token is required")

        if _is_dry_run_mode():
            logger.info(f"[DRY RUN] FCM to {_mask_token(token)}: {payload.title} | data={payload.data}")
            return PushResult(token=token, success=True, message_id=f"dry-run-{uuid.uuid4()}")

        try:
            self._ensure_app()
            message_id = messaging.send(self._build_message(token, payload))
            logger.info(f"FCM message {message_id} sent to {_mask_token(token)}")
            return PushResult(token=token, success=True, message_id=message_id)
        except (messaging.UnregisteredError, firebase_exceptions.InvalidArgumentError) as e:
            logger.warning(f"FCM rejected token {_mask_token(token)}: {e}")
            return PushResult(token=token, success=False, error=INVALID_TOKEN, message=str(e))
        except (firebase_exceptions.FirebaseError, ValueError, RuntimeError) as e:
            logger.error(f"FCM send to {_mask_token(token)} failed: {e}")
            return PushResult(token=token, success=False, error=FCM_ERROR, message=str(e))


class LogChannel(NotificationChannel):
    """Logs payloads instead of delivering them (local development)."""

    @property
    def channel_type(self) -> str:
        return "log"

    def send(self, token: str, payload: PushPayload) -> PushResult:
        logger.info(f"[LOG CHANNEL] to {_mask_token(token)}: {payload.title} - {payload.body} | data={payload.data}")
        return PushResult(token=token, success=True, message_id=f"log-{uuid.uuid4()}")


class NotificationChannelFactory:
    """
    Factory for creating push channels.

    New channels can be added with register_channel() without touching
    the factory.
    """

    _channels: Dict[str, type] = {
        'fcm': FCMChannel,
        'log': LogChannel,
    }

    @classmethod
    def get_channel(cls, channel_type: str, **options) -> NotificationChannel:
        """
        Get a channel instance by type.

        Options are passed to the channel constructor (e.g. FCM credentials).

        Raises:
            ValueError: If channel type is not registered
        """
        channel_class = cls._channels.get(channel_type.lower())
        if not channel_class:
            raise ValueError(f"Unknown channel type: {channel_type}. "
                             f"Available: {', '.join(cls._channels.keys())}")
        return channel_class(**options)

    @classmethod
    def register_channel(cls, channel_type: str, channel_class: type):
        if not issubclass(channel_class, NotificationChannel):
            raise ValueError("Channel class must extend NotificationChannel")

        cls._channels[channel_type.lower()] = channel_class
        logger.info(f"Registered new channel type: {channel_type}")

    @classmethod
    def list_channels(cls) -> list:
        return list(cls._channels.keys())

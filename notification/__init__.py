"""
Notification Module

Push notifications to user devices, sent inline or through an RQ queue.

Usage:
    from notification import PushNotificationService, NotificationChannelFactory

    service = PushNotificationService(token_repo, channel_type='fcm')
    service.notify_like(recipient_id, liker_id, 'practice', 'Smile Dental')

    channel = NotificationChannelFactory.get_channel('log')
    channel.send(token, payload)
"""

from notification.channels import (
    NotificationChannel,
    FCMChannel,
    LogChannel,
    NotificationChannelFactory,
    INVALID_TOKEN,
    FCM_ERROR,
)

from notification.message_builder import (
    NotificationMessageBuilder,
    PushPayload,
    PushResult,
)

from notification.service import (
    PushNotificationService,
    process_push_task,
)

__all__ = [
    # Channels
    'NotificationChannel',
    'FCMChannel',
    'LogChannel',
    'NotificationChannelFactory',
    'INVALID_TOKEN',
    'FCM_ERROR',
    # Payloads
    'NotificationMessageBuilder',
    'PushPayload',
    'PushResult',
    # Service
    'PushNotificationService',
    'process_push_task',
]

#!/usr/bin/env python3
"""
Push Notification Service

Fans a payload out to every device token a user has registered:
- each token is sent independently; one failure never stops the others
- tokens FCM reports as invalid are deleted afterwards
- optionally queued on Redis (RQ) and processed by notification.worker

Usage:
    from notification.service import PushNotificationService

    service = PushNotificationService(PushTokenRepository(db), channel_type='log')
    service.notify_like(recipient_user_id, liker_id, 'candidate', 'Jane', None)
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from redis import Redis
from rq import Queue, Retry

from database.repositories import PushTokenRepository
from notification.channels import NotificationChannelFactory, NotificationChannel, INVALID_TOKEN, FCM_ERROR
from notification.message_builder import NotificationMessageBuilder, PushPayload, PushResult

logger = logging.getLogger(__name__)

DEFAULT_REDIS_URL = 'redis://localhost:6379/0'


class PushNotificationService:
    """
    Best-effort push delivery.

    Nothing here raises to the caller for delivery problems; failures are
    logged and reported in the returned result list.
    """

    def __init__(
        self,
        token_repo: PushTokenRepository,
        channel_type: str = 'fcm',
        enabled: bool = True,
        use_async_queue: bool = False,
        redis_url: Optional[str] = None,
        firebase_credentials: Optional[str] = None,
        firebase_project_id: Optional[str] = None,
        channel: Optional[NotificationChannel] = None
    ):
        """
        Args:
            token_repo: Repository for the recipient's device tokens
            channel_type: 'fcm' or 'log'
            enabled: When False every notify_* call is a no-op
            use_async_queue: Enqueue on RQ instead of sending inline
            redis_url: Redis connection URL for the queue
            firebase_credentials: Service account JSON or file path (fcm only)
            firebase_project_id: Project id for default credentials (fcm only)
            channel: Pre-built channel, mainly for tests
        """
        self.token_repo = token_repo
        self.channel_type = channel_type
        self.enabled = enabled
        self.redis_url = redis_url or DEFAULT_REDIS_URL
        self._firebase_options = {
            'firebase_credentials': firebase_credentials,
            'project_id': firebase_project_id,
        }
        self._channel = channel

        if not use_async_queue:
            self.redis_conn = None
            self.queue = None
            self.async_mode = False
        else:
            try:
                self.redis_conn = Redis.from_url(self.redis_url)
                # Validate connection with ping before using
                self.redis_conn.ping()
                self.queue = Queue('notifications', connection=self.redis_conn)
                self.async_mode = True
                logger.info("Push notification service connected to Redis")
            except Exception as e:
                logger.error(f"Redis connection failed: {e}. Falling back to sync mode.")
                self.redis_conn = None
                self.queue = None
                self.async_mode = False

    @classmethod
    def from_config(cls, token_repo: PushTokenRepository, config) -> 'PushNotificationService':
        """Build from a NotificationConfig section."""
        return cls(
            token_repo,
            channel_type=config.channel,
            enabled=config.enabled,
            use_async_queue=config.use_async_queue,
            redis_url=config.redis_url,
            firebase_credentials=config.firebase_credentials,
            firebase_project_id=config.firebase_project_id,
        )

    @property
    def channel(self) -> NotificationChannel:
        if self._channel is None:
            options = self._firebase_options if self.channel_type == 'fcm' else {}
            self._channel = NotificationChannelFactory.get_channel(self.channel_type, **options)
        return self._channel

    def send_to_tokens(self, tokens: List[str], payload: PushPayload) -> List[PushResult]:
        """Send to every token, collecting one result per token."""
        results = []
        for token in tokens:
            try:
                results.append(self.channel.send(token, payload))
            except Exception as e:
                logger.error(f"Push channel {self.channel_type} raised for a token: {e}", exc_info=True)
                results.append(PushResult(token=token, success=False, error=FCM_ERROR, message=str(e)))
        return results

    def send_to_user(self, user_id: UUID, payload: PushPayload) -> List[PushResult]:
        """
        Deliver a payload to all of a user's devices and prune dead tokens.

        In async mode the work is queued and an empty list is returned.
        """
        if self.async_mode:
            task_data = {
                'user_id': str(user_id),
                'payload': payload.model_dump(),
                'channel_type': self.channel_type,
            }
            retry_policy = Retry(max=3, interval=[30, 60, 120])
            job = self.queue.enqueue(
                process_push_task,
                task_data,
                job_timeout='5m',
                result_ttl=86400,
                retry=retry_policy
            )
            logger.info(f"Queued push for user {user_id} as job {job.id}")
            return []

        tokens = self.token_repo.get_tokens_for_user(user_id)
        if not tokens:
            logger.debug(f"No push tokens for user {user_id}")
            return []

        results = self.send_to_tokens(tokens, payload)

        invalid = [r.token for r in results if not r.success and r.error == INVALID_TOKEN]
        if invalid:
            self.token_repo.delete_tokens(invalid)

        sent = sum(1 for r in results if r.success)
        logger.info(f"Push '{payload.data.get('type', 'notification')}' to user {user_id}: {sent}/{len(results)} delivered")
        return results

    def notify_like(
        self,
        recipient_user_id: UUID,
        liker_id: UUID,
        liker_type: str,
        liker_name: Optional[str],
        liker_avatar: Optional[str] = None,
        on_listing: bool = False
    ) -> List[PushResult]:
        """Tell a user they were liked. Never raises."""
        if not self.enabled:
            return []
        try:
            payload = NotificationMessageBuilder.build_like_notification(
                liker_id, liker_type, liker_name, liker_avatar, on_listing=on_listing
            )
            return self.send_to_user(recipient_user_id, payload)
        except Exception as e:
            logger.error(f"Error sending like notification to {recipient_user_id}: {e}", exc_info=True)
            self.token_repo.rollback()
            return []

    def notify_chat(
        self,
        recipient_user_id: UUID,
        message: Dict[str, Any],
        sender_name: Optional[str] = None,
        sender_avatar: Optional[str] = None
    ) -> List[PushResult]:
        """
        Tell a user about a new chat message. Never raises.

        `message` carries id, sender_id, message and created_at.
        """
        if not self.enabled:
            return []
        try:
            payload = NotificationMessageBuilder.build_chat_notification(
                message_id=message['id'],
                sender_id=message['sender_id'],
                message=message.get('message'),
                created_at=message['created_at'],
                sender_name=sender_name,
                sender_avatar=sender_avatar,
            )
            return self.send_to_user(recipient_user_id, payload)
        except Exception as e:
            logger.error(f"Error sending chat notification to {recipient_user_id}: {e}", exc_info=True)
            self.token_repo.rollback()
            return []

    def get_queue_status(self) -> Dict[str, Any]:
        if not self.async_mode:
            return {'status': 'sync_mode', 'queue_length': 0}

        try:
            return {
                'status': 'active',
                'queue_length': len(self.queue),
                'redis_connected': self.redis_conn.ping()
            }
        except Exception as e:
            return {'status': 'error', 'error': str(e)}


# Worker task - must be at module level for RQ
def process_push_task(task_data: Dict[str, Any]) -> int:
    """
    Deliver a queued push (called by the RQ worker).

    Opens its own transaction for token lookup and pruning. Firebase
    credentials come from the worker's own config, not the job payload.

    Returns: number of devices the push reached
    """
    from core.config_loader import load_config
    from database.uow import push_token_uow

    config = load_config().notifications

    user_id = UUID(task_data['user_id'])
    payload = PushPayload(**task_data['payload'])

    with push_token_uow() as repo:
        service = PushNotificationService(
            repo,
            channel_type=task_data.get('channel_type', 'fcm'),
            firebase_credentials=config.firebase_credentials,
            firebase_project_id=config.firebase_project_id,
        )
        results = service.send_to_user(user_id, payload)

    return sum(1 for r in results if r.success)

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class PushPayload(BaseModel):
    """Notification shown on the device plus the data map the app reads."""
    title: str
    body: str = ""
    image_url: Optional[str] = None
    data: Dict[str, str] = Field(default_factory=dict)


class PushResult(BaseModel):
    token: str
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None  # INVALID_TOKEN | FCM_ERROR
    message: Optional[str] = None


def _stringify(data: Dict[str, Any]) -> Dict[str, str]:
    """FCM data values must be strings; None becomes an empty string."""
    return {key: "" if value is None else str(value) for key, value in data.items()}


class NotificationMessageBuilder:
    @staticmethod
    def build_like_notification(
        liker_id: Any,
        liker_type: str,
        liker_name: Optional[str],
        liker_avatar: Optional[str] = None,
        on_listing: bool = False
    ) -> PushPayload:
        """
        Payload telling a user someone liked them (or one of their listings).

        Args:
            liker_id: user who liked
            liker_type: 'candidate' or 'practice'
            liker_name: display name; falls back to "Someone"
            liker_avatar: profile picture or logo URL
            on_listing: True when a candidate liked a practice's listing
        """
        name = liker_name or "Someone"
        body = f"{name} liked your job posting" if on_listing else f"{name} liked your profile"
        return PushPayload(
            title="New like",
            body=body,
            image_url=liker_avatar or None,
            data=_stringify({
                'type': 'like',
                'likerId': liker_id,
                'likerType': liker_type,
                'likerName': name,
                'likerAvatar': liker_avatar,
            }),
        )

    @staticmethod
    def build_chat_notification(
        message_id: Any,
        sender_id: Any,
        message: Optional[str],
        created_at: datetime,
        sender_name: Optional[str] = None,
        sender_avatar: Optional[str] = None
    ) -> PushPayload:
        data = _stringify({
            'type': 'chat',
            'messageId': message_id,
            'senderId': sender_id,
            'senderName': sender_name,
            'senderAvatar': sender_avatar,
            'message': message,
            'timestamp': created_at.isoformat(),
        })
        return PushPayload(
            title=data['senderName'] or "New Message",
            body=data['message'],
            data=data,
        )

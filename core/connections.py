#!/usr/bin/env python3
"""
Connection Registry - which sockets belong to which user.

One instance per process, created at app startup and kept on app.state.
A user may hold several sockets (several devices or tabs).
"""

import logging
import threading
from typing import Dict, Optional, Set

logger = logging.getLogger(__name__)


class ConnectionRegistry:
    def __init__(self):
        self._lock = threading.Lock()
        self._sockets_by_user: Dict[str, Set[str]] = {}
        self._user_by_socket: Dict[str, str] = {}

    def add_connection(self, user_id, socket_id: str) -> None:
        user_id = str(user_id)
        with self._lock:
            previous = self._user_by_socket.get(socket_id)
            if previous is not None and previous != user_id:
                self._discard(previous, socket_id)
            self._sockets_by_user.setdefault(user_id, set()).add(socket_id)
            self._user_by_socket[socket_id] = user_id
        logger.debug(f"Socket {socket_id} registered for user {user_id}")

    def remove_connection(self, socket_id: str) -> Optional[str]:
        """Forget a socket. Returns the user it belonged to, if any."""
        with self._lock:
            user_id = self._user_by_socket.pop(socket_id, None)
            if user_id is not None:
                self._discard(user_id, socket_id)
        return user_id

    def get_sockets_for_user(self, user_id) -> Set[str]:
        with self._lock:
            return set(self._sockets_by_user.get(str(user_id), ()))

    def get_user_for_socket(self, socket_id: str) -> Optional[str]:
        with self._lock:
            return self._user_by_socket.get(socket_id)

    def is_online(self, user_id) -> bool:
        with self._lock:
            return bool(self._sockets_by_user.get(str(user_id)))

    def clear(self) -> None:
        with self._lock:
            self._sockets_by_user.clear()
            self._user_by_socket.clear()

    def _discard(self, user_id: str, socket_id: str) -> None:
        sockets = self._sockets_by_user.get(user_id)
        if sockets is None:
            return
        sockets.discard(socket_id)
        if not sockets:
            del self._sockets_by_user[user_id]

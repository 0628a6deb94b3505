import contextlib
from typing import Iterator

from database.database import session_scope
from database.repositories.push_token import PushTokenRepository


@contextlib.contextmanager
def push_token_uow() -> Iterator[PushTokenRepository]:
    """Transaction scope for push token bookkeeping in the RQ worker.

    Yields a PushTokenRepository bound to a fresh Session; pruned tokens
    are committed when the block exits cleanly.

    Usage:
        with push_token_uow() as repo:
            tokens = repo.get_tokens_for_user(user_id)
            repo.delete_tokens(invalid)
    """
    with session_scope() as session:
        yield PushTokenRepository(session)

from datetime import datetime, timedelta, timezone
import logging

from sqlalchemy import delete, func, select

from app.database import Database
from app.models.session import SessionEntry
from app.models.user import AccountEntry
from app.schemas.users import AccountResponse
from app.services.security import generate_session_token
from app.services.users import as_utc, to_account_response

LOGGER = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = timedelta(days=7)


class SessionStore:
    """Opaque bearer sessions backed by the ``sessions`` table.

    Expiry is enforced when a token is read: an expired row is deleted by the
    lookup that finds it. Nothing sweeps the table in the background;
    :meth:`cleanup_expired_sessions` exists for maintenance runs.
    """

    def __init__(self, database: Database, ttl: timedelta = DEFAULT_SESSION_TTL) -> None:
        self._database = database
        self._ttl = ttl

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def create_session(self, account_id: int) -> str:
        now = datetime.now(timezone.utc)
        token = generate_session_token()
        with self._database.session_scope() as session:
            session.add(
                SessionEntry(
                    token=token,
                    user_id=account_id,
                    expires_at=now + self._ttl,
                    created_at=now,
                )
            )
        return token

    def resolve_session(self, token: str | None) -> AccountResponse | None:
        if not token:
            return None
        now = datetime.now(timezone.utc)
        with self._database.session_scope() as session:
            entry = session.execute(
                select(SessionEntry).where(SessionEntry.token == token)
            ).scalar_one_or_none()
            if entry is None:
                return None
            if now >= as_utc(entry.expires_at):
                session.delete(entry)
                return None
            account = session.get(AccountEntry, entry.user_id)
            if account is None:
                return None
            return to_account_response(account)

    def revoke_session(self, token: str | None) -> None:
        if not token:
            return
        with self._database.session_scope() as session:
            session.execute(delete(SessionEntry).where(SessionEntry.token == token))

    def revoke_all_sessions(self, account_id: int) -> int:
        with self._database.session_scope() as session:
            result = session.execute(
                delete(SessionEntry).where(SessionEntry.user_id == account_id)
            )
            return result.rowcount

    def cleanup_expired_sessions(self) -> int:
        now = datetime.now(timezone.utc)
        with self._database.session_scope() as session:
            result = session.execute(
                delete(SessionEntry).where(SessionEntry.expires_at <= now)
            )
            deleted = result.rowcount
        LOGGER.info("Removed %s expired sessions", deleted)
        return deleted

    def count_active_sessions(self) -> int:
        now = datetime.now(timezone.utc)
        with self._database.session_scope() as session:
            return session.execute(
                select(func.count(SessionEntry.id)).where(SessionEntry.expires_at > now)
            ).scalar_one()

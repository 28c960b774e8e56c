from datetime import datetime, timedelta, timezone
import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from app.database import Database
from app.models.user import AccountEntry
from app.schemas.users import AccountResponse
from app.services.errors import DuplicateEmail, NotFound
from app.services.security import DEFAULT_BCRYPT_ROUNDS, hash_password, verify_password

LOGGER = logging.getLogger(__name__)

DEFAULT_ROLE = "learner"


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_account_response(entry: AccountEntry) -> AccountResponse:
    return AccountResponse(
        id=entry.id,
        name=entry.name,
        email=entry.email,
        role=entry.role,
        created_at=as_utc(entry.created_at),
        updated_at=as_utc(entry.updated_at),
    )


class AccountStore:
    def __init__(self, database: Database, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self._database = database
        self._bcrypt_rounds = bcrypt_rounds

    def register(
        self, name: str, email: str, password: str, role: str = DEFAULT_ROLE
    ) -> AccountResponse:
        now = datetime.now(timezone.utc)
        key = _normalize_email(email)
        with self._database.session_scope() as session:
            if self._find_by_email(session, key) is not None:
                raise DuplicateEmail()
            entry = AccountEntry(
                name=name,
                email=key,
                password_hash=hash_password(password, self._bcrypt_rounds),
                role=role,
                created_at=now,
                updated_at=now,
            )
            session.add(entry)
            try:
                session.flush()
            except IntegrityError:
                # a concurrent registration won the unique index
                raise DuplicateEmail() from None
            LOGGER.info("Registered account id=%s role=%s", entry.id, entry.role)
            return to_account_response(entry)

    def verify_credentials(self, email: str, password: str) -> AccountResponse | None:
        key = _normalize_email(email)
        with self._database.session_scope() as session:
            entry = self._find_by_email(session, key)
            if entry is None:
                return None
            if not verify_password(password, entry.password_hash):
                return None
            return to_account_response(entry)

    def change_password(
        self, account_id: int, current_password: str, new_password: str
    ) -> bool:
        with self._database.session_scope() as session:
            entry = session.get(AccountEntry, account_id)
            if entry is None:
                return False
            if not verify_password(current_password, entry.password_hash):
                return False
            entry.password_hash = hash_password(new_password, self._bcrypt_rounds)
            entry.updated_at = datetime.now(timezone.utc)
            LOGGER.info("Password changed for account id=%s", account_id)
            return True

    def get_account(self, account_id: int) -> AccountResponse | None:
        with self._database.session_scope() as session:
            entry = session.get(AccountEntry, account_id)
            if entry is None:
                return None
            return to_account_response(entry)

    def list_accounts(self) -> list[AccountResponse]:
        with self._database.session_scope() as session:
            result = session.execute(
                select(AccountEntry).order_by(
                    AccountEntry.created_at.desc(), AccountEntry.id.desc()
                )
            )
            return [to_account_response(entry) for entry in result.scalars().all()]

    def update_profile(
        self, account_id: int, name: str | None = None, email: str | None = None
    ) -> AccountResponse:
        return self.update_account(account_id, name=name, email=email)

    def update_account(
        self,
        account_id: int,
        name: str | None = None,
        email: str | None = None,
        role: str | None = None,
    ) -> AccountResponse:
        with self._database.session_scope() as session:
            entry = session.get(AccountEntry, account_id)
            if entry is None:
                raise NotFound("User not found")

            if email:
                key = _normalize_email(email)
                if key != entry.email:
                    existing = self._find_by_email(session, key)
                    if existing is not None and existing.id != account_id:
                        raise DuplicateEmail()
                    entry.email = key
            if name:
                entry.name = name
            if role and role != entry.role:
                LOGGER.info(
                    "Role of account id=%s changed %s -> %s", account_id, entry.role, role
                )
                entry.role = role
            entry.updated_at = datetime.now(timezone.utc)
            try:
                session.flush()
            except IntegrityError:
                raise DuplicateEmail() from None
            return to_account_response(entry)

    def delete_account(self, account_id: int) -> None:
        with self._database.session_scope() as session:
            entry = session.get(AccountEntry, account_id)
            if entry is None:
                raise NotFound("User not found")
            session.delete(entry)
        LOGGER.info("Deleted account id=%s", account_id)

    def ensure_admin(self, email: str, password: str, name: str) -> AccountResponse:
        key = _normalize_email(email)
        with self._database.session_scope() as session:
            entry = self._find_by_email(session, key)
            if entry is not None:
                if entry.role != "admin":
                    entry.role = "admin"
                    entry.updated_at = datetime.now(timezone.utc)
                    LOGGER.info("Promoted seeded account id=%s to admin", entry.id)
                session.flush()
                return to_account_response(entry)
        LOGGER.info("Seeding admin account")
        return self.register(name, key, password, role="admin")

    def role_counts(self) -> dict[str, int]:
        with self._database.session_scope() as session:
            result = session.execute(
                select(AccountEntry.role, func.count(AccountEntry.id)).group_by(
                    AccountEntry.role
                )
            )
            return {role: count for role, count in result.all()}

    def recent_signup_count(self, days: int = 30) -> int:
        since = datetime.now(timezone.utc) - timedelta(days=days)
        with self._database.session_scope() as session:
            return session.execute(
                select(func.count(AccountEntry.id)).where(
                    AccountEntry.created_at >= since
                )
            ).scalar_one()

    def _find_by_email(self, session, email: str) -> AccountEntry | None:
        return session.execute(
            select(AccountEntry).where(AccountEntry.email == email)
        ).scalar_one_or_none()


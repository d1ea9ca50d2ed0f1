import logging
import time
import uuid

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campusconnect.config import settings
from campusconnect.models.account import Account
from campusconnect.services.errors import Conflict, ValidationFailed
from campusconnect.utils.security import generate_token, hash_password, verify_password
from campusconnect.utils.timestamps import utc_now

logger = logging.getLogger(__name__)


class IdentityService:
    def __init__(self):
        self._sessions: dict[str, tuple[str, float]] = {}  # token -> (account_id, expires_at)

    def _cleanup_expired(self):
        now = time.time()
        self._sessions = {
            t: (account_id, exp) for t, (account_id, exp) in self._sessions.items() if exp > now
        }

    def signup(self, db: Session, email: str, password: str) -> Account:
        normalized = email.strip().lower()
        if not normalized or "@" not in normalized:
            raise ValidationFailed("A valid email is required")
        if len(password) < settings.min_password_length:
            raise ValidationFailed(
                f"Password must be at least {settings.min_password_length} characters"
            )
        if db.query(Account).filter(Account.email == normalized).first():
            raise Conflict("An account with this email already exists")

        now = utc_now()
        account = Account(
            id=str(uuid.uuid4()),
            email=normalized,
            password_hash=hash_password(password),
            created_at=now,
        )
        db.add(account)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise Conflict("An account with this email already exists") from exc
        db.refresh(account)
        return account

    def login(self, db: Session, email: str, password: str, throttle_key: str = "login") -> dict | None:
        delay = self._get_throttle_delay(db, throttle_key)
        if delay > 0:
            logger.warning("Login throttled for %s (%.0fs remaining)", throttle_key, delay)
            return {"error": "too_many_attempts", "retry_after_seconds": delay}

        account = db.query(Account).filter(Account.email == email.strip().lower()).first()
        if not account or not verify_password(account.password_hash, password):
            self._record_failed_attempt(db, throttle_key)
            return None

        self._reset_failed_attempts(db, throttle_key)
        token = generate_token()
        self._sessions[token] = (account.id, time.time() + settings.session_ttl_seconds)
        return {"token": token, "expires_in_seconds": settings.session_ttl_seconds}

    def logout(self, token: str):
        self._sessions.pop(token, None)

    def resolve(self, token: str) -> str | None:
        """Return the account id behind a live session token."""
        self._cleanup_expired()
        entry = self._sessions.get(token)
        return entry[0] if entry else None

    def clear(self):
        self._sessions.clear()

    def _get_throttle_delay(self, db: Session, key: str) -> float:
        row = db.execute(
            text("SELECT failed_attempts, last_failed_at FROM auth_throttle WHERE key = :key"),
            {"key": key},
        ).fetchone()
        if not row:
            return 0
        failed_attempts = int(row[0])
        last_failed_at = float(row[1])

        if failed_attempts < 3:
            return 0
        if failed_attempts < 5:
            delay = 5.0
        elif failed_attempts < 10:
            delay = 30.0
        else:
            delay = 300.0
        elapsed = time.time() - last_failed_at
        remaining = delay - elapsed
        return max(0, remaining)

    def _record_failed_attempt(self, db: Session, key: str):
        now = time.time()
        db.execute(
            text(
                """
                INSERT INTO auth_throttle (key, failed_attempts, last_failed_at)
                VALUES (:key, 1, :now)
                ON CONFLICT(key) DO UPDATE SET
                    failed_attempts = failed_attempts + 1,
                    last_failed_at = :now
                """
            ),
            {"key": key, "now": now},
        )
        db.commit()

    def _reset_failed_attempts(self, db: Session, key: str):
        db.execute(
            text(
                """
                INSERT INTO auth_throttle (key, failed_attempts, last_failed_at)
                VALUES (:key, 0, :now)
                ON CONFLICT(key) DO UPDATE SET
                    failed_attempts = 0,
                    last_failed_at = :now
                """
            ),
            {"key": key, "now": time.time()},
        )
        db.commit()


identity_service = IdentityService()

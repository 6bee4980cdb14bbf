import logging
import re
from typing import Callable

import bcrypt

from database.user_dao import UserDAO
from database.profile_dao import ProfileDAO
from models.user import Session
from utils.constants import MIN_PASSWORD_LENGTH
from utils.date_helpers import now_iso

logger = logging.getLogger(__name__)

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"
USER_UPDATED = "USER_UPDATED"

AuthListener = Callable[[str, Session | None], None]

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class AuthService:
    """Local email/password auth with a single in-process session.

    Listeners registered through on_auth_state_change() are called with
    (event, session) after every sign in, sign out and credential change.
    """

    def __init__(self, user_dao: UserDAO, profile_dao: ProfileDAO):
        self._users = user_dao
        self._profiles = profile_dao
        self._session: Session | None = None
        self._listeners: list[AuthListener] = []

    # ── Session ──────────────────────────────────────────────────────────────

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def user_id(self) -> int | None:
        return self._session.user_id if self._session else None

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: str):
        for listener in list(self._listeners):
            listener(event, self._session)

    # ── Sign up / in / out ───────────────────────────────────────────────────

    def sign_up(self, email: str, password: str, name: str) -> Session:
        email = self._valid_email(email)
        self._validate_password(password)
        name = name.strip()
        if not name:
            raise ValueError("Name is required.")
        if self._users.get_by_email(email):
            raise ValueError("An account with this email already exists.")
        user = self._users.create(email, self._hash(password))
        try:
            self._profiles.create(user.id, name, email)
        except Exception:
            logger.exception("Could not create profile for user %s", user.id)
        logger.info("User %s signed up", user.id)
        return self._start_session(user.id, user.email)

    def sign_in(self, email: str, password: str) -> Session:
        email = self._clean_email(email)
        if not password:
            raise ValueError("Password is required.")
        user = self._users.get_by_email(email)
        if user is None or not self._check(password, user.password_hash):
            logger.info("Failed sign in for %s", email)
            raise ValueError("Invalid email or password.")
        return self._start_session(user.id, user.email)

    def sign_out(self):
        if self._session is None:
            return
        logger.info("User %s signed out", self._session.user_id)
        self._session = None
        self._emit(SIGNED_OUT)

    def _start_session(self, user_id: int, email: str) -> Session:
        self._session = Session(user_id=user_id, email=email, signed_in_at=now_iso())
        logger.info("User %s signed in", user_id)
        self._emit(SIGNED_IN)
        return self._session

    # ── Credential changes ───────────────────────────────────────────────────

    def update_email(self, new_email: str):
        user_id = self._require_session()
        new_email = self._valid_email(new_email)
        existing = self._users.get_by_email(new_email)
        if existing and existing.id != user_id:
            raise ValueError("An account with this email already exists.")
        user = self._users.update_email(user_id, new_email)
        self._session = Session(user_id=user.id, email=user.email,
                                signed_in_at=self._session.signed_in_at)
        self._emit(USER_UPDATED)

    def verify_password(self, password: str) -> bool:
        user_id = self._require_session()
        user = self._users.get_by_id(user_id)
        return user is not None and self._check(password, user.password_hash)

    def update_password(self, new_password: str):
        user_id = self._require_session()
        self._validate_password(new_password)
        self._users.update_password_hash(user_id, self._hash(new_password))
        logger.info("Password changed for user %s", user_id)
        self._emit(USER_UPDATED)

    # ── Helpers ──────────────────────────────────────────────────────────────

    def _require_session(self) -> int:
        if self._session is None:
            raise ValueError("Not signed in.")
        return self._session.user_id

    @staticmethod
    def _clean_email(email: str) -> str:
        email = (email or "").strip()
        if not email:
            raise ValueError("Email is required.")
        return email

    @classmethod
    def _valid_email(cls, email: str) -> str:
        email = cls._clean_email(email)
        if not EMAIL_RE.match(email):
            raise ValueError("Invalid email address.")
        return email

    @staticmethod
    def _validate_password(password: str):
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
            )

    @staticmethod
    def _hash(password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

    @staticmethod
    def _check(password: str, password_hash: str) -> bool:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))

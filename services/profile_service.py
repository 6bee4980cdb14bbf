from database.profile_dao import ProfileDAO
from models.profile import Profile
from services.auth_service import EMAIL_RE, AuthService
from utils.constants import MIN_PASSWORD_LENGTH


class ProfileService:
    def __init__(self, profile_dao: ProfileDAO, auth_service: AuthService):
        self._dao = profile_dao
        self._auth = auth_service

    def get(self, user_id: int) -> Profile | None:
        return self._dao.get(user_id)

    def update(
        self,
        user_id: int,
        name: str,
        email: str,
        current_password: str = "",
        new_password: str = "",
        confirm_password: str = "",
    ) -> Profile:
        """Save name/email and optionally change the password.

        Every field is validated before anything is written.
        """
        name = name.strip()
        email = email.strip()
        if not name:
            raise ValueError("Name is required.")
        if not email:
            raise ValueError("Email is required.")
        if not EMAIL_RE.match(email):
            raise ValueError("Invalid email address.")

        changing_password = bool(new_password or confirm_password)
        if changing_password:
            if not current_password:
                raise ValueError("Enter your current password to change it.")
            if len(new_password) < MIN_PASSWORD_LENGTH:
                raise ValueError(
                    f"New password must be at least {MIN_PASSWORD_LENGTH} characters."
                )
            if new_password != confirm_password:
                raise ValueError("Passwords do not match.")
            if not self._auth.verify_password(current_password):
                raise ValueError("Current password is incorrect.")

        session = self._auth.session
        if session and session.email.lower() != email.lower():
            self._auth.update_email(email)
        if changing_password:
            self._auth.update_password(new_password)

        if self._dao.get(user_id) is None:
            return self._dao.create(user_id, name, email)
        return self._dao.update(user_id, name, email)

# services/users.py
from typing import Iterable, List, Optional, Tuple

from models.user import User
from services.activity import AuditTrail
from services.errors import NotFoundError

THEMES = ("light", "dark", "system")


class UserDirectory:
    """Known users plus the simulated e-mail sign-in."""

    def __init__(self, users: Optional[Iterable[User]] = None, audit: Optional[AuditTrail] = None):
        self._users: List[User] = list(users or [])
        self.audit = audit if audit is not None else AuditTrail()

    @property
    def users(self) -> List[User]:
        return list(self._users)

    def get(self, user_id: str) -> Optional[User]:
        return next((u for u in self._users if u.id == user_id), None)

    def by_email(self, email: str) -> Optional[User]:
        email = (email or "").strip().lower()
        return next((u for u in self._users if u.email.lower() == email), None)

    def display_name(self, user_id: str) -> str:
        user = self.get(user_id)
        return user.name if user else "Unknown"

    def sign_in(self, name: str, email: str) -> Tuple[User, bool]:
        """Return ``(user, created)``; unknown e-mails register a new profile."""
        existing = self.by_email(email)
        if existing:
            self.audit.record(existing.id, "Login", "User logged in", entity_type="User")
            return existing, False
        email = email.strip()
        user = User(name=(name or "").strip() or email.split("@")[0], email=email)
        self._users.append(user)
        self.audit.record(user.id, "Register", "New user registered", user.id, "User")
        return user, True

    def update_profile(self, user_id: str, **changes) -> User:
        user = self.get(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        if changes.get("theme_preference") not in (None, *THEMES):
            raise ValueError(f"Unknown theme: {changes['theme_preference']}")
        changes.pop("id", None)
        data = user.model_dump()
        data.update(changes)
        updated = User(**data)
        self._users = [updated if u.id == user_id else u for u in self._users]
        self.audit.record(user_id, "Update Profile", "Updated profile settings", user_id, "User")
        return updated

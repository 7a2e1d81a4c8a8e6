from typing import Optional

from app.core.security import get_password_hash, verify_password


class User:
    """Account that owns documents and section items"""

    def __init__(self, username: str, password_hash: str):
        self.username = username
        self.password_hash = password_hash

    def authenticate(self, password: str) -> bool:
        """Checks a plain password against the stored hash"""
        return verify_password(password, self.password_hash)

    def change_password(self, new_password: str) -> None:
        self.password_hash = get_password_hash(new_password)

    @classmethod
    def create_user(cls, username: str, password: str) -> "User":
        """New user with a freshly hashed password"""
        return cls(username=username, password_hash=get_password_hash(password))

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.username == other.username

    def __repr__(self) -> str:
        return f"User(username={self.username})"


class ContactInfo:
    """Contact details printed at the top of every resume"""

    FIELDS = ("full_name", "location", "email", "phone", "linkedin", "github")

    def __init__(
        self,
        username: str,
        full_name: str,
        location: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        linkedin: Optional[str] = None,
        github: Optional[str] = None
    ):
        self.username = username
        self.full_name = full_name
        self.location = location
        self.email = email
        self.phone = phone
        self.linkedin = linkedin
        self.github = github

    def __repr__(self) -> str:
        return f"ContactInfo(username={self.username}, full_name={self.full_name})"

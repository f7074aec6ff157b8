"""ABOUTME: User domain model for PlanIt accounts, plus user feedback
ABOUTME: Plain Python objects; User implements the bits of the flask_login user protocol it needs"""

from datetime import UTC, datetime


class User:
    """User domain model for authentication and event membership."""

    def __init__(
        self,
        username: str,
        name: str,
        email: str,
        password_hash: str,
        description: str = "",
        interests: list[str] | None = None,
        user_id: int | None = None,
        created_at: datetime | None = None,
        is_active: bool = True,
    ):
        if not password_hash:
            raise ValueError("User must have a password hash")

        self.id = user_id
        self.username = username
        self.name = name
        self.email = email
        self.password_hash = password_hash
        self.description = description
        self.interests = list(interests or [])
        self.created_at = created_at or datetime.now(UTC)
        self.is_active = is_active

    # couple of things required for flask_login
    @property
    def is_authenticated(self) -> bool:
        return self.is_active

    @property
    def is_anonymous(self) -> bool:
        return False

    def get_id(self) -> str:
        return str(self.id)

    def update_profile(self, name: str, description: str, interests: list[str]) -> None:
        self.name = name
        self.description = description
        self.interests = list(interests)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):  # pragma: no cover
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        return id(self) if self.id is None else hash(("user", self.id))

    def create_detached_copy(self) -> "User":
        """Create a detached copy of this user for use outside SQLAlchemy sessions"""
        return User(
            username=self.username,
            name=self.name,
            email=self.email,
            password_hash=self.password_hash,
            description=self.description,
            interests=self.interests,
            user_id=self.id,
            created_at=self.created_at,
            is_active=self.is_active,
        )


class Feedback:
    def __init__(
        self,
        text: str,
        user_id: int | None = None,
        feedback_id: int | None = None,
        created_at: datetime | None = None,
    ):
        if not text or not text.strip():
            raise ValueError("Feedback text is required")
        self.id = feedback_id
        self.user_id = user_id
        self.text = text
        self.created_at = created_at or datetime.now(UTC)

    def create_detached_copy(self) -> "Feedback":
        return Feedback(text=self.text, user_id=self.user_id, feedback_id=self.id, created_at=self.created_at)

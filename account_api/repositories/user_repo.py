# account_api/repositories/user_repo.py
from sqlmodel import Session, select

from account_api.models.user import User


class UserRepository:
    """
    Data access layer for User.

    Responsibilities:
      - Pure DB operations (insert + lookup)
      - No FastAPI, no HTTP, no business logic
    """

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Return a User by unique email, or None if not found."""
        stmt = select(User).where(User.email == email)
        return session.exec(stmt).first()

    def create(self, session: Session, user: User) -> User:
        """
        Insert a new User and return the persisted row.

        Raises:
            sqlalchemy.exc.IntegrityError: on duplicate email. The caller
            decides how to surface it; nothing is retried here.
        """
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

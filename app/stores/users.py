# =============================================================================================
# APP/STORES/USERS.PY - USER STORE
# =============================================================================================
# The persistent user collaborator the auth core consumes:
# - find_by_email(email) → User, or NotFoundError
# - create(email, hashed_password) → User, or ConflictError (email taken)
# - delete_all() → number of deleted users (admin reset; cascades in the database)
# =============================================================================================

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models.user import User
from app.stores.common import translate_errors


class UserStore:
    """Database access for users, bound to one request's session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_email(self, email: str) -> User:
        with translate_errors(self.session):
            user = self.session.execute(
                select(User).where(User.email == email)
            ).scalar_one_or_none()
        if user is None:
            raise NotFoundError("User not found")
        return user

    def create(self, email: str, hashed_password: str) -> User:
        user = User(email=email, hashed_password=hashed_password)
        with translate_errors(self.session, "Email already registered"):
            self.session.add(user)
            self.session.commit()
            # Load server-generated fields (id, timestamps)
            self.session.refresh(user)
        return user

    def delete_all(self) -> int:
        with translate_errors(self.session):
            result = self.session.execute(delete(User))
            self.session.commit()
        return result.rowcount

# Database models (User, RefreshToken, Chirp)
# Import all models here so Base.metadata.create_all() can find them
from app.models.user import User
from app.models.token import RefreshToken
from app.models.chirp import Chirp

__all__ = ["User", "RefreshToken", "Chirp"]

"""
User Repository - account lookups.
"""

from menu_api.models import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):

    @property
    def model(self) -> type[User]:
        return User

    def find_by_user_name(self, user_name: str) -> User | None:
        return self._db.scalar(self._base_query().where(User.user_name == user_name))

from datetime import date

from heliclockter import datetime_utc

from fitleague.models.db.shared import BaseModelORM
from fitleague.utils.id_types import UserId


class UserBase(BaseModelORM):
    email: str
    name: str
    date_of_birth: date | None = None
    created: datetime_utc


class User(UserBase):
    id: UserId


class UserPublic(UserBase):
    id: UserId

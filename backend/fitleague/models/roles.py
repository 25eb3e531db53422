from pydantic import BaseModel, field_validator

from fitleague.logic.permissions import Permission
from fitleague.models.db.league import LeagueMember, LeagueRole
from fitleague.utils.id_types import LeagueId, UserId

ASSIGNABLE_ROLES = frozenset({LeagueRole.GOVERNOR, LeagueRole.CAPTAIN})


class RoleContext(BaseModel):
    league_id: LeagueId
    user_id: UserId
    role: LeagueRole | None = None
    member: LeagueMember | None = None


class EffectiveRoleView(BaseModel):
    league_id: LeagueId
    role: LeagueRole | None = None
    display_name: str | None = None
    permissions: list[Permission]


class RoleAssignmentBody(BaseModel):
    role: LeagueRole

    @field_validator("role")
    @classmethod
    def assignable_role(cls, value: LeagueRole) -> LeagueRole:
        if value not in ASSIGNABLE_ROLES:
            raise ValueError("Only GOVERNOR and CAPTAIN can be assigned")
        return value

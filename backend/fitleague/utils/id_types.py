from typing import NewType

ActivityId = NewType("ActivityId", int)
EntryId = NewType("EntryId", int)
LeagueActivityId = NewType("LeagueActivityId", int)
LeagueId = NewType("LeagueId", int)
LeagueMemberId = NewType("LeagueMemberId", int)
TeamId = NewType("TeamId", int)
UserId = NewType("UserId", int)

from pydantic import BaseModel

from fitleague.models.activity_minimums import ActivityMinimumView, ApplicableMinimumView
from fitleague.models.db.entry import EffortEntry
from fitleague.models.entries import (
    AutoApproveResult,
    RejectedSubmissionsSummary,
    ReuploadWindowView,
    RrPreviewView,
)
from fitleague.models.roles import EffectiveRoleView


class SuccessResponse(BaseModel):
    success: bool = True


class DataResponse[DataT](BaseModel):
    data: DataT


class EffectiveRoleResponse(DataResponse[EffectiveRoleView]):
    pass


class ActivityMinimumsResponse(DataResponse[list[ActivityMinimumView]]):
    pass


class ApplicableMinimumResponse(DataResponse[ApplicableMinimumView]):
    pass


class RrPreviewResponse(DataResponse[RrPreviewView]):
    pass


class EffortEntryResponse(DataResponse[EffortEntry]):
    pass


class ReuploadWindowResponse(DataResponse[ReuploadWindowView]):
    pass


class RejectedSubmissionsResponse(DataResponse[RejectedSubmissionsSummary]):
    pass


class AutoApproveResponse(DataResponse[AutoApproveResult]):
    pass

import hmac

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from fitleague.config import config
from fitleague.logic.entries import sweep_auto_approve
from fitleague.routes.models import AutoApproveResponse
from fitleague.utils.errors import UnauthorizedError

router = APIRouter(prefix=config.api_prefix)

cron_bearer = HTTPBearer(auto_error=False)


def is_valid_cron_secret(presented: str | None, expected: str | None) -> bool:
    # An unset secret disables the endpoint rather than opening it.
    if not expected or not presented:
        return False
    return hmac.compare_digest(presented.encode(), expected.encode())


async def cron_authenticated(
    credentials: HTTPAuthorizationCredentials | None = Depends(cron_bearer),
) -> None:
    presented = credentials.credentials if credentials is not None else None
    if not is_valid_cron_secret(presented, config.cron_secret):
        raise UnauthorizedError("Invalid cron secret")


@router.api_route(
    "/cron/auto_approve",
    methods=["GET", "POST"],
    response_model=AutoApproveResponse,
    dependencies=[Depends(cron_authenticated)],
)
async def auto_approve_pending_entries() -> AutoApproveResponse:
    return AutoApproveResponse(data=await sweep_auto_approve(config.auto_approve_cutoff_hours))

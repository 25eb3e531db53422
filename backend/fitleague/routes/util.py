from starlette.requests import Request

from fitleague.utils.cache import TTLCache


def get_cache(request: Request) -> TTLCache:
    return request.app.state.cache

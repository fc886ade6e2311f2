from __future__ import annotations

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from discourse_sso.constants import APP_VERSION, LOGGER
from discourse_sso.env import (
    get_bind_address,
    load_config,
    load_env,
    setup_logging,
    validate_env,
)
from sso.models import SSOUser
from sso.provider import ResolveUserFn, SSOProvider

USER_ID_HEADER = "x-auth-user-id"
EMAIL_HEADER = "x-auth-email"
ATTRIBUTE_HEADERS = {
    "x-auth-username": "username",
    "x-auth-name": "name",
}


async def resolve_user_from_headers(request: Request) -> SSOUser | None:
    """Read the signed-in user from headers set by an authenticating proxy.

    The headers are trusted as sent, so the service must only be reachable
    through that proxy, which has to strip any client-supplied X-Auth-* headers.
    """
    user_id = request.headers.get(USER_ID_HEADER, "").strip()
    email = request.headers.get(EMAIL_HEADER, "").strip()
    if not user_id or not email:
        return None

    attributes = {}
    for header, field_name in ATTRIBUTE_HEADERS.items():
        value = request.headers.get(header, "").strip()
        if value:
            attributes[field_name] = value
    return SSOUser(user_id=user_id, email=email, attributes=attributes)


async def health_route(request: Request) -> Response:
    del request
    return JSONResponse({"status": "ok", "version": APP_VERSION})


def create_app(resolve_user_fn: ResolveUserFn | None = None) -> Starlette:
    load_env()
    setup_logging()
    validate_env()

    provider = SSOProvider(
        config=load_config(),
        resolve_user_fn=resolve_user_fn or resolve_user_from_headers,
    )
    routes = [*provider.routes(), Route("/health", health_route, methods=["GET"])]
    LOGGER.info("Discourse SSO provider listening on %s", provider.path)
    return Starlette(routes=routes)


def main() -> None:
    import uvicorn

    host, port = get_bind_address()
    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    main()

from __future__ import annotations

from typing import Awaitable, Callable

from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse, Response
from starlette.routing import Route

from discourse_sso.constants import LOGGER

from .client import DiscourseSSO
from .models import SSOConfig, SSOUser
from .payload import CONFIG_OPTION_KEYS

ResolveUserFn = Callable[[Request], Awaitable[SSOUser | None]]


class SSOProvider:
    """Identity-provider side of the Discourse SSO handshake.

    Discourse sends the browser to ``path`` with ``sso`` and ``sig``. The
    request is validated, the current user is looked up with
    ``resolve_user_fn``, and the browser is redirected back to Discourse with
    a freshly signed payload carrying the same nonce.
    """

    def __init__(
        self,
        *,
        config: SSOConfig,
        resolve_user_fn: ResolveUserFn,
        path: str = "/sso",
    ) -> None:
        self.sso = DiscourseSSO(config)
        self.path = path
        self._resolve_user_fn = resolve_user_fn

    def routes(self) -> list[Route]:
        return [Route(self.path, self._handle_sso, methods=["GET"])]

    async def _handle_sso(self, request: Request) -> Response:
        payload = request.query_params.get("sso")
        signature = request.query_params.get("sig")
        if not payload or not signature:
            return self._error("invalid_request", "Missing sso or sig query parameter.", 400)

        result = self.sso.validate(payload, signature)
        if not result.ok:
            return self._error(result.error.value, "SSO request could not be verified.", 400)

        user = await self._resolve_user_fn(request)
        if user is None:
            return self._error("login_required", "No authenticated user for this request.", 401)

        redirect_url = self.sso.sign_url(
            user.user_id, user.email, result.nonce, _profile_attributes(user)
        )
        LOGGER.info("Discourse SSO: signed in external_id=%s", user.user_id)
        return RedirectResponse(url=redirect_url, status_code=302)

    def _error(self, code: str, description: str, status_code: int) -> Response:
        return JSONResponse(
            {"error": code, "error_description": description},
            status_code=status_code,
        )


def _profile_attributes(user: SSOUser) -> dict:
    # secret and url configure the call; a user record must never set them.
    ignored = CONFIG_OPTION_KEYS.intersection(user.attributes)
    if ignored:
        LOGGER.warning(
            "Discourse SSO: Ignoring configuration keys in user attributes: %s",
            ", ".join(sorted(ignored)),
        )
    return {
        name: value for name, value in user.attributes.items() if name not in CONFIG_OPTION_KEYS
    }

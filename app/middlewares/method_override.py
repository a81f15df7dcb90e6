from __future__ import annotations

from starlette.datastructures import QueryParams
from starlette.types import ASGIApp, Receive, Scope, Send

OVERRIDE_PARAM = "_method"
ALLOWED_METHODS = frozenset({"PUT", "PATCH", "DELETE"})


class MethodOverrideMiddleware:
    """Permite que formulários HTML (só GET/POST) façam PUT/DELETE.

    ``POST /siswa?_method=PUT`` é despachado como ``PUT /siswa``.
    """

    def __init__(self, app: ASGIApp, param: str = OVERRIDE_PARAM):
        self.app = app
        self.param = param

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["method"] == "POST":
            params = QueryParams(scope.get("query_string", b""))
            override = (params.get(self.param) or "").upper()
            if override in ALLOWED_METHODS:
                scope = {**scope, "method": override}
        await self.app(scope, receive, send)

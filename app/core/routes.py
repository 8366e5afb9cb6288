from __future__ import annotations

from starlette.requests import Request


def route_template(request: Request) -> str:
    """
    Return the matched route template (e.g. /api/patients/{patient_id}).

    Raw paths carry patient ids, so logs and metric labels only ever see the template.
    Unmatched requests collapse into a single "unmatched" label.
    """

    route = request.scope.get("route")
    path = getattr(route, "path", None)
    if isinstance(path, str) and path:
        return path
    return "unmatched"


def request_id_of(request: Request) -> str | None:
    """Correlation id assigned by the HTTP logging middleware, if it ran."""

    return getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")

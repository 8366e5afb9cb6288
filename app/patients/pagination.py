from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any
from urllib.parse import urlencode

from app.patients.schemas import PatientPageOut


def offset_for(*, page: int, per_page: int) -> int:
    return (page - 1) * per_page


def _page_url(*, path: str, params: Sequence[tuple[str, str]], page: int) -> str:
    return f"{path}?{urlencode([*params, ('page', str(page))])}"


def build_page(
    *,
    items: list[dict[str, Any]],
    total: int,
    page: int,
    per_page: int,
    path: str,
    params: Sequence[tuple[str, str]],
) -> PatientPageOut:
    """
    Assemble a length-aware page.

    `params` are the request's query parameters; `page` is dropped from them and every
    other parameter (query, fields, paginate, ...) is echoed into each link.
    """

    kept = [(key, value) for key, value in params if key != "page"]
    last_page = max(math.ceil(total / per_page), 1)

    first_index: int | None = None
    last_index: int | None = None
    if items:
        first_index = offset_for(page=page, per_page=per_page) + 1
        last_index = first_index + len(items) - 1

    return PatientPageOut(
        current_page=page,
        data=items,
        first_page_url=_page_url(path=path, params=kept, page=1),
        from_=first_index,
        last_page=last_page,
        last_page_url=_page_url(path=path, params=kept, page=last_page),
        next_page_url=(
            _page_url(path=path, params=kept, page=page + 1) if page < last_page else None
        ),
        path=path,
        per_page=per_page,
        prev_page_url=_page_url(path=path, params=kept, page=page - 1) if page > 1 else None,
        to=last_index,
        total=total,
    )

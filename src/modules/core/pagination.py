"""Limit/offset response envelope for catalog listings.

Listings are paginated by the query compiler, not by a DRF paginator, so
the total must be supplied by the caller from the same predicate that
produced ``results``.
"""

from __future__ import annotations

from typing import Any, Sequence

from rest_framework.response import Response


def limit_offset_response(
    results: Sequence[Any], *, total: int, limit: int, offset: int
) -> Response:
    return Response(
        {
            "results": list(results),
            "meta": {
                "limit": limit,
                "offset": offset,
                "total": total,
            },
        }
    )

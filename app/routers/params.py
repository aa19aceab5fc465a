"""
Query-parameter dependencies shared by the paged list endpoints.
"""

from __future__ import annotations

from typing import Annotated, Literal

from fastapi import Depends, Query

from app.schemas.common import PaginationParams, SortParams


def _pagination_params(
    page: Annotated[int, Query(description="Halaman (mulai 1).", ge=1)] = 1,
    limit: Annotated[
        int, Query(description="Jumlah data per halaman (maks. 100).", ge=1, le=100)
    ] = 10,
) -> PaginationParams:
    """Assemble ``PaginationParams`` from URL query parameters."""
    return PaginationParams(page=page, limit=limit)


def _sort_params(
    sort: Annotated[
        str, Query(description="Kolom pengurutan; kolom tidak dikenal memakai created_at.")
    ] = "created_at",
    order: Annotated[Literal["asc", "desc"], Query(description="Arah pengurutan.")] = "desc",
) -> SortParams:
    return SortParams(sort=sort, order=order)


Pagination = Annotated[PaginationParams, Depends(_pagination_params)]
Sorting = Annotated[SortParams, Depends(_sort_params)]
Search = Annotated[
    str | None, Query(description="Pencarian teks bebas (tidak peka huruf besar/kecil).")
]
Force = Annotated[
    bool, Query(description="Hapus juga data terkait alih-alih menolak penghapusan.")
]

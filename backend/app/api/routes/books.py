"""Book listing, sign-off and team management endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_current_user, get_tracker
from app.api.errors import domain_errors
from app.schemas import (
    BookSchema,
    BooksByDeskSchema,
    BookUpdateRequest,
    SignAllPendingResponse,
    SignOffRequest,
)
from app.services.tracker import SignOffTracker
from pnl_signoff import views
from pnl_signoff.models import RoleUser

router = APIRouter()


def _schemas(books) -> list[BookSchema]:
    return [BookSchema.model_validate(book) for book in books]


@router.get("", response_model=list[BookSchema])
async def list_books(
    search: str | None = Query(default=None),
    desk: str | None = Query(default=None),
    retired: bool | None = Query(default=None, description="Omit to include both active and retired books"),
    current_user: RoleUser = Depends(get_current_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> list[BookSchema]:
    books = views.filter_books(tracker.books(), search=search, desk=desk, retired=retired)
    return _schemas(books)


@router.get("/by-desk", response_model=BooksByDeskSchema)
async def books_by_desk(
    search: str | None = Query(default=None),
    current_user: RoleUser = Depends(get_current_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> BooksByDeskSchema:
    books = tracker.books()
    active = views.filter_books(books, search=search, retired=False)
    retired = views.filter_books(books, search=search, retired=True)
    grouped = views.group_by_desk(active)
    return BooksByDeskSchema(
        desks={desk: _schemas(items) for desk, items in grouped.items()},
        retired=_schemas(retired),
    )


@router.post("/sign-all-pending", response_model=SignAllPendingResponse)
async def sign_all_pending(
    current_user: RoleUser = Depends(get_current_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> SignAllPendingResponse:
    with domain_errors():
        books, count = tracker.sign_all_pending(current_user)
    return SignAllPendingResponse(signed_count=count, books=_schemas(books))


@router.get("/{book_id}", response_model=BookSchema)
async def get_book(
    book_id: str,
    current_user: RoleUser = Depends(get_current_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> BookSchema:
    tracker.working_days()
    with domain_errors():
        book = tracker.repository.get(book_id)
    return BookSchema.model_validate(book)


@router.post("/{book_id}/sign-offs", response_model=BookSchema)
async def post_sign_off(
    book_id: str,
    payload: SignOffRequest,
    current_user: RoleUser = Depends(get_current_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> BookSchema:
    with domain_errors():
        book = tracker.sign_off(
            current_user,
            book_id,
            payload.status,
            date=payload.date,
            comment=payload.comment,
        )
    return BookSchema.model_validate(book)


@router.patch("/{book_id}", response_model=BookSchema)
async def patch_book(
    book_id: str,
    payload: BookUpdateRequest,
    current_user: RoleUser = Depends(get_current_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> BookSchema:
    with domain_errors():
        book = tracker.update_book(current_user, book_id, **payload.model_dump(exclude_unset=True))
    return BookSchema.model_validate(book)


__all__ = ["router"]

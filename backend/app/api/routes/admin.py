"""Admin screens: users, admin list, book management and status overrides."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_tracker, require_admin_user
from app.api.errors import domain_errors
from app.schemas import (
    AdminBookListSchema,
    AdminCreateRequest,
    BookCreateRequest,
    BookSchema,
    BookUpdateRequest,
    SignOffOverviewSchema,
    StatusCountsSchema,
    StatusOverrideRequest,
    UserSchema,
)
from app.services.tracker import SignOffTracker
from pnl_signoff import views
from pnl_signoff.models import RoleUser, SignOffStatus, UserRole

router = APIRouter()


@router.get("/users", response_model=list[UserSchema])
async def list_users(
    search: str | None = Query(default=None),
    role: UserRole | None = Query(default=None),
    current_user: RoleUser = Depends(require_admin_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> list[UserSchema]:
    return [UserSchema.model_validate(user) for user in tracker.directory.all_users(search, role)]


@router.get("/admins", response_model=list[UserSchema])
async def list_admins(
    current_user: RoleUser = Depends(require_admin_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> list[UserSchema]:
    return [UserSchema.model_validate(user) for user in tracker.directory.admins]


@router.post("/admins", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
async def add_admin(
    payload: AdminCreateRequest,
    current_user: RoleUser = Depends(require_admin_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> UserSchema:
    with domain_errors():
        admin = tracker.add_admin(current_user, payload.name, payload.email)
    return UserSchema.model_validate(admin)


@router.delete("/admins/{admin_id}", response_model=UserSchema)
async def remove_admin(
    admin_id: str,
    current_user: RoleUser = Depends(require_admin_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> UserSchema:
    with domain_errors():
        admin = tracker.remove_admin(current_user, admin_id)
    return UserSchema.model_validate(admin)


@router.get("/books", response_model=AdminBookListSchema)
async def admin_books(
    search: str | None = Query(default=None),
    desk: str | None = Query(default=None),
    retired: bool | None = Query(default=None),
    current_user: RoleUser = Depends(require_admin_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> AdminBookListSchema:
    books = views.filter_books(
        tracker.books(),
        search=search,
        desk=desk,
        retired=retired,
        fields=("name", "desk", "primary_trader", "product_controller"),
    )
    rows, message = views.limit_rows(books)
    return AdminBookListSchema(
        desks=tracker.repository.desks(),
        total=len(books),
        books=[BookSchema.model_validate(book) for book in rows],
        message=message,
    )


@router.post("/books", response_model=BookSchema, status_code=status.HTTP_201_CREATED)
async def create_book(
    payload: BookCreateRequest,
    current_user: RoleUser = Depends(require_admin_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> BookSchema:
    with domain_errors():
        book = tracker.create_book(current_user, **payload.model_dump())
    return BookSchema.model_validate(book)


@router.patch("/books/{book_id}", response_model=BookSchema)
async def update_book(
    book_id: str,
    payload: BookUpdateRequest,
    current_user: RoleUser = Depends(require_admin_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> BookSchema:
    with domain_errors():
        book = tracker.update_book(current_user, book_id, **payload.model_dump(exclude_unset=True))
    return BookSchema.model_validate(book)


@router.get("/sign-offs", response_model=SignOffOverviewSchema)
async def sign_off_overview(
    search: str | None = Query(default=None),
    desk: str | None = Query(default=None),
    status_filter: SignOffStatus | None = Query(default=None, alias="status"),
    current_user: RoleUser = Depends(require_admin_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> SignOffOverviewSchema:
    days = tracker.working_days()
    books = views.filter_books(tracker.repository.list(), search=search, desk=desk, retired=None)
    counts = views.status_counts(books, days)
    if status_filter is not None:
        books = views.books_with_status(books, status_filter, days)
    rows, message = views.limit_rows(books)
    return SignOffOverviewSchema(
        working_days=days,
        counts=StatusCountsSchema.model_validate(counts),
        desks=tracker.repository.desks(),
        total=len(books),
        books=[BookSchema.model_validate(book) for book in rows],
        message=message,
    )


@router.put("/books/{book_id}/sign-offs/{report_date}", response_model=BookSchema)
async def override_sign_off(
    book_id: str,
    report_date: str,
    payload: StatusOverrideRequest,
    current_user: RoleUser = Depends(require_admin_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> BookSchema:
    with domain_errors():
        book = tracker.override_status(current_user, book_id, report_date, payload.status)
    return BookSchema.model_validate(book)


__all__ = ["router"]

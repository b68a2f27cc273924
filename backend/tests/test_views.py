from pnl_signoff import views
from pnl_signoff.comments import Audience, unread_count
from pnl_signoff.models import RoleUser, SignOffStatus, UserRole


def test_filter_books_by_search_desk_and_retired(books):
    assert [b.name for b in views.filter_books(books, search="nordic")] == ["Nordic Power"]
    assert [b.name for b in views.filter_books(books, search="emma", desk="Gas Trading")] == ["UK Gas Futures"]
    assert [b.name for b in views.filter_books(books, retired=True)] == ["Dutch TTF"]
    assert len(views.filter_books(books, retired=None, desk="all")) == len(books)


def test_group_by_desk(books):
    groups = views.group_by_desk(views.filter_books(books))

    assert set(groups) == {"Power Trading", "Gas Trading", "Environmental", "Gas & Hub"}
    assert [b.name for b in groups["Gas Trading"]] == ["UK Gas Futures", "LNG Swaps"]


def test_status_counts_match_records(books, working_days):
    counts = views.status_counts(books, working_days)

    expected = {status: 0 for status in SignOffStatus}
    for book in books:
        for record in book.sign_offs:
            expected[record.status] += 1
    assert counts.signed == expected[SignOffStatus.SIGNED]
    assert counts.pending == expected[SignOffStatus.PENDING]
    assert counts.rejected == expected[SignOffStatus.REJECTED]
    assert counts.total == counts.signed + counts.pending + counts.rejected


def test_controller_stats_for_latest_day(books, working_days):
    emma = RoleUser("pc-1", "Emma Wilson", "emma.wilson@sefe.eu", UserRole.PRODUCT_CONTROLLER)
    mine = views.controller_books(books, emma)

    stats = views.controller_stats(mine, working_days)

    # Dutch TTF is retired and left out of the totals.
    assert stats.total_books == 3
    assert stats.pending_today == 3
    assert stats.signed_today == 0
    assert stats.total_comments == 3
    assert stats.unread_comments == unread_count(mine, Audience.PC) == 2


def test_trader_stats_count_overdue(books, working_days):
    robert = RoleUser("tr-13", "Robert Allan", "robert.allan@sefe.eu", UserRole.TRADER)
    mine = views.trader_books(books, robert)

    stats = views.trader_stats(mine, working_days)

    expected_overdue = sum(
        1 for book in mine for record in book.sign_offs[1:] if record.status == SignOffStatus.PENDING
    )
    assert stats.total_books == 3
    assert stats.pending_today == 3
    assert stats.overdue == expected_overdue


def test_limit_rows_truncates_with_message():
    rows, message = views.limit_rows(list(range(60)))
    assert len(rows) == 50
    assert message == views.TRUNCATION_MESSAGE

    rows, message = views.limit_rows(list(range(3)))
    assert rows == [0, 1, 2]
    assert message is None


def test_comment_feed_is_newest_first(books):
    entries, summaries = views.comment_feed(books)

    assert [entry.comment.id for entry in entries] == ["comment-seed-2", "comment-seed-1", "comment-seed-3"]
    assert {summary.book.name: summary.count for summary in summaries} == {
        "EU Power Options": 2,
        "UK Gas Futures": 1,
    }


def test_pending_reminders_skip_retired_books(books):
    reminders = views.pending_reminders(books)

    names = [reminder.book_name for reminder in reminders]
    assert "Dutch TTF" not in names
    assert len(reminders) == 10
    for reminder in reminders:
        assert reminder.pending_dates

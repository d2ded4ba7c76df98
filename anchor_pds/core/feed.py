"""Feed Assembly - page limits, cursors and record views for feed responses.

Invariants:
    - PURE: no IO, no async, no DB
    - The next cursor is the createdAt of the LAST (oldest) row of the page
    - An empty page has no cursor; a short page means end-of-feed (caller infers)

Design Decisions:
    - Cursor is the raw createdAt string: opaque to clients, directly comparable
      in SQL (ADR: ties on createdAt may skip/duplicate across a boundary, accepted)
"""

from anchor_pds.core.checkin_record import StoredCheckin


def clamp_limit(limit: int, ceiling: int) -> int:
    return min(limit, ceiling)


def next_cursor(page: list[StoredCheckin]) -> str | None:
    if not page:
        return None
    return page[-1].record.created_at


def checkin_view(checkin: StoredCheckin) -> dict:
    """Wire view of one stored check-in: {uri, cid, value, author}."""
    view: dict = {"uri": checkin.uri}
    if checkin.cid is not None:
        view["cid"] = checkin.cid
    view["value"] = checkin.record.to_dict(include_type=False)
    view["author"] = {"did": checkin.author_did}
    return view


def feed_page(page: list[StoredCheckin]) -> dict:
    """Build {checkins, cursor?} for listCheckins and getGlobalFeed."""
    body: dict = {"checkins": [checkin_view(c) for c in page]}
    cursor = next_cursor(page)
    if cursor is not None:
        body["cursor"] = cursor
    return body

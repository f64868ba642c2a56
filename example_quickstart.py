"""
Pykeyset Quick Start Example

A simple example to get you started with keyset pagination in 5 minutes.

Features covered:
- Compose keyset queries over a (created_at, id) key
- Page forward with next cursors
- Page back with a previous cursor
- Fail-open handling of a bad cursor

Run with: python example_quickstart.py
"""

import sqlite3
from datetime import datetime, timedelta, timezone

from pykeyset import (
    Direction,
    Order,
    Page,
    build_keyset_page,
    encode_time_and_int64_cursor,
    query_by_time_and_id,
)

BASE_QUERY = "SELECT id, title, created_at FROM posts"


# ============================================================================
# 1. SET UP A DATABASE
# ============================================================================


def create_database() -> sqlite3.Connection:
    """Create an in-memory posts table. Several posts share a timestamp."""
    sqlite3.register_adapter(datetime, lambda d: d.isoformat())
    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE posts (id INTEGER PRIMARY KEY, title TEXT, created_at TEXT)")
    start = datetime(2025, 11, 12, tzinfo=timezone.utc)
    conn.executemany(
        "INSERT INTO posts (id, title, created_at) VALUES (?, ?, ?)",
        [(i, f"Post #{i}", start + timedelta(minutes=i // 3)) for i in range(1, 15)],
    )
    return conn


def encode_row(row: tuple) -> str:
    """Build a cursor from a row's (created_at, id) key."""
    post_id, _, created_at = row
    return encode_time_and_int64_cursor(datetime.fromisoformat(created_at), post_id)


def fetch_posts(conn: sqlite3.Connection, page: Page):
    """Fetch one page, newest first, and return it in display order."""
    sql, args = query_by_time_and_id(BASE_QUERY, page, Order.DESCENDING, "created_at", "id")
    rows = conn.execute(sql, args).fetchall()
    return build_keyset_page(page, rows, encode_row)


def print_posts(label: str, result) -> None:
    print(f"\n-- {label} (len={len(result.items)}) --")
    for post_id, title, created_at in result.items:
        print(f"   {post_id:>3}  {created_at}  {title}")


# ============================================================================
# 2. MAIN
# ============================================================================


def main():
    """Run the quickstart example."""
    conn = create_database()
    print("✅ Created in-memory database")

    try:
        # ====== NEXT PAGES ======
        cursor = ""
        last = None
        for i in range(1, 3):
            last = fetch_posts(conn, Page(cursor=cursor, limit=5))
            print_posts(f"NEXT PAGE {i}", last)
            cursor = last.next_cursor

        # ====== PREVIOUS PAGE ======
        # For a previous page the boundary is the first visible row.
        back = fetch_posts(conn, Page(cursor=last.prev_cursor, limit=5, direction=Direction.PREVIOUS))
        print_posts("PREV PAGE", back)

        # ====== BAD CURSOR ======
        # An invalid cursor resets pagination to the start instead of failing.
        reset = fetch_posts(conn, Page(cursor="not-a-cursor", limit=5))
        print_posts("BAD CURSOR -> FIRST PAGE", reset)

        print("\n✅ All operations completed successfully!")

    finally:
        conn.close()


# ============================================================================
# 3. RUN THE EXAMPLE
# ============================================================================

if __name__ == "__main__":
    main()

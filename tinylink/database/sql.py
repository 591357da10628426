"""SQL statements shared by every link store backend.

Statements are written with ``?`` placeholders; backends that use numbered
parameters convert them with :func:`to_numbered_placeholders`.
"""

import re

LINK_COLUMNS = "id, short_code, original_url, total_clicks, last_clicked, created_at"

INSERT_LINK = (
    "INSERT INTO links (short_code, original_url, total_clicks, last_clicked, created_at) "
    f"VALUES (?, ?, 0, NULL, ?) RETURNING {LINK_COLUMNS}"
)

FIND_BY_CODE = f"SELECT {LINK_COLUMNS} FROM links WHERE short_code = ?"

LIST_ALL = f"SELECT {LINK_COLUMNS} FROM links ORDER BY created_at DESC, id DESC"

DELETE_BY_CODE = "DELETE FROM links WHERE short_code = ?"

# Single statement so concurrent redirects never lose an update
INCREMENT_CLICKS = (
    "UPDATE links SET total_clicks = total_clicks + 1, last_clicked = ? "
    "WHERE short_code = ?"
)

HEALTH_CHECK = "SELECT 1"

_PLACEHOLDER_RE = re.compile(r"\?")


def to_numbered_placeholders(sql: str) -> str:
    """Rewrite ``?`` placeholders as ``$1, $2, ...`` for PostgreSQL drivers."""
    counter = iter(range(1, sql.count("?") + 1))
    return _PLACEHOLDER_RE.sub(lambda _: f"${next(counter)}", sql)

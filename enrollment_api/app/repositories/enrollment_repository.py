"""
SQL access for the ``enrollments`` table.
"""

import sqlite3
from typing import Any, Dict, Optional

from ..core.db import get_connection, row_to_dict, use_connection


# Columns callers may write.  Anything else in a field dictionary is
# dropped before the SQL is built.
WRITABLE_COLUMNS = ("user_id", "name", "document_id", "birth_date", "phone")


def _writable(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in fields.items() if key in WRITABLE_COLUMNS}


class EnrollmentRepository:
    """Repository for enrollments."""

    @classmethod
    def find_with_address_by_user_id(cls, user_id: int) -> Optional[Dict[str, Any]]:
        """Return the user's enrollment with an ``addresses`` list, or ``None``.

        Addresses are ordered by id, i.e. in the order they were stored.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute("SELECT * FROM enrollments WHERE user_id = ?", (user_id,)).fetchone()
            if not row:
                return None
            enrollment = row_to_dict(row)
            addresses = cursor.execute(
                "SELECT * FROM addresses WHERE enrollment_id = ? ORDER BY id",
                (enrollment["id"],),
            ).fetchall()
            enrollment["addresses"] = [row_to_dict(address) for address in addresses]
            return enrollment
        finally:
            conn.close()

    @classmethod
    def upsert(
        cls,
        user_id: int,
        create_fields: Dict[str, Any],
        update_fields: Dict[str, Any],
        conn: Optional[sqlite3.Connection] = None,
    ) -> Dict[str, Any]:
        """Insert the user's enrollment, or update it if one already exists.

        ``create_fields`` are used for the insert and ``update_fields``
        for the update; ``user_id`` is never changed by an update.
        Returns the stored row.
        """
        create = _writable({**create_fields, "user_id": user_id})
        update = _writable(update_fields)
        update.pop("user_id", None)

        columns = ", ".join(create)
        placeholders = ", ".join("?" for _ in create)
        assignments = "".join(f"{column} = ?, " for column in update)
        sql = (
            f"INSERT INTO enrollments ({columns}) VALUES ({placeholders})"
            f" ON CONFLICT(user_id) DO UPDATE SET {assignments}updated_at = CURRENT_TIMESTAMP"
        )
        with use_connection(conn) as db:
            db.execute(sql, (*create.values(), *update.values()))
            row = db.execute("SELECT * FROM enrollments WHERE user_id = ?", (user_id,)).fetchone()
            return row_to_dict(row)

"""
SQL access for the ``addresses`` table.
"""

import sqlite3
from typing import Any, Dict, Optional

from ..core.db import row_to_dict, use_connection


WRITABLE_COLUMNS = (
    "postal_code",
    "street",
    "number",
    "complement",
    "neighborhood",
    "city",
    "state_code",
    "address_detail",
)


def _writable(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in fields.items() if key in WRITABLE_COLUMNS}


class AddressRepository:
    """Repository for enrollment addresses."""

    @classmethod
    def upsert(
        cls,
        enrollment_id: int,
        create_fields: Dict[str, Any],
        update_fields: Dict[str, Any],
        conn: Optional[sqlite3.Connection] = None,
    ) -> Dict[str, Any]:
        """Insert the enrollment's address, or update its first one.

        An enrollment may own several rows; the first by id is the one
        that gets updated.  Returns the stored row.
        """
        with use_connection(conn) as db:
            existing = db.execute(
                "SELECT id FROM addresses WHERE enrollment_id = ? ORDER BY id LIMIT 1",
                (enrollment_id,),
            ).fetchone()
            if existing:
                address_id = existing["id"]
                update = _writable(update_fields)
                assignments = "".join(f"{column} = ?, " for column in update)
                db.execute(
                    f"UPDATE addresses SET {assignments}updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    (*update.values(), address_id),
                )
            else:
                create = _writable(create_fields)
                create["enrollment_id"] = enrollment_id
                columns = ", ".join(create)
                placeholders = ", ".join("?" for _ in create)
                cursor = db.execute(
                    f"INSERT INTO addresses ({columns}) VALUES ({placeholders})",
                    tuple(create.values()),
                )
                address_id = cursor.lastrowid
            row = db.execute("SELECT * FROM addresses WHERE id = ?", (address_id,)).fetchone()
            return row_to_dict(row)

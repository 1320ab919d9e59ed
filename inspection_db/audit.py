"""
Audit Log - writes and reads the DBEdits edit history.

Every field-level change committed through a TrackedRecord becomes one row:
which table and item, which column, the value before the session's first
change, the value it was saved as, when, and by whom.
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from inspection_db.columns import ColumnValue
from inspection_db.connection import current_user
from inspection_db.exceptions import QueryError
from inspection_db.models import AUDIT_TABLE

logger = logging.getLogger(__name__)


class AuditLog:
    """Writes edit records to the audit table through a QueryGateway."""

    def __init__(self, gateway, user_name: str = None):
        """
        Args:
            gateway: QueryGateway used for every read and write
            user_name: Recorded against each row; defaults to the OS user
        """
        self.gateway = gateway
        self.user_name = user_name or current_user()

    def log_edit(self, edit, item_id: Optional[int] = None) -> bool:
        """
        Persist one edit record.

        Args:
            edit: EditRecord to persist
            item_id: Identity to record when the edit was captured before
                the row had one

        Returns:
            True if the row was written, False if the write failed
        """
        values = [
            ColumnValue('TableName', edit.table_name),
            ColumnValue('Item_ID', edit.item_id if edit.item_id is not None else item_id),
            ColumnValue('ColumnName', edit.column_name),
            ColumnValue('TimeStamp', datetime.now()),
            ColumnValue('OldValue', edit.old_value),
            ColumnValue('NewValue', edit.new_value),
            ColumnValue('UserName', self.user_name),
        ]

        try:
            self.gateway.insert(AUDIT_TABLE, values, source=edit)
        except QueryError as e:
            logger.error(f"Failed to log edit {edit}: {e.diagnostic}")
            return False

        logger.debug(f"Edit logged: {edit.table_name}:{item_id or edit.item_id} {edit}")
        return True

    def history(self, table_name: str, item_id: int, limit: int = 50) -> List[Dict]:
        """Get the edit history for one item, newest first."""
        rows = self.gateway.select(
            f"SELECT * FROM {AUDIT_TABLE} "
            "WHERE TableName = :table_name AND Item_ID = :item_id "
            "ORDER BY TimeStamp DESC, DBEdit_ID DESC",
            {'table_name': table_name, 'item_id': item_id},
        )
        return rows[:limit]

    def recent(self, hours: int = 24, limit: int = 100) -> List[Dict]:
        """Get every edit made in the last ``hours`` hours, newest first."""
        since = datetime.now() - timedelta(hours=hours)
        rows = self.gateway.select(
            f"SELECT * FROM {AUDIT_TABLE} WHERE TimeStamp >= :since "
            "ORDER BY TimeStamp DESC, DBEdit_ID DESC",
            {'since': since},
        )
        return rows[:limit]

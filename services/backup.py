"""
Flat-file database backup.

A backup file starts with a one-line header, then holds each table as:

    $TableName
    COLUMN TYPE(len) NOT NULL|COLUMN TYPE|...|PRIMARY KEY(column)
    value|value|...

The schema line is only written for tables that have rows. If the backup
fails part way, the error is appended to the file before it is re-raised.
Restoring into the database is not provided; read_backup() parses a file
back into Python structures.
"""

import logging
import os
import time
from datetime import datetime
from typing import Dict, List

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from inspection_db.exceptions import InspectionDBError

logger = logging.getLogger(__name__)

BACKUP_EXTENSION = '.tiibackup'
HEADER_PREFIX = '##'
TABLE_PREFIX = '$'
ERROR_RULE = '!' * 58
PRIMARY_KEY_PREFIX = 'PRIMARY KEY('


def generate_filename(now: datetime = None) -> str:
    """File name for a backup taken at ``now``, e.g. "141202-16-DB_Backup.tiibackup"."""
    now = now or datetime.now()
    return f"{now:%y%m%d}-{now:%H}-DB_Backup{BACKUP_EXTENSION}"


def _column_schema(column, dialect):
    type_text = column['type'].compile(dialect=dialect).upper()
    schema = f"{column['name'].upper()} {type_text}"
    if not column.get('nullable', True):
        schema += ' NOT NULL'
    return schema


def _format_cell(value):
    if value is None:
        return ''
    return str(value).strip()


def _table_lines(gateway, table_name, inspector):
    lines = [f"{TABLE_PREFIX}{table_name}"]
    rows = gateway.select(f"SELECT * FROM {table_name}")
    if not rows:
        return lines

    dialect = gateway.engine.dialect
    columns = inspector.get_columns(table_name)
    primary_key = inspector.get_pk_constraint(table_name).get('constrained_columns') or []
    schema = [_column_schema(column, dialect) for column in columns]
    schema.append(f"{PRIMARY_KEY_PREFIX}{', '.join(primary_key)})")
    lines.append('|'.join(schema))

    names = [column['name'] for column in columns]
    for row in rows:
        lines.append('|'.join(_format_cell(row.get(name)) for name in names))
    return lines


def _write(path, started, body):
    elapsed_ms = int((time.perf_counter() - started) * 1000)
    header = f"{HEADER_PREFIX}Backup created at {datetime.now():%m/%d/%Y %I:%M:%S %p} - Completed in {elapsed_ms}ms."
    with open(path, 'w', encoding='utf-8') as f:
        f.write(header + '\n')
        for line in body:
            f.write(line + '\n')


def create_backup(gateway, folder: str, now: datetime = None) -> str:
    """
    Write every table to a new backup file in ``folder``.

    Args:
        gateway: QueryGateway for the database to back up
        folder: Directory to write into (created if missing)
        now: Timestamp used for the file name

    Returns:
        Path of the backup file

    Raises:
        FileExistsError: A backup with the same name already exists
    """
    os.makedirs(folder, exist_ok=True)
    path = os.path.join(folder, generate_filename(now))
    if os.path.exists(path):
        raise FileExistsError(f"Specified backup file already exists: {path}")

    started = time.perf_counter()
    body: List[str] = []
    try:
        inspector = inspect(gateway.engine)
        for table_name in sorted(inspector.get_table_names()):
            body.extend(_table_lines(gateway, table_name, inspector))
    except (InspectionDBError, SQLAlchemyError) as e:
        logger.error(f"Backup failed part way through: {e}")
        body.extend([
            '',
            '',
            ERROR_RULE,
            'Error occurred during backup operation.  Details:',
            '',
            str(e),
        ])
        _write(path, started, body)
        raise

    _write(path, started, body)
    logger.info(f"Backup written to {path}")
    return path


def read_backup(path: str) -> Dict[str, Dict]:
    """
    Parse a backup file.

    Returns:
        {table: {'columns': [...], 'primary_key': [...], 'rows': [[...], ...]}}
    """
    tables: Dict[str, Dict] = {}
    current = None

    with open(path, 'r', encoding='utf-8') as f:
        for raw_line in f:
            line = raw_line.rstrip('\n')
            if line.startswith(HEADER_PREFIX):
                continue
            if line.startswith(ERROR_RULE):
                logger.warning(f"Backup {path} ends with an error report")
                break
            if line.startswith(TABLE_PREFIX):
                current = {'columns': [], 'primary_key': [], 'rows': []}
                tables[line[len(TABLE_PREFIX):]] = current
                continue
            if current is None or not line:
                continue

            if not current['columns'] and PRIMARY_KEY_PREFIX in line:
                parts = line.split('|')
                current['columns'] = [part.split(' ')[0] for part in parts[:-1]]
                key = parts[-1][len(PRIMARY_KEY_PREFIX):-1]
                current['primary_key'] = [name.strip() for name in key.split(',') if name.strip()]
                continue

            current['rows'].append(line.split('|'))

    return tables

"""
Running counters for statements sent through the query gateway.
"""

from dataclasses import dataclass, fields, asdict


@dataclass
class ConnectionStatistics:
    """Per-call or accumulated statement statistics.

    ``execution_time`` and ``connection_time`` are in milliseconds.
    ``bytes_sent`` counts the encoded statement text only; DB-API drivers do
    not expose wire-level byte counts.
    """

    select_count: int = 0
    select_rows: int = 0
    idu_count: int = 0
    idu_rows: int = 0
    server_roundtrips: int = 0
    bytes_sent: int = 0
    execution_time: float = 0.0
    connection_time: float = 0.0

    def concat(self, other):
        """Add another set of statistics into this one."""
        for f in fields(self):
            setattr(self, f.name, getattr(self, f.name) + getattr(other, f.name))
        return self

    def __add__(self, other):
        if not isinstance(other, ConnectionStatistics):
            return NotImplemented
        return ConnectionStatistics(**asdict(self)).concat(other)

    def reset(self):
        for f in fields(self):
            setattr(self, f.name, f.default)

    def as_dict(self):
        return asdict(self)

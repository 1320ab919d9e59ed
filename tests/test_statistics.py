"""
Tests for statement statistics
"""
import pytest

from inspection_db.statistics import ConnectionStatistics


@pytest.mark.unit
class TestConnectionStatistics:
    """Tests for accumulating counters"""

    def test_defaults_are_zero(self):
        """Test a fresh instance is all zeros"""
        stats = ConnectionStatistics()
        assert all(value == 0 for value in stats.as_dict().values())

    def test_concat_adds_in_place(self):
        """Test concat mutates and returns self"""
        total = ConnectionStatistics(select_count=1, select_rows=4)
        result = total.concat(ConnectionStatistics(select_count=1, select_rows=2, bytes_sent=30))
        assert result is total
        assert total.select_count == 2
        assert total.select_rows == 6
        assert total.bytes_sent == 30

    def test_add_returns_new_instance(self):
        """Test + leaves both operands untouched"""
        a = ConnectionStatistics(idu_count=1)
        b = ConnectionStatistics(idu_count=2)
        c = a + b
        assert c.idu_count == 3
        assert a.idu_count == 1
        assert b.idu_count == 2

    def test_reset(self):
        """Test reset zeroes every counter"""
        stats = ConnectionStatistics(server_roundtrips=5, execution_time=1.5)
        stats.reset()
        assert stats == ConnectionStatistics()

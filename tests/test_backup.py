"""
Tests for flat-file database backups
"""
import pytest
from datetime import datetime

from inspection_db.exceptions import QueryError
from services.backup import ERROR_RULE, create_backup, generate_filename, read_backup

BACKUP_TIME = datetime(2014, 12, 2, 16, 45)


@pytest.mark.unit
class TestFilename:
    """Tests for backup file naming"""

    def test_generate_filename(self):
        """Test the date and hour stamp"""
        assert generate_filename(BACKUP_TIME) == '141202-16-DB_Backup.tiibackup'


@pytest.mark.integration
class TestCreateBackup:
    """Tests for writing a backup"""

    def test_backup_contents(self, gateway, sample_rows, tmp_path):
        """Test every table is written with schema and rows"""
        path = create_backup(gateway, str(tmp_path), now=BACKUP_TIME)
        assert path.endswith('141202-16-DB_Backup.tiibackup')

        with open(path, encoding='utf-8') as f:
            header = f.readline()
        assert header.startswith('##Backup created at ')
        assert 'Completed in' in header

        tables = read_backup(path)
        assert set(tables) == {
            'Building', 'Building_Contact_Relations', 'Company', 'Company_Contact_Relations',
            'Contact', 'ContactLog', 'DBEdits', 'Elevator', 'Inspection',
        }
        company = tables['Company']
        assert company['columns'] == ['COMPANY_ID', 'NAME', 'STREET', 'CITY', 'STATE', 'ZIP']
        assert company['primary_key'] == ['Company_ID']
        assert company['rows'] == [
            [str(sample_rows['company_id']), 'Acme Property Management', '100 Main St', 'Baltimore', 'MD', '21201'],
        ]
        assert len(tables['Elevator']['rows']) == 2

    def test_empty_tables_have_no_schema(self, gateway, sample_rows, tmp_path):
        """Test tables without rows are listed by name only"""
        path = create_backup(gateway, str(tmp_path), now=BACKUP_TIME)
        assert read_backup(path)['ContactLog'] == {'columns': [], 'primary_key': [], 'rows': []}

    def test_schema_line(self, gateway, sample_rows, tmp_path):
        """Test the schema line lists types, NOT NULL and the key"""
        path = create_backup(gateway, str(tmp_path), now=BACKUP_TIME)
        with open(path, encoding='utf-8') as f:
            lines = f.read().splitlines()
        schema = lines[lines.index('$Company') + 1]
        assert schema.startswith('COMPANY_ID INTEGER NOT NULL|NAME VARCHAR(255) NOT NULL|STREET VARCHAR(255)|')
        assert schema.endswith('|PRIMARY KEY(Company_ID)')

    def test_creates_folder(self, gateway, tmp_path):
        """Test a missing folder is created"""
        folder = tmp_path / 'nested' / 'backups'
        path = create_backup(gateway, str(folder), now=BACKUP_TIME)
        assert folder.exists()
        assert read_backup(path)['Company']['rows'] == []

    def test_refuses_to_overwrite(self, gateway, tmp_path):
        """Test an existing backup is never replaced"""
        create_backup(gateway, str(tmp_path), now=BACKUP_TIME)
        with pytest.raises(FileExistsError):
            create_backup(gateway, str(tmp_path), now=BACKUP_TIME)

    def test_failure_is_written_then_raised(self, gateway, sample_rows, tmp_path, monkeypatch):
        """Test a failed backup leaves an error report in the file"""
        def failing_select(query, params=None):
            raise QueryError(query, 'connection lost')

        monkeypatch.setattr(gateway, 'select', failing_select)
        with pytest.raises(QueryError):
            create_backup(gateway, str(tmp_path), now=BACKUP_TIME)

        path = tmp_path / generate_filename(BACKUP_TIME)
        text = path.read_text(encoding='utf-8')
        assert ERROR_RULE in text
        assert 'Error occurred during backup operation.' in text
        assert 'connection lost' in text
        assert read_backup(str(path)) == {}

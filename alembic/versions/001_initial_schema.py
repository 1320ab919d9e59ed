"""Initial database schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates the company, building, contact, elevator and inspection tables,
the contact relation tables, the contact log and the DBEdits audit table.
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Companies
    op.create_table('Company',
        sa.Column('Company_ID', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('Name', sa.String(255), nullable=False),
        sa.Column('Street', sa.String(255)),
        sa.Column('City', sa.String(100)),
        sa.Column('State', sa.String(2)),
        sa.Column('Zip', sa.String(5)),
        sa.PrimaryKeyConstraint('Company_ID'),
        sa.UniqueConstraint('Name')
    )

    # Buildings
    op.create_table('Building',
        sa.Column('Building_ID', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('Company_ID', sa.Integer()),
        sa.Column('ProposalNumber', sa.String(50)),
        sa.Column('ProposalFile', sa.String(255)),
        sa.Column('Name', sa.String(255)),
        sa.Column('Address', sa.String(255), nullable=False),
        sa.Column('City', sa.String(100)),
        sa.Column('State', sa.String(2)),
        sa.Column('Zip', sa.String(5)),
        sa.Column('County', sa.String(50)),
        sa.Column('Firm_Fee', sa.Numeric(10, 2)),
        sa.Column('Hourly_Fee', sa.Numeric(10, 2)),
        sa.Column('Anniversary', sa.SmallInteger(), default=0),
        sa.Column('Contractor', sa.String(255)),
        sa.Column('Active', sa.Boolean(), default=True),
        sa.Column('Latitude', sa.Float()),
        sa.Column('Longitude', sa.Float()),
        sa.PrimaryKeyConstraint('Building_ID'),
        sa.ForeignKeyConstraint(['Company_ID'], ['Company.Company_ID'])
    )
    op.create_index('ix_building_company', 'Building', ['Company_ID'])
    op.create_index('ix_building_address', 'Building', ['Address'])

    # Contacts
    op.create_table('Contact',
        sa.Column('Contact_ID', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('Name', sa.String(255), nullable=False),
        sa.Column('OfficePhone', sa.String(10)),
        sa.Column('OfficeExt', sa.String(10)),
        sa.Column('CellPhone', sa.String(10)),
        sa.Column('Fax', sa.String(10)),
        sa.Column('Email', sa.String(254)),
        sa.PrimaryKeyConstraint('Contact_ID')
    )

    op.create_table('Company_Contact_Relations',
        sa.Column('Company_ID', sa.Integer(), nullable=False),
        sa.Column('Contact_ID', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('Company_ID', 'Contact_ID'),
        sa.ForeignKeyConstraint(['Company_ID'], ['Company.Company_ID']),
        sa.ForeignKeyConstraint(['Contact_ID'], ['Contact.Contact_ID'])
    )

    op.create_table('Building_Contact_Relations',
        sa.Column('Building_ID', sa.Integer(), nullable=False),
        sa.Column('Contact_ID', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('Building_ID', 'Contact_ID'),
        sa.ForeignKeyConstraint(['Building_ID'], ['Building.Building_ID']),
        sa.ForeignKeyConstraint(['Contact_ID'], ['Contact.Contact_ID'])
    )

    op.create_table('ContactLog',
        sa.Column('ContactLog_ID', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('Contact_ID', sa.Integer()),
        sa.Column('Company_ID', sa.Integer()),
        sa.Column('Building_ID', sa.Integer()),
        sa.Column('Date', sa.DateTime(), default=sa.func.now()),
        sa.Column('Notes', sa.Text()),
        sa.PrimaryKeyConstraint('ContactLog_ID'),
        sa.ForeignKeyConstraint(['Contact_ID'], ['Contact.Contact_ID']),
        sa.ForeignKeyConstraint(['Company_ID'], ['Company.Company_ID']),
        sa.ForeignKeyConstraint(['Building_ID'], ['Building.Building_ID'])
    )

    # Elevators and inspections
    op.create_table('Elevator',
        sa.Column('Elevator_ID', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('Building_ID', sa.Integer(), nullable=False),
        sa.Column('Number', sa.String(50)),
        sa.Column('Type', sa.String(50)),
        sa.Column('Nickname', sa.String(100)),
        sa.PrimaryKeyConstraint('Elevator_ID'),
        sa.ForeignKeyConstraint(['Building_ID'], ['Building.Building_ID']),
        sa.UniqueConstraint('Building_ID', 'Number', name='uq_elevator_building_number')
    )

    op.create_table('Inspection',
        sa.Column('Inspection_ID', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('Elevator_ID', sa.Integer(), nullable=False),
        sa.Column('Date', sa.DateTime()),
        sa.Column('Type', sa.String(50)),
        sa.Column('Status', sa.String(50)),
        sa.Column('Inspector', sa.String(100)),
        sa.Column('Report', sa.String(255)),
        sa.PrimaryKeyConstraint('Inspection_ID'),
        sa.ForeignKeyConstraint(['Elevator_ID'], ['Elevator.Elevator_ID'])
    )
    op.create_index('ix_inspection_elevator', 'Inspection', ['Elevator_ID'])

    # Audit trail
    op.create_table('DBEdits',
        sa.Column('DBEdit_ID', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('TableName', sa.String(50), nullable=False),
        sa.Column('Item_ID', sa.Integer()),
        sa.Column('ColumnName', sa.String(50), nullable=False),
        sa.Column('TimeStamp', sa.DateTime(), nullable=False, default=sa.func.now()),
        sa.Column('OldValue', sa.Text()),
        sa.Column('NewValue', sa.Text()),
        sa.Column('UserName', sa.String(100)),
        sa.PrimaryKeyConstraint('DBEdit_ID')
    )
    op.create_index('ix_dbedits_item', 'DBEdits', ['TableName', 'Item_ID'])
    op.create_index('ix_dbedits_timestamp', 'DBEdits', ['TimeStamp'])


def downgrade() -> None:
    op.drop_index('ix_dbedits_timestamp', 'DBEdits')
    op.drop_index('ix_dbedits_item', 'DBEdits')
    op.drop_table('DBEdits')
    op.drop_index('ix_inspection_elevator', 'Inspection')
    op.drop_table('Inspection')
    op.drop_table('Elevator')
    op.drop_table('ContactLog')
    op.drop_table('Building_Contact_Relations')
    op.drop_table('Company_Contact_Relations')
    op.drop_table('Contact')
    op.drop_index('ix_building_address', 'Building')
    op.drop_index('ix_building_company', 'Building')
    op.drop_table('Building')
    op.drop_table('Company')

"""
Services package for the inspection records database.
Contains the collaborators that sit beside the entities: backups, travel time and certificates.
"""

from services.backup import create_backup, generate_filename, read_backup
from services.maps import MapsError, estimated_travel_time
from services.certificates import create_clean_certificate

__all__ = [
    'create_backup',
    'generate_filename',
    'read_backup',
    'MapsError',
    'estimated_travel_time',
    'create_clean_certificate'
]

"""
Centralized Configuration for the Elevator Inspection Records library
Manages environment-specific settings, credentials, and service configurations.
"""
import os


class Config:
    """Base configuration with defaults"""

    # SQL Server Settings
    DB_SERVER = os.environ.get('DB_SERVER', 'localhost')
    DB_NAME = os.environ.get('DB_NAME', 'Inspection Database')
    DB_USER = os.environ.get('DB_USER', '')
    DB_PASSWORD = os.environ.get('DB_PASSWORD', '')
    DB_DRIVER = os.environ.get('DB_DRIVER', 'ODBC Driver 18 for SQL Server')
    DB_CONNECTION_TIMEOUT = int(os.environ.get('DB_CONNECTION_TIMEOUT', '1'))  # seconds

    # A full SQLAlchemy URL overrides the SQL Server settings above
    DATABASE_URL = os.environ.get('DATABASE_URL')

    # File Storage Paths
    BASE_DIR = os.path.dirname(os.path.abspath(__file__))
    BACKUP_FOLDER = os.environ.get('BACKUP_FOLDER', 'backups')
    CERTIFICATE_FOLDER = os.environ.get('CERTIFICATE_FOLDER', 'certificates')

    # Google Maps
    GOOGLE_MAPS_API_KEY = os.environ.get('GOOGLE_MAPS_API_KEY')
    MAPS_TIMEOUT = int(os.environ.get('MAPS_TIMEOUT', '10'))  # seconds
    MAPS_ROUND_UP_MINUTES = int(os.environ.get('MAPS_ROUND_UP_MINUTES', '15'))

    # Inspection Certificates
    CERTIFICATE = {
        'agency': 'Technical Inspection of D.C. Inc.',
        'professional_in_charge': 'Anthony Vattimo, Jr.',
        'professional_qei': 'S-171',
        'inspector_qei': 'C3690',
        'code_year': '2013',
        'template_image': os.environ.get('CERT_TEMPLATE_IMAGE'),
        'signature_image': os.environ.get('CERT_SIGNATURE_IMAGE'),
    }

    # Logging Configuration
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    LOG_FILE = os.environ.get('LOG_FILE', 'inspection_db.log')
    LOG_DIR = os.environ.get('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development-specific configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = 'DEBUG'


class ProductionConfig(Config):
    """Production-specific configuration"""
    DEBUG = False
    TESTING = False


class TestingConfig(Config):
    """Testing-specific configuration"""
    DEBUG = True
    TESTING = True
    DATABASE_URL = 'sqlite://'
    GOOGLE_MAPS_API_KEY = 'test-maps-key'


# Configuration selector
config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig,
}


def get_config():
    """Get configuration based on APP_ENV environment variable"""
    env = os.environ.get('APP_ENV', 'development')
    return config_by_name.get(env, DevelopmentConfig)

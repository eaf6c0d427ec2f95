from pathlib import Path


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent

# Log directory
LOG_DIR = BASE_DIR / 'logs'

# Static files (served under /static)
STATIC_DIR = BASE_DIR / 'static'

# Uploaded event images
UPLOAD_DIR = STATIC_DIR / 'uploads'

# Alembic config
ALEMBIC_INI = BASE_DIR / 'alembic.ini'

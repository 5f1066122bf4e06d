# config.py
"""
Application configuration constants for Spritesheet Maker
"""

# Supported image formats: exact, case-sensitive file extension -> Pillow format
SUPPORTED_IMAGE_FORMATS = {
    'png': 'PNG',
    'jpeg': 'JPEG',
    'bmp': 'BMP',
}

# Output
OUTPUT_FILENAME = "spritesheet.png"
OUTPUT_FORMAT = "PNG"
PNG_SAVE_OPTIONS = {
    'optimize': True,
    'compress_level': 6,
}

# Canvas
CANVAS_MODE = "RGBA"
TRANSPARENT = (0, 0, 0, 0)

# Row count policy
AUTO_MODE_KEYWORD = "auto"
MIN_ROW_COUNT = 1

# Error reporting
ERROR_PAUSE_SECONDS = 3

# Logging
LOGGER_NAME = "spritesheet_maker"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
LOG_FILE_ENV = "SPRITESHEET_LOG_FILE"
LOG_MAX_BYTES = 1_048_576
LOG_BACKUP_COUNT = 5

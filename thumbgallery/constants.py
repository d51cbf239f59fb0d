# thumbgallery/constants.py
"""
Application-wide constants.
"""

# URL prefixes shared by the static mounts and the gallery listing
STATIC_URL_PREFIX = "/static"
IMAGES_URL_PREFIX = "/static/images"
THUMBNAILS_URL_PREFIX = "/static/thumbnails"
GALLERY_URL_PREFIX = "/gallery"
API_GALLERY_URL_PREFIX = "/api/gallery"
FOLDER_PLACEHOLDER_URL = "/static/assets/folder.svg"

# Watch session defaults
DEFAULT_WATCH_QUEUE_SIZE = 10_000
DEFAULT_WATCH_POLL_INTERVAL_SECONDS = 0.5
DEFAULT_WATCH_SETTLE_SECONDS = 0.25
WORKER_STOP_TIMEOUT_SECONDS = 10.0

MILLISECONDS_PER_SECOND = 1000

# Log file sink
LOG_FILE_ROTATION = "10 MB"
LOG_FILE_RETENTION = "14 days"
LOG_FILE_COMPRESSION = "gz"

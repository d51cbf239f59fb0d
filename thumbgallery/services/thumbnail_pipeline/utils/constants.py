# thumbgallery/services/thumbnail_pipeline/utils/constants.py
"""
Thumbnail Pipeline Constants
"""

# Thumbnails are fitted into a square box of this edge (pixels)
THUMBNAIL_SIZE = 150

# Single output format of the cache tree
THUMBNAIL_FORMAT = "WEBP"
THUMBNAIL_EXTENSION = ".webp"

# WebP quality (1-100) and encoder effort (0-6)
THUMBNAIL_QUALITY = 80
THUMBNAIL_WEBP_METHOD = 4

# Temporary files live beside their target so os.replace stays on one filesystem
TEMP_FILE_PREFIX = "."
TEMP_FILE_SUFFIX = ".tmp"

# Modes WebP can encode directly
WEBP_NATIVE_MODES = ("RGB", "RGBA")

# Settle check for files still being written when their creation is observed
MAX_SETTLE_CHECKS = 40

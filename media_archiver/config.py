"""
Configuration constants for the media archiver.
"""
import re

# --- File Type Definitions ---
IMAGE_EXTS = {'.jpg', '.jpeg', '.dng'}
VIDEO_EXTS = {'.mp4'}

# Extension to Category Mapping
# Anything missing here is ignored by the walker
EXT_TO_CATEGORY = {}
for ext in IMAGE_EXTS: EXT_TO_CATEGORY[ext] = 'image'
for ext in VIDEO_EXTS: EXT_TO_CATEGORY[ext] = 'video'

# Top-level folder in the archive for each category
CATEGORY_DIRS = {
    'image': 'Pictures',
    'video': 'Videos',
}

# Extensions collapsed to a single canonical spelling
EXT_ALIASES = {
    '.jpg': '.jpeg',
}

# macOS AppleDouble resource forks carry media extensions but no media
IGNORED_PREFIXES = ('._',)

# --- Metadata Parsing ---
# Looked up in order, first hit wins
DATE_TAGS = [
    'DateTimeOriginal',
    'DateTime',
]

EXIF_DATE_PATTERN = re.compile(r'^\d{4}:\d{2}:\d{2} \d{2}:\d{2}:\d{2}$')
EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"

# Seconds between 1904-01-01 (QuickTime epoch) and 1970-01-01
MAC_EPOCH_OFFSET = 2082844800

# --- Hashing ---
HASH_ALGORITHM = "sha256"
HASH_CHUNK_SIZE = 64 * 1024  # 64 KB chunks for reading

# --- Organization ---
MONTH_FORMAT = "%Y-%m"
STAMP_FORMAT = "%Y%m%d-%H%M%S"

# --- Logging ---
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

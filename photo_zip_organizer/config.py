"""
Configuration constants for the photo ZIP organizer.
"""

# --- File Type Definitions ---
# Only these are pulled out of an archive; Takeout's JSON sidecars are ignored.
IMAGE_EXTS = {
    '.jpg', '.jpeg', '.png', '.heic', '.heif',
    '.gif', '.webp', '.bmp', '.tif', '.tiff',
}

# --- Metadata Parsing ---
# exifread tag keys
DATETIME_ORIGINAL_TAG = 'EXIF DateTimeOriginal'
MAKE_TAG = 'Image Make'
MODEL_TAG = 'Image Model'
SOFTWARE_TAG = 'Image Software'

# Filename date patterns, tried in order. Each must expose y/m/d groups;
# H/M/S groups are optional.
FILENAME_DATE_PATTERNS = [
    ('date', r'(?<!\d)(?P<y>19\d{2}|20\d{2})-(?P<m>\d{2})-(?P<d>\d{2})(?!\d)'),
    ('compact_datetime',
     r'(?<!\d)(?P<y>19\d{2}|20\d{2})(?P<m>\d{2})(?P<d>\d{2})_(?P<H>\d{2})(?P<M>\d{2})(?P<S>\d{2})(?!\d)'),
    ('messaging', r'^IMG-(?P<y>19\d{2}|20\d{2})(?P<m>\d{2})(?P<d>\d{2})(?!\d)'),
    ('camera',
     r'^IMG_(?P<y>19\d{2}|20\d{2})(?P<m>\d{2})(?P<d>\d{2})_(?P<H>\d{2})(?P<M>\d{2})(?P<S>\d{2})(?!\d)'),
]

# --- Filtering ---
# Make/Model substrings (upper-cased) of cameras whose shots are already
# organized elsewhere.
DSLR_MARKERS = ('NIKON',)
LIGHTROOM_MARKER = 'lightroom'
MIX_MARKER = 'MIX'
EDITED_WORD = 'edited'

# --- Organization ---
FOLDER_PATTERN = "{year}/{year}-{month:02d}-{day:02d}"
UNKNOWN_DATE_FOLDER = "unknown-date"
LOG_FILE_NAME = "organizer.log"

"""
Centralized constants for Manuscript Press.
Layout magic numbers live here, not in the modules that use them.
"""

# ===========================================
# UNITS
# ===========================================
POINTS_PER_INCH = 72.0                # PostScript points

# ===========================================
# PAGE-COUNT ESTIMATION
# ===========================================
CHAR_WIDTH_EM_RATIO = 0.5             # average glyph width as a fraction of the em
CHAPTER_HEADER_ALLOWANCE = 0.25       # one chapter opening eats ~25% of a page
MIN_CHARS_PER_LINE = 20
MIN_LINES_PER_PAGE = 10
FALLBACK_TRIM_SIZE = (6.0, 9.0)       # inches, used when a trim id is unknown
MIN_CONTENT_SIZE = 1.0                # inches, floor for the text block

# ===========================================
# CONTENT
# ===========================================
SCENE_BREAK_MAX_LENGTH = 5            # short all-punctuation paragraphs count as breaks
READING_WORDS_PER_MINUTE = 250
DESCRIPTION_MAX_LENGTH = 300          # title page blurb

# ===========================================
# RENDERING
# ===========================================
DEFAULT_OUTPUT_FORMAT = 'pdf'
ASSET_FETCH_TIMEOUT_SECONDS = 10.0
PDF_MAX_PASSES = 2                    # estimate pass + ground-truth TOC pass

# ===========================================
# LOGGING
# ===========================================
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE = 'logs/press.log'
LOG_MAX_SIZE_MB = 10
LOG_BACKUP_COUNT = 5

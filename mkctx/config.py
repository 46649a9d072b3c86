# mkctx/config.py

# --- Configuration ---
OUTPUT_DIR_NAME = ".mkctx"
OUTPUT_NAME_TEMPLATE = "source-context-{stamp}.md"
OUTPUT_STAMP_FORMAT = "%Y-%m-%d-%H-%M-%S"

# Directories with more immediate children than this start collapsed.
COLLAPSE_THRESHOLD = 32

FENCE_CHAR = b"`"
MIN_FENCE_LENGTH = 3
SCAN_BUFFER_SIZE = 32 * 1024

BINARY_SNIFF_SIZE = 8192
BINARY_CONTROL_RATIO = 0.10

VCS_DIR_NAME = ".git"
BYTES_PER_TOKEN = 4

# Status line + key help footer.
CHROME_ROWS = 2

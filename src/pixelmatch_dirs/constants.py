"""Fixed constants: CLI defaults, comparator exit codes, and file-name prefixes."""

# CLI positional defaults
DEFAULT_THRESHOLD = '0.015'
DEFAULT_SRC_DIR = 'src'
DEFAULT_TARGET_DIR = 'target'

# External tool defaults (overridable from the environment, see config.py)
DEFAULT_RUNTIME = 'docker'
DEFAULT_IMAGE = 'arisawa/pixelmatch:v5.1.0'
DEFAULT_WORKSPACE_DIR = 'tmp'
CONTAINER_APP_DIR = '/app'  # working directory of the pixelmatch image

# Comparator exit codes (pixelmatch CLI convention)
EXIT_IDENTICAL = 0
EXIT_DIFFERENT_DIMENSIONS = 65
EXIT_DIFFERENT_PIXELS = 66

IMAGE_SUFFIX = '.png'

# Transient / artifact file-name prefixes
SRC_PREFIX = 'src-'
TARGET_PREFIX = 'target-'
DIFF_PREFIX = 'diff-'

WORKSPACE_DIR_MODE = 0o755

# Report rendering
TAB_WIDTH = 8
DIMENSION_HEADER = '-- dimensions do not match --'
PIXEL_HEADER = '-- Different pixels are found --'

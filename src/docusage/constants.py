"""
Centralized constants for the docusage package.

This module contains:
- Snippet window sizes used by the usage extractor
- File extension and ignore sets for scanning React sources
- Candidate root offsets for locating page sources
- Catalog file defaults
"""

# =============================================================================
# Usage Extraction Constants
# =============================================================================

# Characters of context captured around a JSX open tag
JSX_CONTEXT_BEFORE = 20
JSX_CONTEXT_AFTER = 50

# Context around an assigned hook call: const [x, setX] = useThing(...)
ASSIGNED_HOOK_CONTEXT_BEFORE = 10
ASSIGNED_HOOK_CONTEXT_AFTER = 40

# Context around a bare hook call: useThing(...)
DIRECT_HOOK_CONTEXT_BEFORE = 10
DIRECT_HOOK_CONTEXT_AFTER = 30

# Type assigned when a matched catalog entry carries no type
DEFAULT_JSX_TYPE = 'component'
DEFAULT_HOOK_TYPE = 'hook'

# =============================================================================
# File Scanner Constants
# =============================================================================

# Directories to ignore when scanning
DEFAULT_IGNORE_DIRS: frozenset[str] = frozenset({
    '.git', '.hg', '.svn',              # Version control
    'node_modules', 'vendor',            # Dependencies
    'dist', 'build', 'coverage',         # Build outputs
    '.next', '.nuxt', '.smartdocs',      # Framework outputs
    '.idea', '.vscode',                  # IDE configs
    'public', 'static', 'assets',        # Static files
    '__tests__',
})

# React source extensions
SOURCE_EXTENSIONS: frozenset[str] = frozenset({
    '.js', '.jsx', '.ts', '.tsx',
})

# File name globs excluded from discovery (stories, tests, configs, typings)
EXCLUDED_FILE_PATTERNS: tuple[str, ...] = (
    '*.stories.*',
    '*.test.*',
    '*.spec.*',
    '*.config.*',
    '*.conf.*',
    '*.d.ts',
)

# Directory name marking page entities
PAGES_DIR_NAME = 'pages'

# =============================================================================
# Source Resolution
# =============================================================================

# Roots tried, relative to the build directory, when resolving a catalog
# entry's filePath. The raw filePath is tried last.
CANDIDATE_ROOT_OFFSETS: tuple[str, ...] = (
    '..',
    '.',
    '../..',
)

# =============================================================================
# Catalog Store
# =============================================================================

# Default location of the catalog written by discovery and read by the site
DEFAULT_CATALOG_PATH = 'content/search.json'

# Version string for generated catalog files
CATALOG_FILE_VERSION = '1.0'

# Number of rows shown in CLI usage rankings
DEFAULT_REPORT_LIMIT = 10

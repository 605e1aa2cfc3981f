"""
Extractors for React source files.

- usage_extractor: which catalog components/hooks a page uses
- js_extractor: exported declarations and their JSDoc, for catalog discovery
"""

from docusage.extractors import js_extractor
from docusage.extractors import usage_extractor

__all__ = [
    "js_extractor",
    "usage_extractor",
]

"""
Compiled regex patterns for React source scanning.

All patterns use re.VERBOSE for readability and are pre-compiled for performance.
Patterns are grouped by the extractor that uses them.
"""
import re

# =============================================================================
# Usage Patterns (usage_extractor)
# =============================================================================

IMPORT_STATEMENT = re.compile(
    r"""
    \b import \s*                       # 'import' keyword
    (?:
        \* \s+ as \s+ \w+               # namespace: * as Name
        |
        (?: \{ [^}]* \} | \w+ )         # default name or {named, list}
        (?: \s* , \s*                   # further clauses, comma separated
            (?: \{ [^}]* \} | \w+ )
        )*
    )
    \s* from \s*                        # 'from' keyword
    ['"`] [^'"`]* ['"`]                 # quoted module specifier
    """,
    re.VERBOSE,
)

CAPITALIZED_NAME = re.compile(
    r"""
    \b [A-Z][a-zA-Z0-9]* \b             # PascalCase identifier
    """,
    re.VERBOSE,
)

HOOK_NAME = re.compile(
    r"""
    \b use [A-Z][a-zA-Z0-9]* \b         # use + PascalCase identifier
    """,
    re.VERBOSE,
)

JSX_OPEN_TAG = re.compile(
    r"""
    <                                   # tag opener
    ([A-Z][a-zA-Z0-9]*)                 # leading component name (captured)
    (?: \. [A-Z][a-zA-Z0-9]* )*         # optional member path: Foo.Bar
    """,
    re.VERBOSE,
)

ASSIGNED_HOOK_CALL = re.compile(
    r"""
    \b (?:const|let|var) \s*            # binding keyword
    (?: \[? [^=]* \]? \s* = \s* )?      # optional (destructured) target and '='
    (use[A-Z][a-zA-Z0-9]*)              # hook name (captured)
    \s* \(                              # call paren
    """,
    re.VERBOSE,
)

DIRECT_HOOK_CALL = re.compile(
    r"""
    \b (use[A-Z][a-zA-Z0-9]*)           # hook name (captured)
    \s* \(                              # call paren
    """,
    re.VERBOSE,
)

# =============================================================================
# Declaration Patterns (js_extractor)
# =============================================================================

JS_EXPORT_DECLARATION = re.compile(
    r"""
    \b export \s+                           # 'export' keyword
    (?:default \s+)?                         # optional 'default'
    (?:async \s+)?                           # optional 'async'
    (?:function|class|const|let|var) \s+    # declaration type
    (\w+)                                    # name (captured)
    """,
    re.VERBOSE,
)

JS_EXPORT_DEFAULT_NAME = re.compile(
    r"""
    \b export \s+ default \s+               # 'export default'
    (?!(?:function|class|async)\b)           # not a declaration
    ([A-Za-z_$][\w$]*)                       # exported binding (captured)
    \s* ;? \s* $                             # end of statement
    """,
    re.VERBOSE | re.MULTILINE,
)

JS_EXPORT_BRACES = re.compile(
    r"""
    \b export \s*       # 'export' keyword
    \{ ([^}]+) \}       # names in braces (captured)
    """,
    re.VERBOSE,
)

JSDOC_BLOCK = re.compile(
    r"""
    /\*\*                                   # JSDoc opener
    ((?:(?!\*/).)*)                          # body, never crossing a closer (captured)
    \*/ \s*                                  # closer
    (?:export \s+ (?:default \s+)?)?         # optional export
    (?:async \s+)?                           # optional async
    (?:function|class|const|let|var) \s+     # declaration keyword
    (\w+)                                    # declared name (captured)
    """,
    re.VERBOSE | re.DOTALL,
)

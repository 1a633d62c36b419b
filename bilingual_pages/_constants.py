"""Common literal values used across bilingual_pages.

These constants keep marker spellings and delimiter tokens centralized so the
composer, generators, and tests can import the same values without drifting.
Intended for internal use within the bilingual_pages package.

Examples
--------
>>> from bilingual_pages import _constants
>>> _constants.OPENING_TOKEN + " header " + _constants.CLOSING_TOKEN
':^) header :::'
>>> _constants.FILL_PARENTS_HTML
'{fill_parents_html}'
"""

OPENING_TOKEN = ":^)"
CLOSING_TOKEN = ":::"
ABOUT_SEPARATOR = "[Section]"
COMPONENT_SUFFIX = ".html"

FILL_PARENTS = "{fill_parents}"
FILL_PARENTS_HTML = "{fill_parents_html}"
LANGUAGE_SRC = "{language_src}"

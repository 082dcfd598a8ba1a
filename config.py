"""Library configuration.

The linter and trimmer read their defaults from an external ``TOML`` file so
that build scripts can adjust the missing-note policy or teach the explainer
about custom UIKit classes without patching the code.  ``XLIFF_TOOLS_CONFIG``
is consulted first, falling back to a ``config.toml`` next to this module.
"""

from __future__ import annotations

import os
import pytoml

_CONFIG_PATH = os.environ.get(
    "XLIFF_TOOLS_CONFIG",
    os.path.join(os.path.dirname(__file__), "config.toml"),
)

if os.path.exists(_CONFIG_PATH):
    with open(_CONFIG_PATH, "r", encoding="utf-8") as _cfg:
        _CONF = pytoml.load(_cfg)
else:
    _CONF = {}

# Note text Xcode writes when a string was extracted without a comment.
PLACEHOLDER_NOTE: str = "No comment provided by engineer."

# Interface Builder notes carry this key; it marks the structured form.
STRUCTURED_MARKER: str = "ObjectID"

# ``error`` only writes rewritten notes when nothing is missing, ``warning``
# writes them regardless.
MISSING_NOTE_POLICY: str = "error"

LOG_LEVEL: str = "INFO"

ROLE_NAMES = {
    "normalTitle": "title",
    "accessibilityLabel": "description for a blind person",
}

ELEMENT_PHRASES = {
    "UIButton": "{role} of a button",
    "UIBarButtonItem": "{role} of a button in a toolbar",
    "UITabBarItem": "{role} of a tab",
    "UITextField": "{role} in a field",
    "UILabel": "{role} in a paragraph on the screen",
    "UIViewController": "{role} of a screen",
    "UINavigationItem": "{role} of a screen",
}

# Override with TOML values if provided
PLACEHOLDER_NOTE = _CONF.get("PLACEHOLDER_NOTE", PLACEHOLDER_NOTE)
STRUCTURED_MARKER = _CONF.get("STRUCTURED_MARKER", STRUCTURED_MARKER)
MISSING_NOTE_POLICY = _CONF.get("MISSING_NOTE_POLICY", MISSING_NOTE_POLICY)
LOG_LEVEL = _CONF.get("LOG_LEVEL", LOG_LEVEL)
ROLE_NAMES = {**ROLE_NAMES, **_CONF.get("ROLE_NAMES", {})}
ELEMENT_PHRASES = {**ELEMENT_PHRASES, **_CONF.get("ELEMENT_PHRASES", {})}

"""Translation lookup for user-facing strings.

Codes that have no definition translate to the supplied default, or to
the code itself when no default is given.
"""

from typing import Optional

_DEFINITIONS: dict[str, str] = {
    "Yaga.Error.Rule404": "Rule not found.",
    "via %s": "via %s",
    "Web Source": "the web",
    "Mobile Source": "mobile",
    "Email Source": "email",
    "Rules": "Rules",
    "Interactive Rules": "Interactive Rules",
}


def translate(code: str, default: Optional[str] = None) -> str:
    """Return the translation for ``code``."""
    if code in _DEFINITIONS:
        return _DEFINITIONS[code]
    return code if default is None else default

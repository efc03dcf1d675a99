"""Language frontends and their registry.

Each frontend provides a LanguageProfile: the parser turning source text
into SyntaxNodes plus the node-kind classification table used by the
scorers.
"""

from pathlib import PurePath
from typing import Dict, List, Tuple

from complex_code_spotter.core.exceptions import ConfigurationError, UnknownLanguageError
from complex_code_spotter.languages.python import PYTHON, parse_python
from complex_code_spotter.models.syntax import LanguageProfile

_PROFILES: Dict[str, LanguageProfile] = {}


def register_language(profile: LanguageProfile) -> None:
    """Register a frontend; a profile with the same name is replaced."""
    _PROFILES[profile.name] = profile


def get_supported_languages() -> List[str]:
    return sorted(_PROFILES)


def get_language_profile(name: str) -> LanguageProfile:
    """Look up a frontend by language name.

    Raises:
        ConfigurationError: If no frontend has this name
    """
    try:
        return _PROFILES[name.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unsupported language '{name}'. Supported: {', '.join(get_supported_languages())}"
        ) from None


def supported_extensions() -> Tuple[str, ...]:
    return tuple(ext for profile in _PROFILES.values() for ext in profile.extensions)


def guess_language(path: str) -> LanguageProfile:
    """Pick the frontend handling a file from its extension.

    Raises:
        UnknownLanguageError: If no registered frontend handles the extension
    """
    suffix = PurePath(path).suffix.lower()
    for profile in _PROFILES.values():
        if suffix in profile.extensions:
            return profile
    raise UnknownLanguageError(path)


register_language(PYTHON)

__all__ = [
    "PYTHON",
    "parse_python",
    "register_language",
    "get_supported_languages",
    "get_language_profile",
    "supported_extensions",
    "guess_language",
]

"""
bmfont.settings - load settings for partially broken or non-compliant files

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class LoadSettings:
    """
    Control how strictly descriptors are checked on load.

    ignore_counts:         accept declared page, char and kerning counts that don't match
    ignore_dims:           clamp out-of-range char rectangle and texture sizes
    allow_unsafe_strings:  accept control characters in face, charset and page file names
    relax_references:      accept references to undefined pages and chars
    """
    ignore_counts: bool = False
    ignore_dims: bool = False
    allow_unsafe_strings: bool = False
    relax_references: bool = False

    def replace(self, **changes):
        """Copy with some flags changed."""
        return replace(self, **changes)

    @classmethod
    def strict(cls):
        """All checks enforced."""
        return DEFAULT

    @classmethod
    def relaxed(cls):
        """Ignore counts and tolerate dimension anomalies."""
        return IGNORE_COUNTS_AND_DIMS


DEFAULT = LoadSettings()
IGNORE_COUNTS = LoadSettings(ignore_counts=True)
IGNORE_COUNTS_AND_DIMS = LoadSettings(ignore_counts=True, ignore_dims=True)
PERMISSIVE = LoadSettings(
    ignore_counts=True, ignore_dims=True,
    allow_unsafe_strings=True, relax_references=True,
)

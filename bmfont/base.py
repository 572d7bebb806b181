"""
bmfont.base - descriptor format registries

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from .magic import MagicRegistry

DEFAULT_FORMAT = 'text'

loaders = MagicRegistry(DEFAULT_FORMAT)
savers = MagicRegistry(DEFAULT_FORMAT)

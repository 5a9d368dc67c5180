"""ResourceFS Core - Shared constants, path translation and validation.

Import specific functions from submodules:
    from resourcefs.core import constants
    from resourcefs.core import path_utils
    from resourcefs.core import validators
"""

from resourcefs.core import constants, path_utils, validators

__all__ = [
    "constants",
    "path_utils",
    "validators",
]

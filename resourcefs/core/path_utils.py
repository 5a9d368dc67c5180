"""
ResourceFS Core: Path Translation.

Logical subpaths use "/" between segments. Artifact resource tables are flat
and join segments with ".". These helpers do the translation between the two.
"""
from typing import Optional

from resourcefs.core.constants import NAMESPACE_SEPARATOR, PATH_SEPARATOR


def strip_leading_separator(subpath: str) -> str:
    """Remove a single leading "/" so rooted and relative forms match.

    Args:
        subpath: Logical path, e.g. "/css/site.css"

    Returns:
        The path without one leading separator, e.g. "css/site.css"
    """
    if subpath.startswith(PATH_SEPARATOR):
        return subpath[1:]
    return subpath


def namespace_prefix(base_namespace: Optional[str]) -> str:
    """Build the key prefix for a base namespace.

    >>> namespace_prefix("App.wwwroot")
    'App.wwwroot.'
    >>> namespace_prefix("")
    ''
    """
    if not base_namespace:
        return ""
    return base_namespace + NAMESPACE_SEPARATOR


def to_resource_key(prefix: str, subpath: str) -> str:
    """Translate a logical subpath into a flat resource key.

    Args:
        prefix: Namespace prefix from namespace_prefix()
        subpath: Logical path with any leading separator already stripped

    Returns:
        Resource key, e.g. "App.wwwroot.css.site.css"
    """
    return prefix + subpath.replace(PATH_SEPARATOR, NAMESPACE_SEPARATOR)


def display_name(subpath: str) -> str:
    """Return the final segment of a logical path ("" for a trailing "/")."""
    return subpath.rsplit(PATH_SEPARATOR, 1)[-1]


def to_key_parts(relative_path: str) -> str:
    """Flatten an archive or package member path into dotted key form.

    Both "/" and the platform separator are treated as segment boundaries.
    """
    return NAMESPACE_SEPARATOR.join(
        part for part in relative_path.replace("\\", PATH_SEPARATOR).split(PATH_SEPARATOR) if part
    )

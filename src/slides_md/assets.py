"""
Asset Path Resolution

Classifies link and image targets as absolute or document-relative.
Relative targets are rewritten under the asset mount, which the server maps
to the directory holding the source document.
"""

ASSET_MOUNT = "/assets/"

ABSOLUTE_PREFIXES = ("http://", "https://", "data:", "/")


def is_absolute_target(target: str) -> bool:
    """Return True if the target should be left untouched."""
    return target.lower().startswith(ABSOLUTE_PREFIXES)


def resolve_asset_path(target: str) -> str:
    """Rewrite a document-relative target under the asset mount.

    >>> resolve_asset_path("pic.png")
    '/assets/pic.png'
    >>> resolve_asset_path("HTTPS://example.com/pic.png")
    'HTTPS://example.com/pic.png'
    """
    if is_absolute_target(target):
        return target
    return ASSET_MOUNT + target


def asset_relative_path(url: str) -> str:
    """Inverse of resolve_asset_path for mounted URLs, '' for anything else."""
    if url.startswith(ASSET_MOUNT):
        return url[len(ASSET_MOUNT):]
    return ""

"""extlibs - serve external library assets locally or remotely."""

from extlibs.core.library import AssetLibrary, LocalInstallation, RemoteSource
from extlibs.core.resolver import AssetPathResolver
from extlibs.core.types import AssetDeclaration, CssCategory
from extlibs.errors import LibraryNotInstalledError, NotAttachableError

__all__ = [
    "AssetDeclaration",
    "AssetLibrary",
    "AssetPathResolver",
    "CssCategory",
    "LibraryNotInstalledError",
    "LocalInstallation",
    "NotAttachableError",
    "RemoteSource",
]

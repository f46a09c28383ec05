"""Local/remote asset path resolution.

Serves library files from the local installation when there is one and falls
back to the remote URL otherwise. Every declared filename is rewritten to
``prefix + "/" + filename``, where the prefix is the root-absolute local path
or the remote URL.
"""

import logging
from copy import deepcopy
from typing import Protocol

from extlibs.core.types import (
    CssAssetSet,
    JsAssetSet,
    ProcessedCssAssets,
    ProcessedJsAssets,
)
from extlibs.errors import NotAttachableError

logger = logging.getLogger(__name__)


class InstallationState(Protocol):
    """Answers whether a library is installed and where."""

    def is_installed(self) -> bool: ...

    def get_local_path(self) -> str: ...


class RemoteEndpoint(Protocol):
    """Answers whether a library has a remote URL and what it is."""

    def has_remote_url(self) -> bool: ...

    def get_remote_url(self) -> str: ...


class AssetPathResolver:
    """Rewrites declared asset filenames into servable paths or URLs.

    Holds no state of its own: the installation and remote collaborators are
    queried on every call, so a library that gets installed between two calls
    is served locally from the second call on.
    """

    __slots__ = ("_installation", "_library_id", "_remote")

    def __init__(
        self,
        installation: InstallationState,
        remote: RemoteEndpoint,
        *,
        library_id: str | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            installation: Local installation state of the library
            remote: Remote endpoint of the library
            library_id: Library identifier, used in error messages
        """
        self._installation = installation
        self._remote = remote
        self._library_id = library_id

    def can_be_attached(self) -> bool:
        """Check whether the library is installed or has a remote URL."""
        return self._installation.is_installed() or self._remote.has_remote_url()

    def serves_locally(self) -> bool:
        """Check whether assets resolve to the local installation.

        The local installation takes priority over the remote URL.
        """
        return self._installation.is_installed()

    def get_path_prefix(self) -> str:
        """Get the prefix to prepend to asset filenames.

        Local paths are relative to the application root, so a leading slash
        is added to make them root-absolute. Remote URLs are returned as is.

        Returns:
            Root-absolute local path or remote URL

        Raises:
            NotAttachableError: If the library is neither installed nor remote
        """
        if self.serves_locally():
            prefix = "/" + self._installation.get_local_path()
            logger.debug(f"Serving {self._library_id} locally from {prefix}")
            return prefix
        if self._remote.has_remote_url():
            prefix = self._remote.get_remote_url()
            logger.debug(f"Serving {self._library_id} remotely from {prefix}")
            return prefix
        raise NotAttachableError(self._library_id)

    def get_css_assets(self, css_assets: CssAssetSet) -> ProcessedCssAssets:
        """Rewrite CSS assets, keeping categories and their order.

        If two files in one category rewrite to the same path, the later one
        wins.

        Args:
            css_assets: Declared files per SMACSS category

        Returns:
            Copies of the options keyed by rewritten path, per category

        Raises:
            NotAttachableError: If the library is neither installed nor remote
        """
        prefix = self.get_path_prefix()
        processed: ProcessedCssAssets = {}
        for category, declarations in css_assets.items():
            category_assets = processed.setdefault(category, {})
            for declaration in declarations:
                category_assets[f"{prefix}/{declaration.filename}"] = deepcopy(
                    declaration.options
                )
        return processed

    def get_js_assets(self, js_assets: JsAssetSet) -> ProcessedJsAssets:
        """Rewrite JavaScript assets, keeping their order.

        Args:
            js_assets: Declared files

        Returns:
            Copies of the options keyed by rewritten path (later duplicates win)

        Raises:
            NotAttachableError: If the library is neither installed nor remote
        """
        prefix = self.get_path_prefix()
        return {
            f"{prefix}/{declaration.filename}": deepcopy(declaration.options)
            for declaration in js_assets
        }

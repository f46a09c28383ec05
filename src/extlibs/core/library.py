"""External asset libraries.

An asset library declares its CSS and JS files relative to the library root.
Whether those files are served from the local installation or from a remote
URL is decided by ``AssetPathResolver`` each time assets are requested.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from extlibs.core.resolver import AssetPathResolver
from extlibs.core.types import (
    AssetDeclaration,
    CssAssetSet,
    CssCategory,
    JsAssetSet,
    ProcessedCssAssets,
    ProcessedJsAssets,
)
from extlibs.errors import LibraryNotInstalledError, NotAttachableError

if TYPE_CHECKING:
    from extlibs.config import Config
    from extlibs.local.locator import Locator, LocatorFactory

logger = logging.getLogger(__name__)

DEFAULT_LOCATOR_ID = "stream"
DEFAULT_LOCATOR_CONFIGURATION: Mapping[str, object] = MappingProxyType(
    {"scheme": "asset"}
)


class LocalInstallation:
    """Installation state of a library on the local filesystem."""

    def __init__(self, library_id: str) -> None:
        self._library_id = library_id
        self._installed = False
        self._local_path: str | None = None

    @property
    def library_id(self) -> str:
        """Identifier of the library this installation belongs to."""
        return self._library_id

    def is_installed(self) -> bool:
        return self._installed

    def set_installed(self, installed: bool = True) -> None:
        self._installed = installed

    def get_local_path(self) -> str:
        """Get the library path relative to the application root.

        Raises:
            LibraryNotInstalledError: If the library is not installed
        """
        if not self._installed or self._local_path is None:
            raise LibraryNotInstalledError(self._library_id)
        return self._local_path

    def set_local_path(self, path: str) -> None:
        """Set the library path, relative to the application root."""
        self._local_path = path.strip("/")


class RemoteSource:
    """Remote URL a library can be served from."""

    def __init__(self, remote_url: str | None = None) -> None:
        self._remote_url = remote_url

    def has_remote_url(self) -> bool:
        return bool(self._remote_url)

    def get_remote_url(self) -> str:
        if not self._remote_url:
            raise ValueError("No remote URL configured")
        return self._remote_url


class AssetLibrary:
    """A library of CSS and JS files served locally or remotely.

    Declared assets are frozen at construction time. Processed assets are
    computed on each call and never cached.
    """

    def __init__(
        self,
        library_id: str,
        *,
        css_assets: CssAssetSet | None = None,
        js_assets: JsAssetSet | None = None,
        remote_url: str | None = None,
        locator_id: str = DEFAULT_LOCATOR_ID,
        locator_configuration: Mapping[str, object] | None = None,
    ) -> None:
        """Initialize library.

        Args:
            library_id: Library machine name, also its directory name
            css_assets: Declared CSS files per SMACSS category
            js_assets: Declared JS files
            remote_url: URL the library files can be served from
            locator_id: Locator used to find the local installation
            locator_configuration: Configuration passed to the locator
        """
        self._id = library_id
        self._css_assets: Mapping[CssCategory, tuple[AssetDeclaration, ...]] = (
            MappingProxyType(
                {category: tuple(files) for category, files in (css_assets or {}).items()}
            )
        )
        self._js_assets = tuple(js_assets or ())
        self._locator_id = locator_id
        self._locator_configuration = MappingProxyType(
            dict(
                DEFAULT_LOCATOR_CONFIGURATION
                if locator_configuration is None
                else locator_configuration
            )
        )
        self._installation = LocalInstallation(library_id)
        self._remote = RemoteSource(remote_url)
        self._resolver = AssetPathResolver(
            self._installation, self._remote, library_id=library_id
        )

    @property
    def id(self) -> str:
        return self._id

    @property
    def installation(self) -> LocalInstallation:
        return self._installation

    @property
    def remote(self) -> RemoteSource:
        return self._remote

    @property
    def css_assets(self) -> CssAssetSet:
        """Declared CSS assets (read-only)."""
        return self._css_assets

    @property
    def js_assets(self) -> JsAssetSet:
        """Declared JS assets (read-only)."""
        return self._js_assets

    def get_locator(self, locator_factory: "LocatorFactory") -> "Locator":
        """Get the locator that determines the installation state."""
        return locator_factory.create_instance(
            self._locator_id, self._locator_configuration
        )

    def locate(self, locator_factory: "LocatorFactory") -> None:
        """Refresh the installation state from the filesystem."""
        self.get_locator(locator_factory).locate(self._installation)

    def can_be_attached(self) -> bool:
        return self._resolver.can_be_attached()

    def serves_locally(self) -> bool:
        return self._resolver.serves_locally()

    def get_path_prefix(self) -> str:
        return self._resolver.get_path_prefix()

    def get_css_assets(self) -> ProcessedCssAssets:
        return self._resolver.get_css_assets(self._css_assets)

    def get_js_assets(self) -> ProcessedJsAssets:
        return self._resolver.get_js_assets(self._js_assets)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization.

        CSS and JS are None when the library cannot be attached.
        """
        prefix: str | None
        try:
            prefix = self.get_path_prefix()
            css: dict[str, object] | None = {
                str(category): files for category, files in self.get_css_assets().items()
            }
            js: dict[str, object] | None = dict(self.get_js_assets())
        except NotAttachableError:
            prefix = None
            css = None
            js = None
        return {
            "id": self._id,
            "attachable": prefix is not None,
            "prefix": prefix,
            "css": css,
            "js": js,
        }


def build_libraries(
    config: "Config",
    locator_factory: "LocatorFactory",
) -> dict[str, AssetLibrary]:
    """Build and locate every library declared in the configuration.

    Args:
        config: Application configuration
        locator_factory: Factory for the libraries' locators

    Returns:
        Libraries keyed by id, in configuration order
    """
    libraries: dict[str, AssetLibrary] = {}
    for library_config in config.libraries:
        library = AssetLibrary(
            library_config.id,
            css_assets=library_config.css,
            js_assets=library_config.js,
            remote_url=library_config.remote_url,
            locator_id=library_config.locator_id,
            locator_configuration=library_config.locator_configuration,
        )
        library.locate(locator_factory)
        libraries[library.id] = library
    logger.debug(f"Built {len(libraries)} libraries")
    return libraries

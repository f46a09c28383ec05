"""Locators for locally installed libraries.

A locator checks whether a library directory exists below the application
root and records the result on the library's ``LocalInstallation``:

    <app_root>/
    └── libraries/               # "asset" scheme base directory
        └── flexslider/          # library id
            └── flexslider.css
"""

import logging
from collections.abc import Callable, Mapping
from pathlib import Path, PurePosixPath
from typing import Protocol

from extlibs.core.library import LocalInstallation

logger = logging.getLogger(__name__)


class Locator(Protocol):
    """Determines the installation state of a library."""

    def locate(self, installation: LocalInstallation) -> None: ...


class UriLocator:
    """Locates libraries in a fixed directory below the application root."""

    def __init__(self, app_root: Path, base: str) -> None:
        """Initialize locator.

        Args:
            app_root: Application root directory
            base: Directory containing libraries, relative to app_root
        """
        self._app_root = app_root
        self._base = PurePosixPath(base.strip("/"))

    @property
    def base(self) -> str:
        return str(self._base)

    def locate(self, installation: LocalInstallation) -> None:
        """Mark the library installed if its directory exists."""
        local_path = self._base / installation.library_id
        if (self._app_root / local_path).is_dir():
            installation.set_installed()
            installation.set_local_path(str(local_path))
            logger.debug(f"Found {installation.library_id} at {local_path}")
        else:
            installation.set_installed(False)
            logger.debug(f"{installation.library_id} not found in {self._base}")


class StreamLocator(UriLocator):
    """Locates libraries in the directory registered for a scheme.

    Schemes map names like ``asset`` to directories below the application
    root, so ``asset://flexslider`` resolves to ``libraries/flexslider``.
    """

    def __init__(self, app_root: Path, schemes: Mapping[str, str], scheme: str) -> None:
        """Initialize locator.

        Args:
            app_root: Application root directory
            schemes: Scheme name to directory mapping
            scheme: Scheme to locate libraries in

        Raises:
            ValueError: If the scheme is not registered
        """
        if scheme not in schemes:
            raise ValueError(f"Unknown scheme: {scheme}")
        super().__init__(app_root, schemes[scheme])
        self._scheme = scheme

    @property
    def scheme(self) -> str:
        return self._scheme


LocatorBuilder = Callable[["LocatorFactory", Mapping[str, object]], Locator]


def _build_stream_locator(
    factory: "LocatorFactory", configuration: Mapping[str, object]
) -> Locator:
    scheme = configuration.get("scheme")
    if not isinstance(scheme, str):
        raise ValueError("stream locator requires a 'scheme' string")
    return StreamLocator(factory.app_root, factory.schemes, scheme)


def _build_uri_locator(
    factory: "LocatorFactory", configuration: Mapping[str, object]
) -> Locator:
    uri = configuration.get("uri")
    if not isinstance(uri, str):
        raise ValueError("uri locator requires a 'uri' string")
    return UriLocator(factory.app_root, uri)


class LocatorFactory:
    """Creates locators by id.

    Built-in locators are ``stream`` (configured with ``scheme``) and ``uri``
    (configured with ``uri``). Others can be added with ``register()``.
    """

    def __init__(self, app_root: Path, schemes: Mapping[str, str]) -> None:
        """Initialize factory.

        Args:
            app_root: Application root directory
            schemes: Scheme name to directory mapping for stream locators
        """
        self._app_root = app_root
        self._schemes = dict(schemes)
        self._builders: dict[str, LocatorBuilder] = {
            "stream": _build_stream_locator,
            "uri": _build_uri_locator,
        }

    @property
    def app_root(self) -> Path:
        return self._app_root

    @property
    def schemes(self) -> Mapping[str, str]:
        return self._schemes

    def register(self, locator_id: str, builder: LocatorBuilder) -> None:
        """Register a locator builder under an id."""
        self._builders[locator_id] = builder

    def create_instance(
        self,
        locator_id: str,
        configuration: Mapping[str, object],
    ) -> Locator:
        """Create a locator.

        Args:
            locator_id: Registered locator id (e.g., "stream")
            configuration: Locator configuration (e.g., {"scheme": "asset"})

        Returns:
            Configured locator

        Raises:
            ValueError: If the id is unknown or the configuration is invalid
        """
        builder = self._builders.get(locator_id)
        if builder is None:
            raise ValueError(f"Unknown locator: {locator_id}")
        return builder(self, configuration)

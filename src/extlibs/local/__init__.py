"""Local installation discovery."""

from extlibs.local.locator import Locator, LocatorFactory, StreamLocator, UriLocator

__all__ = ["Locator", "LocatorFactory", "StreamLocator", "UriLocator"]

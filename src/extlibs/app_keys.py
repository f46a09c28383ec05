"""Application keys for type-safe app configuration access."""

from aiohttp import web

from extlibs.core.library import AssetLibrary
from extlibs.local.locator import LocatorFactory

libraries_key = web.AppKey("libraries", dict[str, AssetLibrary])
locator_factory_key = web.AppKey("locator_factory", LocatorFactory)

"""aiohttp server for extlibs.

Application factory and route registration for standalone server mode.
"""

import logging

from aiohttp import web

from extlibs.api.libraries import create_libraries_routes
from extlibs.app_keys import libraries_key, locator_factory_key
from extlibs.config import Config
from extlibs.core.library import build_libraries
from extlibs.local.locator import LocatorFactory

logger = logging.getLogger(__name__)


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    locator_factory = LocatorFactory(config.app.root, config.schemes)
    libraries = build_libraries(config, locator_factory)

    app[locator_factory_key] = locator_factory
    app[libraries_key] = libraries

    app.router.add_routes(create_libraries_routes())

    logger.info(f"Serving {len(libraries)} libraries from {config.app.root}")
    return app


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    web.run_app(app, host=config.server.host, port=config.server.port)

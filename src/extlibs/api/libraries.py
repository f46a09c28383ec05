"""Libraries API endpoints.

Returns the CSS and JS assets of a library rewritten to local paths or
remote URLs.
"""

from aiohttp import web

from extlibs.app_keys import libraries_key, locator_factory_key
from extlibs.errors import NotAttachableError


def create_libraries_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/libraries", get_libraries),
        web.get("/api/libraries/{library_id}", get_library),
    ]


async def get_libraries(request: web.Request) -> web.Response:
    libraries = request.app[libraries_key]
    locator_factory = request.app[locator_factory_key]

    items = []
    for library in libraries.values():
        library.locate(locator_factory)
        items.append({"id": library.id, "attachable": library.can_be_attached()})
    return web.json_response({"items": items})


async def get_library(request: web.Request) -> web.Response:
    library_id = request.match_info["library_id"]
    library = request.app[libraries_key].get(library_id)
    if library is None:
        return web.json_response(
            {"error": "Library not found", "id": library_id},
            status=404,
        )

    # Pick up installations made while the server is running
    library.locate(request.app[locator_factory_key])

    try:
        prefix = library.get_path_prefix()
        css = library.get_css_assets()
        js = library.get_js_assets()
    except NotAttachableError:
        return web.json_response(
            {"error": "Library cannot be attached", "id": library_id},
            status=409,
        )

    return web.json_response(
        {
            "id": library.id,
            "prefix": prefix,
            "css": {str(category): files for category, files in css.items()},
            "js": js,
        }
    )

"""Configuration management for extlibs.

Supports TOML configuration format with auto-discovery.
"""

import logging
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from extlibs.core.library import DEFAULT_LOCATOR_CONFIGURATION, DEFAULT_LOCATOR_ID
from extlibs.core.types import AssetDeclaration, AssetOptions, CssCategory

CONFIG_FILENAME = "extlibs.toml"

logger = logging.getLogger(__name__)


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class AppConfig:
    """Application root configuration."""

    root: Path = field(default_factory=lambda: Path("."))


@dataclass
class LibraryConfig:
    """Declaration of a single external library."""

    id: str
    css: dict[CssCategory, list[AssetDeclaration]] = field(default_factory=dict)
    js: list[AssetDeclaration] = field(default_factory=list)
    remote_url: str | None = None
    locator_id: str = DEFAULT_LOCATOR_ID
    locator_configuration: dict[str, object] = field(
        default_factory=lambda: dict(DEFAULT_LOCATOR_CONFIGURATION)
    )


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    app: AppConfig
    schemes: dict[str, str]
    libraries: list[LibraryConfig]
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for extlibs.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            logger.info("No configuration file found, using defaults")
            return cls._default()

        logger.info(f"Using configuration from {discovered_path}")
        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        """Create config with all defaults."""
        return cls(
            server=ServerConfig(),
            app=AppConfig(),
            schemes={"asset": "libraries"},
            libraries=[],
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            app=cls._parse_app(data.get("app"), config_dir),
            schemes=cls._parse_schemes(data.get("schemes")),
            libraries=cls._parse_libraries(data.get("libraries")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section.

        Args:
            data: Raw server section data

        Returns:
            ServerConfig instance
        """
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_app(cls, data: object, config_dir: Path) -> AppConfig:
        """Parse app configuration section.

        Args:
            data: Raw app section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            AppConfig instance
        """
        if data is None:
            return AppConfig(root=config_dir)

        if not isinstance(data, dict):
            raise ValueError("app section must be a dictionary")

        root = data.get("root", ".")
        if not isinstance(root, str):
            raise ValueError("app.root must be a string")

        return AppConfig(root=config_dir / root)

    @classmethod
    def _parse_schemes(cls, data: object) -> dict[str, str]:
        """Parse schemes section (scheme name to directory)."""
        if data is None:
            return {"asset": "libraries"}

        if not isinstance(data, dict):
            raise ValueError("schemes section must be a dictionary")

        schemes: dict[str, str] = {}
        for name, directory in data.items():
            if not isinstance(directory, str):
                raise ValueError(f"schemes.{name} must be a string")
            schemes[name] = directory
        return schemes

    @classmethod
    def _parse_libraries(cls, data: object) -> list[LibraryConfig]:
        """Parse libraries section.

        Args:
            data: Raw libraries section data, keyed by library id

        Returns:
            List of LibraryConfig in declaration order
        """
        if data is None:
            return []

        if not isinstance(data, dict):
            raise ValueError("libraries section must be a dictionary")

        return [
            cls._parse_library(library_id, library_data)
            for library_id, library_data in data.items()
        ]

    @classmethod
    def _parse_library(cls, library_id: str, data: object) -> LibraryConfig:
        """Parse a single libraries.<id> section."""
        section = f"libraries.{library_id}"
        # The id doubles as the library's directory name below the scheme base
        if (
            not library_id
            or library_id in (".", "..")
            or "/" in library_id
            or "\\" in library_id
        ):
            raise ValueError(f"{section} id must be a single directory name")
        if not isinstance(data, dict):
            raise ValueError(f"{section} must be a dictionary")

        remote_url = data.get("remote_url")
        if remote_url is not None and not isinstance(remote_url, str):
            raise ValueError(f"{section}.remote_url must be a string")

        css_raw = data.get("css", {})
        if not isinstance(css_raw, dict):
            raise ValueError(f"{section}.css must be a dictionary")
        css: dict[CssCategory, list[AssetDeclaration]] = {}
        for category_name, files in css_raw.items():
            try:
                category = CssCategory(category_name)
            except ValueError:
                allowed = ", ".join(c.value for c in CssCategory)
                raise ValueError(
                    f"{section}.css has unknown category '{category_name}' "
                    f"(expected one of: {allowed})"
                ) from None
            css[category] = cls._parse_assets(files, f"{section}.css.{category_name}")

        js = cls._parse_assets(data.get("js", []), f"{section}.js")

        locator_id = DEFAULT_LOCATOR_ID
        locator_configuration = dict(DEFAULT_LOCATOR_CONFIGURATION)
        locator_raw = data.get("locator")
        if locator_raw is not None:
            if not isinstance(locator_raw, dict):
                raise ValueError(f"{section}.locator must be a dictionary")
            locator_configuration = dict(locator_raw)
            locator_id = locator_configuration.pop("id", DEFAULT_LOCATOR_ID)
            if not isinstance(locator_id, str):
                raise ValueError(f"{section}.locator.id must be a string")

        return LibraryConfig(
            id=library_id,
            css=css,
            js=js,
            remote_url=remote_url,
            locator_id=locator_id,
            locator_configuration=locator_configuration,
        )

    @classmethod
    def _parse_assets(cls, data: object, section: str) -> list[AssetDeclaration]:
        """Parse a list of asset files.

        Each item is either a filename or a table with ``file`` and optional
        ``options``.
        """
        if not isinstance(data, list):
            raise ValueError(f"{section} must be a list")

        declarations: list[AssetDeclaration] = []
        for item in data:
            options: AssetOptions = {}
            if isinstance(item, dict):
                filename = item.get("file")
                options_raw = item.get("options", {})
                if not isinstance(options_raw, dict):
                    raise ValueError(f"{section} options must be a dictionary")
                options = dict(options_raw)
            else:
                filename = item
            if not isinstance(filename, str) or not filename:
                raise ValueError(f"{section} items must be filenames")
            if filename.startswith("/"):
                raise ValueError(
                    f"{section} filenames must be relative to the library: {filename}"
                )
            declarations.append(AssetDeclaration(filename=filename, options=options))
        return declarations

    def get_library(self, library_id: str) -> LibraryConfig | None:
        """Get library declaration by id."""
        for library in self.libraries:
            if library.id == library_id:
                return library
        return None

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        app_root: Path | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            app_root: Override app.root

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        app = self.app
        if app_root is not None:
            app = replace(self.app, root=app_root)

        return replace(self, server=server, app=app)

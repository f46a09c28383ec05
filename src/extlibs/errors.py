"""Exceptions raised while resolving library assets."""


class NotAttachableError(Exception):
    """Library is neither installed locally nor available from a remote URL."""

    def __init__(self, library_id: str | None = None) -> None:
        self.library_id = library_id
        if library_id is None:
            message = "Library cannot be attached: not installed and no remote URL"
        else:
            message = (
                f"Library '{library_id}' cannot be attached: "
                "not installed and no remote URL"
            )
        super().__init__(message)


class LibraryNotInstalledError(Exception):
    """Local path requested for a library that is not installed."""

    def __init__(self, library_id: str) -> None:
        self.library_id = library_id
        super().__init__(f"Library '{library_id}' is not installed")

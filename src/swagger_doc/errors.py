"""Error taxonomy for the documentation engine."""


class SwaggerDocError(Exception):
    """Base class for every error raised by swagger_doc."""


class ConfigurationError(SwaggerDocError):
    """An API definition or documentation config is malformed.

    Raised while the route tree or config is being built, never while a
    documentation request is served.
    """


class ResourceNotFoundError(SwaggerDocError):
    """No endpoint belongs to the requested resource."""

    def __init__(self, resource: str):
        super().__init__(f"Resource not found: {resource!r}")
        self.resource = resource


class BasePathError(SwaggerDocError):
    """A dynamic base path did not produce a usable URL."""

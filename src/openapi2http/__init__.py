"""openapi2http -- Turn OpenAPI 3.x and Swagger 2.0 documents into ``.http`` files.

This package reads an API description and emits one request block per
route and HTTP method, in the plain-text format understood by REST-client
editor extensions. Request bodies for ``POST``/``PUT``/``PATCH`` operations
are filled with a sample JSON value synthesised from the operation's schema.

Typical workflow::

    openapi2http convert petstore.yaml          # writes petstore.http
    openapi2http inspect swagger.json           # summary of the document

Modules:
    app: Typer application factory and CLI entry point.
    converter: End-to-end pipeline (check, load, detect, generate, write).
    sampler: ``$ref``-aware sample value synthesis from schema fragments.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"

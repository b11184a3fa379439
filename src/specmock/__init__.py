"""specmock -- Serve authored OpenAPI 3.x examples as a mock backend.

Point specmock at an OpenAPI document and it answers HTTP requests with the
example values written in the document, so integration tests can run against
a predictable stand-in for the real service.

Typical workflow::

    specmock serve petstore.yaml --port 8080
    curl http://localhost:8080/pets?page=1     # implicit 200
    curl http://localhost:8080/404/pets/7      # explicit status prefix

Modules:
    app: Typer application and CLI entry point.
    models: Immutable pydantic document model and request model.
    engine: Example-resolution engine (matching, selection, ``$ref``).
    server: Threaded HTTP front-end for the engine.
    config: Server configuration with precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"

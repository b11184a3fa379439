"""Built-in CLI sub-commands for specmock.

This package groups the Typer command modules registered on the root app:

* :mod:`~specmock.commands.serve` -- run the mock server.
* :mod:`~specmock.commands.resolve` -- resolve one request without a server.
* :mod:`~specmock.commands.routes` -- list the routes and examples a
  document declares.

Each module exports a plain callback function that
:func:`specmock.app.main` registers as a top-level command.
"""

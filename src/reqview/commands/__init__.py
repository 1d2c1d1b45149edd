"""Built-in CLI sub-commands for reqview.

* :mod:`~reqview.commands.fetch` -- send one request and display the result.
* :mod:`~reqview.commands.shell` -- interactive method/URL loop.
* :mod:`~reqview.commands.config` -- view and modify the configuration.

``fetch`` and ``shell`` are plain callbacks registered directly on the root
app; ``config`` is a :class:`typer.Typer` sub-application.
"""

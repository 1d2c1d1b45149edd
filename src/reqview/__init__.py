"""reqview -- a terminal HTTP client that pretty-prints what comes back.

``reqview`` issues a single GET/POST/PUT/DELETE/PATCH request against a URL
and renders the response body in a readable, syntax-coloured form: JSON is
re-indented with per-category colours, HTML is re-laid out as an indented
element tree, and anything else is shown as best-effort text.

Typical usage::

    reqview fetch https://api.github.com        # one-shot request
    reqview fetch -X DELETE https://host/item/1
    reqview shell                               # interactive loop

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic configuration models.
    config: XDG-aware configuration storage and precedence resolution.
    classifier: Routes a response to a renderer or to an error document.
    render: JSON, HTML and text renderers plus styling schemes.
    client: The HTTP request orchestrator.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr display surface with Rich support.
"""

__version__ = "0.1.0"

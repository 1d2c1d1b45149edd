"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~reqview.exceptions.ReqviewError` subclass or
:class:`~reqview.classifier.ErrorKind` member. Shell wrappers can inspect
the exit code of ``reqview fetch`` to tell failure classes apart without
parsing the rendered error document.

Example::

    $ reqview fetch https://example.com/missing
    $ echo $?
    4   # EXIT_NON_SUCCESS_STATUS -- the server did not answer 200
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments (unknown method, bad config key)."""

EXIT_NON_SUCCESS_STATUS = 4
"""The server answered with a status code other than 200."""

EXIT_CONNECTION_ERROR = 6
"""The request could not be made or completed (invalid URL, timeout, refused, read failure)."""

EXIT_FORMAT_ERROR = 7
"""The response body could not be parsed or formatted."""

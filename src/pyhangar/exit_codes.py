"""Numeric process exit codes for the ``hangar`` CLI.

Every command failure maps to :data:`EXIT_FAILURE` regardless of its cause,
so shell scripts only need to test for a non-zero status. Usage errors are
reported by Typer itself with :data:`EXIT_INVALID_USAGE`.

Example::

    $ hangar project get does-not-exist
    Error: failed to get project: API request failed with status 404: ...
    $ echo $?
    1
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_FAILURE = 1
"""The command failed (validation, network, HTTP, decode or config error)."""

EXIT_INVALID_USAGE = 2
"""The command line could not be parsed (raised by Typer/Click)."""

EXIT_INTERRUPTED = 130
"""The process was interrupted with Ctrl-C."""

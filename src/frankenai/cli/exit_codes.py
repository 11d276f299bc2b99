"""Process exit codes for the franken-ai CLI."""

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INVALID_USAGE = 2
EXIT_ABORTED = 3

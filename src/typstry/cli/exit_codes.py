# topmark:header:start
#
#   project      : Typstry
#   file         : exit_codes.py
#   file_relpath : src/typstry/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the Typstry CLI.

Typstry aligns with the BSD `sysexits` convention so that other tooling can
interpret failures consistently. The `compile` command is the exception: it
exits with the status of the Typst compiler it wraps.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the Typstry CLI.

    Attributes:
        SUCCESS: Successful execution with no errors.
        FAILURE: Generic failure (non-specific error).
        USAGE_ERROR: Command-line invocation error (invalid flags/args). Mirrors
            BSD ``EX_USAGE (64)``.
        DATA_ERROR: The input cannot be formatted: an invalid literal or template,
            an unsupported value kind, or a mistyped setting. Mirrors BSD
            ``EX_DATAERR (65)``.
        UNAVAILABLE: The Typst compiler is not installed. Mirrors BSD
            ``EX_UNAVAILABLE (69)``.
        SOFTWARE_ERROR: Internal failure. Mirrors BSD ``EX_SOFTWARE (70)``.
        IO_ERROR: I/O error reading or writing a file. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Configuration error (missing/invalid/malformed config).
            Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort).
    """

    SUCCESS = 0
    FAILURE = 1

    # sysexits-aligned values for better interoperability
    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    UNAVAILABLE = 69  # EX_UNAVAILABLE
    SOFTWARE_ERROR = 70  # EX_SOFTWARE
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255

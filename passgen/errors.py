"""
Exception classes raised by passgen.

Everything the command line reports as a failure derives from PassgenError,
so cli.main can turn any of them into an error message and exit status 1.
"""


class PassgenError(Exception):
    """Base class for all passgen errors."""
    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ConfigurationError(PassgenError):
    """Raised for unusable configuration: config file, pepper secret or log file."""


class WordListError(PassgenError):
    """Raised when the word list cannot be read or is too small."""
    def __init__(self, message="Word list is unusable."):
        super().__init__(message)


class SelectionError(PassgenError):
    """Raised when word selection returns fewer words than requested."""
    def __init__(self, requested, selected):
        super().__init__(
            f"Internal error: failed to select {requested} words (got {selected})."
        )
        self.requested = requested
        self.selected = selected

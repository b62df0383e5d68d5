class StreamLogError(Exception):
    """Base class for every error raised by the stream logger."""


class InvalidDestination(StreamLogError, TypeError):
    """The destination is neither a path nor a writable stream."""


class StreamUnavailable(StreamLogError, RuntimeError):
    """Nothing to write to: no path configured and no stream open (used after close())."""


class DirectoryCreationFailure(StreamLogError, ValueError):
    """The parent directory is missing and could not be created."""


class UnexpectedOpenFailure(StreamLogError, ValueError):
    """Opening the destination did not yield a usable stream."""


class WriteFailure(StreamLogError, ValueError):
    """Writing the record failed and no retry was left."""

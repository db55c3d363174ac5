class LibraryError(Exception):
    """Base for every failure the bridge reports back to the UI as a message."""
    http_status = 500


class DuplicateEntry(LibraryError):
    http_status = 409


class NotFound(LibraryError):
    http_status = 404


class NoMatch(LibraryError):
    http_status = 404


class UpstreamUnavailable(LibraryError):
    http_status = 502


class UpstreamRejected(LibraryError):
    http_status = 502


class FileNotFound(LibraryError):
    http_status = 404


class LaunchFailed(LibraryError):
    http_status = 500


class StoreReadFailure(LibraryError):
    # never leaves the store; list() turns it into []
    http_status = 500


class UnknownOperation(LibraryError):
    http_status = 404


class BadRequest(LibraryError):
    http_status = 400


class PickerUnavailable(LibraryError):
    http_status = 503

"""Error types raised while discovering and uploading study files."""


class OSFUploadError(RuntimeError):
    """Base class for failures the interactive loop reports and recovers from."""


class FetchError(OSFUploadError):
    """Listing page or file content could not be retrieved."""


class MatchError(OSFUploadError):
    """A data file name does not follow the v#-#-#_<suffix>.csv convention."""


class RepositoryConnectionError(OSFUploadError):
    """OSF storage listing was unreachable or returned no data."""


class NotFoundError(OSFUploadError):
    """The OSF repository has no raw/ folder."""


class UploadError(OSFUploadError):
    """OSF answered an upload with a status other than 201 or 409."""

    def __init__(self, status_code: int, reason: str = ""):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"{status_code}: {reason}" if reason else str(status_code))


class QuitRequested(Exception):
    """User typed quit/exit at a prompt."""

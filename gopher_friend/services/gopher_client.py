"""
A client for downloading gopher images.

The client resolves a gopher name to `<base_url>/<name>.png`, issues a single
GET request and, on a 200 response, saves the body verbatim to `<name>.png`
in the current working directory. Failures are reported through a small
exception hierarchy so the caller can tell a missing gopher apart from a
network or filesystem problem.

The name is used as-is for both the URL and the filename. Names containing
path separators (including `../`) are not rejected.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

import requests

from ..config import BASE_URL, GOPHER_FILE_EXTENSION
from ..logging_config import get_logger
from ..models import SavedGopher

logger = get_logger(__name__)

# --- Errors ---

class GopherError(Exception):
    """Base class for every failure of a gopher download."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class GopherNotFoundError(GopherError):
    """The server answered with anything other than 200 OK."""

    def __init__(self, name: str, status_code: int):
        super().__init__(f"Gopher {name} does not exist")
        self.name = name
        self.status_code = status_code


class TransportError(GopherError):
    """The HTTP request itself failed (connection, DNS, TLS, broken response)."""


class PersistenceError(GopherError):
    """The image could not be written to the local filesystem."""

# --- API Client ---

class GopherClient:
    """Fetches gopher images from a base URL and saves them locally."""

    def __init__(
        self,
        base_url: str = BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        # None keeps the requests default of waiting indefinitely.
        self.timeout = timeout

    def __enter__(self) -> "GopherClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def gopher_url(self, name: str) -> str:
        """Returns the remote URL of the named gopher image."""
        return f"{self.base_url}/{name}{GOPHER_FILE_EXTENSION}"

    def get_gopher(self, name: str) -> SavedGopher:
        """
        Downloads a gopher image and saves it as `<name>.png`.

        Args:
            name: The gopher to fetch, e.g. "standard". Not validated.

        Returns:
            A `SavedGopher` describing the written file.

        Raises:
            GopherNotFoundError: The server did not answer with status 200.
            TransportError: The request failed before a response was read.
            PersistenceError: The response could not be written to disk.
        """
        url = self.gopher_url(name)
        logger.info("fetching_gopher", gopher=name, url=url)

        try:
            response = self.session.get(url, timeout=self.timeout)
            # Reading the body can fail too (e.g. a truncated chunked stream).
            content = response.content if response.status_code == 200 else b""
        except requests.exceptions.RequestException as e:
            raise TransportError(str(e)) from e

        if response.status_code != 200:
            logger.warning("gopher_not_found", gopher=name, status_code=response.status_code)
            raise GopherNotFoundError(name, response.status_code)

        path = Path(f"{name}{GOPHER_FILE_EXTENSION}")
        # ValueError covers names the OS cannot represent, e.g. an embedded NUL.
        try:
            _write_atomically(path, content)
        except (OSError, ValueError) as e:
            raise PersistenceError(str(e)) from e

        logger.info("gopher_saved", gopher=name, path=str(path), size=len(content))
        return SavedGopher(name=name, url=url, path=str(path), size=len(content))


def _write_atomically(path: Path, content: bytes) -> None:
    """
    Writes `content` to `path` through a temporary file in the same directory.

    The target is only replaced once the whole body is on disk, so an
    interrupted write never leaves a truncated image behind.
    """
    fd, tmp_name = tempfile.mkstemp(
        prefix=path.name + ".",
        suffix=".part",
        dir=path.parent,
    )
    try:
        with os.fdopen(fd, "wb") as tmp_file:
            tmp_file.write(content)
        # mkstemp creates 0600; give the artifact the usual umask-derived mode.
        os.chmod(tmp_name, 0o666 & ~_UMASK)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def _read_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


# Read once at import; os.umask can only be queried by changing it process-wide.
_UMASK = _read_umask()


# A shared instance of the client for the command-line entry point.
gopher_client = GopherClient()

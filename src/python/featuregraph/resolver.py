# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import logging
import os
import tempfile
import time
from contextlib import closing
from typing import Any, Callable, Iterable, Iterator, Sequence, TypeVar

import requests
from typing_extensions import Protocol

from featuregraph.coordinate import ArtifactCoordinate
from featuregraph.errors import InvalidCoordinateString, UnresolvableCoordinate

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

DEFAULT_REMOTE_REPOSITORIES = (
    "https://maven-central.storage-download.googleapis.com/maven2",
    "https://repo1.maven.org/maven2",
)


class ArtifactResolver(Protocol):
    """Turns an artifact coordinate into the path of a local copy of the artifact."""

    def resolve(self, coord: str) -> str:
        """:raises UnresolvableCoordinate: if the artifact cannot be fetched."""


class FetchError(Exception):
    """Indicates an error fetching an artifact from one repository."""


class TransientFetchError(FetchError):
    """A fetch error that may reasonably be retried, such as a connection error or a timeout."""


def retry_on_exception(
    func: Callable[[], _T],
    max_retries: int,
    exception_types: tuple[type[BaseException], ...],
    backoff_func: Callable[[int], float] = lambda n: 0,
) -> _T:
    """Retry a callable against a set of exceptions, optionally sleeping between retries.

    :param func: The callable to retry.
    :param max_retries: The maximum number of times to attempt running the function.
    :param exception_types: The types of exceptions to catch for retry.
    :param backoff_func: Called with the current attempt count to determine how long to sleep
                         before the next attempt. Defaults to no backoff.
    """
    if max_retries < 1:
        raise ValueError(f"max_retries must be at least 1, got {max_retries}")
    for i in range(max_retries):
        if i:
            time.sleep(backoff_func(i))
        try:
            return func()
        except exception_types as e:
            logger.debug(f"encountered exception on attempt #{i + 1}: {e!r}")
            if i == max_retries - 1:
                raise
    raise AssertionError("unreachable")


class MavenRepositoryResolver:
    """Resolves artifacts against a local Maven-layout repository, filling it from remotes.

    Remote repositories are tried in order. A remote may be an `http(s)://` URL, fetched with
    `requests`, or a `file:` URL naming another repository on disk.
    """

    _TRANSIENT_EXCEPTION_TYPES = (requests.ConnectionError, requests.Timeout)

    def __init__(
        self,
        local_repository: str,
        remote_repositories: Sequence[str] = DEFAULT_REMOTE_REPOSITORIES,
        *,
        requests_api: Any = None,
        max_retries: int = 3,
        timeout_secs: float = 10.0,
        chunk_size_bytes: int = 10 * 1024,
    ) -> None:
        """
        :param local_repository: The root of the local Maven-layout repository.
        :param remote_repositories: Repository base URLs to fetch missing artifacts from.
        :param requests_api: An optional requests api-like object, e.g. a `requests.Session`.
        """
        self._local_repository = os.path.expanduser(local_repository)
        self._remote_repositories = tuple(r.rstrip("/") for r in remote_repositories)
        self._requests = requests_api or requests
        self._max_retries = max_retries
        self._timeout_secs = timeout_secs
        self._chunk_size_bytes = chunk_size_bytes

    def resolve(self, coord: str) -> str:
        try:
            coordinate = ArtifactCoordinate.from_coord_str(coord)
        except InvalidCoordinateString as e:
            raise UnresolvableCoordinate(coord, str(e)) from e
        relpath = coordinate.repository_path()
        local_path = os.path.join(self._local_repository, *relpath.split("/"))
        if os.path.isfile(local_path):
            logger.debug(f"Resolved {coord} from the local repository at {local_path}")
            return local_path

        failures = []
        for remote in self._remote_repositories:
            url = f"{remote}/{relpath}"
            try:
                retry_on_exception(
                    lambda: self._fetch(url, local_path),
                    max_retries=self._max_retries,
                    exception_types=(TransientFetchError,),
                    backoff_func=lambda n: 0.5 * n,
                )
            except FetchError as e:
                logger.debug(f"Could not fetch {coord} from {remote}: {e}")
                failures.append(f"{url}: {e}")
                continue
            logger.info(f"Downloaded {coord} from {remote}")
            return local_path

        reason = "; ".join(failures) if failures else "no remote repositories are configured"
        raise UnresolvableCoordinate(coord, f"not in {self._local_repository} and {reason}")

    def _fetch(self, url: str, dest: str) -> None:
        if url.startswith("file:"):
            path = _as_local_file_path(url)
            if not os.path.isfile(path):
                raise FetchError(f"{path} does not exist")
            self._write_atomically(self._iter_file(path), dest, source=path)
        else:
            self._download(url, dest)

    def _iter_file(self, path: str) -> Iterator[bytes]:
        with open(path, "rb") as fp:
            yield from iter(lambda: fp.read(self._chunk_size_bytes), b"")

    def _download(self, url: str, dest: str) -> None:
        try:
            resp = self._requests.get(
                url, stream=True, timeout=self._timeout_secs, allow_redirects=True
            )
        except requests.RequestException as e:
            raise self._as_fetch_error(url, e) from e

        with closing(resp):
            if resp.status_code != requests.codes.ok:
                raise FetchError(f"Fetch of {url} failed with status code {resp.status_code}")
            self._write_atomically(self._iter_response(url, resp), dest, source=url)

    def _iter_response(self, url: str, resp: Any) -> Iterator[bytes]:
        try:
            yield from resp.iter_content(chunk_size=self._chunk_size_bytes)
        except requests.RequestException as e:
            raise self._as_fetch_error(url, e) from e

    @staticmethod
    def _write_atomically(chunks: Iterable[bytes], dest: str, *, source: str) -> None:
        """Writes `chunks` to a temporary file beside `dest`, then moves it into place.

        `dest` either ends up complete or is left untouched.
        """
        try:
            os.makedirs(os.path.dirname(dest), exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=os.path.dirname(dest), suffix=".part")
        except OSError as e:
            raise FetchError(f"Problem storing {source} at {dest}: {e!r}") from e
        try:
            with os.fdopen(fd, "wb") as fp:
                for data in chunks:
                    fp.write(data)
            os.replace(tmp_path, dest)
        except OSError as e:
            raise FetchError(f"Problem storing {source} at {dest}: {e!r}") from e
        finally:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)

    @classmethod
    def _as_fetch_error(cls, url: str, e: Exception) -> FetchError:
        exception_factory = (
            TransientFetchError if isinstance(e, cls._TRANSIENT_EXCEPTION_TYPES) else FetchError
        )
        return exception_factory(f"Problem GETing data from {url}: {e!r}")


def _as_local_file_path(url: str) -> str:
    path = url[len("file:") :]
    if path.startswith("//"):
        path = path[2:]
    return path

# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import http.client
import logging
import urllib.request
from typing import Optional
from urllib.parse import urlparse

from ..exceptions import UnbelievableException
from ._configuration import Configuration, _active_settings, _default_encoding

__all__ = ["UrlConfiguration"]

_logger = logging.getLogger(__name__)


class UrlConfiguration(Configuration):
    """
    A configuration based on the contents of a given URL.

    The URL is always considered set: nothing is fetched until the value is needed. The contents
    are fetched on first use and cached for the lifetime of this object.
    """

    def __init__(
        self,
        location: str,
        timeout: float | None = None,
        encoding: str | None = None,
    ) -> None:
        """
        Args:
            location (str): The URL.
            timeout (float, optional): Seconds to wait for the fetch. Defaults to the url_timeout
                in the toolkit settings.
            encoding (str, optional): The encoding used when the response does not declare a
                charset. Defaults to the encoding in the toolkit settings.

        Raises:
            UnbelievableException: Raised when the location is not a valid URL.
        """
        try:
            parsed = urlparse(location)
        except ValueError as e:
            errmsg = f"Malformed URL {location!r}: {e}"
            _logger.error(errmsg)
            raise UnbelievableException(errmsg) from e
        if not parsed.scheme or not (parsed.netloc or parsed.scheme == "file"):
            errmsg = f"Malformed URL {location!r}: a scheme and a network location are required"
            _logger.error(errmsg)
            raise UnbelievableException(errmsg)

        self._location = location
        self._timeout = timeout
        self._encoding = encoding
        self._content: Optional[str] = None

    @property
    def location(self) -> str:
        return self._location

    def is_set(self) -> bool:
        return True

    def get(self) -> str:
        return self._load()

    def read(self) -> str:
        return self._load()

    def _load(self) -> str:
        if self._content is None:
            self._content = self._fetch()
            _logger.debug(f"Cached contents of {self._location}")
        return self._content

    def _fetch(self) -> str:
        timeout = self._timeout if self._timeout is not None else _active_settings().url_timeout
        _logger.debug(f"Fetching {self._location} (timeout={timeout}s)")
        try:
            with urllib.request.urlopen(self._location, timeout=timeout) as response:
                data = response.read()
                charset = response.headers.get_content_charset()
            return data.decode(charset or self._encoding or _default_encoding())
        except (OSError, ValueError, LookupError, http.client.HTTPException) as e:
            errmsg = f"Failed to fetch {self._location}: {e}"
            _logger.error(errmsg)
            raise UnbelievableException(errmsg) from e

    def __repr__(self) -> str:
        return f"UrlConfiguration({self._location!r})"

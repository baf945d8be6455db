"""Location service used for redirects and canonical URL replacement."""

import logging
from dataclasses import dataclass, replace as dc_replace
from typing import List, Optional, Union
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Location:
    """Current application location."""
    pathname: str = "/"
    search: str = ""
    hash: str = ""

    @classmethod
    def parse(cls, path: str) -> "Location":
        parts = urlsplit(path)
        return cls(
            pathname=parts.path or "/",
            search=f"?{parts.query}" if parts.query else "",
            hash=f"#{parts.fragment}" if parts.fragment else "",
        )

    def href(self) -> str:
        return f"{self.pathname}{self.search}{self.hash}"


def strip_base_from_url(url: str, app_sub_url: str = "", origin: Optional[str] = None) -> str:
    """Remove the origin and application sub-path prefix from a URL.

    ``/grafana/d/abc`` with sub-path ``/grafana`` becomes ``/d/abc``. A prefix
    is stripped only on a segment boundary, so ``/grafanax/d`` is left alone.
    """
    if not url:
        return url

    sub_url = app_sub_url.rstrip("/")
    path = url

    if "://" in url:
        parts = urlsplit(url)
        url_origin = f"{parts.scheme}://{parts.netloc}"
        if origin is not None and url_origin != origin.rstrip("/"):
            return url
        path = url[len(url_origin):] or "/"

    if sub_url and path.startswith(sub_url):
        rest = path[len(sub_url):]
        if not rest or rest[0] in "/?#":
            return rest or "/"

    return path


class LocationService:
    """In-process location holder with history semantics.

    ``replace`` swaps the current entry without growing the history; ``push``
    appends a new entry.
    """

    def __init__(self, initial: Union[str, Location] = "/"):
        start = initial if isinstance(initial, Location) else Location.parse(initial)
        self._history: List[Location] = [start]

    def get_location(self) -> Location:
        return self._history[-1]

    @property
    def history(self) -> List[Location]:
        return list(self._history)

    def push(self, target: Union[str, Location]) -> None:
        self._history.append(self._coerce(target))

    def replace(self, target: Union[str, Location]) -> None:
        location = self._coerce(target)
        logger.debug(f"Replacing location {self._history[-1].href()} -> {location.href()}")
        self._history[-1] = location

    def replace_pathname(self, pathname: str) -> None:
        """Replace only the path, keeping query and hash of the current entry."""
        self.replace(dc_replace(self.get_location(), pathname=pathname))

    @staticmethod
    def _coerce(target: Union[str, Location]) -> Location:
        return target if isinstance(target, Location) else Location.parse(target)

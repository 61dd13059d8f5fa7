"""
Repository star counter.

Loads a repository's public page and reads the star counter out of the
markup. No API token is used, so nothing is rate limited or cached here:
every call is one GET.
"""

import math
from typing import Optional

import requests
from bs4 import BeautifulSoup
from bs4.exceptions import ParserRejectedMarkup

from models import DEFAULT_TIMEOUT, ErrorKind, StarGuardError


STARS_ELEMENT_ID = "repo-stars-counter-star"
THOUSANDS_SUFFIX = "k"


class Stargazer:
    """
    Fetch star counts from repository pages.

    Errors:
    - QUERY_FAILED: transport error, non-2xx status, unreadable body
    - METRIC_UNAVAILABLE: counter element missing or its text unparsable
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize stargazer.

        Args:
            timeout: Seconds to wait for each page
            session: requests.Session to reuse (optional)
        """
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            session.headers.update({
                "Accept": "text/html",
            })
        self.session = session

    def get_stars(self, repository_url: str) -> int:
        """
        Get the star count of a repository.

        Args:
            repository_url: Repository page URL, e.g. "https://github.com/pkg/errors"

        Returns:
            Star count

        Raises:
            StarGuardError: QUERY_FAILED or METRIC_UNAVAILABLE
        """
        content = self._load_html(repository_url)

        try:
            doc = BeautifulSoup(content, "html.parser")
        except ParserRejectedMarkup as e:
            raise StarGuardError(ErrorKind.QUERY_FAILED, repository_url, str(e)) from e

        # find() walks the tree depth first, in document order
        stars_element = doc.find(id=STARS_ELEMENT_ID)
        if stars_element is None:
            raise StarGuardError(
                ErrorKind.METRIC_UNAVAILABLE,
                repository_url,
                "could not find stars element in fetched HTML",
            )

        text = next(iter(stars_element.strings), "")
        try:
            return parse_star_count(text)
        except ValueError as e:
            raise StarGuardError(ErrorKind.METRIC_UNAVAILABLE, repository_url, str(e)) from e

    def _load_html(self, url: str) -> str:
        """
        Fetch page body.

        Args:
            url: Page URL

        Returns:
            Response body as text
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.text
        except requests.RequestException as e:
            raise StarGuardError(ErrorKind.QUERY_FAILED, url, str(e)) from e


def parse_star_count(text: str) -> int:
    """
    Normalize counter text to an integer.

    "950" -> 950, "1.2k" -> 1200, "3k" -> 3000. Fractions are truncated.

    Raises:
        ValueError: empty, non-numeric, non-finite or negative text
    """
    stars = text.strip()
    multiplier = 1
    if stars.endswith(THOUSANDS_SUFFIX):
        stars = stars[:-len(THOUSANDS_SUFFIX)]
        multiplier = 1000

    if not stars:
        raise ValueError(f"empty star count {text!r}")

    try:
        value = float(stars) * multiplier
    except ValueError:
        raise ValueError(f"invalid star count {text!r}") from None

    if not math.isfinite(value) or value < 0:
        raise ValueError(f"invalid star count {text!r}")

    # x.yk can land a hair below the integer in binary; round before truncating
    return int(round(value, 6))

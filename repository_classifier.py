"""
RepositoryClassifier - Decides which imports name a queryable repository.

Only github.com imports are in scope; everything else (standard library,
other hosts, vanity domains) is skipped without an issue.
"""

from typing import Optional


class RepositoryClassifier:
    """
    Maps an import path to its canonical `host/owner/repo` form.

    Sub-package segments are dropped, so `github.com/foo/bar/sub/pkg`
    and `github.com/foo/bar` both resolve to the same repository.
    """

    HOST = "github.com"

    def __init__(self, host: str = HOST):
        """
        Initialize classifier.

        Args:
            host: Hosting prefix an import must start with
        """
        self.host = host

    def classify(self, import_path: str) -> Optional[str]:
        """
        Classify an import path.

        Args:
            import_path: Import path as written in the source file

        Returns:
            Canonical repository path, or None if not applicable
        """
        path = import_path.strip()
        if not path.startswith(self.host):
            return None

        segments = path.split("/")
        # "github.company/x/y" starts with the prefix but is another host
        if segments[0] != self.host:
            return None

        if len(segments) < 3:
            return None

        owner, repo = segments[1], segments[2]
        if not owner or not repo:
            return None

        return "/".join((self.host, owner, repo))

    def repository_url(self, canonical: str) -> str:
        """Page URL for a canonical repository path."""
        return f"https://{canonical}"

"""
Star guard processor.

Drives the pipeline for each file and each import:
scan → classify → fetch stars → evaluate thresholds → Issue
"""

from typing import Callable, Iterable, List, Optional, Tuple

from models import (
    Configuration,
    ErrorKind,
    ImportReference,
    Issue,
    StarGuardError,
)
from repository_classifier import RepositoryClassifier
from threshold_evaluator import ThresholdEvaluator
from starguard.scanner import ImportScanner, scanner_for
from starguard.stargazer import Stargazer


Source = Tuple[str, Optional[bytes]]  # (file name, content or None if unreadable)
LogSink = Callable[[str], None]


class Processor:
    """
    Collects Issues for a list of files.

    Failures are contained where they happen:
    - unreadable / unparsable file → one line-0 Issue, next file
    - failed star lookup → one Issue at the import, next import

    Every occurrence of an import is looked up on its own; nothing is
    cached between imports or files.
    """

    def __init__(
        self,
        config: Configuration,
        stargazer: Optional[Stargazer] = None,
        classifier: Optional[RepositoryClassifier] = None,
        scanner_factory: Callable[[str], ImportScanner] = scanner_for,
        log: Optional[LogSink] = None,
    ):
        """
        Initialize processor.

        Args:
            config: Run configuration
            stargazer: Star fetcher (defaults to one using config.timeout)
            classifier: RepositoryClassifier instance
            scanner_factory: Picks the scanner for a file name
            log: Sink for progress messages (silent if None)
        """
        self.config = config
        self.stargazer = stargazer or Stargazer(timeout=config.timeout)
        self.classifier = classifier or RepositoryClassifier()
        self.evaluator = ThresholdEvaluator(config)
        self.scanner_factory = scanner_factory
        self.log = log

    def process_files(self, file_names: Iterable[str]) -> List[Issue]:
        """
        Read files from disk and process them.

        Args:
            file_names: Paths of files to lint

        Returns:
            Issues in file-then-import order
        """
        issues: List[Issue] = []
        for file_name in file_names:
            try:
                with open(file_name, "rb") as f:
                    data = f.read()
            except OSError as e:
                error = StarGuardError(ErrorKind.FILE_UNREADABLE, file_name, str(e))
                issues.append(Issue(file_name=file_name, line_number=0, reason=error.message))
                continue

            issues.extend(self.process_file(file_name, data))

        return issues

    def process(self, sources: Iterable[Source]) -> List[Issue]:
        """
        Process already loaded files.

        Args:
            sources: (file name, content) pairs in lint order

        Returns:
            Issues in file-then-import order
        """
        issues: List[Issue] = []
        for file_name, content in sources:
            issues.extend(self.process_file(file_name, content))
        return issues

    def process_file(self, file_name: str, content: Optional[bytes]) -> List[Issue]:
        """
        Process a single file.

        Args:
            file_name: File identifier
            content: File bytes, None if unreadable

        Returns:
            Issues for this file
        """
        scanner = self.scanner_factory(file_name)
        try:
            references = scanner.scan(file_name, content)
        except StarGuardError as e:
            self._log(f"[WARN] {e.message}")
            return [Issue(file_name=file_name, line_number=0, reason=e.message)]

        issues = []
        for reference in references:
            issue = self.check_import(reference)
            if issue:
                issues.append(issue)
        return issues

    def check_import(self, reference: ImportReference) -> Optional[Issue]:
        """
        Check one import against the thresholds.

        Args:
            reference: ImportReference from a scanner

        Returns:
            Issue, or None if the import is out of scope or popular enough
        """
        canonical = self.classifier.classify(reference.path)
        if canonical is None:
            return None

        url = self.classifier.repository_url(canonical)
        self._log(f"[INFO] {reference.path} -> {url}")

        try:
            stars = self.stargazer.get_stars(url)
        except StarGuardError as e:
            self._log(f"[WARN] {e.message}")
            return Issue(
                file_name=reference.file_name,
                line_number=reference.line,
                reason=e.message,
            )

        self._log(f"[INFO] {canonical}: {stars} stars")

        verdict = self.evaluator.evaluate(stars)
        if verdict is None:
            return None

        return Issue(
            file_name=reference.file_name,
            line_number=reference.line,
            reason=verdict.describe(reference.path),
            severity=verdict.severity,
        )

    def _log(self, message: str) -> None:
        if self.log:
            self.log(message)

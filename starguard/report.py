"""
Issue reporting: console lines and checkstyle XML.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, Iterable, List, TextIO, Union

from models import Issue, Severity


CHECKSTYLE_VERSION = "5.0"
SOURCE = "starguard"


def print_issues(issues: Iterable[Issue], out: TextIO) -> None:
    """Write one `file:line reason` line per issue."""
    for issue in issues:
        print(str(issue), file=out)


def checkstyle_xml(issues: Iterable[Issue]) -> str:
    """
    Render issues as a checkstyle document.

    Files appear in the order they were first reported.

    Args:
        issues: Issues from the processor

    Returns:
        Indented XML document with declaration
    """
    root = ET.Element("checkstyle", {"version": CHECKSTYLE_VERSION})
    files: Dict[str, ET.Element] = {}

    for issue in issues:
        file_element = files.get(issue.file_name)
        if file_element is None:
            file_element = ET.SubElement(root, "file", {"name": issue.file_name})
            files[issue.file_name] = file_element

        ET.SubElement(file_element, "error", {
            "line": str(issue.line_number),
            "column": "1",
            "severity": "warning" if issue.severity is Severity.WARN else "error",
            "message": issue.reason,
            "source": SOURCE,
        })

    ET.indent(root, space="  ")
    body = ET.tostring(root, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'


def write_checkstyle(path: Union[str, Path], issues: List[Issue]) -> None:
    """Write checkstyle XML to a file."""
    Path(path).write_text(checkstyle_xml(issues), encoding="utf-8")

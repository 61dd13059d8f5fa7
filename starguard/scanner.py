"""
Import scanners.

Turn one file's bytes into the ordered list of import references it
declares. Only the package clause and the import declarations of a Go
file are parsed; the rest of the file is never looked at.
"""

import os
import re
from abc import ABC, abstractmethod
from typing import List, Optional

from models import ErrorKind, ImportReference, StarGuardError


class ImportScanner(ABC):
    """Contract for scanners: bytes in, ordered (path, line) references out."""

    def scan(self, file_name: str, content: Optional[bytes]) -> List[ImportReference]:
        """
        Scan a file's content.

        Args:
            file_name: File identifier used in references and errors
            content: Raw file content, None if the file could not be read

        Returns:
            ImportReference list in file order

        Raises:
            StarGuardError: FILE_UNREADABLE or SYNTAX_INVALID
        """
        if content is None:
            raise StarGuardError(
                ErrorKind.FILE_UNREADABLE, file_name, "file content is not available"
            )

        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise StarGuardError(
                ErrorKind.SYNTAX_INVALID, file_name, f"{file_name}: invalid UTF-8 encoding ({e.reason})"
            ) from e

        return self.parse(file_name, text.lstrip("\ufeff"))

    @abstractmethod
    def parse(self, file_name: str, text: str) -> List[ImportReference]:
        """Parse decoded text into import references."""


class GoImportScanner(ImportScanner):
    """Scanner for Go source files."""

    def parse(self, file_name: str, text: str) -> List[ImportReference]:
        return _GoHeaderParser(file_name, text).parse()


# go.mod directive keyword; "(" may follow without a space
_DIRECTIVE = re.compile(r"(\w+)\s*(.*)")


class GoModScanner(ImportScanner):
    """
    Scanner for go.mod files.

    Reports the module path of every `require` directive, in single-line
    and block form. Other directives are skipped.
    """

    def parse(self, file_name: str, text: str) -> List[ImportReference]:
        references = []
        block = None  # directive of the open "( ... )" block
        block_line = 0

        for line_number, raw_line in enumerate(text.splitlines(), start=1):
            line = raw_line.split("//", 1)[0].strip()
            if not line:
                continue

            if block is not None:
                if line == ")":
                    block = None
                elif block == "require":
                    references.append(self._require(file_name, line, line_number))
                continue

            match = _DIRECTIVE.match(line)
            if match is None:
                continue
            directive, rest = match.group(1), match.group(2).strip()
            if rest == "(":
                block = directive
                block_line = line_number
            elif directive == "require" and "".join(rest.split()) != "()":
                references.append(self._require(file_name, rest, line_number))

        if block is not None:
            raise StarGuardError(
                ErrorKind.SYNTAX_INVALID,
                file_name,
                f"{file_name}:{block_line}: unterminated {block} block",
            )

        return references

    def _require(self, file_name: str, spec: str, line_number: int) -> ImportReference:
        fields = spec.split()
        if len(fields) < 2:
            raise StarGuardError(
                ErrorKind.SYNTAX_INVALID,
                file_name,
                f"{file_name}:{line_number}: usage: require module/path v1.2.3",
            )
        return ImportReference(
            path=fields[0].strip('"'),
            file_name=file_name,
            line=line_number,
        )


# Characters Go rejects inside an import path
_INVALID_PATH_CHARS = set("!\"#$%&'()*,:;<=>?[\\]^`{|}")

_SIMPLE_ESCAPES = {
    "a": "\a", "b": "\b", "f": "\f", "n": "\n", "r": "\r",
    "t": "\t", "v": "\v", "\\": "\\", "\"": "\"",
}
_HEX_ESCAPE_LENGTHS = {"x": 2, "u": 4, "U": 8}


class _GoHeaderParser:
    """Cursor over the package clause and import declarations of a Go file."""

    def __init__(self, file_name: str, text: str):
        self.file_name = file_name
        self.text = text
        self.pos = 0
        self.line = 1

    def parse(self) -> List[ImportReference]:
        self._skip_space()
        if not self._keyword("package"):
            self._fail(f"expected 'package', found {self._describe_next()}")

        self._skip_space()
        if not self._identifier():
            self._fail(f"expected package name, found {self._describe_next()}")
        self._skip_terminator()

        references = []
        while True:
            self._skip_space()
            if not self._keyword("import"):
                break

            self._skip_space()
            if self._peek() == "(":
                self._advance()
                references.extend(self._import_block())
            else:
                references.append(self._import_spec())
            self._skip_terminator()

        return references

    def _import_block(self) -> List[ImportReference]:
        start_line = self.line
        references = []
        while True:
            self._skip_space()
            while self._peek() == ";":
                self._advance()
                self._skip_space()

            char = self._peek()
            if char == ")":
                self._advance()
                return references
            if char == "":
                self._fail("unterminated import block", line=start_line)
            references.append(self._import_spec())

    def _import_spec(self) -> ImportReference:
        line = self.line
        char = self._peek()
        if char == ".":
            self._advance()
            self._skip_space()
        elif self._identifier():
            self._skip_space()

        if self._peek() not in ('"', "`"):
            self._fail(f"missing import path, found {self._describe_next()}")

        path = self._string()
        if not path:
            self._fail("empty import path", line=line)
        if any(not c.isprintable() or c.isspace() or c in _INVALID_PATH_CHARS for c in path):
            self._fail(f"invalid import path: {path}", line=line)

        return ImportReference(path=path, file_name=self.file_name, line=line)

    def _string(self) -> str:
        quote = self._advance()
        start_line = self.line
        chars = []
        while True:
            char = self._advance()
            if char == "":
                self._fail("string literal not terminated", line=start_line)
            if char == quote:
                return "".join(chars)
            if quote == '"':
                if char == "\n":
                    self._fail("string literal not terminated", line=start_line)
                if char == "\\":
                    char = self._escape(start_line)
            chars.append(char)

    def _escape(self, start_line: int) -> str:
        char = self._advance()
        if char in ("", "\n"):
            self._fail("string literal not terminated", line=start_line)
        if char in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[char]

        if char in "01234567":
            digits, length, base = char, 3, 8
        elif char in _HEX_ESCAPE_LENGTHS:
            digits, length, base = "", _HEX_ESCAPE_LENGTHS[char], 16
        else:
            self._fail(f"unknown escape sequence \\{char}")

        while len(digits) < length and self._peek():
            digits += self._advance()
        allowed = "01234567" if base == 8 else "0123456789abcdefABCDEF"
        if len(digits) != length or any(d not in allowed for d in digits):
            self._fail("illegal character in escape sequence")
        value = int(digits, base)

        if base == 8 and value > 0xFF:
            self._fail(f"octal escape value > 255: \\{digits}")
        if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
            self._fail("escape sequence is invalid Unicode code point")
        return chr(value)

    def _identifier(self) -> str:
        start = self.pos
        while self.pos < len(self.text) and _is_identifier_char(self.text[self.pos]):
            if self.pos == start and self.text[self.pos].isdigit():
                break
            self.pos += 1
        return self.text[start:self.pos]

    def _keyword(self, word: str) -> bool:
        end = self.pos + len(word)
        if not self.text.startswith(word, self.pos):
            return False
        if end < len(self.text) and _is_identifier_char(self.text[end]):
            return False
        self.pos = end
        return True

    def _skip_terminator(self) -> None:
        self._skip_space()
        if self._peek() == ";":
            self._advance()

    def _skip_space(self) -> None:
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if char.isspace():
                self._advance()
            elif self.text.startswith("//", self.pos):
                end = self.text.find("\n", self.pos)
                self.pos = len(self.text) if end == -1 else end
            elif self.text.startswith("/*", self.pos):
                start_line = self.line
                end = self.text.find("*/", self.pos + 2)
                if end == -1:
                    self._fail("comment not terminated", line=start_line)
                self.line += self.text.count("\n", self.pos, end)
                self.pos = end + 2
            else:
                return

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _advance(self) -> str:
        char = self._peek()
        if char:
            self.pos += 1
            if char == "\n":
                self.line += 1
        return char

    def _describe_next(self) -> str:
        if self.pos >= len(self.text):
            return "EOF"
        token = self.text[self.pos:].split(None, 1)[0]
        return f"'{token[:20]}'"

    def _fail(self, message: str, line: Optional[int] = None) -> None:
        raise StarGuardError(
            ErrorKind.SYNTAX_INVALID,
            self.file_name,
            f"{self.file_name}:{line or self.line}: {message}",
        )


def _is_identifier_char(char: str) -> bool:
    return char == "_" or char.isalnum()


GO_MOD_FILE = "go.mod"


def scanner_for(file_name: str) -> ImportScanner:
    """Pick the scanner for a file: go.mod files or Go source."""
    if os.path.basename(file_name) == GO_MOD_FILE:
        return GoModScanner()
    return GoImportScanner()

"""MSL Parser - MediaScrapeLang script parser"""

import re
import textwrap
from pathlib import Path
from typing import List, NamedTuple

from msl_core.errors import ParseError
from msl_core.types import (
    Attribute,
    Click,
    Command,
    Extensions,
    Media,
    MediaBlock,
    MediaFilter,
    MediaType,
    Open,
    Save,
    Script,
    Set,
    Split,
    Text,
    ValueExpr,
    Wait,
    Where,
)


class _Line(NamedTuple):
    number: int
    index: int
    indent: int
    text: str


QUOTED = r'"([^"]*)"'


class MSLParser:
    """
    Parser for MediaScrapeLang scripts.

    The language is line oriented: one command per line, and the body of a
    ``click`` is the run of lines indented exactly two more whitespace
    characters than the ``click`` itself. Parsing is all-or-nothing; the
    first line that cannot be consumed raises ParseError carrying the rest
    of the input.
    """

    INDENT_WIDTH = 2

    # Keyword dispatch order
    COMMANDS = ("open", "click", "set", "media", "save", "wait")
    MEDIA_TYPES = {media_type.value: media_type for media_type in MediaType}
    FILTERS = ("where", "extensions")

    OPEN_PATTERN = re.compile(rf'^open\s+{QUOTED}$')
    CLICK_PATTERN = re.compile(rf'^click\s+{QUOTED}$')
    SET_PATTERN = re.compile(r'^set\s+([^\s=]+)\s*=\s*(.+)$')
    SAVE_PATTERN = re.compile(rf'^save\s+to\s+{QUOTED}$')
    WAIT_PATTERN = re.compile(r'^wait(?:\s+(\S+))?$')
    ATTR_PATTERN = re.compile(rf'^attr\({QUOTED}\)$')
    SPLIT_PATTERN = re.compile(rf'^split\({QUOTED}\)(?:\.split\({QUOTED}\))?\[([^\]]*)\]$')
    WHERE_PATTERN = re.compile(rf'^where\s+([^\s~!=]+)\s*(~|!=|=)\s*{QUOTED}$')
    EXTENSIONS_PATTERN = re.compile(r'^extensions\s+(.+)$')
    EXTENSION_PATTERN = re.compile(r'^[^\s,]+$')

    def __init__(self):
        self.source_lines: List[str] = []
        self.lines: List[_Line] = []
        self.current = 0

    def parse(self, script: str) -> Script:
        """Parse MSL script text into a Script"""
        # Scripts embedded in indented strings parse like top-level files
        self.source_lines = textwrap.dedent(script).splitlines()
        self.lines = self._tokenize(self.source_lines)
        self.current = 0

        commands = self._parse_block(depth=0)

        if not self._at_end():
            line = self._peek()
            raise self._error(
                f"Unexpected indentation ({line.indent} whitespace characters) before '{line.text}'",
                line,
            )

        return Script(commands=commands)

    def parse_file(self, filepath: str) -> Script:
        """Parse MSL script from a UTF-8 file"""
        return self.parse(Path(filepath).read_text(encoding='utf-8'))

    def _tokenize(self, source_lines: List[str]) -> List[_Line]:
        """Split source into significant lines, dropping blanks and # comments"""
        lines = []
        for index, raw in enumerate(source_lines):
            text = raw.strip()
            if not text or text.startswith('#'):
                continue
            indent = len(raw) - len(raw.lstrip(' \t'))
            lines.append(_Line(number=index + 1, index=index, indent=indent, text=text))
        return lines

    def _at_end(self) -> bool:
        return self.current >= len(self.lines)

    def _peek(self) -> _Line:
        return self.lines[self.current]

    def _advance(self) -> _Line:
        line = self.lines[self.current]
        self.current += 1
        return line

    def _error(self, message: str, line: _Line) -> ParseError:
        remaining = "\n".join(self.source_lines[line.index:]).rstrip()
        return ParseError(message, remaining=remaining, line=line.number)

    def _parse_block(self, depth: int) -> List[Command]:
        """Parse consecutive commands indented for the given nesting depth"""
        expected = depth * self.INDENT_WIDTH
        commands = []

        while not self._at_end():
            line = self._peek()
            if line.indent != expected:
                break
            commands.append(self._parse_command(line, depth))

        return commands

    def _parse_command(self, line: _Line, depth: int) -> Command:
        keyword = line.text.split(None, 1)[0]

        for name in self.COMMANDS:
            if keyword == name:
                self._advance()
                return getattr(self, f"_parse_{name}")(line, depth)

        raise self._error(f"Unknown command '{keyword}'", line)

    def _parse_open(self, line: _Line, depth: int) -> Open:
        match = self.OPEN_PATTERN.match(line.text)
        if not match:
            raise self._error('Expected: open "<url>"', line)
        return Open(url=match.group(1))

    def _parse_click(self, line: _Line, depth: int) -> Click:
        match = self.CLICK_PATTERN.match(line.text)
        if not match:
            raise self._error('Expected: click "<selector>"', line)
        body = self._parse_block(depth + 1)
        return Click(selector=match.group(1), body=body)

    def _parse_set(self, line: _Line, depth: int) -> Set:
        match = self.SET_PATTERN.match(line.text)
        if not match:
            raise self._error('Expected: set <name> = <value>', line)
        value = self._parse_value(match.group(2).strip(), line)
        return Set(name=match.group(1), value=value)

    def _parse_value(self, expr: str, line: _Line) -> ValueExpr:
        if expr == "text":
            return Text()

        match = self.ATTR_PATTERN.match(expr)
        if match:
            return Attribute(name=match.group(1))

        match = self.SPLIT_PATTERN.match(expr)
        if match:
            first, second, index = match.groups()
            index = self._parse_int(index, default=-1)
            if second is None:
                return Split(delimiter=first, index=index)
            return Split(delimiter=second, index=index, source_delimiter=first)

        raise self._error(
            f"Unknown value expression '{expr}' (expected text, attr(\"name\") or split(\"d\").split(\"d\")[i])",
            line,
        )

    def _parse_media(self, line: _Line, depth: int) -> Media:
        if line.text != "media":
            raise self._error("'media' takes no arguments; list media types on the following lines", line)

        blocks: List[MediaBlock] = []

        while not self._at_end():
            sub = self._peek()
            if sub.indent <= line.indent:
                break

            word = sub.text.split(None, 1)[0]
            if word in self.MEDIA_TYPES:
                if sub.text != word:
                    raise self._error(f"Media type '{word}' takes no arguments", sub)
                blocks.append(MediaBlock(kind=self.MEDIA_TYPES[word]))
            elif word in self.FILTERS or word == "save":
                if not blocks:
                    raise self._error(f"'{word}' must follow a media type (image, video or audio)", sub)
                if word == "save":
                    blocks[-1].save_path = self._parse_save_path(sub)
                else:
                    blocks[-1].filters.append(self._parse_filter(sub))
            else:
                break

            self._advance()

        return Media(blocks=blocks)

    def _parse_filter(self, line: _Line) -> MediaFilter:
        if line.text.startswith("where"):
            match = self.WHERE_PATTERN.match(line.text)
            if not match:
                raise self._error('Expected: where <field> <~|=|!=> "<value>"', line)
            field, operator, value = match.groups()
            return Where(field=field, operator=operator, value=value)

        match = self.EXTENSIONS_PATTERN.match(line.text)
        if not match:
            raise self._error('Expected: extensions <ext>, <ext>, ...', line)

        extensions = []
        for part in match.group(1).split(','):
            ext = part.strip()
            if not self.EXTENSION_PATTERN.match(ext):
                raise self._error(f"Invalid extension list '{match.group(1)}'", line)
            if ext not in extensions:
                extensions.append(ext)
        return Extensions(extensions=extensions)

    def _parse_save_path(self, line: _Line) -> str:
        match = self.SAVE_PATTERN.match(line.text)
        if not match:
            raise self._error('Expected: save to "<path>"', line)
        return match.group(1)

    def _parse_save(self, line: _Line, depth: int) -> Save:
        return Save(path=self._parse_save_path(line))

    def _parse_wait(self, line: _Line, depth: int) -> Wait:
        match = self.WAIT_PATTERN.match(line.text)
        if not match:
            raise self._error('Expected: wait <seconds>', line)
        # Invalid durations fall back to one second
        return Wait(seconds=self._parse_int(match.group(1) or "", default=1, minimum=0))

    @staticmethod
    def _parse_int(text: str, default: int, minimum: int = None) -> int:
        try:
            value = int(text.strip())
        except ValueError:
            return default
        if minimum is not None and value < minimum:
            return default
        return value


def parse_script(script: str) -> Script:
    """Parse MSL script text with a fresh parser"""
    return MSLParser().parse(script)

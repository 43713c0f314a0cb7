"""
Idempotent text patching for generated source files.

A patch is an ordered list of PatchRule objects applied to the full text of a
file. Each rule pairs a transform with a predicate that detects the rule's own
prior effect, so running the same rules again leaves the text unchanged.

Rules locate their insertion points with regular expressions over the raw
text. When an anchor is not found the rule leaves the text as is; this is
logged at DEBUG and is not an error.
"""

import pathlib
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator

from nx_quasar_build.utils import logger

LOG = logger(__file__)

_PLUGINS_RE = re.compile(r"(plugins:\s*)\[")
_BRACKET_PAIRS = {"(": ")", "[": "]", "{": "}"}
_QUOTES = "'\"`"
_CLOSING_BRACKETS = set(_BRACKET_PAIRS.values())


@dataclass(frozen=True)
class PatchRule:
    """
    A single guarded find/replace step.

    Attributes:
        name: Short identifier used in log output.
        transform: Function mapping the current text to the patched text.
        is_applied: Predicate that is true when the rule's effect is already
            present. Unguarded rules always report False and rely on their
            trigger pattern not matching once applied.
    """

    name: str
    transform: Callable[[str], str]
    is_applied: Callable[[str], bool] = field(default=lambda _: False)

    @classmethod
    def guarded(
        cls, name: str, marker: str, transform: Callable[[str], str]
    ) -> "PatchRule":
        """Create a rule that is skipped when marker already occurs in the text."""
        if not marker:
            raise ValueError(f"Guarded rule requires a marker: {name}")
        return cls(name, transform, lambda text: marker in text)

    @classmethod
    def unguarded(cls, name: str, transform: Callable[[str], str]) -> "PatchRule":
        return cls(name, transform)

    def apply(self, text: str) -> str:
        if self.is_applied(text):
            LOG.debug("Rule already applied - rule:%s", self.name)
            return text
        patched = self.transform(text)
        if patched == text:
            LOG.debug("Rule anchor not found - rule:%s", self.name)
        return patched


def apply_rules(text: str, rules: Iterable[PatchRule]) -> str:
    """Apply rules in order, each seeing the output of the previous one."""
    for rule in rules:
        text = rule.apply(text)
    return text


def patch_file(path: pathlib.Path, rules: Iterable[PatchRule]) -> bool:
    """
    Read a file, apply rules and write it back if the text changed.

    Args:
        path: File to patch.
        rules: Ordered patch rules.

    Returns:
        True if the file exists and was patched (or already up to date),
        False if it does not exist.
    """
    if not path.is_file():
        LOG.error(f"File not found: {path}")
        return False
    content = path.read_text(encoding="utf-8")
    patched = apply_rules(content, rules)
    if patched != content:
        path.write_text(patched, encoding="utf-8")
        LOG.debug("Patched file: %s", path)
    else:
        LOG.debug("File already up to date: %s", path)
    return True


def write_once(path: pathlib.Path, content: str) -> bool:
    """
    Create a file with content unless it already exists.

    Returns:
        True if the file was created.
    """
    if path.exists():
        LOG.debug("File exists, skipping: %s", path)
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return True


def insert_after(pattern: str, lines: Iterable[str]) -> Callable[[str], str]:
    """
    Build a transform inserting lines directly after the first pattern match.
    """
    regex = re.compile(pattern)
    insert = "".join("\n" + line for line in lines)
    return lambda text: regex.sub(lambda m: m.group(0) + insert, text, count=1)


def insert_before(pattern: str, lines: Iterable[str]) -> Callable[[str], str]:
    """
    Build a transform inserting lines directly before the first pattern match.
    """
    regex = re.compile(pattern)
    insert = "".join(line + "\n" for line in lines)
    return lambda text: regex.sub(lambda m: insert + m.group(0), text, count=1)


def replace_all(pattern: str, replacement: str) -> Callable[[str], str]:
    """Build a transform replacing every pattern match with literal text."""
    regex = re.compile(pattern)
    return lambda text: regex.sub(lambda _: replacement, text)


def append_plugin(
    entry: str, entry_indent: str = " " * 4, close_indent: str = " " * 2
) -> Callable[[str], str]:
    """
    Build a transform appending an entry to the `plugins: [...]` array.

    The existing top level entries are trimmed, re-indented one per line and
    followed by the new entry. Text without a balanced plugins array is
    returned unchanged.
    """

    def _transform(text: str) -> str:
        m = _PLUGINS_RE.search(text)
        if not m:
            return text
        start = m.end() - 1
        end = _closing_index(text, start)
        if end is None:
            return text
        entries = [
            entry_indent + e for e in _split_top_level(text[start + 1 : end]) if e
        ]
        entries.append(entry)
        body = ",\n".join(entries)
        return f"{text[: m.start()]}{m.group(1)}[\n{body}\n{close_indent}]{text[end + 1 :]}"

    return _transform


def _code_chars(text: str, start: int = 0) -> Iterator[tuple[int, str]]:
    """
    Yield (index, char) for characters outside string literals and comments.

    Handles quoted strings with backslash escapes, `//` line comments and
    `/* */` block comments. An unterminated string or block comment ends
    the scan.
    """
    idx = start
    length = len(text)
    while idx < length:
        c = text[idx]
        if c in _QUOTES:
            idx += 1
            while idx < length and text[idx] != c:
                idx += 2 if text[idx] == "\\" else 1
            if idx >= length:
                return
        elif text.startswith("//", idx):
            idx = text.find("\n", idx)
            if idx < 0:
                return
            continue
        elif text.startswith("/*", idx):
            end = text.find("*/", idx + 2)
            if end < 0:
                return
            idx = end + 2
            continue
        else:
            yield idx, c
        idx += 1


def _closing_index(text: str, start: int) -> int | None:
    """
    Find the index of the bracket closing the one at start.

    Returns None when the bracket is never closed.
    """
    stack: list[str] = []
    for idx, c in _code_chars(text, start):
        if c in _BRACKET_PAIRS:
            stack.append(_BRACKET_PAIRS[c])
        elif stack and c == stack[-1]:
            stack.pop()
            if not stack:
                return idx
    return None


def _split_top_level(text: str) -> list[str]:
    """Split on commas that are not nested in brackets, strings or comments, stripping each part."""
    parts: list[str] = []
    depth = 0
    last = 0
    for idx, c in _code_chars(text):
        if c in _BRACKET_PAIRS:
            depth += 1
        elif c in _CLOSING_BRACKETS:
            depth -= 1
        elif c == "," and depth == 0:
            parts.append(text[last:idx].strip())
            last = idx + 1
    parts.append(text[last:].strip())
    return parts

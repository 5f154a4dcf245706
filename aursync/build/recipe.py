"""
Recipe Module - Structured reader/writer for PKGBUILD top-level fields

A PKGBUILD is split into blocks. A field block is a top-level assignment
starting at column 0 (``name=value``); a bash array value that spans several
lines stays in one block. Everything else (comments, functions, indented
lines) is kept as raw text. Rewriting a field replaces only its block, so
the serialized recipe is byte-identical outside the managed fields.
"""

import re
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from aursync.common.errors import RecipeError
from aursync.release.version_gate import strip_version_prefix

logger = logging.getLogger(__name__)

FIELD_RE = re.compile(r'^([A-Za-z_][A-Za-z0-9_]*)=(.*)$')
QUOTED_RE = re.compile(r'"(?:\\.|[^"\\])*"|\'[^\']*\'')
# bash starts a comment only at a word boundary: `url#fragment` is one word
COMMENT_RE = re.compile(r'(^|\s)#.*')

VERSION_FIELD = "pkgver"
CHECKSUM_FIELD = "sha256sums"
RELEASE_FIELD = "pkgrel"


@dataclass
class _Block:
    name: Optional[str]
    text: str


def _paren_depth(text: str) -> int:
    unquoted = COMMENT_RE.sub('', QUOTED_RE.sub('', text))
    return unquoted.count('(') - unquoted.count(')')


class Recipe:
    """Parsed PKGBUILD"""

    def __init__(self, blocks: List[_Block]):
        self._blocks = blocks

    @classmethod
    def from_text(cls, text: str) -> 'Recipe':
        blocks: List[_Block] = []
        lines = text.splitlines(keepends=True)
        i = 0
        while i < len(lines):
            line = lines[i]
            match = FIELD_RE.match(line.rstrip('\r\n'))
            if not match:
                blocks.append(_Block(None, line))
                i += 1
                continue

            name, value = match.group(1), match.group(2)
            chunk = [line]
            depth = _paren_depth(value) if value.startswith('(') else 0
            i += 1
            while depth > 0 and i < len(lines):
                chunk.append(lines[i])
                depth += _paren_depth(lines[i])
                i += 1
            blocks.append(_Block(name, ''.join(chunk)))

        return cls(blocks)

    @classmethod
    def from_file(cls, path: Path) -> 'Recipe':
        try:
            with open(path, 'r', encoding='utf-8', newline='') as f:
                return cls.from_text(f.read())
        except OSError as e:
            raise RecipeError(f"cannot read {path}: {e}") from e

    def fields(self) -> List[str]:
        return [block.name for block in self._blocks if block.name]

    def get(self, name: str) -> Optional[str]:
        """Raw value of the first assignment of name, without the trailing newline"""
        for block in self._blocks:
            if block.name == name:
                return block.text.split('=', 1)[1].rstrip('\r\n')
        return None

    def set(self, name: str, value: str):
        """
        Replace every top-level assignment of name.

        Raises:
            RecipeError: if the recipe has no such field
        """
        found = False
        for block in self._blocks:
            if block.name != name:
                continue
            stripped = block.text.rstrip('\r\n')
            ending = block.text[len(stripped):]
            block.text = f"{name}={value}{ending}"
            found = True

        if not found:
            raise RecipeError(f"{name} not found in PKGBUILD")

    def apply_release(self, tag: str, sha256: str):
        """Point the recipe at a new upstream release and reset pkgrel"""
        self.set(VERSION_FIELD, strip_version_prefix(tag))
        self.set(CHECKSUM_FIELD, f"('{sha256}')")
        self.set(RELEASE_FIELD, "1")

    def to_text(self) -> str:
        return ''.join(block.text for block in self._blocks)

    def save(self, path: Path):
        with open(path, 'w', encoding='utf-8', newline='') as f:
            f.write(self.to_text())


def update_recipe_file(path: Path, tag: str, sha256: str) -> Recipe:
    """Rewrite pkgver, sha256sums and pkgrel of the PKGBUILD at path in place"""
    recipe = Recipe.from_file(path)
    old_version = recipe.get(VERSION_FIELD)
    recipe.apply_release(tag, sha256)
    recipe.save(path)
    logger.info(f"Updated PKGBUILD: pkgver {old_version} -> {recipe.get(VERSION_FIELD)}, pkgrel=1")
    return recipe

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Split a SKILL.md document into its front-matter header and markdown body."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import aiofiles
import frontmatter
import yaml

from mhskills.core.exceptions import FrontmatterError
from mhskills.models.skill import Frontmatter

DELIMITER = "---"

_yaml_handler = frontmatter.YAMLHandler()


def _is_delimiter(line: str) -> bool:
    return line.rstrip("\r") == DELIMITER


def _str_field(data: dict[str, Any], key: str) -> str:
    """Coerce a scalar header value to str; ``None``/missing become ``""``."""
    val = data.get(key)
    if val is None:
        return ""
    if isinstance(val, (dict, list)):
        raise FrontmatterError(f"front-matter field '{key}' must be a string")
    return str(val)


def _load_header(text: str) -> Frontmatter:
    try:
        data = _yaml_handler.load(text)
    except yaml.YAMLError as exc:
        raise FrontmatterError(f"invalid front-matter: {exc}") from exc

    if data is None:
        return Frontmatter()
    if not isinstance(data, dict):
        raise FrontmatterError(
            f"invalid front-matter: expected a mapping, got {type(data).__name__}"
        )

    metadata = data.get("metadata")
    return Frontmatter(
        name=_str_field(data, "name"),
        description=_str_field(data, "description"),
        metadata=dict(metadata) if isinstance(metadata, dict) else {},
    )


def parse_frontmatter(content: str) -> tuple[Frontmatter, str]:
    """Extract the YAML front matter from *content*.

    Returns
    -------
    tuple[Frontmatter, str]
        The parsed header and the remaining body.  A document without a
        header, or whose header is opened but never closed, yields an empty
        :class:`Frontmatter` and the full input unchanged.

    Raises
    ------
    FrontmatterError
        If a closed header cannot be parsed as a YAML mapping.
    """
    if not content.startswith(DELIMITER):
        return Frontmatter(), content

    header_lines: list[str] = []
    body_lines: list[str] = []
    in_header = False
    closed = False

    for line in content.split("\n"):
        if not in_header:
            if _is_delimiter(line):
                in_header = True
                continue
            body_lines.append(line)
        elif not closed:
            if _is_delimiter(line):
                closed = True
                continue
            header_lines.append(line)
        else:
            body_lines.append(line)

    if not closed:
        return Frontmatter(), content

    fm = _load_header("\n".join(header_lines))
    return fm, "\n".join(body_lines)


async def read_skill_frontmatter(path: Path) -> tuple[Frontmatter, str]:
    """Read a SKILL.md from disk and return its front matter and raw content."""
    try:
        async with aiofiles.open(path, encoding="utf-8") as fh:
            content = await fh.read()
    except OSError as exc:
        raise FrontmatterError(f"cannot read {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise FrontmatterError(f"{path} is not valid UTF-8: {exc}") from exc

    fm, _ = parse_frontmatter(content)
    return fm, content

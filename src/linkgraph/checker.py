"""Offline integrity check for internal links in the content collection.

Every markdown link is resolved with the same rules the backlink index and
graph use; any internal target that is neither a post nor an asset under the
content root is reported as broken.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .config import CONTENT_EXTENSIONS, INDEX_SUFFIX
from .models import BrokenLink, LinkCheckReport
from .parser import is_external, iter_markdown_links, post_id_for, resolve_link_to_id
from .parser.links import strip_fragment

log = logging.getLogger(__name__)


def collect_known_ids(content_root: Path) -> set[str]:
    """Identifiers a link may legitimately point at.

    Includes every file's relative path (so "img/cover.webp" resolves) and,
    for posts, the path without extension.
    """
    known: set[str] = set()
    for path in content_root.rglob("*"):
        if not path.is_file():
            continue
        known.add(path.relative_to(content_root).as_posix())
        if path.suffix in CONTENT_EXTENSIONS:
            known.add(post_id_for(path, content_root))
    return known


def _target_exists(target_id: str, known_ids: set[str]) -> bool:
    return target_id in known_ids or f"{target_id}{INDEX_SUFFIX}" in known_ids


def check_file(path: Path, content_root: Path, known_ids: set[str]) -> tuple[int, list[BrokenLink]]:
    """Check the links of a single post file.

    Returns:
        Tuple of (internal links checked, broken links found).
    """
    source_id = post_id_for(path, content_root)
    content = path.read_text(encoding="utf-8")

    checked = 0
    broken: list[BrokenLink] = []
    for link in iter_markdown_links(content, strict=True):
        url = strip_fragment(link.href)
        if not url or is_external(url):
            continue

        target_id = resolve_link_to_id(url, source_id)
        if target_id is None:
            continue

        checked += 1
        if _target_exists(target_id, known_ids):
            continue

        log.debug("Broken link in %s: %s -> %s", source_id, link.text, target_id)
        broken.append(BrokenLink(source_id=source_id, link=link.text, target_id=target_id))

    return checked, broken


def check_links(content_root: Path) -> LinkCheckReport:
    """Check every internal link of every post under content_root.

    Args:
        content_root: Root directory of the blog collection.

    Returns:
        LinkCheckReport listing broken links in file order.
    """
    known_ids = collect_known_ids(content_root)
    report = LinkCheckReport()

    for path in sorted(content_root.rglob("*")):
        if not path.is_file() or path.suffix not in CONTENT_EXTENSIONS:
            continue
        try:
            checked, broken = check_file(path, content_root, known_ids)
        except (OSError, UnicodeDecodeError) as e:
            log.warning("Could not read %s: %s", path, e)
            continue

        report.files_checked += 1
        report.links_checked += checked
        report.broken.extend(broken)

    log.info(
        "Checked %d links in %d files: %d broken",
        report.links_checked,
        report.files_checked,
        len(report.broken),
    )
    return report

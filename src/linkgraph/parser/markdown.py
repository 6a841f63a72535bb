"""Post parsing with YAML frontmatter support."""

from pathlib import Path

import frontmatter
from pydantic import ValidationError

from ..models import Post, PostMetadata


class ParseError(Exception):
    """Raised when a post cannot be parsed."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


def post_id_for(path: Path, content_root: Path) -> str:
    """Identifier for a content file: POSIX relative path, no extension."""
    return path.relative_to(content_root).with_suffix("").as_posix()


def parse_post(path: Path, content_root: Path) -> Post:
    """Parse a markdown/MDX file with YAML frontmatter.

    Args:
        path: Path to the content file.
        content_root: Collection root the identifier is relative to.

    Returns:
        Post with raw body (frontmatter removed) and validated metadata.

    Raises:
        ParseError: If the file cannot be read or has invalid frontmatter.
    """
    if not path.is_file():
        raise ParseError(path, "Path is not a file")

    try:
        post = frontmatter.load(str(path))
    except Exception as e:
        raise ParseError(path, f"Failed to parse frontmatter: {e}") from e

    if not post.metadata:
        raise ParseError(path, "Missing frontmatter (YAML block required at start of file)")

    try:
        metadata = PostMetadata.model_validate(post.metadata)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            errors.append(f"  - {loc}: {error['msg']}")
        raise ParseError(path, "Invalid frontmatter:\n" + "\n".join(errors)) from e

    return Post(id=post_id_for(path, content_root), body=post.content, data=metadata)

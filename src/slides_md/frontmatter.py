"""
Frontmatter Extraction

Strips an optional YAML block delimited by ``---`` lines from the top of a
document. Anything that does not parse cleanly is treated as ordinary slide
content, so extraction never fails the pipeline.
"""

from typing import Any, Optional, Tuple

import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

DELIMITER = "---"

# Plain scalars with these tags stay strings, so `title: Yes` or `title: 010`
# reads as written rather than as a YAML 1.1 bool or octal.
LITERAL_SCALAR_TAGS = frozenset({
    "tag:yaml.org,2002:bool",
    "tag:yaml.org,2002:int",
    "tag:yaml.org,2002:float",
    "tag:yaml.org,2002:timestamp",
})


class FrontmatterLoader(yaml.SafeLoader):
    """SafeLoader that only resolves null among the implicit scalar types."""


FrontmatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in LITERAL_SCALAR_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class Frontmatter(BaseModel):
    """Recognized frontmatter keys. Unknown keys are ignored."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    title: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def coerce_scalar_title(cls, v: Any) -> Any:
        if v is not None and not isinstance(v, (str, dict, list)):
            return str(v)
        return v


def split_frontmatter(document: str) -> Optional[Tuple[str, str]]:
    """Return (frontmatter text, body) when the document opens with a closed block."""
    lines = document.strip().split("\n")
    if lines[0] != DELIMITER:
        return None

    for index in range(1, len(lines)):
        if lines[index] == DELIMITER:
            return "\n".join(lines[1:index]), "\n".join(lines[index + 1:])
    return None


def extract_frontmatter(document: str) -> Tuple[Optional[str], str]:
    """Extract the deck title and the remaining body.

    Returns (None, document) unchanged when there is no frontmatter block,
    the block is never closed, or its content is not a YAML mapping.
    """
    split = split_frontmatter(document)
    if split is None:
        return None, document

    text, body = split
    try:
        data = yaml.load(text, Loader=FrontmatterLoader)
    except yaml.YAMLError as exc:
        logger.debug("Ignoring frontmatter that is not valid YAML: {}", exc)
        return None, document

    if data is None:
        data = {}
    if not isinstance(data, dict):
        logger.debug("Ignoring frontmatter that is not a mapping ({})", type(data).__name__)
        return None, document

    try:
        frontmatter = Frontmatter.model_validate(data)
    except ValidationError as exc:
        logger.debug("Ignoring frontmatter with invalid fields: {}", exc)
        return None, document

    return frontmatter.title, body

"""Front matter records for generated Markdown documents."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

import yaml


@dataclass
class FrontMatter:
    """Metadata block written at the top of every generated post.

    Field order is the order keys appear in the YAML output.
    """
    date: str
    title: str
    description: str
    toot_url: str
    categories: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def dump_front_matter(front_matter: FrontMatter) -> str:
    """Serialise front matter to YAML without the ``---`` delimiters.

    Lines are never folded, however long the title or description.
    """
    text = yaml.safe_dump(
        front_matter.to_dict(),
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
        width=float("inf"),
    )
    return text.rstrip()

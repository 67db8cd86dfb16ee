"""Content creator for turning archived statuses into Markdown posts."""

import re
from typing import Dict, List, Optional

from markdownify import markdownify as md_convert

from fedi_archiver.core.models import ValidationError
from fedi_archiver.core.status import Status, parse_absolute_url
from fedi_archiver.transforms.frontmatter import FrontMatter, dump_front_matter
from fedi_archiver.transforms.segmenter import (
    SentenceSegmenter,
    WordSegmenter,
    take_sentences,
    take_words,
)
from fedi_archiver.transforms.tags import TagReplacer

ELLIPSIS = "…"
LINK_BACK_TEXT = "Original post on the Fediverse"


class ContentCreator:
    """Creates Markdown content and front matter from a raw status.

    Handles:
    - HTML to Markdown conversion
    - Removal of hashtag links the server embeds in the body
    - Title and description extraction
    - Tag replacement for the front matter
    """

    # Trailing horizontal whitespace on a line
    TRAILING_SPACE_PATTERN = re.compile(r'[^\S\r\n]+$', re.MULTILINE)

    # Markdown link whose text is a hashtag: [#tag](https://host/tags/tag)
    HASHTAG_LINK_PATTERN = re.compile(r'\[\\?#[^\]]*\]\([^)]*\)')

    # Three or more newlines, i.e. more than one blank line
    EXTRA_NEWLINES_PATTERN = re.compile(r'\n{3,}')

    def __init__(
        self,
        tag_replacer: Optional[TagReplacer] = None,
        locale: str = "en",
        title_word_count: int = 10,
        description_sentence_count: int = 2,
    ):
        """Initialize ContentCreator.

        Args:
            tag_replacer: Optional mapping applied to the front matter tags
            locale: Locale for word and sentence segmentation
            title_word_count: Number of words used for titles
            description_sentence_count: Number of sentences used for descriptions
        """
        self.tag_replacer = tag_replacer
        self.word_segmenter = WordSegmenter(locale)
        self.sentence_segmenter = SentenceSegmenter(locale)
        self.title_word_count = title_word_count
        self.description_sentence_count = description_sentence_count
        self.content_cache: Dict[str, str] = {}

    def convert_content(self, html_content: str) -> str:
        """Convert the HTML content of a status to Markdown.

        Raises:
            ValidationError: If html_content is not a non-empty string
        """
        if not isinstance(html_content, str):
            raise ValidationError("The htmlContent parameter must be a string.")

        if len(html_content) == 0:
            raise ValidationError("The htmlContent parameter cannot be a zero length string.")

        markdown = md_convert(html_content, heading_style="ATX")
        markdown = self.HASHTAG_LINK_PATTERN.sub("", markdown)
        return self.TRAILING_SPACE_PATTERN.sub("", markdown).strip()

    def make_markdown_content(self, status: Status) -> str:
        """Get the Markdown body of a status, converting it once per status id.

        Raises:
            ValidationError: If the status has no content or id
        """
        if not isinstance(status, dict):
            raise ValidationError("The status parameter must be an object")

        content = status.get("content")
        if not isinstance(content, str) or not content:
            raise ValidationError("The status.content property must be a non-empty string")

        status_id = status.get("id")
        if status_id is None or status_id == "":
            raise ValidationError("The status.id property is required")

        status_id = str(status_id)
        if status_id in self.content_cache:
            return self.content_cache[status_id]

        markdown = self.convert_content(content)
        markdown = self.EXTRA_NEWLINES_PATTERN.sub("\n\n", markdown).strip()

        self.content_cache[status_id] = markdown
        return markdown

    @staticmethod
    def _flatten(markdown_content: str) -> str:
        text = markdown_content.replace("\n", " ")
        return re.sub(r' {2,}', ' ', text)

    def make_title(self, markdown_content: str) -> str:
        """Build a title from the first words of the content."""
        if not isinstance(markdown_content, str):
            raise ValidationError("The markdownContent parameter must be a string.")

        text = self._flatten(markdown_content)
        title = take_words(self.word_segmenter, text, self.title_word_count)
        return title + ELLIPSIS

    def make_description(self, markdown_content: str) -> str:
        """Build a description from the first sentences of the content.

        The final sentence loses its terminal punctuation to the ellipsis.
        """
        if not isinstance(markdown_content, str):
            raise ValidationError("The markdownContent parameter must be a string.")

        text = self._flatten(markdown_content)
        description = take_sentences(
            self.sentence_segmenter, text, self.description_sentence_count
        ).strip()
        return description[:-1] + ELLIPSIS

    def make_front_matter(self, status: Status, categories: Optional[List[str]] = None) -> str:
        """Build the YAML front matter for a status.

        Args:
            status: Raw status record
            categories: Categories to list verbatim

        Returns:
            YAML text without the ``---`` delimiters

        Raises:
            ValidationError: If status or categories are malformed
        """
        if not isinstance(status, dict):
            raise ValidationError("The status parameter must be an object")

        for key in ("created_at", "url"):
            if key not in status:
                raise ValidationError(f"The status.{key} property is required")

        if not isinstance(status.get("tags"), list):
            raise ValidationError("The status.tags property must be an array")

        if categories is None:
            categories = []

        if not isinstance(categories, list):
            raise ValidationError("The categories parameter must be an array")

        markdown = self.make_markdown_content(status)

        tags = [tag["name"] for tag in status["tags"]]
        if self.tag_replacer:
            tags = self.tag_replacer.replace_tags(tags)

        front_matter = FrontMatter(
            date=status["created_at"],
            title=self.make_title(markdown),
            description=self.make_description(markdown),
            toot_url=status["url"],
            categories=list(categories),
            tags=tags,
        )
        return dump_front_matter(front_matter)

    def make_link_back(self, url: str) -> str:
        """Build a Markdown link back to the original post.

        Raises:
            ValidationError: If url is not an absolute URL
        """
        parse_absolute_url(url)
        return f"[{LINK_BACK_TEXT}]({url})"

    def build_document(self, status: Status, categories: Optional[List[str]] = None) -> str:
        """Assemble a complete Markdown document for a status.

        Layout: front matter between ``---`` lines, a blank line, the body,
        a blank line, the link back and a trailing newline.
        """
        parts = [
            "---",
            self.make_front_matter(status, categories),
            "---",
            "",
            self.make_markdown_content(status),
            "",
            self.make_link_back(status["url"]),
        ]
        return "\n".join(parts) + "\n"

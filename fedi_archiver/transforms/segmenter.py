"""Locale-aware word and sentence segmentation backed by ICU.

Both segmenters split text into consecutive segments whose concatenation is
the original text. Word segments carry ICU's word-like status, so numbers
such as ``3,000``, contractions such as ``There's`` and dictionary-split
CJK words each count as one word while spaces and punctuation do not.
"""

from dataclasses import dataclass
from typing import Iterator, List

from icu import BreakIterator, Locale, UnicodeString

# UBRK_WORD_NONE_LIMIT: rule statuses at or above this mark a word-like segment
WORD_NONE_LIMIT = 100


@dataclass(frozen=True)
class Segment:
    """One piece of segmented text."""
    segment: str
    index: int
    is_word_like: bool = False


class _IcuSegmenter:
    def __init__(self, locale: str = "en"):
        if not isinstance(locale, str) or not locale:
            raise ValueError("A segmenter locale is required")
        self.locale = locale
        self._icu_locale = Locale(locale)

    def _create_iterator(self) -> BreakIterator:
        raise NotImplementedError

    def segment(self, text: str) -> Iterator[Segment]:
        # ICU offsets are UTF-16 code units, so slice the ICU string itself
        ustr = UnicodeString(text)
        iterator = self._create_iterator()
        iterator.setText(ustr)

        start = iterator.first()
        index = 0
        for end in iterator:
            piece = str(ustr[start:end])
            yield Segment(
                segment=piece,
                index=index,
                is_word_like=self._is_word_like(iterator),
            )
            index += len(piece)
            start = end

    def _is_word_like(self, iterator: BreakIterator) -> bool:
        return False


class WordSegmenter(_IcuSegmenter):
    """Splits text into word-like and non-word segments."""

    def _create_iterator(self) -> BreakIterator:
        return BreakIterator.createWordInstance(self._icu_locale)

    def _is_word_like(self, iterator: BreakIterator) -> bool:
        return iterator.getRuleStatus() >= WORD_NONE_LIMIT


class SentenceSegmenter(_IcuSegmenter):
    """Splits text into sentences, each keeping its trailing whitespace."""

    def _create_iterator(self) -> BreakIterator:
        return BreakIterator.createSentenceInstance(self._icu_locale)


def take_words(segmenter: WordSegmenter, text: str, budget: int) -> str:
    """Concatenate segments up to and including the ``budget``-th word."""
    pieces: List[str] = []
    words = 0
    for seg in segmenter.segment(text):
        pieces.append(seg.segment)
        if seg.is_word_like:
            words += 1
            if words >= budget:
                break
    return "".join(pieces)


def take_sentences(segmenter: SentenceSegmenter, text: str, budget: int) -> str:
    """Concatenate the first ``budget`` sentences."""
    pieces: List[str] = []
    for seg in segmenter.segment(text):
        if len(pieces) >= budget:
            break
        pieces.append(seg.segment)
    return "".join(pieces)

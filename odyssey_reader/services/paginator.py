import logging
from dataclasses import dataclass
from typing import List, Sequence, Union

from odyssey_reader.core.errors import PageOutOfRange
from odyssey_reader.services.preferences import PreferenceStore
from odyssey_reader.services.source import Segment
from odyssey_reader.utils.text_utils import split_words

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Page:
    book_title: str
    book_number: Union[int, str]
    text: str
    number: int  # global, 1-based, contigu sur tous les livres


def paginate(segments: Sequence[Segment], words_per_page: int) -> List[Page]:
    """
    Découpe chaque livre en pages de `words_per_page` mots (la dernière page
    d'un livre peut être plus courte). La numérotation continue d'un livre
    à l'autre.
    """
    if words_per_page <= 0:
        raise ValueError("words_per_page must be > 0")

    pages: List[Page] = []
    for seg in segments:
        words = split_words(seg.text)
        for i in range(0, len(words), words_per_page):
            pages.append(
                Page(
                    book_title=f"Book {seg.book}",
                    book_number=seg.book,
                    text=" ".join(words[i:i + words_per_page]),
                    number=len(pages) + 1,
                )
            )
    return pages


class Paginator:
    """
    Page courante + navigation. Chaque déplacement réussi est persisté
    (READING_POSITION) pour reprendre la lecture à la session suivante.
    """

    def __init__(self, pages: List[Page], store: PreferenceStore):
        if not pages:
            raise ValueError("cannot paginate an empty source")
        self._pages = pages
        self._store = store
        self._current = self._restore_position()

    @property
    def pages(self) -> List[Page]:
        return self._pages

    @property
    def total_pages(self) -> int:
        return len(self._pages)

    @property
    def current_number(self) -> int:
        return self._current

    @property
    def current(self) -> Page:
        return self._pages[self._current - 1]

    def page(self, number: int) -> Page:
        if not 1 <= number <= self.total_pages:
            raise PageOutOfRange(self.total_pages)
        return self._pages[number - 1]

    # ---------- navigation ----------

    def next(self) -> bool:
        if self._current >= self.total_pages:
            return False
        self._go(self._current + 1)
        return True

    def previous(self) -> bool:
        if self._current <= 1:
            return False
        self._go(self._current - 1)
        return True

    def jump_to(self, number: int) -> bool:
        if not 1 <= number <= self.total_pages:
            raise PageOutOfRange(self.total_pages)
        changed = number != self._current
        self._go(number)
        return changed

    # ---------- interne ----------

    def _go(self, number: int) -> None:
        self._current = number
        self._store.set("READING_POSITION", number)
        logger.debug("page %d/%d", number, self.total_pages)

    def _restore_position(self) -> int:
        saved = self._store.get_int("READING_POSITION", 1)
        return min(max(saved, 1), self.total_pages)

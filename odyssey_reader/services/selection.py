from dataclasses import dataclass
from typing import Optional, Tuple

from odyssey_reader.utils.text_utils import preview, word_count

SELECTION_PREVIEW_CHARS = 100


@dataclass(frozen=True)
class Selection:
    text: str
    start: Optional[int] = None
    end: Optional[int] = None


class SelectionTracker:
    """
    Sélection courante de l'utilisateur (capturée au relâchement du pointeur).
    """

    def __init__(self) -> None:
        self._selection: Optional[Selection] = None

    def capture(self, text: Optional[str], start: Optional[int] = None, end: Optional[int] = None) -> Optional[Selection]:
        cleaned = (text or "").strip()
        if not cleaned:
            self.clear()
            return None
        self._selection = Selection(text=cleaned, start=start, end=end)
        return self._selection

    def clear(self) -> None:
        self._selection = None

    @property
    def current(self) -> Optional[Selection]:
        return self._selection

    @property
    def text(self) -> Optional[str]:
        return self._selection.text if self._selection else None

    @property
    def range(self) -> Optional[Tuple[Optional[int], Optional[int]]]:
        if self._selection is None:
            return None
        return (self._selection.start, self._selection.end)

    @property
    def word_count(self) -> int:
        return word_count(self.text or "")

    @property
    def is_single_word(self) -> bool:
        return self.word_count == 1

    def preview(self, limit: int = SELECTION_PREVIEW_CHARS) -> Optional[str]:
        if self._selection is None:
            return None
        return preview(self._selection.text, limit)

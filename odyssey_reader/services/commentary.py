import threading
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from odyssey_reader.services.paginator import Page

CONTEXT_WINDOW_CHARS = 200
QUESTION_PAGE_CHARS = 500


class AnalysisKind(str, Enum):
    page = "page"
    selection = "selection"
    question = "question"


@dataclass(frozen=True)
class AnalysisRecord:
    id: str
    kind: AnalysisKind
    page: int
    content: str
    selection: Optional[str] = None
    question: Optional[str] = None


class CommentaryStore:
    """
    Liste append-only des analyses, rattachées au numéro de page actif
    au moment de la requête. Jamais modifiées ni supprimées.
    """

    def __init__(self) -> None:
        self._records: List[AnalysisRecord] = []
        self._lock = threading.Lock()

    def append(
        self,
        kind: AnalysisKind,
        page: int,
        content: str,
        selection: Optional[str] = None,
        question: Optional[str] = None,
    ) -> AnalysisRecord:
        record = AnalysisRecord(
            id=f"an_{uuid.uuid4().hex[:12]}",
            kind=kind,
            page=page,
            content=content,
            selection=selection,
            question=question,
        )
        with self._lock:
            self._records.append(record)
        return record

    def for_page(self, page: int) -> List[AnalysisRecord]:
        with self._lock:
            return [r for r in self._records if r.page == page]

    def all(self) -> List[AnalysisRecord]:
        with self._lock:
            return list(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


# =========================================================
# Construction des prompts
# =========================================================

def build_page_prompt(template: str, page: Page) -> str:
    return template.replace("{TEXT}", page.text, 1)


def selection_context(page_text: str, selection: str, window: int = CONTEXT_WINDOW_CHARS) -> Tuple[str, str]:
    """
    Contexte avant/après la sélection, calculé à partir de la PREMIÈRE
    occurrence du texte sélectionné dans la page (pas de la position réelle
    de la sélection). Texte introuvable -> contexte vide.
    """
    start = page_text.find(selection)
    if start < 0:
        return "", ""
    end = start + len(selection)
    before = page_text[max(0, start - window):start]
    after = page_text[end:min(len(page_text), end + window)]
    return before, after


def build_selection_prompt(template: str, page: Page, selection: str) -> str:
    before, after = selection_context(page.text, selection)
    return (
        template
        .replace("{BOOK}", str(page.book_number), 1)
        .replace("{CONTEXT_BEFORE}", before, 1)
        .replace("{SELECTION}", selection, 1)
        .replace("{CONTEXT_AFTER}", after, 1)
    )


def build_question_prompt(page: Page, question: str) -> str:
    return (
        "I'm reading The Odyssey (Samuel Butler translation), "
        f"currently on page {page.number} in {page.book_title}.\n\n"
        "Current page content:\n"
        f"{page.text[:QUESTION_PAGE_CHARS]}...\n\n"
        f"Question: {question}\n\n"
        "Please provide a helpful answer based on your knowledge of The Odyssey "
        "and the context provided."
    )


def build_definition_prompt(word: str) -> str:
    return (
        f'Define the word "{word}" as it would be used in Homer\'s Odyssey '
        "(Samuel Butler translation). Include:\n"
        "1. The basic definition\n"
        "2. How it's used in ancient Greek context\n"
        "3. Any cultural or historical significance\n\n"
        "Keep it concise but informative."
    )

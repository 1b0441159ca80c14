import logging
from dataclasses import dataclass
from typing import List, Optional

import httpx

from odyssey_reader.core.config import (
    API_KEY_PREFIX,
    DEFAULT_FONT_SIZE,
    DEFAULT_PROMPTS,
    DEFAULT_THEME,
    FONT_SIZE_STEP,
    MAX_FONT_SIZE,
    MIN_FONT_SIZE,
    PROMPT_SLOTS,
    THEMES,
    Settings,
)
from odyssey_reader.core.errors import EmptyQuestion, InvalidApiKeyFormat, NoSelection
from odyssey_reader.services.commentary import (
    AnalysisKind,
    AnalysisRecord,
    CommentaryStore,
    build_definition_prompt,
    build_page_prompt,
    build_question_prompt,
    build_selection_prompt,
)
from odyssey_reader.services.llm_client import LLMClient
from odyssey_reader.services.paginator import Paginator, paginate
from odyssey_reader.services.preferences import PreferenceStore, get_config_value, save_config_value
from odyssey_reader.services.selection import SelectionTracker
from odyssey_reader.services.source import Segment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Definition:
    word: str
    content: str


class ReaderSession:
    """
    État complet d'une session de lecture (une instance par processus) :
    pages, sélection, analyses, client API et préférences persistées.
    """

    def __init__(
        self,
        settings: Settings,
        store: PreferenceStore,
        segments: List[Segment],
        http_client: Optional[httpx.Client] = None,
    ):
        self.settings = settings
        self.store = store
        self.paginator = Paginator(paginate(segments, settings.WORDS_PER_PAGE), store)
        self.selection = SelectionTracker()
        self.commentary = CommentaryStore()

        self.theme = store.get("THEME") or DEFAULT_THEME
        if self.theme not in THEMES:
            self.theme = DEFAULT_THEME
        self.font_size = min(max(store.get_int("FONT_SIZE", DEFAULT_FONT_SIZE), MIN_FONT_SIZE), MAX_FONT_SIZE)

        self.client = LLMClient(
            settings,
            api_key_provider=self.api_key,
            max_calls=store.get_int("MAX_API_CALLS", settings.DEFAULT_MAX_API_CALLS),
            http_client=http_client,
        )
        logger.info(
            "reader ready: %d pages, resuming at page %d",
            self.paginator.total_pages,
            self.paginator.current_number,
        )

    # ---------- navigation ----------

    def next_page(self) -> bool:
        return self._after_navigation(self.paginator.next())

    def previous_page(self) -> bool:
        return self._after_navigation(self.paginator.previous())

    def jump_to(self, number: int) -> bool:
        return self._after_navigation(self.paginator.jump_to(number))

    def _after_navigation(self, changed: bool) -> bool:
        # la sélection appartient à la page quittée
        if changed:
            self.selection.clear()
        return changed

    # ---------- clé API ----------

    def api_key(self) -> Optional[str]:
        return self.store.get("API_KEY")

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key())

    def save_api_key(self, key: str) -> None:
        key = (key or "").strip()
        if not key.startswith(API_KEY_PREFIX):
            raise InvalidApiKeyFormat()
        self.store.set("API_KEY", key)
        logger.info("API key saved")

    def clear_api_key(self) -> None:
        self.store.delete("API_KEY")
        logger.info("API key cleared")

    # ---------- analyses ----------

    def analyze_page(self) -> AnalysisRecord:
        self.client.check_ready()
        page = self.paginator.current
        prompt = build_page_prompt(self.get_prompt("page"), page)
        content = self.client.send(prompt)
        return self.commentary.append(AnalysisKind.page, page.number, content)

    def analyze_selection(self) -> AnalysisRecord:
        self.client.check_ready()
        selected = self.selection.text
        if not selected:
            raise NoSelection()
        page = self.paginator.current
        prompt = build_selection_prompt(self.get_prompt("selection"), page, selected)
        content = self.client.send(prompt)
        record = self.commentary.append(AnalysisKind.selection, page.number, content, selection=selected)
        self.selection.clear()
        return record

    def define_word(self) -> Definition:
        selected = self.selection.text
        if not selected:
            raise NoSelection()
        if not self.selection.is_single_word:
            raise NoSelection("Select a single word to look up its definition")
        self.client.check_ready()
        content = self.client.send(build_definition_prompt(selected))
        self.selection.clear()
        return Definition(word=selected, content=content)

    def ask_question(self, question: str) -> AnalysisRecord:
        question = (question or "").strip()
        if not question:
            raise EmptyQuestion()
        self.client.check_ready()
        page = self.paginator.current
        content = self.client.send(build_question_prompt(page, question))
        return self.commentary.append(AnalysisKind.question, page.number, content, question=question)

    # ---------- affichage ----------

    def toggle_theme(self) -> str:
        self.theme = "dark" if self.theme == "light" else "light"
        self.store.set("THEME", self.theme)
        return self.theme

    def increase_font_size(self) -> int:
        if self.font_size < MAX_FONT_SIZE:
            self.font_size = min(self.font_size + FONT_SIZE_STEP, MAX_FONT_SIZE)
            self.store.set("FONT_SIZE", self.font_size)
        return self.font_size

    def decrease_font_size(self) -> int:
        if self.font_size > MIN_FONT_SIZE:
            self.font_size = max(self.font_size - FONT_SIZE_STEP, MIN_FONT_SIZE)
            self.store.set("FONT_SIZE", self.font_size)
        return self.font_size

    # ---------- quota ----------

    def set_max_calls(self, max_calls: int) -> int:
        self.client.max_calls = max_calls
        self.store.set("MAX_API_CALLS", max_calls)
        return max_calls

    # ---------- prompts ----------

    def get_prompt(self, slot: str) -> str:
        storage_name, default_name = PROMPT_SLOTS[slot]
        return get_config_value(self.store, storage_name, DEFAULT_PROMPTS[default_name])

    def is_custom_prompt(self, slot: str) -> bool:
        storage_name, _ = PROMPT_SLOTS[slot]
        return self.store.get(storage_name) is not None

    def save_prompt(self, slot: str, template: str) -> str:
        storage_name, _ = PROMPT_SLOTS[slot]
        save_config_value(self.store, storage_name, template)
        return template

    def reset_prompt(self, slot: str) -> str:
        storage_name, default_name = PROMPT_SLOTS[slot]
        self.store.delete(storage_name)
        return DEFAULT_PROMPTS[default_name]

    def close(self) -> None:
        self.client.close()

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Base
    APP_ENV: str = "dev"  # dev | staging | prod
    APP_NAME: str = "ODYSSEY READER API"
    APP_VERSION: str = "0.1.0"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Storage (préférences persistantes)
    DATABASE_URL: str = "sqlite:///./odyssey_reader.db"

    # Source du livre (JSON: [{"book": ..., "text": ...}]), vide = texte embarqué
    SOURCE_PATH: str = ""

    # Anthropic
    API_ENDPOINT: str = "https://api.anthropic.com/v1/messages"
    MODEL: str = "claude-sonnet-4-20250514"
    MAX_TOKENS: int = 2048
    ANTHROPIC_VERSION: str = "2023-06-01"
    REQUEST_TIMEOUT: Optional[float] = None  # None = pas de timeout côté client

    # Lecture / quotas
    WORDS_PER_PAGE: int = 400
    DEFAULT_MAX_API_CALLS: int = 50

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache
def get_settings() -> Settings:
    return Settings()


# Estimation grossière du coût (tarifs Sonnet 4)
COST_PER_1K_INPUT_TOKENS = 0.003
COST_PER_1K_OUTPUT_TOKENS = 0.015
COST_PER_CALL = 0.02

# Affichage
DEFAULT_THEME = "light"
THEMES = ("light", "dark")
DEFAULT_FONT_SIZE = 16
MIN_FONT_SIZE = 12
MAX_FONT_SIZE = 24
FONT_SIZE_STEP = 2

API_KEY_PREFIX = "sk-ant-"

STORAGE_KEYS = {
    "API_KEY": "odyssey_api_key",
    "READING_POSITION": "odyssey_reading_position",
    "THEME": "odyssey_theme",
    "FONT_SIZE": "odyssey_font_size",
    "API_USAGE": "odyssey_api_usage",
    "MAX_API_CALLS": "odyssey_max_api_calls",
    "PAGE_PROMPT": "odyssey_page_prompt",
    "SELECTION_PROMPT": "odyssey_selection_prompt",
}

# Prompts par défaut (modifiables par l'utilisateur)
DEFAULT_PROMPTS = {
    "PAGE_ANALYSIS": """I'm reading a page from The Odyssey by Homer (Samuel Butler translation).

Here is the text:
{TEXT}

Please provide a concise analysis with the following sections:

1) SUMMARY: Brief summary of what happens on this page
2) HISTORICAL CONTEXT: Relevant historical or cultural background
3) TRANSLATION NOTES: Any interesting aspects of this translation or Greek terms
4) LITERARY SIGNIFICANCE: Themes, symbolism, or narrative importance

Keep your response focused and informative. Assume the reader is familiar with the general story but wants deeper understanding.""",
    "SELECTION_ANALYSIS": """I'm reading The Odyssey by Homer (Samuel Butler translation), specifically from Book {BOOK}.

Here is the surrounding context:
{CONTEXT_BEFORE}

**[SELECTED TEXT]:**
{SELECTION}

{CONTEXT_AFTER}

Please explain this selected passage in the context of the chapter and the larger epic. Address:
- What's happening in this specific passage
- How it connects to the surrounding narrative
- Its significance to the overall story
- Any notable literary techniques or themes

Be concise but insightful.""",
}

# Prompt éditable -> (clé de stockage, prompt par défaut)
PROMPT_SLOTS = {
    "page": ("PAGE_PROMPT", "PAGE_ANALYSIS"),
    "selection": ("SELECTION_PROMPT", "SELECTION_ANALYSIS"),
}

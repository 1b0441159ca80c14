import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from odyssey_reader.core.errors import SourceUnavailable

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_SOURCE_PATH = DATA_DIR / "odyssey.json"


@dataclass(frozen=True)
class Segment:
    book: Union[int, str]
    text: str


def load_segments(path: Union[str, Path, None] = None) -> List[Segment]:
    """
    Charge la liste ordonnée des livres : [{"book": 1, "text": "..."}, ...].
    """
    source = Path(path) if path else DEFAULT_SOURCE_PATH
    try:
        with open(source, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError) as e:
        logger.error("cannot read source %s: %s", source, e)
        raise SourceUnavailable() from e

    if not isinstance(raw, list) or not raw:
        logger.error("source %s is empty or not a list", source)
        raise SourceUnavailable()

    segments: List[Segment] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict) or "text" not in item:
            logger.error("source %s: entry %d has no text", source, i)
            raise SourceUnavailable()
        segments.append(Segment(book=item.get("book", i + 1), text=str(item["text"])))

    if not any(seg.text.split() for seg in segments):
        logger.error("source %s contains no words", source)
        raise SourceUnavailable()

    logger.info("loaded %d book(s) from %s", len(segments), source)
    return segments

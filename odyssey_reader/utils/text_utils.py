import html
import re

_BOLD_RE = re.compile(r"\*\*([^*]+)\*\*")
_ITALIC_RE = re.compile(r"\*([^*]+)\*")


def split_words(text: str) -> list[str]:
    """
    Découpe sur les espaces (mots vides ignorés).
    """
    if not text:
        return []
    return text.split()


def word_count(text: str) -> int:
    return len(split_words(text))


def preview(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def format_analysis(text: str) -> str:
    """
    Mise en forme légère façon markdown -> HTML :
    **gras**, *italique*, paragraphes sur ligne vide, <br> sinon.
    """
    formatted = html.escape(text or "", quote=False)
    formatted = _BOLD_RE.sub(r"<strong>\1</strong>", formatted)
    formatted = _ITALIC_RE.sub(r"<em>\1</em>", formatted)
    formatted = formatted.replace("\n\n", "</p><p>").replace("\n", "<br>")
    return f"<p>{formatted}</p>"

from typing import Optional

from fastapi import APIRouter, Depends

from odyssey_reader.core.deps import get_reader
from odyssey_reader.models.reader import SelectionOut, SelectionRequest, SelectionResponse
from odyssey_reader.services.selection import SelectionTracker
from odyssey_reader.services.session import ReaderSession

router = APIRouter(prefix="/v1/selection", tags=["selection"])


def selection_out(tracker: SelectionTracker) -> Optional[SelectionOut]:
    sel = tracker.current
    if sel is None:
        return None
    return SelectionOut(
        text=sel.text,
        preview=tracker.preview(),
        wordCount=tracker.word_count,
        isSingleWord=tracker.is_single_word,
        start=sel.start,
        end=sel.end,
    )


@router.get("", response_model=SelectionResponse)
def get_selection(reader: ReaderSession = Depends(get_reader)):
    return SelectionResponse(selection=selection_out(reader.selection))


@router.put("", response_model=SelectionResponse)
def capture_selection(body: SelectionRequest, reader: ReaderSession = Depends(get_reader)):
    # relâchement du pointeur : sélection vide ou blanche = effacement
    reader.selection.capture(body.text, body.start, body.end)
    return SelectionResponse(selection=selection_out(reader.selection))


@router.delete("", response_model=SelectionResponse)
def clear_selection(reader: ReaderSession = Depends(get_reader)):
    reader.selection.clear()
    return SelectionResponse(selection=None)

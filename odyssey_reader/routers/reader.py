from fastapi import APIRouter, Depends

from odyssey_reader.core.deps import get_reader
from odyssey_reader.models.analysis import AnalysisOut
from odyssey_reader.models.errors import ERROR_RESPONSES
from odyssey_reader.models.reader import (
    JumpRequest,
    NavigationResponse,
    PageIndexItem,
    PageIndexResponse,
    PageOut,
    PageViewResponse,
)
from odyssey_reader.routers.selection import selection_out
from odyssey_reader.services.commentary import AnalysisKind
from odyssey_reader.services.session import ReaderSession

router = APIRouter(prefix="/v1/reader", tags=["reader"], responses={400: ERROR_RESPONSES[400]})


def _current_page(reader: ReaderSession) -> PageOut:
    return PageOut.from_page(reader.paginator.current, reader.paginator.total_pages)


@router.get("/page", response_model=PageViewResponse)
def view_page(reader: ReaderSession = Depends(get_reader)):
    records = reader.commentary.for_page(reader.paginator.current_number)
    return PageViewResponse(
        page=_current_page(reader),
        analyses=[AnalysisOut.from_record(r) for r in records],
        hasPageAnalysis=any(r.kind == AnalysisKind.page for r in records),
        selection=selection_out(reader.selection),
    )


@router.get("/pages", response_model=PageIndexResponse)
def list_pages(reader: ReaderSession = Depends(get_reader)):
    pag = reader.paginator
    return PageIndexResponse(
        totalPages=pag.total_pages,
        currentPage=pag.current_number,
        items=[PageIndexItem(number=p.number, bookTitle=p.book_title) for p in pag.pages],
    )


@router.post("/next", response_model=NavigationResponse)
def next_page(reader: ReaderSession = Depends(get_reader)):
    changed = reader.next_page()
    return NavigationResponse(changed=changed, page=_current_page(reader))


@router.post("/previous", response_model=NavigationResponse)
def previous_page(reader: ReaderSession = Depends(get_reader)):
    changed = reader.previous_page()
    return NavigationResponse(changed=changed, page=_current_page(reader))


@router.post("/jump", response_model=NavigationResponse)
def jump_to_page(body: JumpRequest, reader: ReaderSession = Depends(get_reader)):
    # hors [1, total] -> PageOutOfRange, page inchangée
    changed = reader.jump_to(body.page)
    return NavigationResponse(changed=changed, page=_current_page(reader))

from typing import Optional

from fastapi import APIRouter, Depends, Query
from starlette.status import HTTP_201_CREATED

from odyssey_reader.core.deps import get_reader
from odyssey_reader.core.errors import PageOutOfRange
from odyssey_reader.models.errors import ERROR_RESPONSES
from odyssey_reader.models.analysis import (
    AnalysisListResponse,
    AnalysisOut,
    DefinitionResponse,
    QuestionRequest,
)
from odyssey_reader.services.session import ReaderSession
from odyssey_reader.utils.text_utils import format_analysis

router = APIRouter(prefix="/v1/analysis", tags=["analysis"], responses=ERROR_RESPONSES)


@router.get("", response_model=AnalysisListResponse)
def list_analyses(
    page: Optional[int] = Query(default=None, description="Numéro de page (défaut: page courante)"),
    reader: ReaderSession = Depends(get_reader),
):
    number = reader.paginator.current_number if page is None else page
    if not 1 <= number <= reader.paginator.total_pages:
        raise PageOutOfRange(reader.paginator.total_pages)
    items = [AnalysisOut.from_record(r) for r in reader.commentary.for_page(number)]
    return AnalysisListResponse(page=number, items=items)


@router.post("/page", response_model=AnalysisOut, status_code=HTTP_201_CREATED)
def analyze_page(reader: ReaderSession = Depends(get_reader)):
    return AnalysisOut.from_record(reader.analyze_page())


@router.post("/selection", response_model=AnalysisOut, status_code=HTTP_201_CREATED)
def analyze_selection(reader: ReaderSession = Depends(get_reader)):
    return AnalysisOut.from_record(reader.analyze_selection())


@router.post("/question", response_model=AnalysisOut, status_code=HTTP_201_CREATED)
def ask_question(body: QuestionRequest, reader: ReaderSession = Depends(get_reader)):
    return AnalysisOut.from_record(reader.ask_question(body.question))


@router.post("/definition", response_model=DefinitionResponse)
def define_word(reader: ReaderSession = Depends(get_reader)):
    d = reader.define_word()
    return DefinitionResponse(word=d.word, content=d.content, html=format_analysis(d.content))

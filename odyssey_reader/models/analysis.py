from typing import List, Optional
from pydantic import BaseModel, Field

from odyssey_reader.services.commentary import AnalysisKind, AnalysisRecord
from odyssey_reader.utils.text_utils import format_analysis


class AnalysisOut(BaseModel):
    id: str
    kind: AnalysisKind
    page: int
    content: str
    html: str = Field(..., description="Contenu mis en forme (markdown léger -> HTML)")
    selection: Optional[str] = None
    question: Optional[str] = None

    @classmethod
    def from_record(cls, record: AnalysisRecord) -> "AnalysisOut":
        return cls(
            id=record.id,
            kind=record.kind,
            page=record.page,
            content=record.content,
            html=format_analysis(record.content),
            selection=record.selection,
            question=record.question,
        )


class AnalysisListResponse(BaseModel):
    page: int
    items: List[AnalysisOut]


class QuestionRequest(BaseModel):
    question: str = Field(..., max_length=4000)


class DefinitionResponse(BaseModel):
    word: str
    content: str
    html: str

from typing import List, Optional, Union
from pydantic import BaseModel, Field

from odyssey_reader.models.analysis import AnalysisOut
from odyssey_reader.services.paginator import Page


class PageOut(BaseModel):
    number: int = Field(..., ge=1, description="Numéro global de page (1-based)")
    totalPages: int = Field(..., ge=1)
    bookTitle: str
    bookNumber: Union[int, str]
    text: str

    @classmethod
    def from_page(cls, page: Page, total_pages: int) -> "PageOut":
        return cls(
            number=page.number,
            totalPages=total_pages,
            bookTitle=page.book_title,
            bookNumber=page.book_number,
            text=page.text,
        )


class SelectionOut(BaseModel):
    text: str
    preview: str
    wordCount: int
    isSingleWord: bool
    start: Optional[int] = None
    end: Optional[int] = None


class PageViewResponse(BaseModel):
    page: PageOut
    analyses: List[AnalysisOut] = Field(default_factory=list)
    hasPageAnalysis: bool = False
    selection: Optional[SelectionOut] = None


class NavigationResponse(BaseModel):
    changed: bool
    page: PageOut


class JumpRequest(BaseModel):
    page: int = Field(..., description="Numéro de page cible")


class PageIndexItem(BaseModel):
    number: int
    bookTitle: str


class PageIndexResponse(BaseModel):
    totalPages: int
    currentPage: int
    items: List[PageIndexItem]


class SelectionRequest(BaseModel):
    text: str = Field(default="", description="Texte sélectionné (vide = efface)")
    start: Optional[int] = Field(default=None, ge=0)
    end: Optional[int] = Field(default=None, ge=0)


class SelectionResponse(BaseModel):
    selection: Optional[SelectionOut] = None

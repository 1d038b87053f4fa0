from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class Paragraph:
    number: int
    content: str
    marker: str


@dataclass(frozen=True)
class Section:
    name: str
    content: str
    page: int


@dataclass(frozen=True)
class Table:
    table_number: int
    content: str
    type: str = "explicit"


@dataclass(frozen=True)
class Composition:
    element: str
    unit: str
    min: float | None = None
    max: float | None = None
    value: float | None = None

    @property
    def is_range(self) -> bool:
        return self.min is not None and self.max is not None

    def describe(self) -> str:
        if self.is_range:
            return f"{self.element}: {self.min:g}-{self.max:g}{self.unit}"
        return f"{self.element}: {self.value:g}{self.unit}"


@dataclass(frozen=True)
class Temperature:
    raw: str
    unit: str = "°C"
    min: int | None = None
    max: int | None = None
    value: int | None = None


@dataclass(frozen=True)
class ProcessMention:
    type: str
    description: str


@dataclass(frozen=True)
class TechnicalDetails:
    temperatures: tuple[Temperature, ...] = ()
    processes: tuple[ProcessMention, ...] = ()


@dataclass(frozen=True)
class Claim:
    number: int
    text: str
    is_dependent: bool = False
    depends_on: tuple[int, ...] = ()


@dataclass(frozen=True)
class Citation:
    patent_id: str
    page: int
    section: str
    paragraph_number: int | None = None
    type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"patentId": self.patent_id, "page": self.page, "section": self.section}
        if self.paragraph_number is not None:
            out["paragraphNumber"] = self.paragraph_number
        if self.type is not None:
            out["type"] = self.type
        return out


@dataclass(frozen=True)
class PatentRecord:
    patent_number: str
    title: str
    abstract: str
    header_info: Mapping[str, str] = field(default_factory=dict)
    numbered_paragraphs: tuple[Paragraph, ...] = ()
    sections: tuple[Section, ...] = ()
    tables: tuple[Table, ...] = ()
    compositions: tuple[Composition, ...] = ()
    technical_details: TechnicalDetails = field(default_factory=TechnicalDetails)
    keywords: tuple[str, ...] = ()
    claims: tuple[Claim, ...] = ()
    searchable_content: str = ""
    processed_at: str = ""
    original_file_name: str | None = None
    num_pages: int = 1
    text_length: int = 0
    file_size: int | None = None
    pdf_available: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "header_info", MappingProxyType(dict(self.header_info)))

    # header_info is pickled as a plain dict and re-wrapped on load
    def __getstate__(self) -> dict[str, Any]:
        state = dict(self.__dict__)
        state["header_info"] = dict(self.header_info)
        return state

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.__dict__.update(state)
        object.__setattr__(self, "header_info", MappingProxyType(dict(state["header_info"])))

    def paragraph(self, number: int) -> Paragraph | None:
        for para in self.numbered_paragraphs:
            if para.number == number:
                return para
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "patent_number": self.patent_number,
            "title": self.title,
            "abstract": self.abstract,
            "header_info": dict(self.header_info),
            "numbered_paragraphs": [p.__dict__ for p in self.numbered_paragraphs],
            "sections": [s.__dict__ for s in self.sections],
            "tables": [t.__dict__ for t in self.tables],
            "compositions": [c.__dict__ for c in self.compositions],
            "technical_details": {
                "temperatures": [t.__dict__ for t in self.technical_details.temperatures],
                "processes": [p.__dict__ for p in self.technical_details.processes],
            },
            "keywords": list(self.keywords),
            "claims": [{**c.__dict__, "depends_on": list(c.depends_on)} for c in self.claims],
            "searchable_content": self.searchable_content,
            "processed_at": self.processed_at,
            "original_file_name": self.original_file_name,
            "num_pages": self.num_pages,
            "text_length": self.text_length,
            "file_size": self.file_size,
            "pdf_available": self.pdf_available,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PatentRecord":
        details = data.get("technical_details") or {}
        return cls(
            patent_number=data["patent_number"],
            title=data.get("title", ""),
            abstract=data.get("abstract", ""),
            header_info=data.get("header_info") or {},
            numbered_paragraphs=tuple(Paragraph(**p) for p in data.get("numbered_paragraphs", [])),
            sections=tuple(Section(**s) for s in data.get("sections", [])),
            tables=tuple(Table(**t) for t in data.get("tables", [])),
            compositions=tuple(Composition(**c) for c in data.get("compositions", [])),
            technical_details=TechnicalDetails(
                temperatures=tuple(Temperature(**t) for t in details.get("temperatures", [])),
                processes=tuple(ProcessMention(**p) for p in details.get("processes", [])),
            ),
            keywords=tuple(data.get("keywords", [])),
            claims=tuple(
                Claim(
                    number=c["number"],
                    text=c["text"],
                    is_dependent=bool(c.get("is_dependent", False)),
                    depends_on=tuple(c.get("depends_on", [])),
                )
                for c in data.get("claims", [])
            ),
            searchable_content=data.get("searchable_content", ""),
            processed_at=data.get("processed_at", ""),
            original_file_name=data.get("original_file_name"),
            num_pages=int(data.get("num_pages") or 1),
            text_length=int(data.get("text_length") or 0),
            file_size=data.get("file_size"),
            pdf_available=bool(data.get("pdf_available", False)),
        )

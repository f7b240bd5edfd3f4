from enum import Enum
from pydantic import BaseModel
from sqlmodel import SQLModel, Field, Relationship
from typing import List, Optional


class Difficulty(str, Enum):
    Easy = "Easy"
    Medium = "Medium"
    Difficult = "Difficult"
    Varies = "Varies"


class Region(str, Enum):
    Central_Coast = "Central Coast"
    Southern_California = "Southern California"
    Northern_California = "Northern California"
    Varies = "Varies"

    @classmethod
    def find_by_label(cls, label: str) -> "Region":
        for region in cls:
            if region.value.lower() == label.lower():
                return region
        raise ValueError(f"Unknown region: {label}")


class TourPackage(SQLModel, table=True):
    __tablename__ = "tour_package"

    code: str = Field(primary_key=True, max_length=2)
    name: str = Field(unique=True, index=True)


class TourBase(SQLModel):
    title: str
    description: Optional[str] = None
    blurb: Optional[str] = None
    price: int = 0
    duration: Optional[str] = None
    bullets: Optional[str] = None
    keywords: Optional[str] = None
    difficulty: Difficulty = Difficulty.Varies
    region: Region = Region.Varies


class Tour(TourBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    tour_package_code: str = Field(foreign_key="tour_package.code", index=True)
    tour_package: Optional[TourPackage] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})


class TourCreate(TourBase):
    tour_package_name: str


class TourRead(TourBase):
    id: int
    tour_package_code: str


class PaginatedTourResponse(BaseModel):
    tours: List[TourRead]
    total_items: int
    page: int
    items_per_page: int
    total_pages: int

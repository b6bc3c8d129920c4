from typing import List

from fastapi import APIRouter
from pydantic import BaseModel

from lems.models.scoresheet import LOCALIZED_SCORESHEET_STATUS, ScoresheetStatus

router = APIRouter()


class ScoresheetStatusReference(BaseModel):
    status: ScoresheetStatus
    label: str


@router.get("/scoresheets/statuses", response_model=List[ScoresheetStatusReference])
def get_scoresheet_statuses():
    """Every scoresheet status with its display label, in workflow order"""
    return [
        ScoresheetStatusReference(status=status, label=LOCALIZED_SCORESHEET_STATUS[status])
        for status in ScoresheetStatus
    ]

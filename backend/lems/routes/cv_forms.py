"""
Core values incident forms.

Any signed-in user of the event may file a form; only the judge advisor may
record the actions taken. Severity is always computed server-side.
"""
from datetime import datetime
from typing import Dict, List, Literal, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from sqlmodel import Session

from lems.auth import ensure_event_access, get_current_user, has_role
from lems.crud import cv_forms as cv_forms_crud
from lems.crud import events as events_crud
from lems.database import get_session
from lems.models.core_values_form import CoreValuesForm
from lems.models.user import User
from lems.realtime.hub import RoomHub, get_hub
from lems.realtime.messages import CV_FORM_CREATED, CV_FORM_UPDATED
from lems.services.cv_form import CVFormValidationError, prepare_cv_form

router = APIRouter()

CVFormSubject = Literal["team", "student", "anyone-else"]


class CVFormGroup(BaseModel):
    fields: List[bool] = []
    other: str = ""


class CVFormCategory(BaseModel):
    team_or_student: CVFormGroup = CVFormGroup()
    anyone_else: CVFormGroup = CVFormGroup()


class CompletedBy(BaseModel):
    name: str = ""
    phone: str = ""
    affiliation: str = ""


class CVFormSubmission(BaseModel):
    observers: List[CVFormSubject] = []
    observer_affiliation: str = ""
    demonstrators: List[CVFormSubject] = []
    demonstrator_affiliation: str = ""
    data: Dict[str, CVFormCategory] = {}
    details: str = ""
    completed_by: CompletedBy = CompletedBy()
    actions_taken: Optional[str] = None


class CVFormResponse(CVFormSubmission):
    model_config = ConfigDict(from_attributes=True)

    id: int
    event_id: int
    severity: str
    created_at: datetime


def _prepare(submission: CVFormSubmission, user: User) -> dict:
    values = submission.model_dump()
    if not has_role(user, ["judge-advisor"]):
        values.pop("actions_taken", None)
    try:
        return prepare_cv_form(values)
    except CVFormValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)


def _require_event(session: Session, user: User, event_id: int) -> None:
    ensure_event_access(user, event_id)
    if not events_crud.get_event(session, event_id):
        raise HTTPException(status_code=404, detail="Event not found")


@router.get("/events/{event_id}/cv-forms", response_model=List[CVFormResponse])
def get_cv_forms(
    event_id: int,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Get all core values forms of an event"""
    _require_event(session, user, event_id)
    return cv_forms_crud.get_event_cv_forms(session, event_id)


@router.post("/events/{event_id}/cv-forms", response_model=CVFormResponse, status_code=201)
def create_cv_form(
    event_id: int,
    submission: CVFormSubmission,
    background_tasks: BackgroundTasks,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
    hub: RoomHub = Depends(get_hub),
):
    """Validate and file a new core values form"""
    _require_event(session, user, event_id)
    values = _prepare(submission, user)

    form = cv_forms_crud.save_cv_form(session, CoreValuesForm(event_id=event_id, **values))
    response = CVFormResponse.model_validate(form)
    background_tasks.add_task(hub.broadcast, event_id, CV_FORM_CREATED, response, "judging")
    return response


@router.put("/events/{event_id}/cv-forms/{form_id}", response_model=CVFormResponse)
def update_cv_form(
    event_id: int,
    form_id: int,
    submission: CVFormSubmission,
    background_tasks: BackgroundTasks,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
    hub: RoomHub = Depends(get_hub),
):
    """Replace the contents of an existing form"""
    _require_event(session, user, event_id)
    form = cv_forms_crud.get_event_cv_form(session, event_id, form_id)
    if not form:
        raise HTTPException(status_code=404, detail="Core values form not found")

    values = _prepare(submission, user)
    if "actions_taken" not in values:
        values["actions_taken"] = form.actions_taken
    for field, value in values.items():
        setattr(form, field, value)

    form = cv_forms_crud.save_cv_form(session, form)
    response = CVFormResponse.model_validate(form)
    background_tasks.add_task(hub.broadcast, event_id, CV_FORM_UPDATED, response, "judging")
    return response

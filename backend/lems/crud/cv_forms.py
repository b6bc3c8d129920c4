from typing import List, Optional

from sqlmodel import Session, select

from lems.models.core_values_form import CoreValuesForm


def get_event_cv_forms(session: Session, event_id: int) -> List[CoreValuesForm]:
    return list(
        session.exec(
            select(CoreValuesForm).where(CoreValuesForm.event_id == event_id).order_by(CoreValuesForm.id)
        ).all()
    )


def get_event_cv_form(session: Session, event_id: int, form_id: int) -> Optional[CoreValuesForm]:
    form = session.get(CoreValuesForm, form_id)
    if form is None or form.event_id != event_id:
        return None
    return form


def save_cv_form(session: Session, form: CoreValuesForm) -> CoreValuesForm:
    session.add(form)
    session.commit()
    session.refresh(form)
    return form

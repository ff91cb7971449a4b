import asyncio
import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session, sessionmaker
from starlette.concurrency import run_in_threadpool

from app.core.config import accepts_json
from app.database import get_db, get_session_factory
from app.dependencies.auth import get_authenticated_member
from app.logic.personal_information import FORM_FIELDS, parse_personal_information
from app.models.member import Point
from app.repositories.member_repo import (
    get_member_ethnicities,
    get_member_hometown,
    list_ethnicity_options,
    update_member,
)
from app.services.onboarding_steps import JoinDirectoryStep, next_step, previous_step, step_path


logger = logging.getLogger(__name__)

router = APIRouter(tags=["directory"])
templates = Jinja2Templates(
    directory=str(Path(__file__).resolve().parents[1] / "templates")
)

PERSONAL_STEP = JoinDirectoryStep.PERSONAL
PERSONAL_TEMPLATE = "directory/join_personal.html"


def _serialize_coordinates(coordinates: Point | None) -> dict[str, float] | None:
    if coordinates is None:
        return None
    return {"x": coordinates.x, "y": coordinates.y}


async def load_personal_information(session_factory: sessionmaker, member_id: int) -> dict[str, Any]:
    """Fetch ethnicities and hometown together, each on its own session."""

    def _fetch_ethnicities() -> list[str]:
        with session_factory() as db:
            return get_member_ethnicities(db, member_id)

    def _fetch_student() -> dict[str, Any]:
        with session_factory() as db:
            return get_member_hometown(db, member_id)

    ethnicities, student = await asyncio.gather(
        run_in_threadpool(_fetch_ethnicities),
        run_in_threadpool(_fetch_student),
    )
    return {
        "ethnicities": ethnicities,
        "student": {
            "hometown": student["hometown"],
            "hometownCoordinates": _serialize_coordinates(student["hometown_coordinates"]),
        },
    }


def _form_values_from_page_data(page_data: dict[str, Any]) -> dict[str, Any]:
    student = page_data["student"]
    coordinates = student["hometownCoordinates"] or {}
    return {
        "hometown": student["hometown"] or "",
        "hometownLatitude": coordinates.get("y", ""),
        "hometownLongitude": coordinates.get("x", ""),
        "ethnicities": list(page_data["ethnicities"]),
    }


def _render_personal_step(
    request: Request,
    db: Session,
    *,
    values: dict[str, Any],
    errors: dict[str, str] | None = None,
    status_code: int = 200,
):
    back_step = previous_step(PERSONAL_STEP)
    return templates.TemplateResponse(
        request=request,
        name=PERSONAL_TEMPLATE,
        context={
            "values": values,
            "errors": errors or {},
            "ethnicity_options": list_ethnicity_options(db),
            "action_url": step_path(PERSONAL_STEP),
            "back_url": step_path(back_step) if back_step else None,
        },
        status_code=status_code,
    )


def _submitted_form(form) -> dict[str, Any]:
    submitted = {name: form.get(name) for name in FORM_FIELDS}
    # Multi-select posts one field per option; a single comma list also arrives here.
    ethnicity_values = [value for value in form.getlist("ethnicities") if isinstance(value, str)]
    submitted["ethnicities"] = ",".join(ethnicity_values) if ethnicity_values else None
    return submitted


@router.get("/directory/join/2")
async def personal_information_page(
    request: Request,
    member_id: int = Depends(get_authenticated_member),
    session_factory: sessionmaker = Depends(get_session_factory),
):
    page_data = await load_personal_information(session_factory, member_id)
    if accepts_json(request):
        return JSONResponse(content=page_data)

    with session_factory() as db:
        return _render_personal_step(
            request,
            db,
            values=_form_values_from_page_data(page_data),
        )


@router.post("/directory/join/2")
async def personal_information_submit(
    request: Request,
    member_id: int = Depends(get_authenticated_member),
    db: Session = Depends(get_db),
):
    form = await request.form()
    submitted = _submitted_form(form)
    result = parse_personal_information(submitted)

    if not result.ok:
        logger.info(
            "directory_join: member_id=%s invalid fields=%s",
            member_id,
            ",".join(sorted(result.errors)),
        )
        if accepts_json(request):
            return JSONResponse(content={"errors": result.errors}, status_code=400)
        values = {name: (submitted.get(name) or "") for name in FORM_FIELDS}
        values["ethnicities"] = [
            code.strip() for code in (submitted.get("ethnicities") or "").split(",") if code.strip()
        ]
        return _render_personal_step(
            request,
            db,
            values=values,
            errors=result.errors,
            status_code=400,
        )

    data = result.data.model_dump()
    data["ethnicities"] = data["ethnicities"] or []
    update_member(db, member_id=member_id, data=data)
    db.commit()
    logger.info(
        "directory_join: member_id=%s personal information saved ethnicities=%d",
        member_id,
        len(data["ethnicities"]),
    )

    return RedirectResponse(url=step_path(next_step(PERSONAL_STEP)), status_code=302)

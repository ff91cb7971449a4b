"""
Member repository: reads and writes behind the member-directory onboarding pages.
Callers own the transaction; nothing here commits.
"""
import logging
from typing import Any

from sqlalchemy.orm import Session

from app.models.member import Country, MemberEthnicity, Point, Student

logger = logging.getLogger(__name__)


class MemberNotFoundError(LookupError):
    def __init__(self, member_id: int):
        super().__init__(f"Member {member_id} not found.")
        self.member_id = member_id


def get_member_ethnicities(db: Session, member_id: int) -> list[str]:
    rows = (
        db.query(MemberEthnicity.country_code)
        .filter(MemberEthnicity.student_id == member_id)
        .order_by(MemberEthnicity.country_code)
        .all()
    )
    return [row.country_code for row in rows]


def get_member_hometown(db: Session, member_id: int) -> dict[str, Any]:
    """Hometown columns of a member who must exist; raises MemberNotFoundError otherwise."""
    row = (
        db.query(Student.hometown, Student.hometown_coordinates)
        .filter(Student.id == member_id)
        .first()
    )
    if row is None:
        logger.error("member_repo: no member record for member_id=%s", member_id)
        raise MemberNotFoundError(member_id)
    return {
        "hometown": row.hometown,
        "hometown_coordinates": row.hometown_coordinates,
    }


def list_ethnicity_options(db: Session) -> list[dict[str, Any]]:
    rows = db.query(Country).order_by(Country.demonym).all()
    return [
        {
            "code": country.code,
            "demonym": country.demonym,
            "flag_emoji": country.flag_emoji or "",
        }
        for country in rows
    ]


def update_member(db: Session, *, member_id: int, data: dict[str, Any]) -> None:
    """
    Apply a partial update to a member.

    ``hometown_latitude``/``hometown_longitude`` are stored together as the
    hometown point. ``ethnicities``, when present, replaces the member's
    whole ethnicity set.
    """
    values = dict(data)
    ethnicities = values.pop("ethnicities", None)
    latitude = values.pop("hometown_latitude", None)
    longitude = values.pop("hometown_longitude", None)
    if latitude is not None and longitude is not None:
        values["hometown_coordinates"] = Point(x=longitude, y=latitude)

    if values:
        updated = (
            db.query(Student)
            .filter(Student.id == member_id)
            .update(values, synchronize_session=False)
        )
        if not updated:
            raise MemberNotFoundError(member_id)

    if ethnicities is not None:
        db.query(MemberEthnicity).filter(MemberEthnicity.student_id == member_id).delete(
            synchronize_session=False
        )
        for code in dict.fromkeys(ethnicities):
            db.add(MemberEthnicity(student_id=member_id, country_code=code))
        db.flush()

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import pytest

from app.database import Base
from app.models.member import Country, MemberEthnicity, Point, Student
from app.repositories.member_repo import (
    MemberNotFoundError,
    get_member_ethnicities,
    get_member_hometown,
    list_ethnicity_options,
    update_member,
)


def _build_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    with SessionLocal() as db:
        db.add_all(
            [
                Country(code="NG", demonym="Nigerian", flag_emoji="🇳🇬"),
                Country(code="US", demonym="American", flag_emoji="🇺🇸"),
                Country(code="MX", demonym="Mexican", flag_emoji=None),
            ]
        )
        db.add(Student(id=1, email="ada@example.com"))
        db.add(
            Student(
                id=2,
                email="grace@example.com",
                hometown="Lagos, Nigeria",
                hometown_coordinates=Point(x=3.3792, y=6.5244),
            )
        )
        db.add(MemberEthnicity(student_id=2, country_code="NG"))
        db.commit()

    return SessionLocal


def test_member_without_hometown():
    SessionLocal = _build_session()

    with SessionLocal() as db:
        assert get_member_hometown(db, 1) == {"hometown": None, "hometown_coordinates": None}
        assert get_member_ethnicities(db, 1) == []


def test_member_hometown_point_round_trips_through_storage():
    SessionLocal = _build_session()

    with SessionLocal() as db:
        hometown = get_member_hometown(db, 2)
        raw = db.execute(text("SELECT hometown_coordinates FROM students WHERE id = 2")).scalar_one()

    assert hometown["hometown"] == "Lagos, Nigeria"
    assert hometown["hometown_coordinates"] == Point(x=3.3792, y=6.5244)
    assert raw == "(3.3792,6.5244)"


def test_missing_member_raises():
    SessionLocal = _build_session()

    with SessionLocal() as db:
        with pytest.raises(MemberNotFoundError) as excinfo:
            get_member_hometown(db, 404)

    assert excinfo.value.member_id == 404


def test_ethnicity_options_sorted_by_demonym():
    SessionLocal = _build_session()

    with SessionLocal() as db:
        options = list_ethnicity_options(db)

    assert [option["code"] for option in options] == ["US", "MX", "NG"]
    assert options[1]["flag_emoji"] == ""


def test_update_member_writes_hometown_point():
    SessionLocal = _build_session()

    with SessionLocal() as db:
        update_member(
            db,
            member_id=1,
            data={
                "ethnicities": ["US", "MX"],
                "hometown": "Austin, TX",
                "hometown_latitude": 30.2672,
                "hometown_longitude": -97.7431,
            },
        )
        db.commit()

    with SessionLocal() as db:
        hometown = get_member_hometown(db, 1)
        ethnicities = get_member_ethnicities(db, 1)

    assert hometown["hometown"] == "Austin, TX"
    assert hometown["hometown_coordinates"].x == pytest.approx(-97.7431)
    assert hometown["hometown_coordinates"].y == pytest.approx(30.2672)
    assert ethnicities == ["MX", "US"]


def test_update_member_replaces_ethnicity_set():
    SessionLocal = _build_session()

    with SessionLocal() as db:
        update_member(db, member_id=2, data={"ethnicities": ["US", "US", "MX"]})
        db.commit()

    with SessionLocal() as db:
        assert get_member_ethnicities(db, 2) == ["MX", "US"]
        assert get_member_hometown(db, 2)["hometown"] == "Lagos, Nigeria"


def test_update_member_empty_ethnicities_clears_set():
    SessionLocal = _build_session()

    with SessionLocal() as db:
        update_member(db, member_id=2, data={"ethnicities": []})
        db.commit()

    with SessionLocal() as db:
        assert get_member_ethnicities(db, 2) == []


def test_update_member_without_ethnicities_keeps_set():
    SessionLocal = _build_session()

    with SessionLocal() as db:
        update_member(db, member_id=2, data={"hometown": "Abuja, Nigeria"})
        db.commit()

    with SessionLocal() as db:
        assert get_member_ethnicities(db, 2) == ["NG"]
        assert get_member_hometown(db, 2)["hometown"] == "Abuja, Nigeria"


def test_update_unknown_member_raises():
    SessionLocal = _build_session()

    with SessionLocal() as db:
        with pytest.raises(MemberNotFoundError):
            update_member(db, member_id=404, data={"hometown": "Nowhere"})

from dataclasses import dataclass

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func
from sqlalchemy.types import TypeDecorator

from app.database import Base


@dataclass(frozen=True)
class Point:
    x: float  # longitude
    y: float  # latitude


class PointType(TypeDecorator):
    """Postgres ``point`` column, exchanged in its ``(x,y)`` text form."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return f"({float(value.x)},{float(value.y)})"

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        x_raw, y_raw = str(value).strip().strip("()").split(",")
        return Point(x=float(x_raw), y=float(y_raw))


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    hometown = Column(Text, nullable=True)
    hometown_coordinates = Column(PointType, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )


class Country(Base):
    __tablename__ = "countries"

    code = Column(String(3), primary_key=True)
    demonym = Column(String(100), nullable=False)
    flag_emoji = Column(String(16), nullable=True)


class MemberEthnicity(Base):
    __tablename__ = "member_ethnicities"

    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), primary_key=True)
    country_code = Column(String(3), ForeignKey("countries.code"), primary_key=True, index=True)

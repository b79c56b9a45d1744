from sqlalchemy import Boolean, Column, Integer, String, UniqueConstraint

from hirehub.db.base import Base


class Department(Base):
    """Department name shown in form pickers."""

    __tablename__ = "departments"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    is_active = Column(Boolean, default=True)


class JobRole(Base):
    """Job role lookup, scoped to a department."""

    __tablename__ = "job_roles"
    __table_args__ = (UniqueConstraint("title", "department", name="uq_job_roles_title_department"),)

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    department = Column(String, nullable=False, index=True)
    is_active = Column(Boolean, default=True)

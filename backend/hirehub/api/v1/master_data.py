"""
Master data API endpoints.

Department and job-role lookups used to populate form pickers.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from hirehub.api.deps import require_admin
from hirehub.db.session import get_db
from hirehub.models import Department, JobRole, User

router = APIRouter()


class DepartmentCreate(BaseModel):
    name: str


class DepartmentResponse(BaseModel):
    id: int
    name: str
    is_active: bool

    class Config:
        from_attributes = True


class JobRoleCreate(BaseModel):
    title: str
    department: str


class JobRoleResponse(BaseModel):
    id: int
    title: str
    department: str
    is_active: bool

    class Config:
        from_attributes = True


@router.get("/departments", response_model=list[DepartmentResponse])
async def list_departments(db: Session = Depends(get_db)):
    return db.query(Department).filter(Department.is_active.is_(True)).order_by(Department.name).all()


@router.get("/job-roles", response_model=list[JobRoleResponse])
async def list_job_roles(department: Optional[str] = None, db: Session = Depends(get_db)):
    """Active job roles, optionally limited to one department."""
    query = db.query(JobRole).filter(JobRole.is_active.is_(True))
    if department:
        query = query.filter(JobRole.department == department)
    return query.order_by(JobRole.title).all()


@router.post("/departments", response_model=DepartmentResponse, status_code=status.HTTP_201_CREATED)
async def create_department(
    data: DepartmentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    if db.query(Department).filter(Department.name == data.name).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Department already exists",
        )

    department = Department(name=data.name, is_active=True)
    db.add(department)
    db.commit()
    db.refresh(department)
    return department


@router.post("/job-roles", response_model=JobRoleResponse, status_code=status.HTTP_201_CREATED)
async def create_job_role(
    data: JobRoleCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    if not db.query(Department).filter(Department.name == data.department).first():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Department not found",
        )
    existing = (
        db.query(JobRole)
        .filter(JobRole.title == data.title, JobRole.department == data.department)
        .first()
    )
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Job role already exists",
        )

    job_role = JobRole(title=data.title, department=data.department, is_active=True)
    db.add(job_role)
    db.commit()
    db.refresh(job_role)
    return job_role

"""FastAPI application factory for the classroll JSON API."""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field, field_validator

from ..core.models import AttendanceStatus, Student, Teacher
from ..provider import RepositoryProvider
from ..repositories.errors import ValidationError
from ..services.readiness import blocker_feedback, check_readiness, warning_feedback
from .dependencies import get_provider

logger = logging.getLogger(__name__)


class RegisterRequest(BaseModel):
    first_name: str = Field(..., description="Given name")
    middle_name: str = Field("", description="Middle name")
    last_name: str = Field(..., description="Family name")
    email: str = Field(..., description="Login email address")
    password: str = Field(..., description="Account password")
    confirm_password: str = Field(..., description="Password repeated")


class LoginRequest(BaseModel):
    email: str
    password: str


class StudentCreateRequest(BaseModel):
    first_name: str
    middle_name: str = ""
    last_name: str
    course_id: Optional[str] = None
    teacher_id: str


class AttendanceRequest(BaseModel):
    """Check-ins for several students in one subject."""

    subject_id: str
    teacher_id: str
    student_ids: List[str] = Field(default_factory=list)
    status: AttendanceStatus = AttendanceStatus.PRESENT
    check_in_date: Optional[date] = Field(None, description="Defaults to today")

    @field_validator("student_ids")
    @classmethod
    def strip_student_ids(cls, v):
        return [student_id.strip() for student_id in v if student_id.strip()]


def _teacher_payload(teacher: Teacher) -> Dict[str, Any]:
    return {
        "teacher_id": teacher.teacher_id,
        "first_name": teacher.first_name,
        "middle_name": teacher.middle_name,
        "last_name": teacher.last_name,
        "email": teacher.email,
    }


def _student_payload(student: Student) -> Dict[str, Any]:
    payload = asdict(student)
    payload["full_name"] = student.full_name
    return payload


def _require_teacher(provider: RepositoryProvider, teacher_id: str) -> Teacher:
    teacher = provider.teacher_repository.get_teacher_by_id(teacher_id)
    if teacher is None:
        raise HTTPException(status_code=404, detail="Teacher not found")
    return teacher


def create_app() -> FastAPI:
    """Construct and return the FastAPI application."""
    app = FastAPI(title="Classroll API")

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/teachers/register", status_code=201, tags=["teachers"])
    def register_teacher(
        body: RegisterRequest, provider: RepositoryProvider = Depends(get_provider)
    ) -> Dict[str, Any]:
        try:
            teacher = provider.teacher_repository.register(
                body.first_name,
                body.middle_name,
                body.last_name,
                body.email,
                body.password,
                body.confirm_password,
            )
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return _teacher_payload(teacher)

    @app.post("/api/teachers/login", tags=["teachers"])
    def login_teacher(
        body: LoginRequest, provider: RepositoryProvider = Depends(get_provider)
    ) -> Dict[str, Any]:
        teacher = provider.teacher_repository.login(body.email, body.password)
        if teacher is None:
            raise HTTPException(status_code=401, detail="Invalid email or password")
        return _teacher_payload(teacher)

    @app.get("/api/teachers/{teacher_id}/students", tags=["students"])
    def list_students(
        teacher_id: str, provider: RepositoryProvider = Depends(get_provider)
    ) -> List[Dict[str, Any]]:
        _require_teacher(provider, teacher_id)
        students = provider.student_repository.get_students_by_teacher(teacher_id)
        return [_student_payload(student) for student in students]

    @app.post("/api/students", status_code=201, tags=["students"])
    def create_student(
        body: StudentCreateRequest, provider: RepositoryProvider = Depends(get_provider)
    ) -> Dict[str, Any]:
        _require_teacher(provider, body.teacher_id)
        if body.course_id and body.course_id.strip():
            if provider.course_repository.get_course_by_id(body.course_id.strip()) is None:
                raise HTTPException(status_code=404, detail="Course not found")
        try:
            student = provider.student_repository.create_student(
                body.first_name,
                body.middle_name,
                body.last_name,
                body.course_id,
                body.teacher_id,
            )
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return _student_payload(student)

    @app.post("/api/attendance", status_code=201, tags=["attendance"])
    def record_attendance(
        body: AttendanceRequest, provider: RepositoryProvider = Depends(get_provider)
    ) -> Dict[str, Any]:
        if not body.student_ids:
            raise HTTPException(status_code=400, detail="No students specified")
        _require_teacher(provider, body.teacher_id)
        if provider.subject_repository.get_subject_by_id(body.subject_id) is None:
            raise HTTPException(status_code=404, detail="Subject not found")
        missing = [
            student_id
            for student_id in body.student_ids
            if provider.student_repository.get_student_by_id(student_id) is None
        ]
        if missing:
            raise HTTPException(
                status_code=404, detail=f"Students not found: {', '.join(missing)}"
            )

        repository = provider.attendance_repository
        try:
            count = repository.record_bulk_attendance(
                body.student_ids,
                body.subject_id,
                body.teacher_id,
                {student_id: body.status for student_id in body.student_ids},
                on=body.check_in_date,
            )
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        logger.info("Recorded %d check-ins via API", count)
        check_in_date = (
            body.check_in_date.isoformat() if body.check_in_date else repository.get_current_date()
        )
        return {"recorded": count, "check_in_date": check_in_date}

    @app.get("/api/teachers/{teacher_id}/stats", tags=["attendance"])
    def teacher_stats(
        teacher_id: str, provider: RepositoryProvider = Depends(get_provider)
    ) -> Dict[str, Any]:
        _require_teacher(provider, teacher_id)
        return asdict(provider.attendance_repository.get_attendance_stats(teacher_id))

    @app.get("/api/teachers/{teacher_id}/readiness", tags=["attendance"])
    def teacher_readiness(
        teacher_id: str, provider: RepositoryProvider = Depends(get_provider)
    ) -> Dict[str, Any]:
        _require_teacher(provider, teacher_id)
        state = check_readiness(provider, teacher_id)
        return {
            "is_ready": state.is_ready,
            "student_count": state.student_count,
            "subject_count": state.subject_count,
            "course_count": state.course_count,
            "blockers": [asdict(blocker_feedback(item)) for item in state.blockers],
            "warnings": [asdict(warning_feedback(item)) for item in state.warnings],
        }

    return app

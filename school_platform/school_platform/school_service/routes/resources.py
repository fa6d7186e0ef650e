"""
Mount points for students, teachers and courses.

No behaviour is defined for these resources yet; each answers 501 so the
routes show up in /docs.
"""
from fastapi import APIRouter

from ..errors import SchoolAPIError


class NotImplementedRoutesError(SchoolAPIError):
    status_code = 501


def _placeholder_router(resource: str) -> APIRouter:
    router = APIRouter(prefix=f"/{resource}", tags=[resource.capitalize()])

    @router.get("", summary=f"List {resource} (not implemented)", responses={501: {"description": "Not implemented"}})
    def list_placeholder():
        raise NotImplementedRoutesError(f"{resource.capitalize()} routes are not implemented")

    return router


students_router = _placeholder_router("students")
teachers_router = _placeholder_router("teachers")
courses_router = _placeholder_router("courses")

"""
API routes for the Grades system.

Domain errors raised by the grading tools are translated to HTTP responses by
the exception handlers registered in ``main.py``.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Header, Response
from sqlalchemy.orm import Session

from database import User, get_db
from grading import (
    AuthorizationService,
    catalog,
    get_user_grades,
    get_passed_courses,
    get_all_courses,
    get_course_summary,
    get_course_timeline,
    get_course_grades,
    add_grade,
    update_grade,
    delete_grade,
    get_average_stats,
    get_full_distribution,
    create_user,
)
from .schemas import (
    CreateUserRequest,
    NameRequest,
    CreateCourseRequest,
    CreateGradeRequest,
    UpdateGradeRequest,
    UserResponse,
    NamedResponse,
    CourseResponse,
    SearchResponse,
    PageResponse,
    AverageStatsResponse,
    FullDistributionResponse,
    CourseSummaryResponse,
    CourseTimelineResponse,
)


def get_current_user(
    x_user_id: int = Header(..., alias="X-User-Id", description="ID of the requesting user"),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the requesting user from the database."""
    return AuthorizationService(db).get_user(x_user_id)


users_router = APIRouter(prefix="/api/users", tags=["Users"])
semesters_router = APIRouter(prefix="/api/semesters", tags=["Semesters"])
courses_router = APIRouter(prefix="/api/courses", tags=["Courses"])
examinations_router = APIRouter(prefix="/api/examinations", tags=["Examinations"])
grades_router = APIRouter(prefix="/api/grades", tags=["Grades"])
stats_router = APIRouter(prefix="/api/stats", tags=["Stats"])


# ============== User Endpoints ==============

@users_router.post("", response_model=UserResponse, status_code=201)
async def create_user_endpoint(request: CreateUserRequest, db: Session = Depends(get_db)):
    """Register a grade owner."""
    return create_user(db=db, name=request.name, email=request.email)


@users_router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_user)):
    """Get the requesting user."""
    return user.to_dict()


# ============== Semester Endpoints ==============

@semesters_router.post("", status_code=201)
async def create_semester_endpoint(request: NameRequest, db: Session = Depends(get_db),
                                   user: User = Depends(get_current_user)):
    return {"semester": catalog.create_semester(db, request.name)}


@semesters_router.get("", response_model=list[NamedResponse])
async def list_semesters_endpoint(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return catalog.list_semesters(db)


@semesters_router.get("/{semester_id}", response_model=NamedResponse)
async def get_semester_endpoint(semester_id: int, db: Session = Depends(get_db),
                                user: User = Depends(get_current_user)):
    return catalog.get_semester(db, semester_id)


@semesters_router.put("/{semester_id}", response_model=NamedResponse)
async def update_semester_endpoint(semester_id: int, request: NameRequest, db: Session = Depends(get_db),
                                   user: User = Depends(get_current_user)):
    return catalog.update_semester(db, semester_id, request.name)


@semesters_router.delete("/{semester_id}", status_code=204, response_class=Response)
async def delete_semester_endpoint(semester_id: int, db: Session = Depends(get_db),
                                   user: User = Depends(get_current_user)):
    """Delete a semester. Its courses move to the unspecified group."""
    catalog.delete_semester(db, semester_id)
    return Response(status_code=204)


# ============== Course Endpoints ==============

@courses_router.post("", status_code=201)
async def create_course_endpoint(request: CreateCourseRequest, db: Session = Depends(get_db),
                                 user: User = Depends(get_current_user)):
    return {"course": catalog.create_course(db, request.name, request.semester_id)}


@courses_router.get("")
async def get_all_courses_endpoint(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """
    All courses grouped by semester name.
    Courses without a semester are listed under ``unspecified``.
    """
    return get_all_courses(db)


@courses_router.get("/passed")
async def get_passed_courses_endpoint(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """
    Courses passed by the requesting user, grouped by semester name.
    Courses without a semester are listed under ``Unspecified``.
    """
    return get_passed_courses(db, user.id)


@courses_router.get("/search", response_model=SearchResponse)
async def search_courses_endpoint(query: Optional[str] = None, db: Session = Depends(get_db),
                                  user: User = Depends(get_current_user)):
    return {"results": catalog.search_courses(db, query)}


@courses_router.get("/{course_id}", response_model=CourseResponse)
async def get_course_endpoint(course_id: int, db: Session = Depends(get_db),
                              user: User = Depends(get_current_user)):
    return catalog.get_course(db, course_id)


@courses_router.put("/{course_id}", response_model=CourseResponse)
async def update_course_endpoint(course_id: int, request: NameRequest, db: Session = Depends(get_db),
                                 user: User = Depends(get_current_user)):
    return catalog.update_course(db, course_id, request.name)


@courses_router.delete("/{course_id}", status_code=204, response_class=Response)
async def delete_course_endpoint(course_id: int, db: Session = Depends(get_db),
                                 user: User = Depends(get_current_user)):
    """Delete a course and every grade recorded for it."""
    catalog.delete_course(db, course_id)
    return Response(status_code=204)


@courses_router.get("/{course_id}/summary", response_model=CourseSummaryResponse)
async def get_course_summary_endpoint(course_id: int, db: Session = Depends(get_db),
                                      user: User = Depends(get_current_user)):
    """Final grade of the course for the requesting user."""
    return get_course_summary(db, user.id, course_id)


@courses_router.get("/{course_id}/grades/graph", response_model=CourseTimelineResponse)
async def get_course_timeline_endpoint(course_id: int, db: Session = Depends(get_db),
                                       user: User = Depends(get_current_user)):
    """Every attempt of the course, oldest first, for charting."""
    return get_course_timeline(db, user.id, course_id).to_dict()


@courses_router.get("/{course_id}/grades", response_model=PageResponse)
async def get_course_grades_endpoint(
    course_id: int,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Paginated attempts of the course, most recent first."""
    return get_course_grades(db, user.id, course_id, page=page, limit=limit)


# ============== Examination Endpoints ==============

@examinations_router.post("", status_code=201)
async def create_examination_endpoint(request: NameRequest, db: Session = Depends(get_db),
                                      user: User = Depends(get_current_user)):
    return {"message": "Examination created", "exam": catalog.create_examination(db, request.name)}


@examinations_router.get("", response_model=list[NamedResponse])
async def list_examinations_endpoint(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return catalog.list_examinations(db)


@examinations_router.get("/search", response_model=SearchResponse)
async def search_examinations_endpoint(query: Optional[str] = None, db: Session = Depends(get_db),
                                       user: User = Depends(get_current_user)):
    return {"results": catalog.search_examinations(db, query)}


@examinations_router.get("/name/{name}", response_model=NamedResponse)
async def get_examination_by_name_endpoint(name: str, db: Session = Depends(get_db),
                                           user: User = Depends(get_current_user)):
    return catalog.get_examination_by_name(db, name)


@examinations_router.get("/{examination_id}", response_model=NamedResponse)
async def get_examination_endpoint(examination_id: int, db: Session = Depends(get_db),
                                   user: User = Depends(get_current_user)):
    return catalog.get_examination(db, examination_id)


@examinations_router.put("/{examination_id}", response_model=NamedResponse)
async def update_examination_endpoint(examination_id: int, request: NameRequest, db: Session = Depends(get_db),
                                      user: User = Depends(get_current_user)):
    return catalog.update_examination(db, examination_id, request.name)


# ============== Grade Endpoints ==============

@grades_router.post("", status_code=201)
async def create_grade_endpoint(request: CreateGradeRequest, db: Session = Depends(get_db),
                                user: User = Depends(get_current_user)):
    """Record a grade attempt for the requesting user."""
    grade = add_grade(
        db=db,
        user_id=user.id,
        course_id=request.course_id,
        examination_id=request.examination_id,
        score=request.score,
    )
    return {"grade": grade}


@grades_router.get("", response_model=PageResponse)
async def get_user_grades_endpoint(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Paginated grades of the requesting user, most recent first.

    Invalid ``page``/``limit`` values fall back to 1 and 10.
    """
    return get_user_grades(db, user.id, page=page, limit=limit)


@grades_router.put("/{grade_id}")
async def update_grade_endpoint(grade_id: int, request: UpdateGradeRequest, db: Session = Depends(get_db),
                                user: User = Depends(get_current_user)):
    """Change the score and/or examination of an owned grade."""
    grade = update_grade(
        db=db,
        user_id=user.id,
        grade_id=grade_id,
        score=request.score,
        examination_id=request.examination_id,
    )
    return {"grade": grade}


@grades_router.delete("/{grade_id}", status_code=204, response_class=Response)
async def delete_grade_endpoint(grade_id: int, db: Session = Depends(get_db),
                                user: User = Depends(get_current_user)):
    delete_grade(db, user.id, grade_id)
    return Response(status_code=204)


# ============== Stats Endpoints ==============

@stats_router.get("/average", response_model=AverageStatsResponse)
async def get_average_endpoint(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """Passed-course count, their average and the 5-10 distribution of best attempts."""
    return get_average_stats(db, user.id)


@stats_router.get("/full-distribution", response_model=FullDistributionResponse)
async def get_full_distribution_endpoint(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """0-10 distribution of every attempt."""
    return get_full_distribution(db, user.id)

"""
Pydantic schemas for API requests and responses.

Wire names are camelCase; Python attributes are snake_case with aliases.
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt

Score = Union[StrictInt, StrictFloat]


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# Request schemas
class CreateUserRequest(CamelModel):
    """Request to register a grade owner."""
    name: Optional[str] = Field(None, description="Display name")
    email: Optional[str] = Field(None, description="Unique email address")


class NameRequest(CamelModel):
    """Request carrying only a name (semesters, examinations, course rename)."""
    name: Optional[str] = Field(None, description="Unique name")


class CreateCourseRequest(CamelModel):
    """Request to create a course."""
    name: Optional[str] = Field(None, description="Unique course name")
    semester_id: Optional[int] = Field(None, alias="semesterId", description="Owning semester")


class CreateGradeRequest(CamelModel):
    """Request to record a grade attempt for the current user."""
    course_id: Optional[int] = Field(None, alias="courseId", description="ID of the course")
    examination_id: Optional[int] = Field(None, alias="examinationId", description="ID of the examination")
    score: Optional[Score] = Field(None, description="Attempt score")


class UpdateGradeRequest(CamelModel):
    """Request to change a grade's score and/or examination."""
    score: Optional[Score] = Field(None, description="New score")
    examination_id: Optional[int] = Field(None, alias="examinationId", description="New examination")


# Response schemas
class UserResponse(CamelModel):
    id: int
    name: str
    email: str


class NamedResponse(CamelModel):
    """Semester or examination."""
    id: int
    name: str


class CourseResponse(CamelModel):
    id: int
    name: str
    semester_id: Optional[int] = Field(None, alias="semesterId")
    semester: Optional[NamedResponse] = None


class GradeResponse(CamelModel):
    id: int
    user_id: int = Field(alias="userId")
    course_id: int = Field(alias="courseId")
    examination_id: int = Field(alias="examinationId")
    score: float


class SearchResponse(CamelModel):
    results: List[NamedResponse]


class PageResponse(CamelModel):
    """One page of grade rows."""
    data: List[Dict[str, Any]]
    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")


class AverageStatsResponse(CamelModel):
    total_courses: int = Field(alias="totalCourses")
    average_score: float = Field(alias="averageScore")
    grade_distribution: Dict[int, int] = Field(alias="gradeDistribution")


class FullDistributionResponse(CamelModel):
    full_grade_distribution: Dict[int, int] = Field(alias="fullGradeDistribution")


class CourseSummaryResponse(CamelModel):
    course_name: str = Field(alias="courseName")
    final_grade: Optional[float] = Field(None, alias="finalGrade")
    examination: Optional[str] = None


class TimelinePoint(CamelModel):
    examination: Optional[str]
    score: float


class CourseTimelineResponse(CamelModel):
    grades: List[TimelinePoint]


class ErrorResponse(CamelModel):
    """Error response."""
    detail: str
    type: Optional[str] = None

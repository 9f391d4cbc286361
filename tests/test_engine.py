"""
Unit tests for the aggregation engine.
Uses transient ORM objects; no database access.
"""
import math

import pytest

from database import Course, Examination, Grade, Semester
from grading import (
    Histogram,
    build_histogram,
    passed_histogram,
    full_histogram,
    select_best_attempts,
    best_scores,
    best_attempt_for_course,
    compute_average_stats,
    build_passed_roster,
    build_course_roster,
    roster_to_dict,
    resolve_page_params,
    compute_window,
    total_pages,
    build_page,
    CourseTimeline,
    build_course_summary,
    serialize_attempt_row,
)
from grading.aggregates import round_half_away


FALL = Semester(id=1, name="Fall 2025")
SPRING = Semester(id=2, name="Spring 2026")
MIDTERM = Examination(id=1, name="Midterm")
RESIT = Examination(id=2, name="Resit")


def make_course(course_id, name, semester=None):
    return Course(
        id=course_id,
        name=name,
        semester_id=semester.id if semester is not None else None,
        semester=semester,
    )


def make_grade(grade_id, course_id, score, course=None, examination=MIDTERM):
    return Grade(
        id=grade_id,
        user_id=1,
        course_id=course_id,
        examination_id=examination.id,
        score=score,
        course=course,
        examination=examination,
    )


class TestRanking:
    """Tests for best-attempt selection."""

    def test_highest_score_wins_per_course(self):
        grades = [
            make_grade(1, 10, 4),
            make_grade(2, 10, 7),
            make_grade(3, 20, 9),
            make_grade(4, 10, 6),
        ]
        best = select_best_attempts(grades)
        assert list(best) == [10, 20]
        assert best[10].id == 2
        assert best[20].id == 3

    def test_tie_prefers_smallest_id_in_any_order(self):
        grades = [make_grade(5, 10, 8), make_grade(3, 10, 8), make_grade(9, 10, 8)]
        assert select_best_attempts(grades)[10].id == 3
        assert select_best_attempts(reversed(grades))[10].id == 3

    def test_selection_is_idempotent(self):
        grades = [make_grade(i, i % 3, (i * 7) % 11) for i in range(1, 20)]
        first = select_best_attempts(grades)
        second = select_best_attempts(grades)
        again = select_best_attempts(first.values())
        assert {k: g.id for k, g in first.items()} == {k: g.id for k, g in second.items()}
        assert {k: g.id for k, g in first.items()} == {k: g.id for k, g in again.items()}

    def test_best_scores_one_per_course_in_course_order(self):
        grades = [make_grade(1, 30, 5), make_grade(2, 10, 75), make_grade(3, 10, 95)]
        assert best_scores(grades) == [95, 5]

    def test_best_attempt_for_course(self):
        grades = [make_grade(1, 10, 5), make_grade(2, 20, 9)]
        assert best_attempt_for_course(grades, 20).id == 2
        assert best_attempt_for_course(grades, 99) is None

    def test_empty_input(self):
        assert select_best_attempts([]) == {}
        assert best_scores([]) == []


class TestHistogram:
    """Tests for score histograms."""

    def test_every_bucket_present_when_empty(self):
        histogram = build_histogram([], 0, 10)
        assert histogram.to_dict() == {b: 0 for b in range(11)}
        assert histogram.total == 0

    def test_floor_bucketing(self):
        histogram = build_histogram([7.9, 7.0, 5, 10.99, 0.1], 0, 10)
        assert histogram.count(7) == 2
        assert histogram.count(5) == 1
        assert histogram.count(10) == 1
        assert histogram.count(0) == 1

    def test_out_of_range_scores_are_dropped(self):
        scores = [-0.5, 11, 80, 90, 3]
        histogram = build_histogram(scores, 0, 10)
        assert histogram.total == 1
        assert histogram.count(3) == 1
        assert set(histogram.to_dict()) == set(range(11))

    def test_total_matches_input_only_when_all_in_range(self):
        in_range = [0, 2.5, 9.99, 10]
        assert build_histogram(in_range, 0, 10).total == len(in_range)
        mixed = in_range + [10.5, -1]
        assert build_histogram(mixed, 0, 10).total < len(mixed)

    def test_non_finite_scores_are_dropped(self):
        histogram = build_histogram([math.nan, math.inf, -math.inf, 6], 0, 10)
        assert histogram.total == 1

    def test_buckets_ascending(self):
        histogram = build_histogram([6, 6, 9], 5, 10)
        assert list(histogram.buckets()) == [(5, 0), (6, 2), (7, 0), (8, 0), (9, 1), (10, 0)]

    def test_count_outside_range_raises(self):
        with pytest.raises(KeyError):
            Histogram(5, 10).count(4)

    def test_empty_range_rejected(self):
        with pytest.raises(ValueError):
            Histogram(10, 5)

    def test_passed_histogram_ignores_failing_scores(self):
        histogram = passed_histogram([4.99, 5, 8.5, 10])
        assert histogram.to_dict() == {5: 1, 6: 0, 7: 0, 8: 1, 9: 0, 10: 1}

    def test_full_histogram_range(self):
        assert list(full_histogram([1, 1, 10]).to_dict()) == list(range(11))


class TestAverageStats:
    """Tests for the average stats aggregate."""

    def test_out_of_scale_scores_counted_but_not_bucketed(self):
        stats = compute_average_stats([80, 90])
        assert stats.total_courses == 2
        assert stats.average_score == 85.0
        assert stats.to_dict()["gradeDistribution"] == {b: 0 for b in range(5, 11)}

    def test_empty_passed_set(self):
        stats = compute_average_stats([])
        assert stats.to_dict() == {
            "totalCourses": 0,
            "averageScore": 0,
            "gradeDistribution": {b: 0 for b in range(5, 11)},
        }

    def test_only_passing_scores_count(self):
        stats = compute_average_stats([4, 6, 2])
        assert stats.total_courses == 1
        assert stats.average_score == 6.0
        assert stats.distribution.count(6) == 1

    def test_average_rounded_to_two_decimals(self):
        assert compute_average_stats([5, 6, 6]).average_score == 5.67
        assert compute_average_stats([7, 8, 8]).average_score == 7.67

    def test_round_half_away_from_zero(self):
        assert round_half_away(2.675) == 2.68
        assert round_half_away(-2.675) == -2.68
        assert round_half_away(5.125) == 5.13
        assert round_half_away(5.0) == 5.0

    def test_round_half_away_passes_non_finite_through(self):
        assert round_half_away(math.inf) == math.inf
        assert math.isnan(round_half_away(math.nan))

    def test_huge_scores_average_without_error(self):
        stats = compute_average_stats([1e30, 8])
        assert stats.total_courses == 2
        assert stats.average_score == pytest.approx(5e29)
        assert stats.distribution.count(8) == 1

    def test_sum_beyond_float_range_stays_finite(self):
        stats = compute_average_stats([1e308, 1e308])
        assert stats.total_courses == 2
        assert stats.average_score == 1e308
        assert math.isfinite(stats.average_score)


class TestRosters:
    """Tests for semester rosters."""

    def test_passed_roster_keeps_only_best_attempt(self):
        math_course = make_course(1, "Math", FALL)
        grades = [make_grade(1, 1, 75, math_course), make_grade(2, 1, 95, math_course)]
        assert roster_to_dict(build_passed_roster(grades)) == {
            "Fall 2025": [{"courseId": 1, "courseName": "Math", "highestGrade": 95}],
        }

    def test_passed_roster_skips_failed_courses(self):
        math_course = make_course(1, "Math", FALL)
        history = make_course(2, "History", FALL)
        grades = [
            make_grade(1, 1, 3, math_course),
            make_grade(2, 1, 4.5, math_course),
            make_grade(3, 2, 5, history),
        ]
        roster = roster_to_dict(build_passed_roster(grades))
        assert roster == {"Fall 2025": [{"courseId": 2, "courseName": "History", "highestGrade": 5}]}

    def test_passed_roster_order_and_unspecified_label(self):
        writing = make_course(1, "Writing")
        history = make_course(3, "History", SPRING)
        physics = make_course(4, "Physics", FALL)
        math_course = make_course(2, "Math", FALL)
        grades = [
            make_grade(1, 1, 6, writing),
            make_grade(2, 3, 7, history),
            make_grade(3, 4, 8, physics),
            make_grade(4, 2, 9, math_course),
        ]
        groups = build_passed_roster(grades)
        assert [g.label for g in groups] == ["Fall 2025", "Spring 2026", "Unspecified"]
        assert [e["courseId"] for e in groups[0].entries] == [2, 4]

    def test_all_courses_roster_uses_lower_case_unspecified(self):
        courses = [make_course(1, "Math", FALL), make_course(2, "Writing"), make_course(3, "Physics", FALL)]
        roster = roster_to_dict(build_course_roster(courses))
        assert list(roster) == ["Fall 2025", "unspecified"]
        assert [c["name"] for c in roster["Fall 2025"]] == ["Math", "Physics"]
        assert roster["unspecified"][0]["semester"] is None

    def test_empty_rosters(self):
        assert build_passed_roster([]) == []
        assert roster_to_dict(build_course_roster([])) == {}


class TestPager:
    """Tests for pagination arithmetic."""

    def test_defaults(self):
        assert resolve_page_params() == (1, 10)

    @pytest.mark.parametrize("page,limit", [
        ("abc", "x"),
        ("0", "0"),
        ("-2", "-5"),
        ("", " "),
        (True, False),
    ])
    def test_invalid_values_fall_back(self, page, limit):
        assert resolve_page_params(page, limit) == (1, 10)

    def test_valid_values(self):
        assert resolve_page_params("3", " 25 ") == (3, 25)
        assert resolve_page_params(2, 5) == (2, 5)

    def test_decimal_values_truncate(self):
        assert resolve_page_params("2.5", "10.9") == (2, 10)
        assert resolve_page_params(3.0, "+4") == (3, 4)
        assert resolve_page_params("0.5", "2abc") == (1, 10)

    def test_values_beyond_64_bit_fall_back(self):
        huge = "99999999999999999999"
        assert resolve_page_params(huge, huge) == (1, 10)
        assert resolve_page_params(str(2 ** 63), str(2 ** 63 - 1)) == (1, 2 ** 63 - 1)

    def test_window_skip_is_capped(self):
        window = compute_window(str(2 ** 62), "10")
        assert window.page == 2 ** 62
        assert window.skip == 2 ** 63 - 1

    def test_window_skip(self):
        window = compute_window("3", "10")
        assert window.skip == 20
        assert window.limit == 10
        assert compute_window().skip == 0

    @pytest.mark.parametrize("total,limit,expected", [
        (0, 10, 1),
        (1, 10, 1),
        (10, 10, 1),
        (25, 10, 3),
        (31, 10, 4),
        (7, 1, 7),
    ])
    def test_total_pages(self, total, limit, expected):
        assert total_pages(total, limit) == expected

    def test_build_page(self):
        page = build_page([{"id": 1}], compute_window(2, 1), 3)
        assert page.to_dict() == {"data": [{"id": 1}], "page": 2, "limit": 1, "total": 3, "totalPages": 3}

    def test_build_page_empty(self):
        assert build_page([], compute_window(), 0).to_dict()["totalPages"] == 1


class TestCourseViews:
    """Tests for course summary and timeline."""

    def test_summary_without_attempts(self):
        course = make_course(1, "Math", FALL)
        assert build_course_summary(course, []) == {
            "courseName": "Math",
            "finalGrade": None,
            "examination": None,
        }

    def test_summary_names_examination_of_best_attempt(self):
        course = make_course(1, "Math", FALL)
        grades = [
            make_grade(4, 1, 8, course, RESIT),
            make_grade(2, 1, 8, course, MIDTERM),
            make_grade(1, 1, 3, course, RESIT),
        ]
        assert build_course_summary(course, grades) == {
            "courseName": "Math",
            "finalGrade": 8,
            "examination": "Midterm",
        }

    def test_timeline_ascending_without_dedup(self):
        grades = [
            make_grade(3, 1, 6, examination=RESIT),
            make_grade(1, 1, 4, examination=MIDTERM),
            make_grade(2, 1, 4, examination=MIDTERM),
        ]
        timeline = CourseTimeline(grades)
        assert len(timeline) == 3
        assert timeline.to_dict() == {"grades": [
            {"examination": "Midterm", "score": 4},
            {"examination": "Midterm", "score": 4},
            {"examination": "Resit", "score": 6},
        ]}

    def test_timeline_is_restartable(self):
        timeline = CourseTimeline([make_grade(1, 1, 5), make_grade(2, 1, 7)])
        assert list(timeline) == list(timeline)
        assert list(CourseTimeline([])) == []

    def test_attempt_row_carries_examination(self):
        row = serialize_attempt_row(make_grade(7, 1, 6.5, examination=RESIT))
        assert row["id"] == 7
        assert row["score"] == 6.5
        assert row["examinationName"] == "Resit"
        assert row["examination"] == {"id": 2, "name": "Resit"}

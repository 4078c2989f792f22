"""
Unit tests for parameter validation.

Contract:
- term must be one of the known terms
- list filters are unconstrained, blank means "no filter"
- detail lookups: subject 2-4, code 3-4, section 1-4 characters
- page/limit are integers >= 1, defaulting to 1/10
"""

import unittest

from courseup.errors import ValidationError
from courseup.model import CourseKey, CourseQuery
from courseup.validate import validate_course_key, validate_course_query, validate_page, validate_term

TERMS = ["202109", "202201"]


class TestValidateTerm(unittest.TestCase):
    def test_known_term(self) -> None:
        self.assertEqual(validate_term("202109", TERMS), "202109")

    def test_unknown_term(self) -> None:
        with self.assertRaises(ValidationError):
            validate_term("209999", TERMS)

    def test_missing_term(self) -> None:
        with self.assertRaises(ValidationError):
            validate_term(None, TERMS)


class TestValidatePage(unittest.TestCase):
    def test_default_when_missing(self) -> None:
        self.assertEqual(validate_page(None, "page", 1), 1)
        self.assertEqual(validate_page(None, "limit", 10), 10)

    def test_accepts_int_and_digit_string(self) -> None:
        self.assertEqual(validate_page(3, "page", 1), 3)
        self.assertEqual(validate_page("25", "limit", 10), 25)

    def test_rejects_non_positive(self) -> None:
        for value in (0, "0", -1, "-1"):
            with self.assertRaises(ValidationError):
                validate_page(value, "page", 1)

    def test_rejects_garbage(self) -> None:
        for value in ("abc", "1.5", 1.5, True, ""):
            with self.assertRaises(ValidationError):
                validate_page(value, "limit", 10)

    def test_rejects_non_ascii_digits(self) -> None:
        # superscript two is a digit character but not a decimal number
        for value in ("\u00b2", "1\u00b2"):
            with self.assertRaises(ValidationError):
                validate_page(value, "page", 1)

    def test_rejects_oversized_digit_string(self) -> None:
        with self.assertRaises(ValidationError):
            validate_page("1" * 5000, "limit", 10)


class TestValidateCourseQuery(unittest.TestCase):
    def test_defaults(self) -> None:
        q = validate_course_query("202109", None, None, None, None, TERMS)
        self.assertEqual(q, CourseQuery(term="202109", subject=None, code=None, page=1, limit=10))

    def test_custom_default_limit(self) -> None:
        q = validate_course_query("202109", None, None, None, None, TERMS, default_limit=25)
        self.assertEqual(q.limit, 25)

    def test_filters_are_unconstrained(self) -> None:
        q = validate_course_query("202201", "ABCDEFG", "1", "2", "5", TERMS)
        self.assertEqual(q.subject, "ABCDEFG")
        self.assertEqual(q.code, "1")
        self.assertEqual((q.page, q.limit), (2, 5))

    def test_blank_filters_mean_no_filter(self) -> None:
        q = validate_course_query("202109", "", "  ", None, None, TERMS)
        self.assertIsNone(q.subject)
        self.assertIsNone(q.code)

    def test_bad_term_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            validate_course_query("209999", "CSC", None, None, None, TERMS)


class TestValidateCourseKey(unittest.TestCase):
    def test_valid_key(self) -> None:
        key = validate_course_key("202109", "CSC", "225", TERMS)
        self.assertEqual(key, CourseKey(term="202109", subject="CSC", code="225", section=None))

    def test_valid_key_with_section(self) -> None:
        key = validate_course_key("202109", "MATH", "100A", TERMS, section="A01")
        self.assertEqual(key.section, "A01")

    def test_subject_bounds(self) -> None:
        for subject in ("C", "ABCDE"):
            with self.assertRaises(ValidationError):
                validate_course_key("202109", subject, "110", TERMS)

    def test_code_bounds(self) -> None:
        for code in ("11", "11000"):
            with self.assertRaises(ValidationError):
                validate_course_key("202109", "CSC", code, TERMS)

    def test_section_bounds(self) -> None:
        for section in ("", "A0123"):
            with self.assertRaises(ValidationError):
                validate_course_key("202109", "CSC", "110", TERMS, section=section)

    def test_unknown_term(self) -> None:
        with self.assertRaises(ValidationError):
            validate_course_key("202110", "CSC", "110", TERMS)


if __name__ == "__main__":
    unittest.main()

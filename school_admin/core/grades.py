"""
Grade progression policy.

Grades are totally ordered by declaration order of `Grade`. A rollover moves
each learner one position forward; learners in the terminal grade leave the
school instead.
"""

from typing import List, Optional

from school_admin.core.enums import Grade, Term

GRADE_ORDER: List[str] = [g.value for g in Grade]
TERMINAL_GRADE: str = GRADE_ORDER[-1]
FIRST_TERM: str = Term.TERM_1.value

# Column names on the fee_structure table, index-aligned with GRADE_ORDER.
FEE_STRUCTURE_KEYS: List[str] = [
    "playgroup",
    "pp1",
    "pp2",
    "grade1",
    "grade2",
    "grade3",
    "grade4",
    "grade5",
    "grade6",
    "grade7",
    "grade8",
    "grade9",
]


def grade_position(grade: str) -> int:
    """Index of grade in GRADE_ORDER. Raises ValueError for unknown labels."""
    return GRADE_ORDER.index(grade)


def is_terminal(grade: str) -> bool:
    return grade == TERMINAL_GRADE


def next_grade(grade: str) -> Optional[str]:
    """Label of the grade after `grade`, or None when `grade` is terminal."""
    position = grade_position(grade)
    if position == len(GRADE_ORDER) - 1:
        return None
    return GRADE_ORDER[position + 1]
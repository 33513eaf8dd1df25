from enum import Enum


class Grade(str, Enum):
    PLAYGROUP = "Playgroup"
    PP1 = "PP1"
    PP2 = "PP2"
    GRADE_1 = "Grade 1"
    GRADE_2 = "Grade 2"
    GRADE_3 = "Grade 3"
    GRADE_4 = "Grade 4"
    GRADE_5 = "Grade 5"
    GRADE_6 = "Grade 6"
    GRADE_7 = "Grade 7"
    GRADE_8 = "Grade 8"
    GRADE_9 = "Grade 9"


class Term(str, Enum):
    TERM_1 = "Term 1"
    TERM_2 = "Term 2"
    TERM_3 = "Term 3"


class ConnectionState(str, Enum):
    INIT = "INIT"
    READY = "READY"
    DEGRADED = "DEGRADED"
    RETRYING = "RETRYING"

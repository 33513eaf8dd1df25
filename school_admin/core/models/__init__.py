from school_admin.core.models.book import Book
from school_admin.core.models.class_book import ClassBook
from school_admin.core.models.fee import Fee
from school_admin.core.models.fee_structure import FeeStructure
from school_admin.core.models.learner import Learner
from school_admin.core.models.learner_archive import LearnerArchive
from school_admin.core.models.term_settings import TermSettings

__all__ = [
    "Book",
    "ClassBook",
    "Fee",
    "FeeStructure",
    "Learner",
    "LearnerArchive",
    "TermSettings",
]

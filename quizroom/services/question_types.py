from enum import Enum


class QuestionType(str, Enum):
    single_choice = "single-choice"
    multiple_choice = "multiple-choice"  # legacy alias of single-choice
    multi_choice = "multi-choice"
    text = "text"


SINGLE_ANSWER_TYPES = {QuestionType.single_choice.value, QuestionType.multiple_choice.value}
CHOICE_TYPES = SINGLE_ANSWER_TYPES | {QuestionType.multi_choice.value}

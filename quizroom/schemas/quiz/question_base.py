from typing import List, Optional, Union
from uuid import UUID

from pydantic import Field, model_validator

from quizroom.schemas.common.camel_model import CamelModel
from quizroom.services.question_types import QuestionType, CHOICE_TYPES


class QuestionBase(CamelModel):
    content: str = Field(min_length=1)
    type: QuestionType
    choices: Optional[List[str]] = None
    answer: Union[List[str], str]
    points: int = Field(default=1, ge=1)
    order: int = 0


class QuestionCreate(QuestionBase):

    @model_validator(mode="after")
    def check_answer_shape(self):
        qtype = self.type.value
        if qtype == QuestionType.text.value:
            if not isinstance(self.answer, str):
                raise ValueError("text questions take a single string answer")
            self.choices = None
            return self

        if not self.choices:
            raise ValueError("choice questions need at least one choice")

        if qtype == QuestionType.multi_choice.value:
            if not isinstance(self.answer, list) or not self.answer:
                raise ValueError("multi-choice questions take a non-empty list of answers")
            answers = self.answer
        else:
            if not isinstance(self.answer, str):
                raise ValueError("single-choice questions take a single string answer")
            answers = [self.answer]

        missing = [a for a in answers if a not in self.choices]
        if missing:
            raise ValueError(f"answer not among choices: {', '.join(missing)}")
        return self


class QuestionUpdate(CamelModel):
    content: Optional[str] = Field(default=None, min_length=1)
    type: Optional[QuestionType] = None
    choices: Optional[List[str]] = None
    answer: Optional[Union[List[str], str]] = None
    points: Optional[int] = Field(default=None, ge=1)
    order: Optional[int] = None


class QuestionOut(QuestionBase):
    id: UUID
    quiz_id: UUID

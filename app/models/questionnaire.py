from pydantic import ConfigDict, Field
from typing import List

from app.models.base import CamelModel


class AnswerOption(CamelModel):
    """
    One selectable answer for a question.
    """

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., min_length=1, description="Stable option identifier")
    label: str = Field(..., description="Human-readable option text")
    score: int = Field(..., ge=0, le=4, description="Rubric points awarded for this option")


class Question(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    text: str
    options: List[AnswerOption] = Field(..., min_length=1)


class QuestionCluster(CamelModel):
    """
    A rubric category (ISO 27001 control area) and its questions.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str
    description: str
    questions: List[Question]


class QuestionClusterResponse(QuestionCluster):
    """
    Cluster as returned by the API, with its scoring ceiling.
    """

    max_score: int = Field(..., ge=0)


class QuestionBankResponse(CamelModel):
    clusters: List[QuestionClusterResponse]
    total_questions: int
    max_total_score: int

"""Manual body condition assessment from three owner observations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Tuple

from .errors import ValidationError
from .types import MAX_BCS, MIN_BCS


@dataclass(frozen=True)
class AnswerOption:
    score: int
    label: str


@dataclass(frozen=True)
class Question:
    id: str
    text: str
    options: Tuple[AnswerOption, ...]


QUESTIONS: Tuple[Question, ...] = (
    Question(
        id="ribs",
        text="When you touch your dog's ribs, what do you feel?",
        options=(
            AnswerOption(1, "Ribs are very prominent and easily visible"),
            AnswerOption(2, "Ribs are easily felt with minimal pressure"),
            AnswerOption(3, "Ribs are felt with slight pressure"),
            AnswerOption(4, "Ribs are difficult to feel under fat layer"),
            AnswerOption(5, "Ribs cannot be felt under thick fat layer"),
        ),
    ),
    Question(
        id="waist",
        text="Looking at your dog from above, how would you describe their waist?",
        options=(
            AnswerOption(1, "Waist is extremely pronounced and narrow"),
            AnswerOption(2, "Waist is clearly visible and well-defined"),
            AnswerOption(3, "Waist is visible but not overly pronounced"),
            AnswerOption(4, "Little to no visible waist"),
            AnswerOption(5, "No waist visible, sides bulge outward"),
        ),
    ),
    Question(
        id="abdomen",
        text="Looking at your dog from the side, how does their abdomen appear?",
        options=(
            AnswerOption(1, "Abdomen is severely tucked up"),
            AnswerOption(2, "Abdomen is clearly tucked up"),
            AnswerOption(3, "Abdomen is slightly tucked up"),
            AnswerOption(4, "Abdomen is level with chest"),
            AnswerOption(5, "Abdomen hangs below chest line"),
        ),
    ),
)

# Answers are on a 1-5 scale; 1.8 stretches their mean onto the 1-9 BCS scale.
ANSWER_TO_BCS = 1.8


def score_answers(answers: Mapping[str, int]) -> int:
    """Convert one answer per question into a BCS between 1 and 9."""

    scores = []
    for question in QUESTIONS:
        if question.id not in answers:
            raise ValidationError(f"Missing answer for question '{question.id}'.")
        value = answers[question.id]
        valid = {option.score for option in question.options}
        if value not in valid:
            raise ValidationError(f"Answer for '{question.id}' must be one of {sorted(valid)}, got {value!r}.")
        scores.append(value)

    average = sum(scores) / len(scores)
    bcs = int(math.floor(average * ANSWER_TO_BCS + 0.5))
    return max(MIN_BCS, min(MAX_BCS, bcs))

"""
Question records as delivered by the OpenTDB question endpoint.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from ..errors import ProtocolError

REQUIRED_FIELDS = ('category', 'type', 'difficulty', 'question', 'correct_answer', 'incorrect_answers')


@dataclass(frozen=True)
class RawQuestion:
    """One entry of the ``results`` array, text kept exactly as received."""

    category: str
    type: str
    difficulty: str
    question: str
    correct_answer: str
    incorrect_answers: List[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Dict) -> 'RawQuestion':
        if not isinstance(data, dict):
            raise ProtocolError(f"Question record is not an object: {data!r}")

        missing = [name for name in REQUIRED_FIELDS if name not in data]
        if missing:
            raise ProtocolError(f"Question record is missing {', '.join(missing)}")

        incorrect = data['incorrect_answers']
        if not isinstance(incorrect, list):
            raise ProtocolError("incorrect_answers must be a list")

        return cls(
            category=str(data['category']),
            type=str(data['type']),
            difficulty=str(data['difficulty']),
            question=str(data['question']),
            correct_answer=str(data['correct_answer']),
            incorrect_answers=[str(answer) for answer in incorrect],
        )

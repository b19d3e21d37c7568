"""Response validation against the question catalog.

Out-of-range values are rejected, never clamped. A dependent question
answered without its parent chain satisfied is not an error: it is
recorded as ignored and excluded from scoring.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence, Set, Tuple

from safeharbor.shared.exceptions import InvalidResponseValue, ResponseTypeError
from safeharbor.shared.models import AssessmentQuestion
from .config import QUESTION_CATALOG


@dataclass(frozen=True)
class ValidatedResponses:
    """A response set checked against the catalog.

    Attributes:
        responses: Known question ids mapped to their int responses
        eligible_ids: Catalog ids whose dependency chain is satisfied
        ignored_ids: Answered ids excluded because the chain is unsatisfied
        unknown_ids: Submitted ids not present in the catalog
    """
    responses: Dict[str, int]
    eligible_ids: Tuple[str, ...]
    ignored_ids: Tuple[str, ...] = ()
    unknown_ids: Tuple[str, ...] = ()

    def is_eligible(self, question_id: str) -> bool:
        return question_id in self.eligible_ids

    def scored(self, question_id: str) -> bool:
        """Answered and eligible."""
        return question_id in self.responses and question_id in self.eligible_ids

    def get(self, question_id: str, default=None):
        return self.responses.get(question_id, default)

    @property
    def answered_eligible_count(self) -> int:
        return sum(1 for qid in self.eligible_ids if qid in self.responses)


def _coerce_response(question_id: str, value: Any) -> int:
    # JSON booleans arrive as bool; they are valid binary answers
    if isinstance(value, bool):
        return int(value)
    if not isinstance(value, int):
        raise ResponseTypeError(question_id, value, "int")
    return value


def eligible_question_ids(
    responses: Mapping[str, int],
    catalog: Sequence[AssessmentQuestion] = QUESTION_CATALOG,
) -> List[str]:
    """Catalog ids whose dependency chain is satisfied, in catalog order.

    A question is eligible when it has no parent, or its parent is
    answered non-zero and is itself eligible.
    """
    by_id = {q.id: q for q in catalog}
    memo: Dict[str, bool] = {}

    def satisfied(question_id: str, seen: Set[str]) -> bool:
        if question_id in memo:
            return memo[question_id]
        question = by_id[question_id]
        if question.depends_on is None:
            result = True
        elif question.depends_on in seen or question.depends_on not in by_id:
            result = False
        else:
            parent_ok = satisfied(question.depends_on, seen | {question_id})
            result = parent_ok and responses.get(question.depends_on, 0) != 0
        memo[question_id] = result
        return result

    return [q.id for q in catalog if satisfied(q.id, set())]


def validate_responses(
    responses: Mapping[str, Any],
    catalog: Sequence[AssessmentQuestion] = QUESTION_CATALOG,
) -> ValidatedResponses:
    """Validate a raw response mapping.

    Args:
        responses: Question id to response value
        catalog: Question catalog to validate against

    Returns:
        ValidatedResponses with eligibility resolved

    Raises:
        ResponseTypeError: If responses is not a mapping or a value is not an int
        InvalidResponseValue: If a value is outside its question's range
    """
    if not isinstance(responses, Mapping):
        raise ResponseTypeError("responses", responses, "mapping of question id to int")

    by_id = {q.id: q for q in catalog}
    known: Dict[str, int] = {}
    unknown: List[str] = []

    for question_id, raw_value in responses.items():
        if not isinstance(question_id, str):
            raise ResponseTypeError("responses", question_id, "str question id")
        question = by_id.get(question_id)
        if question is None:
            unknown.append(question_id)
            continue
        value = _coerce_response(question_id, raw_value)
        if not question.kind.allows(value):
            raise InvalidResponseValue(
                question_id,
                value,
                f"{question.kind.min_value}-{question.kind.max_value}",
            )
        known[question_id] = value

    eligible = eligible_question_ids(known, catalog)
    ignored = [q.id for q in catalog if q.id in known and q.id not in eligible]

    return ValidatedResponses(
        responses=known,
        eligible_ids=tuple(eligible),
        ignored_ids=tuple(ignored),
        unknown_ids=tuple(sorted(unknown)),
    )

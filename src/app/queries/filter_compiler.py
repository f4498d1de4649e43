"""
Filter Compiler

Turns the filter criteria sent by the history grid into a Predicate of SQL
clauses on the logs table. Criteria that cannot be understood are dropped
and counted; they never fail the request. Values are always bound as
parameters.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from sqlalchemy import and_, case, func, or_
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import select

from src.domain.entities import ChangeEvent, User

logger = logging.getLogger(__name__)

OPERATOR_ALIASES = {
    "=": "eq",
    "==": "eq",
    "equals": "eq",
    "!=": "neq",
    "<>": "neq",
    "<": "lt",
    "<=": "lte",
    ">": "gt",
    ">=": "gte",
    "like": "contains",
    "not in": "notin",
    "not_in": "notin",
}

# Free-text fields default to a substring match when no operator is given
TEXT_SEARCH_FIELDS = ("user_name", "change")

INTEGER_PATTERN = re.compile(r"-?\d+")

# Integer columns are signed 64-bit; longer digit strings never reach int()
MAX_INTEGER_DIGITS = 20
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def user_display_name():
    """
    SQL form of User.display_name: "realname firstname", the login when both are empty.

    Used both to filter and to sort on the name shown in the history grid.
    """
    full_name = func.trim(
        func.coalesce(User.realname, "") + " " + func.coalesce(User.firstname, "")
    )
    return case((full_name == "", User.name), else_=full_name)


@dataclass(frozen=True)
class FilterCriterion:
    field: str
    operator: str
    value: Any

    @classmethod
    def from_raw(cls, raw: Any) -> Optional["FilterCriterion"]:
        """Build a criterion from a decoded JSON object, None when malformed"""
        if not isinstance(raw, dict):
            return None
        field = raw.get("field")
        if not isinstance(field, str) or not field.strip():
            return None
        field = field.strip()
        operator = raw.get("operator")
        if operator is None or operator == "":
            operator = default_operator(field, raw.get("value"))
        if not isinstance(operator, str):
            return None
        operator = operator.strip().lower()
        operator = OPERATOR_ALIASES.get(operator, operator)
        return cls(field=field, operator=operator, value=raw.get("value"))


def default_operator(field: str, value: Any) -> str:
    if isinstance(value, list):
        return "in"
    if field in TEXT_SEARCH_FIELDS:
        return "contains"
    return "eq"


@dataclass(frozen=True)
class Predicate:
    """Compiled filter: clauses joined with AND, plus bookkeeping"""

    clauses: Tuple[ColumnElement, ...] = ()
    discarded: int = 0
    summary: str = ""

    @classmethod
    def match_all(cls) -> "Predicate":
        return cls()

    @property
    def is_match_all(self) -> bool:
        return not self.clauses

    def apply(self, stmt):
        """Add the clauses to a select statement"""
        if not self.clauses:
            return stmt
        return stmt.where(*self.clauses)


class InvalidValue(ValueError):
    pass


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidValue("boolean is not an integer")
    text = value.strip() if isinstance(value, str) else None
    if isinstance(value, int):
        number = value
    elif text and len(text) <= MAX_INTEGER_DIGITS and INTEGER_PATTERN.fullmatch(text):
        number = int(text)
    else:
        raise InvalidValue(f"not an integer: {value!r}")
    if not INT64_MIN <= number <= INT64_MAX:
        raise InvalidValue(f"integer out of range: {value!r}")
    return number


def _to_int_list(value: Any) -> List[int]:
    if isinstance(value, str):
        value = [part for part in value.split(",") if part.strip()]
    if not isinstance(value, list) or not value:
        raise InvalidValue(f"not a list of integers: {value!r}")
    return [_to_int(item) for item in value]


def _to_text(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise InvalidValue(f"not a text value: {value!r}")
    text = str(value).strip()
    if not text:
        raise InvalidValue("empty text")
    return text


def _to_text_list(value: Any) -> List[str]:
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, list):
        raise InvalidValue(f"not a list of text values: {value!r}")
    texts = [_to_text(item) for item in value if not (isinstance(item, str) and not item.strip())]
    if not texts:
        raise InvalidValue("empty list")
    return texts


def _to_moment(value: Any) -> Tuple[datetime, bool]:
    """Parse a date or a date-time; the flag tells a whole day was given"""
    if not isinstance(value, str) or not value.strip():
        raise InvalidValue(f"not a date: {value!r}")
    text = value.strip()
    try:
        if len(text) == 10:
            day = date.fromisoformat(text)
            return datetime(day.year, day.month, day.day), True
        moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
        if moment.tzinfo is not None:
            # date_mod is stored naive in UTC
            moment = moment.replace(tzinfo=None) - (moment.utcoffset() or timedelta(0))
    except (ValueError, OverflowError) as exc:
        raise InvalidValue(str(exc)) from exc
    return moment, False


def _nullable_neq(column, clause):
    """Negative match on a nullable column keeps rows where it is NULL"""
    return or_(column.is_(None), clause)


def _integer_clause(column, operator: str, value: Any, nullable: bool = False):
    if operator in ("in", "notin"):
        values = _to_int_list(value)
        if operator == "in":
            return column.in_(values)
        clause = column.not_in(values)
        return _nullable_neq(column, clause) if nullable else clause
    number = _to_int(value)
    if operator == "eq":
        return column == number
    if operator == "neq":
        clause = column != number
        return _nullable_neq(column, clause) if nullable else clause
    if operator == "lt":
        return column < number
    if operator == "lte":
        return column <= number
    if operator == "gt":
        return column > number
    if operator == "gte":
        return column >= number
    raise InvalidValue(f"unsupported operator {operator}")


def _id_clause(operator, value):
    return _integer_clause(ChangeEvent.id, operator, value)


def _users_id_clause(operator, value):
    return _integer_clause(ChangeEvent.users_id, operator, value, nullable=True)


def _linked_action_clause(operator, value):
    return _integer_clause(ChangeEvent.linked_action, operator, value)


def _date_mod_clause(operator, value):
    column = ChangeEvent.date_mod
    moment, whole_day = _to_moment(value)
    if whole_day:
        try:
            next_day = moment + timedelta(days=1)
        except OverflowError as exc:
            raise InvalidValue(f"no day after {value!r}") from exc
        if operator == "eq":
            return and_(column >= moment, column < next_day)
        if operator == "lt":
            return column < moment
        if operator == "lte":
            return column < next_day
        if operator == "gt":
            return column >= next_day
        if operator == "gte":
            return column >= moment
    else:
        if operator == "eq":
            return column == moment
        if operator == "lt":
            return column < moment
        if operator == "lte":
            return column <= moment
        if operator == "gt":
            return column > moment
        if operator == "gte":
            return column >= moment
    raise InvalidValue(f"unsupported operator {operator}")


def _field_clause(operator, value):
    column = ChangeEvent.field
    if operator == "eq":
        return column == _to_text(value)
    if operator == "neq":
        return column != _to_text(value)
    if operator == "in":
        return column.in_(_to_text_list(value))
    if operator == "notin":
        return column.not_in(_to_text_list(value))
    raise InvalidValue(f"unsupported operator {operator}")


def _user_name_clause(operator, value):
    text = _to_text(value)
    display_name = user_display_name()
    # The login still matches when a full name is shown
    if operator == "eq":
        matching = select(User.id).where(or_(display_name == text, User.name == text))
    elif operator == "contains":
        matching = select(User.id).where(
            or_(
                display_name.icontains(text, autoescape=True),
                User.name.icontains(text, autoescape=True),
            )
        )
    else:
        raise InvalidValue(f"unsupported operator {operator}")
    return ChangeEvent.users_id.in_(matching)


def _change_clause(operator, value):
    if operator != "contains":
        raise InvalidValue(f"unsupported operator {operator}")
    text = _to_text(value)
    return or_(
        ChangeEvent.old_value.icontains(text, autoescape=True),
        ChangeEvent.new_value.icontains(text, autoescape=True),
    )


FIELD_BUILDERS: Dict[str, Callable[[str, Any], ColumnElement]] = {
    "id": _id_clause,
    "date_mod": _date_mod_clause,
    "users_id": _users_id_clause,
    "user_name": _user_name_clause,
    "field": _field_clause,
    "linked_action": _linked_action_clause,
    "change": _change_clause,
}


class FilterCompiler:
    """Compiles decoded filter payloads into Predicates"""

    def __init__(self, builders: Optional[Dict[str, Callable[[str, Any], ColumnElement]]] = None):
        self.builders = builders if builders is not None else FIELD_BUILDERS

    def compile(self, criteria: Any) -> Predicate:
        """
        Compile criteria into a Predicate.

        Args:
            criteria: None, a list of {field, operator, value} objects, or
                an object mapping field to value

        Returns:
            Predicate; match-all when nothing usable was given
        """
        raw_items = self._normalize(criteria)
        if raw_items is None:
            if criteria is not None:
                logger.debug(f"Ignoring filter payload of type {type(criteria).__name__}")
                return Predicate(discarded=1)
            return Predicate.match_all()

        clauses = []
        applied = []
        discarded = 0
        for raw in raw_items:
            criterion = FilterCriterion.from_raw(raw)
            if criterion is None:
                discarded += 1
                logger.debug(f"Dropped malformed filter criterion: {raw!r}")
                continue
            builder = self.builders.get(criterion.field)
            if builder is None:
                discarded += 1
                logger.debug(f"Dropped filter on unknown field: {criterion.field!r}")
                continue
            try:
                clauses.append(builder(criterion.operator, criterion.value))
            except InvalidValue as exc:
                discarded += 1
                logger.debug(
                    f"Dropped filter {criterion.field} {criterion.operator}: {exc}"
                )
                continue
            applied.append(f"{criterion.field} {criterion.operator}")

        return Predicate(
            clauses=tuple(clauses),
            discarded=discarded,
            summary=", ".join(applied),
        )

    @staticmethod
    def _normalize(criteria: Any) -> Optional[Iterable[Any]]:
        if criteria is None:
            return None
        if isinstance(criteria, list):
            return criteria
        if isinstance(criteria, dict):
            if (
                "field" in criteria
                and ("value" in criteria or "operator" in criteria)
                and set(criteria) <= {"field", "operator", "value"}
            ):
                return [criteria]
            return [{"field": key, "value": value} for key, value in criteria.items()]
        return None

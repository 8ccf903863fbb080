"""Backend-independent filter tree used to describe which documents a search should match."""

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict


class _Clause(BaseModel):
    model_config = ConfigDict(frozen=True)


class PhraseMatch(_Clause):
    """Exact value on a single field."""

    kind: Literal["phrase"] = "phrase"
    field: str
    value: Any


class TermsMatch(_Clause):
    """Any value out of a set on a single field."""

    kind: Literal["terms"] = "terms"
    field: str
    values: tuple[Any, ...]


class Conjunction(_Clause):
    """Every sub-clause must match."""

    kind: Literal["and"] = "and"
    clauses: tuple["FilterClause", ...]


class Disjunction(_Clause):
    """At least one sub-clause must match."""

    kind: Literal["or"] = "or"
    clauses: tuple["FilterClause", ...]


class Negation(_Clause):
    """None of the sub-clauses may match."""

    kind: Literal["not"] = "not"
    clauses: tuple["FilterClause", ...]


FilterClause = Union[PhraseMatch, TermsMatch, Conjunction, Disjunction, Negation]

Conjunction.model_rebuild()
Disjunction.model_rebuild()
Negation.model_rebuild()

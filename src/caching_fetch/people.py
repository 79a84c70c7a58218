from __future__ import annotations

from typing import Any, Iterable, TypedDict, TypeGuard


class Person(TypedDict):
    """One entry of the people array served by the remote API."""

    first: str
    last: str
    email: str
    address: str
    created: str
    balance: str


PERSON_KEYS: frozenset[str] = frozenset(Person.__annotations__)


def is_person(value: Any) -> TypeGuard[Person]:
    """Return True when ``value`` is a JSON object whose keys are all Person fields.

    Only the key set is checked: missing fields and value types are not, so a
    partial record such as ``{"first": "Ann"}`` is accepted.
    """
    if not isinstance(value, dict):
        return False
    return all(key in PERSON_KEYS for key in value)


def filter_people(values: Iterable[Any]) -> list[Person]:
    return [value for value in values if is_person(value)]

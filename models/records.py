# models/records.py

"""
Validation at the spreadsheet boundary.

Everything the Apps Script backend returns is untrusted: rows can be
missing IDs, carry numbers where strings belong, or not be objects at all.
Rows are parsed into their model or wrapped in a MalformedRecord; the
caller decides whether to drop (lists) or fail (single fetch).
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError


ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class MalformedRecord:
    raw: Any
    reason: str

    # Never visible to any role
    region = None


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "row"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def parse_record(row: Any, model: Type[ModelT]) -> Union[ModelT, MalformedRecord]:
    if not isinstance(row, Mapping):
        return MalformedRecord(raw=row, reason=f"expected an object, got {type(row).__name__}")
    try:
        return model.model_validate(dict(row))
    except ValidationError as exc:
        return MalformedRecord(raw=row, reason=_describe(exc))


def parse_records(rows: Any, model: Type[ModelT]) -> Tuple[List[ModelT], List[MalformedRecord]]:
    """
    Split a backend payload into valid models and malformed rows.
    A payload that is not a list yields nothing.
    """
    valid: List[ModelT] = []
    malformed: List[MalformedRecord] = []

    if not isinstance(rows, list):
        if rows is not None:
            malformed.append(MalformedRecord(raw=rows, reason="expected a list of rows"))
        return valid, malformed

    for row in rows:
        parsed = parse_record(row, model)
        if isinstance(parsed, MalformedRecord):
            malformed.append(parsed)
        else:
            valid.append(parsed)
    return valid, malformed

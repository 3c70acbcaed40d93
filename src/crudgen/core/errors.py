from __future__ import annotations

import enum


class ErrorKind(str, enum.Enum):
    BODY_ID_IS_NOT_NULL = "BodyIdIsNotNullException"
    BODY_ID_DOES_NOT_MATCH_PATH = "BodyIdDoesNotMatchPathException"
    CONSTRAINT_VIOLATION = "ConstraintViolationException"
    NO_ROWS_UPDATED = "NoRowsUpdatedException"
    UNKNOWN_FIELD = "UnknownFieldException"
    STORAGE_FAILURE = "StorageException"


class DomainError(Exception):
    """A guard or storage failure reported to the client as ``{kind, message}``."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"DomainError({self.kind.value!r}, {self.message!r})"


class BodyIdIsNotNullError(DomainError):
    def __init__(self) -> None:
        super().__init__(ErrorKind.BODY_ID_IS_NOT_NULL, "Request body entity's id field is expected to be null.")


class BodyIdDoesNotMatchPathError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            ErrorKind.BODY_ID_DOES_NOT_MATCH_PATH,
            "Request body entity's id field is expected to be empty or to match id path parameter.",
        )

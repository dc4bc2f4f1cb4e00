from typing import Dict, Hashable, Iterable, TypeVar

T = TypeVar("T", bound=Hashable)


class Validator:
    """
    Collects field-level validation failures for a single payload.

    Create one per validation run and discard it afterwards:
        v = Validator()
        v.check(movie.title != "", "title", "must be provided")
        if not v.valid():
            raise ValidationFailed(v.errors)
    """

    def __init__(self):
        self.errors: Dict[str, str] = {}

    def valid(self) -> bool:
        """True if no errors were recorded"""
        return not self.errors

    def add_error(self, key: str, message: str) -> None:
        """Record a message for key unless one is already there (first one wins)"""
        if key not in self.errors:
            self.errors[key] = message

    def check(self, ok: bool, key: str, message: str) -> None:
        """Record message under key only when the check is not ok"""
        if not ok:
            self.add_error(key, message)


def unique(values: Iterable[T]) -> bool:
    """True if every value appears only once"""
    values = list(values)
    return len(values) == len(set(values))

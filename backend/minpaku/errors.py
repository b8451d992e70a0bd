"""Error taxonomy shared by the wizard, the engine and the persistence layer."""
from __future__ import annotations


class MinpakuError(Exception):
    """Base class for all simulator errors."""


class StepValidationError(MinpakuError):
    """A wizard step was left before its required field was set."""

    def __init__(self, step, prompt: str):
        super().__init__(prompt)
        self.step = step
        self.prompt = prompt


class MalformedInputError(MinpakuError, ValueError):
    """Input is missing, out of range, or otherwise unusable."""


class UnknownReferenceError(MalformedInputError):
    """A region or property type name is not in the reference tables."""

    def __init__(self, kind: str, name: str):
        super().__init__(f"Unknown {kind}: {name!r}")
        self.kind = kind
        self.name = name


class StorageError(MinpakuError):
    """The simulation store is unreachable or rejected the operation."""

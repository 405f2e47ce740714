"""Pluggable file name post-processing.

A name processor may be ``None`` (names are kept as-is), any callable taking
and returning a file name, or an object implementing ``process_filename``.
All shapes are normalized to a single ``Callable[[str], str]``.
"""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from .errors import InvalidNameProcessorError


@runtime_checkable
class ProcessesFilename(Protocol):
    """Object capable of turning an original file name into a final one."""

    def process_filename(self, filename: str) -> str: ...


NameProcessor = ProcessesFilename | Callable[[str], str] | None


def identity(filename: str) -> str:
    return filename


def as_name_processor(processor: object) -> Callable[[str], str]:
    """Normalize any accepted processor shape to a plain callable.

    Raises:
        InvalidNameProcessorError: If ``processor`` is not an accepted shape
    """
    if processor is None:
        return identity
    # process_filename wins over __call__
    if isinstance(processor, ProcessesFilename):
        return processor.process_filename
    if callable(processor):
        return processor
    raise InvalidNameProcessorError(processor)

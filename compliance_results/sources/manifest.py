"""Registration record of a results source."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel

from compliance_results.sources.base import ResultsSource

ConfigT = TypeVar("ConfigT", bound=BaseModel)


@dataclass(frozen=True, kw_only=True)
class SourceManifest(Generic[ConfigT]):
    """What an entry point under ``compliance_results.sources`` exposes.

    ``config_cls`` validates the JSON given with ``--source-config`` and
    ``source_factory`` turns the validated settings into an open source.
    """

    config_cls: type[ConfigT]
    source_factory: Callable[[ConfigT], AbstractAsyncContextManager[ResultsSource]]

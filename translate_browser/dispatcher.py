"""Runs resolution and rename jobs off the event loop and posts their results."""

from __future__ import annotations

import errno
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

from .debug import get_logger
from .lister import ResolutionJob
from .resolver import NameResolver


@dataclass(frozen=True)
class RenameJob:
    source: str
    destination: str


@dataclass(frozen=True)
class TranslationResult:
    name: str
    translation: str
    directory: str


@dataclass(frozen=True)
class RenameResult:
    source: str
    destination: str
    success: bool
    error: Optional[str] = None


ResultEvent = Union[TranslationResult, RenameResult]
Post = Callable[[ResultEvent], None]
Spawn = Callable[[Callable[[], None], str], None]

RESOLVE_GROUP = "resolve"
RENAME_GROUP = "rename"


def _same_file(a: str, b: str) -> bool:
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


def rename_path(source: str, destination: str) -> RenameResult:
    """Rename in one ``os.rename`` call; an existing destination is refused, not replaced."""
    try:
        if os.path.lexists(destination) and not _same_file(source, destination):
            raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), destination)
        os.rename(source, destination)
    except OSError as exc:
        return RenameResult(source, destination, False, str(exc))
    return RenameResult(source, destination, True)


class JobDispatcher:
    """Schedule each job as an independent unit and report it as one event.

    ``spawn(fn, group)`` starts ``fn`` somewhere off the caller's thread; the
    application passes Textual's thread workers, everything else gets a
    private thread pool. ``post(event)`` must be safe to call from any thread.
    """

    def __init__(
        self,
        resolver: NameResolver,
        post: Post,
        spawn: Optional[Spawn] = None,
        max_workers: int = 8,
    ) -> None:
        self.resolver = resolver
        self.post = post
        self.logr = get_logger("dispatcher")
        self._executor: Optional[ThreadPoolExecutor] = None
        if spawn is None:
            self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="translate-job")
            executor = self._executor

            def spawn(fn: Callable[[], None], group: str) -> None:
                executor.submit(fn)

        self._spawn: Spawn = spawn

    def submit_resolutions(self, jobs: Iterable[ResolutionJob]) -> int:
        count = 0
        for job in jobs:
            self._spawn(self._resolution_task(job), RESOLVE_GROUP)
            count += 1
        if count:
            self.logr.debug("dispatched %d resolution jobs", count)
        return count

    def submit_rename(self, job: RenameJob) -> None:
        self.logr.debug("dispatch rename: %s -> %s", job.source, job.destination)
        self._spawn(self._rename_task(job), RENAME_GROUP)

    def _resolution_task(self, job: ResolutionJob) -> Callable[[], None]:
        def run() -> None:
            translation = self.resolver.resolve(job.name)
            self.post(TranslationResult(job.name, translation, job.directory))

        return run

    def _rename_task(self, job: RenameJob) -> Callable[[], None]:
        def run() -> None:
            self.post(rename_path(job.source, job.destination))

        return run

    def shutdown(self, wait: bool = True) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None

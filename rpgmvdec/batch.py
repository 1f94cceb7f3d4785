from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from dataclasses import dataclass
from itertools import islice
from logging import getLogger
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from tqdm import tqdm

from rpgmvdec.crypto import RPGMVDecException
from rpgmvdec.fmt.signature import DetectedKind

logger = getLogger(__name__)

DEFAULT_WORKERS = 4

# (name, encrypted bytes) -> (output name, restored bytes, detected kind)
RestoreFunc = Callable[[str, bytes], Tuple[str, bytes, DetectedKind]]


@dataclass
class BatchResult:
    index: int
    name: str
    output_name: Optional[str] = None
    data: Optional[bytes] = None
    kind: DetectedKind = DetectedKind.UNKNOWN
    error: Optional[Exception] = None

    @property
    def ok(self):
        return self.error is None


class RestoreExecutor(ThreadPoolExecutor):
    progress: tqdm = None

    def _ensure_progress(self):
        if self.progress is None:
            self.progress = tqdm(total=0, unit="file", disable=not self.show_progress)

    def _restore(self, index: int, name: str, raw: bytes) -> BatchResult:
        result = BatchResult(index, name)
        try:
            result.output_name, result.data, result.kind = self.func(name, raw)
        except RPGMVDecException as e:
            logger.error("While restoring %s : %s", name, e)
            result.error = e
        finally:
            self.progress.update(1)
        if result.ok and result.kind == DetectedKind.UNKNOWN:
            logger.warning("%s: no known signature found. Saved as is", name)
        return result

    def __init__(self, func: RestoreFunc, show_progress=True, **kw) -> None:
        self.func = func
        self.show_progress = show_progress
        super().__init__(**kw)

    def __exit__(self, exc_type, exc_val, exc_tb):
        result = super().__exit__(exc_type, exc_val, exc_tb)
        if self.progress is not None:
            self.progress.close()
        return result

    def add_file(self, index: int, name: str, raw: bytes):
        self._ensure_progress()
        self.progress.total += 1
        self.progress.refresh()
        return self.submit(self._restore, index, name, raw)


def iter_restore_batch(
    items: Iterable[Tuple[str, bytes]],
    func: RestoreFunc,
    workers=DEFAULT_WORKERS,
    show_progress=True,
) -> Iterator[BatchResult]:
    """Restores every (name, bytes) pair independently, yielding results as they complete.

    Errors raised by the core are recorded on the result rather than
    propagated, so a single bad file never stops the batch. On
    KeyboardInterrupt the files not yet started are cancelled.

    At most 2 * workers files are in flight at a time. `items` is only read
    as slots free up, and results are dropped once yielded.
    """
    window = max(1, workers) * 2
    items = enumerate(items)
    with RestoreExecutor(func, show_progress=show_progress, max_workers=workers) as executor:
        pending = set()
        try:
            while True:
                for index, (name, raw) in islice(items, window - len(pending)):
                    pending.add(executor.add_file(index, name, raw))
                if not pending:
                    break
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    yield future.result()
                del done
        except (KeyboardInterrupt, GeneratorExit):
            executor.shutdown(wait=True, cancel_futures=True)
            raise


def restore_batch(
    items: Iterable[Tuple[str, bytes]],
    func: RestoreFunc,
    workers=DEFAULT_WORKERS,
    show_progress=True,
) -> List[BatchResult]:
    """Same as `iter_restore_batch`, but collects every result in input order."""
    results = list(iter_restore_batch(items, func, workers, show_progress))
    results.sort(key=lambda result: result.index)
    return results

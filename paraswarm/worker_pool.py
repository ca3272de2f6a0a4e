"""
This file contains the WorkerPool class, a fixed number of threads running fire-and-forget jobs.
"""
import logging
import queue
import threading
from typing import Callable, List, Optional

log = logging.getLogger(__name__)  # Get logger instance.

Job = Callable[[], None]


class WorkerError(RuntimeError):
    """A job submitted to a ``WorkerPool`` raised an exception."""


class WorkerPool:
    """
    A fixed-size pool of worker threads consuming no-argument jobs from a shared queue.

    Jobs do not return anything; they communicate results by writing into shared state themselves. Each job runs at
    most once, in no particular order relative to other jobs. The number of workers stays constant from construction
    until shutdown, which happens when leaving the pool's ``with`` block or when calling ``shutdown`` explicitly.

    A job that raises, even ``SystemExit``, does not take its worker down. The exception is logged and kept in
    ``errors`` so that the owner of the pool can fail the whole run after joining, see ``raise_errors``.

    Attributes
    ----------
    errors : List[BaseException]
        Exceptions raised by jobs so far, in the order they were caught.
    worker_count : int
        The number of worker threads.
    """

    def __init__(self, worker_count: int, name: str = "worker") -> None:
        """
        Start ``worker_count`` worker threads.

        Parameters
        ----------
        worker_count : int
            The number of worker threads.
        name : str, optional
            The prefix of the worker thread names. Default is "worker".

        Raises
        ------
        ValueError
            If ``worker_count`` is smaller than one.
        """
        if worker_count < 1:
            raise ValueError(f"Worker pool needs at least one worker, got {worker_count}.")
        self.worker_count = worker_count
        self.errors: List[BaseException] = []
        self._jobs: "queue.Queue[Optional[Job]]" = queue.Queue()
        self._lock = threading.Lock()  # Guards ``_shutdown`` and ``errors``.
        self._shutdown = False
        self._workers = [
            threading.Thread(target=self._work, name=f"{name}-{i}", daemon=True) for i in range(worker_count)
        ]
        for worker in self._workers:
            worker.start()
        log.debug(f"Started {worker_count} worker threads.")

    def _work(self) -> None:
        """Run jobs until the stop sentinel ``None`` is received."""
        while True:
            job = self._jobs.get()
            try:
                if job is None:
                    return
                job()
            except BaseException as e:  # Includes SystemExit, the worker keeps serving the queue.
                log.exception(f"Job failed in {threading.current_thread().name}: {e!r}")
                with self._lock:
                    self.errors.append(e)
            finally:
                self._jobs.task_done()

    def execute(self, job: Job) -> None:
        """
        Enqueue a job and return immediately.

        Jobs submitted after shutdown has begun are dropped with a warning.

        Parameters
        ----------
        job : Callable[[], None]
            The unit of work.
        """
        with self._lock:
            if self._shutdown:
                log.warning("Worker pool is shut down, dropping job.")
                return
            self._jobs.put(job)

    def shutdown(self, wait: bool = True) -> None:
        """
        Stop accepting jobs and let the workers exit once the queue has drained.

        Parameters
        ----------
        wait : bool, optional
            Block until every worker thread has exited. Default is True.
        """
        with self._lock:
            if not self._shutdown:
                self._shutdown = True
                for _ in self._workers:
                    self._jobs.put(None)  # One stop sentinel per worker, behind all queued jobs.
        if wait:
            for worker in self._workers:
                worker.join()
            log.debug("All worker threads joined.")

    def raise_errors(self) -> None:
        """
        Re-raise the first exception caught in a job, if any.

        Raises
        ------
        WorkerError
            If at least one job raised, chained from the first exception.
        """
        with self._lock:
            errors = list(self.errors)
        if errors:
            raise WorkerError(f"{len(errors)} job(s) failed, first error: {errors[0]!r}") from errors[0]

    @property
    def alive_workers(self) -> int:
        return sum(worker.is_alive() for worker in self._workers)

    def __enter__(self) -> "WorkerPool":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:  # type: ignore
        self.shutdown(wait=True)

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Union

from scavenger_hunt.core.activity_log import ActivityLogger
from scavenger_hunt.core.task import GeoCoordinate, HuntTask, PhotoSource
from scavenger_hunt.core.upload import (
    Cancellable,
    Scheduler,
    UploadOutcome,
    UploadResult,
    UploadTransport,
)
from scavenger_hunt.util.errors import (
    TaskIndexError,
    TaskNotCompletedError,
    TaskNotFoundError,
    UploadInProgressError,
)

TaskRef = Union[int, str]
TaskListener = Callable[[int, HuntTask], None]
UploadCallback = Callable[[UploadResult], None]


@dataclass
class _PendingUpload:
    token: int
    on_complete: UploadCallback
    transport_handle: Cancellable | None = None
    timeout_handle: Cancellable | None = None


class TaskStore:
    """Ordered, fixed set of hunt tasks and their legal transitions.

    Tasks are addressed by position (int) or by id (str). All methods must be
    called from the thread that owns the store; deferred upload results are
    delivered through the scheduler on that same thread.

    Transitions:
    - complete_task: attach photo + optional location (replaces any earlier photo)
    - upload_task: hand the photo to the transport; success sets uploaded
    - cancel_upload: drop a pending upload without touching the task
    """

    def __init__(
        self,
        tasks: Iterable[HuntTask],
        transport: UploadTransport,
        scheduler: Scheduler | None = None,
        upload_timeout_seconds: float | None = None,
        logger: ActivityLogger | None = None,
    ) -> None:
        self._tasks: list[HuntTask] = list(tasks)
        ids = [t.id for t in self._tasks]
        if len(set(ids)) != len(ids):
            raise ValueError("Task ids must be unique.")
        self._by_id = {t.id: i for i, t in enumerate(self._tasks)}
        self.transport = transport
        self.scheduler = scheduler
        if upload_timeout_seconds and scheduler is None:
            raise ValueError("A scheduler is required when upload_timeout_seconds is set.")
        self.upload_timeout_seconds = upload_timeout_seconds or None
        self.logger = logger or ActivityLogger()
        self._listeners: list[TaskListener] = []
        self._pending: dict[str, _PendingUpload] = {}
        self._next_token = 0

    # ---- lookup ----

    @property
    def tasks(self) -> tuple[HuntTask, ...]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[HuntTask]:
        return iter(self._tasks)

    def task(self, ref: TaskRef) -> HuntTask:
        return self._tasks[self._resolve(ref)]

    def index_of(self, task_id: str) -> int:
        return self._resolve(task_id)

    def _resolve(self, ref: TaskRef) -> int:
        if isinstance(ref, bool):
            raise TypeError("Task reference must be an int index or a str id.")
        if isinstance(ref, int):
            if 0 <= ref < len(self._tasks):
                return ref
            raise TaskIndexError(f"Task index {ref} out of range (0..{len(self._tasks) - 1}).")
        if isinstance(ref, str):
            try:
                return self._by_id[ref]
            except KeyError:
                raise TaskNotFoundError(f"Unknown task id: {ref}") from None
        raise TypeError("Task reference must be an int index or a str id.")

    # ---- observers ----

    def subscribe(self, listener: TaskListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self, index: int) -> None:
        task = self._tasks[index]
        for listener in list(self._listeners):
            listener(index, task)

    # ---- transitions ----

    def complete_task(
        self,
        ref: TaskRef,
        image: bytes,
        location: GeoCoordinate | None,
        source: PhotoSource = PhotoSource.LIBRARY,
    ) -> HuntTask:
        """Attach a photo (and optional location) to a task.

        A second photo replaces the first. If the task was already uploaded,
        uploaded is reset so the new photo goes through upload again.
        Rejected while an upload for the task is pending.
        """
        index = self._resolve(ref)
        if not image:
            raise ValueError("Image payload must not be empty.")
        task = self._tasks[index]
        if task.id in self._pending:
            raise UploadInProgressError(f"Upload in progress for task '{task.title}'.")

        # Validate everything before touching the task.
        image_source = PhotoSource(source)
        payload = bytes(image)

        was_uploaded = task.uploaded
        task.image = payload
        task.image_source = image_source
        task.location = location
        task.is_completed = True
        task.uploaded = False

        where = location.format() if location else "no location"
        self.logger.log(f"Completed '{task.title}' from {task.image_source.value} ({where}).")
        if was_uploaded:
            self.logger.log(f"Replaced uploaded photo for '{task.title}'; upload required again.")
        self._notify(index)
        return task

    def upload_task(self, ref: TaskRef, on_complete: UploadCallback | None = None) -> None:
        """Start the upload of a completed task.

        on_complete(result) is called exactly once when the upload resolves,
        unless the upload is cancelled first.
        """
        index = self._resolve(ref)
        task = self._tasks[index]
        if not task.is_completed or task.image is None:
            raise TaskNotCompletedError(f"Task '{task.title}' has no photo to upload.")
        if task.id in self._pending:
            raise UploadInProgressError(f"Upload already in progress for task '{task.title}'.")

        self._next_token += 1
        pending = _PendingUpload(token=self._next_token, on_complete=on_complete or (lambda _r: None))
        self._pending[task.id] = pending
        self.logger.log(f"Upload started for '{task.title}'.")
        self._notify(index)

        task_id = task.id
        token = pending.token
        try:
            handle = self.transport.upload(
                task_id,
                task.image,
                lambda outcome, message="": self._finish_upload(task_id, token, outcome, message),
            )
        except Exception as e:
            # A transport that cannot even start reports like any other failed upload.
            self._finish_upload(task_id, token, UploadOutcome.FAILED, str(e) or type(e).__name__)
            return
        # The transport may finish synchronously; only keep the handle if still pending.
        current = self._pending.get(task_id)
        if current is not None and current.token == token:
            current.transport_handle = handle
            if self.upload_timeout_seconds:
                current.timeout_handle = self.scheduler.call_later(
                    self.upload_timeout_seconds,
                    lambda: self._finish_upload(task_id, token, UploadOutcome.TIMEOUT, "Upload timed out."),
                )

    def cancel_upload(self, ref: TaskRef) -> bool:
        index = self._resolve(ref)
        task = self._tasks[index]
        pending = self._pending.pop(task.id, None)
        if pending is None:
            return False
        for handle in (pending.transport_handle, pending.timeout_handle):
            if handle is not None:
                handle.cancel()
        self.logger.log(f"Upload cancelled for '{task.title}'.")
        self._notify(index)
        return True

    def cancel_all_uploads(self) -> None:
        for task_id in list(self._pending):
            self.cancel_upload(task_id)

    def is_uploading(self, ref: TaskRef) -> bool:
        return self.task(ref).id in self._pending

    def _finish_upload(self, task_id: str, token: int, outcome: UploadOutcome, message: str = "") -> None:
        pending = self._pending.get(task_id)
        if pending is None or pending.token != token:
            # Cancelled, timed out, or superseded: late results are ignored.
            return
        del self._pending[task_id]
        for handle in (pending.transport_handle, pending.timeout_handle):
            if handle is not None:
                handle.cancel()

        index = self._by_id[task_id]
        task = self._tasks[index]
        outcome = UploadOutcome(outcome)
        if outcome == UploadOutcome.SUCCESS:
            task.uploaded = True
            self.logger.log(f"Upload finished for '{task.title}'.")
        else:
            self.logger.log(f"Upload {outcome.value} for '{task.title}': {message}")
        self._notify(index)
        pending.on_complete(UploadResult(task_id=task_id, outcome=outcome, message=message))

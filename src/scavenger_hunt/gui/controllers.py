from __future__ import annotations

from pathlib import Path
from typing import Iterable

from PySide6.QtCore import QObject, Signal, Slot

from scavenger_hunt.core.activity_log import ActivityLogger
from scavenger_hunt.core.location import (
    AcquiredPhoto,
    LiveLocationFeed,
    LocationProvider,
    LocationResolver,
)
from scavenger_hunt.core.settings import AppSettings
from scavenger_hunt.core.task import HuntTask, PhotoSource
from scavenger_hunt.core.task_store import TaskStore
from scavenger_hunt.core.upload import SimulatedUploadTransport, UploadResult
from scavenger_hunt.gui.positioning import QtPositionFeed
from scavenger_hunt.gui.qt_scheduler import QtScheduler
from scavenger_hunt.gui.workers import LibraryPhotoWorker, LoadedPhoto
from scavenger_hunt.util.errors import ScavengerHuntError

class HuntController(QObject):
    """Owns the task store and bridges it to Qt signals for the pages.

    All store mutation happens here, on the GUI thread.
    """
    task_changed = Signal(int)
    upload_finished = Signal(int, object)  # index, UploadResult
    photo_failed = Signal(int, str)
    location_status = Signal(str)

    def __init__(
        self,
        settings: AppSettings,
        tasks: Iterable[HuntTask],
        location_provider: LocationProvider | None = None,
        logger: ActivityLogger | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.settings = settings
        self.logger = logger or ActivityLogger()

        self.position_feed: QtPositionFeed | None = None
        if location_provider is None:
            live = LiveLocationFeed()
            self.position_feed = QtPositionFeed(live, self)
            self.position_feed.status_changed.connect(self.location_status.emit)
            location_provider = live
        self.location_provider = location_provider

        self.scheduler = QtScheduler(self)
        self.transport = SimulatedUploadTransport(
            self.scheduler,
            delay_seconds=settings.upload_delay_seconds,
            failure_rate=settings.upload_failure_rate,
        )
        self.store = TaskStore(
            tasks,
            transport=self.transport,
            scheduler=self.scheduler,
            upload_timeout_seconds=settings.upload_timeout_seconds,
            logger=self.logger,
        )
        self.resolver = LocationResolver(self.location_provider, logger=self.logger)
        self.store.subscribe(lambda index, _task: self.task_changed.emit(index))

        self._loaders: dict[str, LibraryPhotoWorker] = {}
        self._running_workers: set[LibraryPhotoWorker] = set()
        self._next_load_token = 0

    @property
    def tasks(self) -> tuple[HuntTask, ...]:
        return self.store.tasks

    def start_location_updates(self) -> None:
        if self.position_feed is not None:
            self.position_feed.start()

    def stop_location_updates(self) -> None:
        if self.position_feed is not None:
            self.position_feed.stop()

    # ---- photos ----

    def attach_library_photo(self, index: int, path: Path) -> LibraryPhotoWorker:
        """Load a picked file in a worker, then complete the task with its EXIF location.

        A newer pick for the same task supersedes an older one still loading.
        """
        task = self.store.task(index)
        self.settings.last_photo_dir = str(path.parent)
        self._next_load_token += 1
        worker = LibraryPhotoWorker(task.id, self._next_load_token, path, self.resolver)
        self._loaders[task.id] = worker
        self._running_workers.add(worker)
        worker.loaded.connect(self._on_library_loaded)
        worker.failed.connect(self._on_library_failed)
        worker.finished.connect(self._on_worker_finished)
        worker.start()
        return worker

    def attach_camera_photo(self, index: int, data: bytes) -> HuntTask | None:
        return self.attach_photo(index, AcquiredPhoto(data=data, source=PhotoSource.CAMERA))

    def attach_photo(self, index: int, photo: AcquiredPhoto) -> HuntTask | None:
        location = self.resolver.resolve(photo)
        return self._complete(index, photo.data, location, photo.source)

    def is_loading_photo(self, index: int) -> bool:
        return self.store.task(index).id in self._loaders

    def _is_current_load(self, task_id: str, token: int) -> bool:
        worker = self._loaders.get(task_id)
        return worker is not None and worker.token == token

    @Slot(object)
    def _on_library_loaded(self, photo: LoadedPhoto) -> None:
        if not self._is_current_load(photo.task_id, photo.token):
            return  # superseded by a newer pick
        del self._loaders[photo.task_id]
        self._complete(self.store.index_of(photo.task_id), photo.data, photo.location, PhotoSource.LIBRARY)

    @Slot(str, int, str)
    def _on_library_failed(self, task_id: str, token: int, err: str) -> None:
        if not self._is_current_load(task_id, token):
            return
        del self._loaders[task_id]
        index = self.store.index_of(task_id)
        self.logger.log(f"Could not load photo: {err}")
        self.photo_failed.emit(index, err)

    @Slot()
    def _on_worker_finished(self) -> None:
        for worker in [w for w in self._running_workers if w.isFinished()]:
            self._running_workers.discard(worker)
            worker.deleteLater()

    def _complete(self, index: int, data: bytes, location, source: PhotoSource) -> HuntTask | None:
        try:
            return self.store.complete_task(index, data, location, source)
        except (ScavengerHuntError, ValueError) as e:
            self.photo_failed.emit(index, str(e))
            return None

    # ---- upload ----

    def upload(self, index: int) -> None:
        self.store.upload_task(index, self._on_upload_finished)

    def cancel_upload(self, index: int) -> bool:
        return self.store.cancel_upload(index)

    def is_uploading(self, index: int) -> bool:
        return self.store.is_uploading(index)

    def shutdown(self) -> None:
        self.store.cancel_all_uploads()
        self.stop_location_updates()
        for worker in list(self._running_workers):
            worker.wait(2000)
        self._loaders.clear()

    def _on_upload_finished(self, result: UploadResult) -> None:
        self.upload_finished.emit(self.store.index_of(result.task_id), result)

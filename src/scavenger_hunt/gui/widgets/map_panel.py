from __future__ import annotations

from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import QGroupBox, QHBoxLayout, QLabel, QPushButton, QVBoxLayout

from scavenger_hunt.core.map_region import DEFAULT_SPAN_DEGREES, MapRegion, osm_view_url
from scavenger_hunt.core.task import GeoCoordinate


class MapPanel(QGroupBox):
    """Shows where an uploaded photo was taken and links out to the map."""

    def __init__(self, span_degrees: float = DEFAULT_SPAN_DEGREES, parent=None) -> None:
        super().__init__("Task Location", parent)
        self.span_degrees = span_degrees
        self.region: MapRegion | None = None

        layout = QVBoxLayout(self)
        self.coord_label = QLabel()
        font = self.coord_label.font()
        font.setBold(True)
        self.coord_label.setFont(font)
        layout.addWidget(self.coord_label)

        self.region_label = QLabel()
        self.region_label.setProperty("muted", True)
        layout.addWidget(self.region_label)

        row = QHBoxLayout()
        self.open_btn = QPushButton("Open Map…")
        self.open_btn.clicked.connect(self._open_map)
        row.addWidget(self.open_btn)
        row.addStretch(1)
        layout.addLayout(row)
        self.setMinimumHeight(120)

    def set_location(self, coordinate: GeoCoordinate | None) -> None:
        if coordinate is None:
            self.region = None
            self.coord_label.setText("")
            self.region_label.setText("")
            self.open_btn.setEnabled(False)
            return
        self.region = MapRegion(coordinate, self.span_degrees)
        min_lon, min_lat, max_lon, max_lat = self.region.bounding_box()
        self.coord_label.setText(coordinate.format())
        self.region_label.setText(
            f"Region: {min_lat:.4f}…{max_lat:.4f} lat, {min_lon:.4f}…{max_lon:.4f} lon"
        )
        self.open_btn.setEnabled(True)

    def _open_map(self) -> None:
        if self.region is None:
            return
        QDesktopServices.openUrl(QUrl(osm_view_url(self.region.center)))

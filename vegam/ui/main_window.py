from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QEvent, Qt, QTimer
from PySide6.QtGui import QCloseEvent, QKeyEvent, QTextCursor
from PySide6.QtWidgets import (
    QComboBox,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from vegam.core.controller import RoundController, RoundDisplay
from vegam.core.passages import PassageRepository
from vegam.core.settings import Settings
from vegam.ui.colors import RoundColors, status_color
from vegam.ui.rendering import render_diff_html
from vegam.ui.ticker import QtTickScheduler

logger = logging.getLogger(__name__)

_MODIFIERS = (
    Qt.KeyboardModifier.ControlModifier
    | Qt.KeyboardModifier.AltModifier
    | Qt.KeyboardModifier.MetaModifier
)


class MainWindow(QMainWindow):
    """Single-screen practice window.

    Holds the passage and duration pickers, Start/Reset buttons, the passage
    overlay with per-character highlighting, the input editor and the stats
    panel. All measurement lives in :class:`RoundController`; this window only
    forwards Qt events to it and repaints whatever it pushes back.
    """

    def __init__(self, passages: PassageRepository, settings: Settings) -> None:
        super().__init__()
        self._passages = passages
        self._settings = settings
        self._controller = RoundController(passages, QtTickScheduler(self), settings)
        self._sync_block = False

        self.passage_select: Optional[QComboBox] = None
        self.duration_select: Optional[QComboBox] = None
        self.start_button: Optional[QPushButton] = None
        self.reset_button: Optional[QPushButton] = None
        self.target_display: Optional[QLabel] = None
        self.input_box: Optional[QPlainTextEdit] = None
        self._time_label: Optional[QLabel] = None
        self._correct_label: Optional[QLabel] = None
        self._mistakes_label: Optional[QLabel] = None
        self._accuracy_label: Optional[QLabel] = None
        self._wpm_label: Optional[QLabel] = None
        self._status_label: Optional[QLabel] = None

        self._build_ui()
        self._controller.add_listener(self._repaint)
        self._controller.request_reset()
        QTimer.singleShot(0, self.input_box.setFocus)

    @property
    def controller(self) -> RoundController:
        return self._controller

    def _build_ui(self) -> None:
        """Construct the widget tree: controls row, passage card, input and stats panel."""
        self.setWindowTitle("Vegam - Typing Practice")
        self.setMinimumSize(960, 680)
        self.setStyleSheet(f"QMainWindow {{ background: {RoundColors.BG_MAIN}; }}")

        central = QWidget()
        root = QVBoxLayout(central)
        root.setContentsMargins(16, 16, 16, 16)
        root.setSpacing(14)
        self.setCentralWidget(central)

        controls = QHBoxLayout()
        controls.setSpacing(10)
        self.passage_select = QComboBox()
        self.passage_select.addItems(self._passages.labels())
        self.passage_select.setCurrentIndex(self._controller.passage_index)
        self.passage_select.currentIndexChanged.connect(self._controller.select_passage)

        self.duration_select = QComboBox()
        for minutes in self._settings.duration_options_minutes:
            self.duration_select.addItem(f"{minutes} min", minutes)
        default_pos = self.duration_select.findData(self._settings.default_duration_minutes)
        self.duration_select.setCurrentIndex(max(0, default_pos))
        self.duration_select.currentIndexChanged.connect(self._on_duration_changed)
        for select in (self.passage_select, self.duration_select):
            select.installEventFilter(self)

        self.start_button = QPushButton("Start")
        self.reset_button = QPushButton("Reset")
        for button in (self.start_button, self.reset_button):
            button.setCursor(Qt.PointingHandCursor)
            button.setStyleSheet(
                f"""
                QPushButton {{
                    background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
                        stop:0 {RoundColors.PRIMARY_LIGHT}, stop:1 {RoundColors.PRIMARY});
                    color: white;
                    padding: 8px 18px;
                    border: none;
                    border-radius: 10px;
                    font-weight: 600;
                }}
                QPushButton:hover {{ background: {RoundColors.PRIMARY_DARK}; }}
                """
            )
        self.start_button.clicked.connect(self._on_start_clicked)
        self.reset_button.clicked.connect(self._on_reset_clicked)

        controls.addWidget(QLabel("Passage"))
        controls.addWidget(self.passage_select)
        controls.addWidget(QLabel("Time limit"))
        controls.addWidget(self.duration_select)
        controls.addStretch(1)
        controls.addWidget(self.start_button)
        controls.addWidget(self.reset_button)
        root.addLayout(controls)

        card = QFrame()
        card.setStyleSheet(
            f"QFrame {{ background: {RoundColors.CARD_BG}; border: 1px solid {RoundColors.CARD_BORDER};"
            f" border-radius: 14px; }}"
        )
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(18, 18, 18, 18)
        self.target_display = QLabel()
        self.target_display.setTextFormat(Qt.RichText)
        self.target_display.setWordWrap(True)
        self.target_display.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.target_display.setStyleSheet("QLabel { border: none; font-size: 17px; }")
        card_layout.addWidget(self.target_display)
        root.addWidget(card, 3)

        self.input_box = QPlainTextEdit()
        self.input_box.setPlaceholderText("Start typing here...")
        self.input_box.setStyleSheet(
            f"QPlainTextEdit {{ background: white; border: 1px solid {RoundColors.CARD_BORDER};"
            f" border-radius: 10px; padding: 8px; font-size: 16px; color: {RoundColors.TEXT_PRIMARY}; }}"
        )
        self.input_box.installEventFilter(self)
        self.input_box.textChanged.connect(self._on_text_changed)
        root.addWidget(self.input_box, 2)

        stats = QGridLayout()
        stats.setHorizontalSpacing(24)

        def _stat(column: int, header: str) -> QLabel:
            head = QLabel(header)
            head.setStyleSheet(f"color: {RoundColors.TEXT_MUTED}; font-size: 12px;")
            value = QLabel()
            value.setStyleSheet(f"color: {RoundColors.PRIMARY}; font-size: 26px; font-weight: 700;")
            stats.addWidget(head, 0, column)
            stats.addWidget(value, 1, column)
            return value

        self._time_label = _stat(0, "Time")
        self._correct_label = _stat(1, "Correct")
        self._mistakes_label = _stat(2, "Mistakes")
        self._accuracy_label = _stat(3, "Accuracy")
        self._wpm_label = _stat(4, "WPM")
        self._status_label = _stat(5, "Status")
        root.addLayout(stats)

    def _on_duration_changed(self, _index: int) -> None:
        self._controller.select_duration(self.duration_select.currentData())

    def _on_start_clicked(self) -> None:
        self._controller.request_start()
        self.input_box.setFocus()

    def _on_reset_clicked(self) -> None:
        self._controller.request_reset()
        self.input_box.setFocus()

    def _on_text_changed(self) -> None:
        if self._sync_block:
            return
        self._controller.submit_typed_text(self.input_box.toPlainText())

    def eventFilter(self, obj, event) -> bool:
        """Start the round from the first keystroke in the editor or a picker.

        In the editor the key still lands; in a picker it is consumed.
        """
        if obj in self._key_start_widgets() and event.type() == QEvent.Type.KeyPress:
            started = self._controller.key_pressed(
                self._key_text(event),
                modifier=bool(event.modifiers() & _MODIFIERS),
                editing=True,
            )
            if started and obj is not self.input_box:
                # a picker would otherwise search its items and reset the round
                self.input_box.setFocus()
                return True
        return super().eventFilter(obj, event)

    def _key_start_widgets(self) -> tuple:
        return (self.input_box, self.passage_select, self.duration_select)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        """Keystrokes that reach the window came from outside the editor."""
        started = self._controller.key_pressed(
            self._key_text(event),
            modifier=bool(event.modifiers() & _MODIFIERS),
            editing=False,
        )
        if started:
            self.input_box.setFocus()
            event.accept()
            return
        super().keyPressEvent(event)

    @staticmethod
    def _key_text(event: QKeyEvent) -> str:
        if event.key() in (Qt.Key_Return, Qt.Key_Enter):
            return "Enter"
        return event.text()

    def _set_input_text(self, text: str) -> None:
        """Set the editor content without feeding it back to the controller."""
        self._sync_block = True
        self.input_box.setPlainText(text)
        self.input_box.moveCursor(QTextCursor.End)
        self._sync_block = False

    def _repaint(self, display: RoundDisplay) -> None:
        if self.input_box.toPlainText() != display.typed:
            self._set_input_text(display.typed)
        self.target_display.setText(render_diff_html(display.diff, display.typed))
        self._time_label.setText(display.time_text)
        self._correct_label.setText(str(display.correct))
        self._mistakes_label.setText(str(display.mistakes))
        self._accuracy_label.setText(display.accuracy_text)
        self._wpm_label.setText(str(display.wpm))
        self._status_label.setText(display.status_label)
        color = status_color(display.status_label)
        self._status_label.setStyleSheet(f"color: {color}; font-size: 26px; font-weight: 700;")

    def closeEvent(self, event: QCloseEvent) -> None:
        """Stop the tick before the window goes away."""
        self._controller.stop()
        logger.info("Window closed")
        super().closeEvent(event)

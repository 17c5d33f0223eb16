from __future__ import annotations
from typing import Any, Callable, Dict, Optional, Tuple

from PySide6.QtCore import QEvent, QPoint, QSize
from PySide6.QtGui import QImage, QPainter, QPixmap
from PySide6.QtWidgets import QToolTip, QWidget

from ..core.card_io import DEFAULT_CARD_WIDTH
from ..core.card_stack import CardStack
from ..core.errors import ImageNotFoundError
from ..core.geometry import Insets, Point, Size
from ..core.layout import DEFAULT_VGAP
from ..services.interfaces import IImageProvider, IItemSource, ILogger, IRenderSurface
from ..services.logging_service import NullLogger


def qimage_from_cv_bgr(bgr) -> QImage:
    rgb = bgr[..., ::-1].copy()
    h, w, c = rgb.shape
    return QImage(rgb.data, w, h, 3 * w, QImage.Format.Format_RGB888).copy()


class QPainterSurface(IRenderSurface):
    def __init__(self, painter: QPainter, to_pixmap: Callable[[Any], QPixmap]):
        self._painter = painter
        self._to_pixmap = to_pixmap

    def draw_image(self, image, x: int, y: int) -> None:
        self._painter.drawPixmap(x, y, self._to_pixmap(image))


class CardListWidget(QWidget):
    """Qt host for a CardStack: paints it, sizes to it, and shows card previews as tooltips.

    Widgets added as children are never painted; the stack owns the whole area.
    """

    def __init__(self, source: IItemSource, provider: IImageProvider, vgap: int = DEFAULT_VGAP,
                 card_width: int = DEFAULT_CARD_WIDTH, logger: Optional[ILogger] = None, parent=None):
        super().__init__(parent)
        self._logger = logger or NullLogger()
        self._pixmaps: Dict[int, Tuple[Any, QPixmap]] = {}
        self._stack: Optional[CardStack] = None
        self._stack = CardStack(source, provider, vgap, card_width, on_repaint=self._request_repaint)
        # Capture the stack, not self: the wrapper is dead by the time this fires
        stack = self._stack
        self.destroyed.connect(lambda *args: stack.close())

    @property
    def stack(self) -> CardStack:
        return self._stack

    def set_source(self, source: IItemSource) -> None:
        self._stack.set_source(source)

    def vgap(self) -> int:
        return self._stack.vgap

    def set_vgap(self, vgap: int) -> None:
        self._stack.vgap = vgap

    def set_pinned_size(self, size: Optional[QSize]) -> None:
        self._stack.pinned_size = Size(size.width(), size.height()) if size is not None else None
        self.updateGeometry()

    def release(self) -> None:
        """Stop observing the item source."""
        self._stack.close()

    def _request_repaint(self) -> None:
        if self._stack is None:
            return
        self.updateGeometry()
        self.update()

    def _sync_insets(self) -> None:
        m = self.contentsMargins()
        self._stack.insets = Insets(m.top(), m.left(), m.bottom(), m.right())

    def _pixmap_for(self, image) -> QPixmap:
        # Cached images are never evicted, so id() stays unique while they live
        entry = self._pixmaps.get(id(image))
        if entry is not None and entry[0] is image:
            return entry[1]
        pixmap = QPixmap.fromImage(qimage_from_cv_bgr(image))
        self._pixmaps[id(image)] = (image, pixmap)
        return pixmap

    def sizeHint(self) -> QSize:
        self._sync_insets()
        try:
            size = self._stack.preferred_size()
        except ImageNotFoundError as e:
            self._logger.warning(f"Cannot size card stack: {e}")
            return super().sizeHint()
        return QSize(size.width, size.height)

    def minimumSizeHint(self) -> QSize:
        return self.sizeHint()

    def paintEvent(self, event) -> None:
        self._sync_insets()
        painter = QPainter(self)
        try:
            self._stack.render(QPainterSurface(painter, self._pixmap_for))
        except ImageNotFoundError as e:
            self._logger.warning(f"Stopped painting card stack: {e}")
        finally:
            painter.end()

    def tooltip_for(self, pos: QPoint) -> Optional[str]:
        """Rich-text preview of the card under pos, or None."""
        self._sync_insets()
        try:
            preview = self._stack.preview_at(Point(pos.x(), pos.y()))
        except ImageNotFoundError as e:
            self._logger.warning(f"No preview: {e}")
            return None
        if preview is None:
            return None
        return preview.to_html() or str(preview.item)

    def event(self, e) -> bool:
        if e.type() == QEvent.Type.ToolTip:
            text = self.tooltip_for(e.pos())
            if text:
                QToolTip.showText(e.globalPos(), text, self)
            else:
                QToolTip.hideText()
                e.ignore()
            return True
        return super().event(e)

    def childEvent(self, e) -> None:
        if e.added() and e.child().isWidgetType():
            e.child().installEventFilter(self)
        super().childEvent(e)

    def eventFilter(self, obj, e) -> bool:
        if e.type() == QEvent.Type.Paint and obj.parent() is self:
            return True
        return super().eventFilter(obj, e)

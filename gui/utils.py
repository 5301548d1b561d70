import numpy as np
from PIL import Image, ImageTk

from core.adjust import BrightnessContrast


def np_to_tkimage(arr, size=None):
    """Convert a uint8 numpy array (H×W) to a PhotoImage, optionally resized to (w, h)."""
    img = Image.fromarray(np.uint8(arr))
    if size is not None:
        img = img.resize(size, Image.NEAREST)
    return ImageTk.PhotoImage(img)


def fit_size(shape, max_w, max_h):
    """Largest (w, h) with the array's aspect ratio that fits into max_w x max_h."""
    h, w = shape[:2]
    if w <= 0 or h <= 0 or max_w <= 1 or max_h <= 1:
        return (max(w, 1), max(h, 1))
    scale = min(max_w / w, max_h / h)
    return (max(int(w * scale), 1), max(int(h * scale), 1))


class CanvasView:
    """
    A tk canvas that shows one uint8 raster and lets the user drag on it to
    change display brightness (vertical) and contrast (horizontal).
    The source raster is never modified; adjustments are redone from it.
    """

    def __init__(self, canvas):
        self.canvas = canvas
        self.source = None
        self.adjust = BrightnessContrast()
        self._tkimage = None
        self._drag_start = None
        canvas.bind("<ButtonPress-1>", self._on_press)
        canvas.bind("<B1-Motion>", self._on_drag)
        canvas.bind("<ButtonRelease-1>", self._on_release)
        canvas.bind("<Double-Button-1>", self._on_reset)
        canvas.bind("<Configure>", lambda e: self.redraw())

    def show(self, raster, reset=False):
        self.source = None if raster is None else np.asarray(raster, dtype=np.uint8)
        if reset:
            self.adjust.reset()
        self.redraw()

    def redraw(self):
        self.canvas.delete("all")
        if self.source is None:
            return
        shown = self.adjust.apply(self.source)
        cw, ch = self.canvas.winfo_width(), self.canvas.winfo_height()
        self._tkimage = np_to_tkimage(shown, fit_size(shown.shape, cw, ch))
        self.canvas.create_image(cw // 2, ch // 2, anchor="center", image=self._tkimage)
        if not self.adjust.is_identity:
            self.canvas.create_text(
                4, 4, anchor="nw", fill="yellow", font=("Helvetica", 8),
                text=f"B {self.adjust.brightness:+.0f}  C {self.adjust.contrast:+.0f}",
            )

    def _on_press(self, event):
        self._drag_start = (event.x, event.y)

    def _on_drag(self, event):
        if self._drag_start is None or self.source is None:
            return
        x0, y0 = self._drag_start
        self.adjust.drag(event.x - x0, event.y - y0)
        self._drag_start = (event.x, event.y)
        self.redraw()

    def _on_release(self, event):
        self._drag_start = None

    def _on_reset(self, event):
        self.adjust.reset()
        self.redraw()

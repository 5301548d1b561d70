import logging
import queue

import ttkbootstrap as ttk
import tkinter as tk
from ttkbootstrap.constants import *
from tkinter import StringVar, DoubleVar, IntVar, BooleanVar
from tkinter.scrolledtext import ScrolledText

from core.spectrum import COMPONENTS
from io_utils.log_utils import CallbackHandler, setup_logging
from .callbacks import (
    open_image_callback,
    poll_results,
    save_output_callback,
    schedule_mix,
    show_component,
)
from .utils import CanvasView

N_SLOTS = 4
N_OUTPUTS = 2


class InputSlot:
    """State for one input viewport: loaded image, resized raster, cached spectrum."""

    def __init__(self, index):
        self.index = index
        self.original = None
        self.raster = None
        self.spectrum = None
        self.component = StringVar(value="Magnitude")
        self.weight = DoubleVar(value=1.0 / N_SLOTS)
        self.image_view = None
        self.component_view = None


class MixerApp(ttk.Window):
    def __init__(self, title="Fourier Image Mixer", themename="cyborg"):
        super().__init__(themename=themename)
        self.title(title)
        self.geometry("1400x850")

        # Data
        self.slots = [InputSlot(i) for i in range(N_SLOTS)]
        self.outputs = [None] * N_OUTPUTS
        self.output_views = []

        # Variables
        self.mix_mode = StringVar(value="magnitude-phase")
        self.region_enabled = BooleanVar(value=False)
        self.region_kind = StringVar(value="inner")
        self.region_size = DoubleVar(value=30.0)
        self.selected_output = IntVar(value=1)
        self.unified_size = StringVar(value="Unified size: -")
        self.status = StringVar(value="Idle")

        # Mix scheduling
        self._mix_after_id = None
        self._mix_generation = 0
        self._results = queue.Queue()
        self._log_lines = queue.Queue()

        self._build_layout()

        handler = CallbackHandler(self.log)
        logging.getLogger().addHandler(handler)
        self.after(0, lambda: poll_results(self))

    def log(self, msg: str):
        """Queue a message for the log panel; safe to call from worker threads."""
        self._log_lines.put(str(msg))

    def flush_log(self):
        """Move queued messages into the log panel (Tk thread only)."""
        try:
            while True:
                msg = self._log_lines.get_nowait()
                try:
                    self.log_box.insert("end", msg + "\n")
                    self.log_box.see("end")
                except tk.TclError:
                    print(msg)
        except queue.Empty:
            pass

    # --- Layout ---
    def _build_layout(self):
        # Left control panel
        control = ttk.Frame(self)
        control.pack(side=LEFT, fill=Y, padx=10, pady=10)

        ttk.Label(control, text="Mix Mode:").pack(anchor=W)
        ttk.Radiobutton(control, text="Magnitude / Phase", value="magnitude-phase",
                        variable=self.mix_mode, command=lambda: schedule_mix(self)).pack(anchor=W)
        ttk.Radiobutton(control, text="Real / Imaginary", value="real-imaginary",
                        variable=self.mix_mode, command=lambda: schedule_mix(self)).pack(anchor=W)

        ttk.Separator(control).pack(fill=X, pady=5)
        ttk.Label(control, text="Weights:").pack(anchor=W)
        for slot in self.slots:
            row = ttk.Frame(control)
            row.pack(fill=X, pady=1)
            ttk.Label(row, text=f"Image {slot.index + 1}", width=8).pack(side=LEFT)
            ttk.Scale(row, from_=0.0, to=1.0, variable=slot.weight,
                      command=lambda _v: schedule_mix(self)).pack(side=LEFT, fill=X, expand=True)

        ttk.Separator(control).pack(fill=X, pady=5)
        ttk.Checkbutton(control, text="Enable Region Selection", variable=self.region_enabled,
                        command=lambda: schedule_mix(self)).pack(anchor=W)
        kind_row = ttk.Frame(control)
        kind_row.pack(fill=X)
        ttk.Radiobutton(kind_row, text="Inner (low)", value="inner", variable=self.region_kind,
                        command=lambda: schedule_mix(self)).pack(side=LEFT)
        ttk.Radiobutton(kind_row, text="Outer (high)", value="outer", variable=self.region_kind,
                        command=lambda: schedule_mix(self)).pack(side=LEFT, padx=6)
        ttk.Label(control, text="Region Size (%):").pack(anchor=W)
        ttk.Scale(control, from_=0.0, to=100.0, variable=self.region_size,
                  command=lambda _v: schedule_mix(self)).pack(fill=X, pady=2)

        ttk.Separator(control).pack(fill=X, pady=5)
        ttk.Label(control, text="Send Result To:").pack(anchor=W)
        out_row = ttk.Frame(control)
        out_row.pack(fill=X)
        for i in range(N_OUTPUTS):
            ttk.Radiobutton(out_row, text=f"Output {i + 1}", value=i + 1,
                            variable=self.selected_output).pack(side=LEFT, padx=(0, 6))

        ttk.Button(control, text="Mix Now", bootstyle=SUCCESS, command=lambda: schedule_mix(self)).pack(fill=X, pady=3)
        ttk.Button(control, text="Save Output", bootstyle=INFO, command=lambda: save_output_callback(self)).pack(fill=X, pady=3)
        ttk.Label(control, textvariable=self.unified_size).pack(anchor=W, pady=(6, 0))
        ttk.Label(control, textvariable=self.status).pack(anchor=W)

        ttk.Separator(control).pack(fill=X, pady=5)
        ttk.Label(control, text="Logs:").pack(anchor=W)
        self.log_box = ScrolledText(control, height=12, width=40, wrap="word")
        self.log_box.configure(font=("Helvetica", 9))
        self.log_box.pack(fill=BOTH, expand=True, pady=5)

        # Right display area: input grid on top, outputs below
        display = ttk.Frame(self)
        display.pack(side=LEFT, fill=BOTH, expand=True, padx=(8, 12), pady=8)

        inputs = ttk.Frame(display)
        inputs.pack(fill=BOTH, expand=True)
        for slot in self.slots:
            self._make_input_column(inputs, slot).pack(side=LEFT, fill=BOTH, expand=True, padx=3)

        outputs = ttk.Frame(display)
        outputs.pack(fill=BOTH, expand=True, pady=(8, 0))
        for i in range(N_OUTPUTS):
            col = ttk.Frame(outputs)
            col.pack(side=LEFT, fill=BOTH, expand=True, padx=3)
            ttk.Label(col, text=f"Output {i + 1}").pack(anchor=W)
            canvas = tk.Canvas(col, background="black", highlightthickness=0)
            canvas.pack(fill=BOTH, expand=True)
            self.output_views.append(CanvasView(canvas))

    def _make_input_column(self, parent, slot):
        col = ttk.Frame(parent)
        toolrow = ttk.Frame(col)
        toolrow.pack(fill=X, pady=(0, 4))
        ttk.Button(toolrow, text=f"Open {slot.index + 1}", bootstyle=PRIMARY,
                   command=lambda: open_image_callback(self, slot)).pack(side=LEFT)
        opt = ttk.OptionMenu(toolrow, slot.component, slot.component.get(),
                             *[c.capitalize() for c in COMPONENTS])
        opt.pack(side=RIGHT)
        slot.component.trace_add("write", lambda *args: show_component(self, slot))

        image_canvas = tk.Canvas(col, background="black", height=160, highlightthickness=0)
        image_canvas.pack(fill=BOTH, expand=True, pady=(0, 3))
        component_canvas = tk.Canvas(col, background="black", height=160, highlightthickness=0)
        component_canvas.pack(fill=BOTH, expand=True)
        slot.image_view = CanvasView(image_canvas)
        slot.component_view = CanvasView(component_canvas)
        return col


def launch_app():
    setup_logging("fourier-mixer")
    app = MixerApp()
    app.mainloop()

import logging
import os
import queue
import threading

import numpy as np
from tkinter import filedialog, messagebox

from core.errors import MixerError
from core.filters import RegionSpec
from core.mixer import MixMode, MixSpec
from core.pipeline import mix_spectra
from core.preprocessing import common_size, resize_nearest
from core.spectrum import component_display, transform
from io_utils.image_handler import read_grayscale, save_image

logger = logging.getLogger(__name__)

# delay between the last control change and the mix it triggers
MIX_DEBOUNCE_MS = 300
RESULT_POLL_MS = 50


# ----------------------
# Input slots
# ----------------------
def open_image_callback(app, slot):
    """Load an image into one input slot, then re-unify sizes and refresh spectra."""
    path = filedialog.askopenfilename(
        title=f"Select Image {slot.index + 1}",
        filetypes=[("Image Files", "*.png *.jpg *.jpeg *.tif *.bmp *.gif *.avif"), ("All Files", "*.*")]
    )
    if not path:
        return
    try:
        gray = read_grayscale(path)
    except (OSError, ValueError) as e:
        logger.error("Failed to load %s: %s", path, e)
        messagebox.showerror("Load Error", f"Could not read image:\n{e}")
        return

    slot.original = gray
    logger.info("Loaded %s into slot %d (%dx%d)", os.path.basename(path), slot.index + 1,
                gray.shape[1], gray.shape[0])
    refresh_inputs(app)
    schedule_mix(app)


def refresh_inputs(app):
    """
    Resize every loaded image to the smallest loaded size and recompute its
    spectrum. Spectra are cached on the slot; mixing only reads them.
    """
    loaded = [s for s in app.slots if s.original is not None]
    if not loaded:
        return
    width, height = common_size([s.original for s in loaded])
    app.unified_size.set(f"Unified size: {width} x {height}")
    for s in loaded:
        s.raster = resize_nearest(s.original, width, height)
        s.spectrum = transform(s.raster)
        s.image_view.show(s.raster, reset=True)
        show_component(app, s)


def show_component(app, slot):
    if slot.spectrum is None:
        return
    name = slot.component.get().lower()
    slot.component_view.show(component_display(slot.spectrum, name))


# ----------------------
# Mixing
# ----------------------
def current_specs(app):
    """Fresh MixSpec/RegionSpec built from the controls."""
    mode = MixMode.MAGNITUDE_PHASE if app.mix_mode.get() == "magnitude-phase" else MixMode.REAL_IMAGINARY
    weights = [float(s.weight.get()) for s in app.slots]
    mix_spec = MixSpec(mode=mode, weights=weights)
    region = RegionSpec(
        enabled=bool(app.region_enabled.get()),
        kind=app.region_kind.get(),
        size_percent=float(app.region_size.get()),
    )
    return mix_spec, region


def schedule_mix(app):
    """Debounce: restart the timer on every control change."""
    if app._mix_after_id is not None:
        app.after_cancel(app._mix_after_id)
    app._mix_after_id = app.after(MIX_DEBOUNCE_MS, lambda: run_mix_callback(app))


def run_mix_callback(app):
    """
    Start a mix on a worker thread. Each request gets a generation number;
    results from superseded requests are discarded when they arrive.
    """
    app._mix_after_id = None
    spectra = [s.spectrum for s in app.slots]
    if all(s is None for s in spectra):
        return
    try:
        mix_spec, region = current_specs(app)
    except ValueError as e:
        logger.error("Invalid mix settings: %s", e)
        return

    app._mix_generation += 1
    generation = app._mix_generation
    target = int(app.selected_output.get())
    app.status.set(f"Mixing #{generation}...")

    def _worker():
        try:
            out = mix_spectra(spectra, mix_spec, region)
            app._results.put((generation, target, out, None))
        except MixerError as e:
            app._results.put((generation, target, None, e))

    threading.Thread(target=_worker, daemon=True).start()


def poll_results(app):
    """Deliver finished mixes on the Tk thread."""
    try:
        while True:
            generation, target, out, err = app._results.get_nowait()
            if generation != app._mix_generation:
                logger.debug("Discarding superseded mix #%d", generation)
                continue
            if err is not None:
                logger.error("Mixing error: %s", err)
                app.status.set("Mix failed")
                messagebox.showerror("Mixing Error", f"Error during mixing:\n{err}")
                continue
            app.outputs[target - 1] = out
            app.output_views[target - 1].show(out)
            app.status.set(f"Mix #{generation} -> Output {target}")
            logger.info("Mix #%d done -> output %d", generation, target)
    except queue.Empty:
        pass
    app.flush_log()
    app.after(RESULT_POLL_MS, lambda: poll_results(app))


def save_output_callback(app):
    """Save the selected output raster (un-adjusted) to a file."""
    target = int(app.selected_output.get())
    out = app.outputs[target - 1]
    if out is None:
        messagebox.showwarning("No Output", f"Output {target} is empty. Load images and mix first.")
        return

    save_path = filedialog.asksaveasfilename(
        title="Save Mixed Image",
        initialfile=f"mixed_output_{target}.png",
        defaultextension=".png",
        filetypes=[("PNG Image", "*.png"), ("JPEG Image", "*.jpg;*.jpeg"), ("TIFF Image", "*.tif;*.tiff")]
    )
    if not save_path:
        logger.info("Save cancelled.")
        return
    try:
        save_image(save_path, np.asarray(out, dtype=np.uint8))
    except (OSError, ValueError) as e:
        logger.error("Save failed: %s", e)
        messagebox.showerror("Save Error", f"Saving failed:\n{e}")
        return
    logger.info("Saved output %d -> %s", target, save_path)

"""
Batch-run demo: mix a set of images under several settings.

Saves per-run outputs, component images, mask images and a CSV log with:
- run, mode, weights, region, out_path, output_min, output_max, output_mean,
  max_imag_residual, degenerate (bool)

Usage (from project root):
python -m scripts.batch_mix

Edit the IMAGES and RUNS lists below to point to your files and settings.
"""

import os
import csv
from datetime import datetime

import numpy as np

from io_utils.image_handler import read_grayscale, save_image
from io_utils.file_utils import make_result_filename, save_parameters_txt
from io_utils.log_utils import setup_logging
from core.preprocessing import unify_sizes
from core.filters import RegionSpec
from core.mixer import MixSpec
from core.pipeline import mix_rasters
from core.fft_engine import ifft_shift
from core.spectrum import transform
from visuals.plots import plot_component, plot_region_mask, compare_and_save

# CONFIG: input images (up to four), loaded as grayscale
IMAGES = [
    "data/image_1.png",
    "data/image_2.png",
    "data/image_3.png",
    "data/image_4.png",
]

# each run: (name, mode, weights, region or None)
RUNS = [
    ("equal_magphase", "magnitude-phase", [0.25, 0.25, 0.25, 0.25], None),
    ("equal_realimag", "real-imaginary", [0.25, 0.25, 0.25, 0.25], None),
    ("low_freq_first", "magnitude-phase", [1.0, 0.0, 0.0, 0.0], RegionSpec(True, "inner", 20)),
    ("high_freq_mix", "real-imaginary", [0.5, 0.5, 0.0, 0.0], RegionSpec(True, "outer", 10)),
]

COMPONENTS = ("magnitude", "phase", "real", "imaginary")
LOG_LEVEL = "INFO"

csv_fields = [
    "run", "mode", "weights", "region", "out_path", "output_min", "output_max",
    "output_mean", "max_imag_residual", "degenerate",
]


def _region_desc(region):
    if region is None or not region.enabled:
        return "full"
    return f"{region.kind.value}{region.size_percent:g}%"


def process_run(rasters, name, mode, weights, region, outdir):
    mix_spec = MixSpec(mode=mode, weights=weights)
    out, inter = mix_rasters(rasters, mix_spec, region, return_intermediates=True)

    out_path = make_result_filename("mixer", mix_spec.mode.value, weights, _region_desc(region),
                                    name, outdir=outdir)
    save_image(out_path, out)

    # residual imaginary part after the inverse transform
    spatial = np.fft.ifft2(ifft_shift(inter["mixed"].data))
    max_imag = float(np.max(np.abs(np.imag(spatial))))

    if inter["mask"] is not None:
        plot_region_mask(inter["mask"], out_path=os.path.join(outdir, f"{name}_mask.png"))
    present = [r for r in rasters if r is not None]
    compare_and_save(present, out, out_path=os.path.join(outdir, f"{name}_compare.png"))

    return {
        "run": name,
        "mode": mix_spec.mode.value,
        "weights": " ".join(f"{w:g}" for w in weights),
        "region": _region_desc(region),
        "out_path": out_path,
        "output_min": int(out.min()),
        "output_max": int(out.max()),
        "output_mean": float(out.mean()),
        "max_imag_residual": max_imag,
        "degenerate": bool(out.min() == out.max()),
    }


def main():
    logger = setup_logging("batch_mix", LOG_LEVEL)
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    outdir = os.path.join("results", f"batch_mix_{timestamp}")
    os.makedirs(outdir, exist_ok=True)

    rasters = []
    for path in IMAGES:
        if not os.path.exists(path):
            logger.warning("Skipping missing: %s", path)
            rasters.append(None)
            continue
        rasters.append(read_grayscale(path))
    if all(r is None for r in rasters):
        logger.error("No input images found; nothing to do.")
        return

    rasters = unify_sizes(rasters)
    first = next(r for r in rasters if r is not None)
    logger.info("Unified size: %dx%d", first.shape[1], first.shape[0])

    # component images of each input, for reference
    for i, r in enumerate(rasters):
        if r is None:
            continue
        spec = transform(r)
        for comp in COMPONENTS:
            plot_component(spec, comp, out_path=os.path.join(outdir, "inputs", f"input{i + 1}_{comp}.png"))

    save_parameters_txt(outdir, {"images": IMAGES, "runs": [r[:3] for r in RUNS]})

    csv_path = os.path.join(outdir, "results.csv")
    with open(csv_path, "w", newline="", encoding="utf-8") as csvf:
        writer = csv.DictWriter(csvf, fieldnames=csv_fields)
        writer.writeheader()
        for name, mode, weights, region in RUNS:
            logger.info("Run %s", name)
            rec = process_run(rasters, name, mode, weights, region, outdir)
            writer.writerow(rec)
            csvf.flush()
            logger.info(" -> done. range=[%d, %d] max_imag=%.3g", rec["output_min"],
                        rec["output_max"], rec["max_imag_residual"])

    logger.info("Batch done. Results in: %s CSV: %s", outdir, csv_path)


if __name__ == "__main__":
    main()

# io_utils/file_utils.py
"""
File naming and parameter recording helpers.
"""

import os
import datetime
from typing import Dict, Sequence


def make_result_filename(
    projname: str,
    mode: str,
    weights: Sequence[float],
    region_desc: str,
    desc: str,
    ext: str = "png",
    outdir: str = ".",
) -> str:
    """
    Build an output path like
    <proj>_<mode>_w-0.5-0.5_<region>_<desc>_<timestamp>.<ext>
    and make sure `outdir` exists.
    """
    timestamp = datetime.datetime.now().strftime("%Y%m%dT%H%M%S")
    w_part = "-".join(f"{float(w):g}" for w in weights) or "none"
    safe_desc = str(desc).replace(" ", "_")
    safe_region = str(region_desc).replace(" ", "_").replace("%", "pct")
    fname = f"{projname}_{mode}_w-{w_part}_{safe_region}_{safe_desc}_{timestamp}.{ext}"
    os.makedirs(outdir, exist_ok=True)
    return os.path.join(outdir, fname)


def save_parameters_txt(outdir: str, params: Dict):
    os.makedirs(outdir, exist_ok=True)
    path = os.path.join(outdir, "parameters.txt")
    with open(path, "w", encoding="utf-8") as f:
        for k, v in params.items():
            f.write(f"{k}: {v}\n")
    return path

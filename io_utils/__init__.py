# io_utils/__init__.py
"""
I/O helpers package for the Fourier image mixer.
"""
from .image_handler import read_image, read_grayscale, save_image, detect_is_color
from .file_utils import make_result_filename, save_parameters_txt
from .log_utils import setup_logging, resolve_log_level, CallbackHandler

__all__ = [
    "read_image",
    "read_grayscale",
    "save_image",
    "detect_is_color",
    "make_result_filename",
    "save_parameters_txt",
    "setup_logging",
    "resolve_log_level",
    "CallbackHandler",
]

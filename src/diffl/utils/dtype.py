"""Conversion utilities for data types of images."""

from warnings import warn

import numpy as np
import skimage

__all__ = ["convert_dtype"]


def convert_dtype(img: np.ndarray, dtype: np.dtype) -> np.ndarray:
    """Convert a floating point image to the specified dtype.

    Integer types are rescaled following the skimage conventions, i.e., the unit
    interval is mapped onto the range of the integer type.

    Args:
        img (np.ndarray): image
        dtype (np.dtype): dtype to convert to

    Returns:
        np.ndarray: converted image

    """
    if dtype == np.uint8:
        return skimage.img_as_ubyte(np.clip(img, 0, 1))
    elif dtype == np.uint16:
        return skimage.img_as_uint(np.clip(img, 0, 1))
    elif dtype == np.float32:
        return skimage.img_as_float32(img)
    elif dtype == np.float64:
        return skimage.img_as_float64(img)
    else:
        warn(f"{dtype} is not a supported dtype. Returning {img.dtype} image.")
        return img

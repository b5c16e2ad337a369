"""
Swatch Imaging Utilities
Handles image I/O, upload validation and conversion to pixel collections.
"""
import io
from pathlib import Path
from typing import List, Union

import cv2
import numpy as np
from fastapi import HTTPException, UploadFile
from PIL import Image

from swatch.config import config
from swatch.services.colors.pixel import Pixel


def decode_image_bytes(file_bytes: bytes) -> np.ndarray:
    """
    Decode raw image bytes to an RGB uint8 array of shape (H, W, 3).

    Raises:
        ValueError: If the bytes are not a decodable image
    """
    try:
        pil_image = Image.open(io.BytesIO(file_bytes))
        if pil_image.mode != 'RGB':
            pil_image = pil_image.convert('RGB')
        return np.array(pil_image)
    except Exception as e:
        raise ValueError(f"Failed to decode image: {str(e)}")


def load_image(path: Union[str, Path]) -> np.ndarray:
    """
    Load an image file from disk as an RGB uint8 array.

    Raises:
        FileNotFoundError: If path does not exist
        ValueError: If the file cannot be decoded
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"No such file or directory: {path}")
    return decode_image_bytes(path.read_bytes())


def save_image(rgb: np.ndarray, path: Union[str, Path]) -> None:
    """Write an RGB array to disk; format follows the file extension."""
    Image.fromarray(np.clip(rgb, 0, 255).astype(np.uint8)).save(Path(path))


def validate_file_upload(file: UploadFile) -> None:
    """
    Validate uploaded file for size and format compliance.

    Raises:
        HTTPException: 400 for invalid files, 415 for unsupported formats
    """
    # file.size might be None for some clients
    if getattr(file, 'size', None) and file.size > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    if file.content_type not in config.SUPPORTED_MIME_TYPES:
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported media type. Supported: {', '.join(config.SUPPORTED_MIME_TYPES)}"
        )

    if file.filename:
        ext = Path(file.filename).suffix.lower()
        if ext not in config.SUPPORTED_EXTENSIONS:
            raise HTTPException(
                status_code=415,
                detail=f"Unsupported file extension. Supported: {', '.join(sorted(config.SUPPORTED_EXTENSIONS))}"
            )


def validate_magic_bytes(file_bytes: bytes) -> str:
    """
    Validate file magic bytes to ensure it's actually an image.

    Returns:
        Detected MIME type

    Raises:
        HTTPException: 400 for invalid/corrupt files
    """
    if len(file_bytes) < 8:
        raise HTTPException(status_code=400, detail="File too small or corrupt")

    if file_bytes.startswith(b'\xff\xd8\xff'):
        return "image/jpeg"
    elif file_bytes.startswith(b'\x89PNG\r\n\x1a\n'):
        return "image/png"
    else:
        raise HTTPException(
            status_code=400,
            detail="Invalid image file. Magic bytes don't match supported formats."
        )


async def read_upload(file: UploadFile) -> np.ndarray:
    """
    Safely read and decode an uploaded image to an RGB array.

    Raises:
        HTTPException: 400 for read/decode errors
    """
    try:
        file_bytes = await file.read()
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to read file: {str(e)}")

    if len(file_bytes) > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    validate_magic_bytes(file_bytes)

    try:
        return decode_image_bytes(file_bytes)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def resize_long_edge(rgb: np.ndarray, max_edge: int = None) -> np.ndarray:
    """
    Resize image so the longest edge is at most max_edge pixels.

    A max_edge of 0 keeps the image as is.
    """
    if max_edge is None:
        max_edge = config.MAX_EDGE

    height, width = rgb.shape[:2]
    current_max = max(height, width)

    if max_edge <= 0 or current_max <= max_edge:
        return rgb

    scale = max_edge / current_max
    new_width = max(1, int(width * scale))
    new_height = max(1, int(height * scale))

    # INTER_AREA for downscaling
    return cv2.resize(rgb, (new_width, new_height), interpolation=cv2.INTER_AREA)


def flatten_rgb(rgb: np.ndarray) -> np.ndarray:
    """Row-major (H*W, 3) int64 channel values of an RGB image."""
    return rgb[..., :3].reshape(-1, 3).astype(np.int64)


def pixels_from_array(rgb: np.ndarray) -> List[Pixel]:
    """Row-major Pixels carrying their (x, y) source coordinates."""
    height, width = rgb.shape[:2]
    return [
        Pixel(int(r), int(g), int(b), x=x, y=y)
        for y in range(height)
        for x, (r, g, b) in enumerate(rgb[y, :, :3].tolist())
    ]

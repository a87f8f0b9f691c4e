"""
Common type definitions for the paper alignment pipeline.

This module provides Pydantic-based type definitions for the two data
structures shared by every stage: pixel buffers and points.

These types provide:
- Type validation and conversion
- Consistent interfaces across modules
- Integration with numpy arrays and OpenCV
"""

from typing import Tuple, Union

import numpy as np
from pydantic import BaseModel, Field, ValidationError, field_validator

from paper_aligner.common.errors import InvalidInputError


class ImageBuffer(BaseModel):
    """
    Type-safe wrapper for pixel buffers (numpy.ndarray).

    Attributes:
        data: The underlying numpy array containing image data.
            Shape: (H, W, 3) for BGR color images, (H, W) for grayscale
            or binary masks. Dtype: uint8 (0-255).

    Example:
        >>> import cv2
        >>> image = cv2.imread("paper.jpg")
        >>> buffer = ImageBuffer(data=image)
        >>> print(buffer.height, buffer.width)  # 480, 640
    """

    data: np.ndarray = Field(..., description="Image data as numpy array")

    model_config = {"arbitrary_types_allowed": True}

    @field_validator("data")
    @classmethod
    def _validate_image(cls, v: np.ndarray) -> np.ndarray:
        """
        Validate that the numpy array is a valid pixel buffer.

        Raises:
            ValueError: If array is not a valid image format.
        """
        if not isinstance(v, np.ndarray):
            raise ValueError(f"Expected numpy.ndarray, got {type(v)}")

        if v.size == 0:
            raise ValueError("Image array is empty")

        if len(v.shape) not in (2, 3):
            raise ValueError(
                f"Expected 2D (grayscale) or 3D (color) image, got shape {v.shape}"
            )

        if len(v.shape) == 3 and v.shape[2] != 3:
            raise ValueError(
                f"Expected 3 channels for color image, got {v.shape[2]}"
            )

        if v.dtype != np.uint8:
            raise ValueError(
                f"Expected uint8 dtype for image, got {v.dtype}. "
                "Images should be in range [0, 255]"
            )

        return v

    @classmethod
    def validate_array(cls, data: object) -> "ImageBuffer":
        """
        Wrap an array, converting validation failures to InvalidInputError.

        Raises:
            InvalidInputError: If the array is not a valid pixel buffer.
        """
        if data is None:
            raise InvalidInputError("Invalid input image: image is None")
        try:
            return cls(data=data)
        except ValidationError as e:
            messages = "; ".join(err["msg"] for err in e.errors())
            raise InvalidInputError(f"Invalid input image: {messages}") from e

    @property
    def shape(self) -> Tuple[int, ...]:
        """Get image shape (H, W) or (H, W, C)."""
        return self.data.shape

    @property
    def height(self) -> int:
        """Get image height in pixels."""
        return int(self.data.shape[0])

    @property
    def width(self) -> int:
        """Get image width in pixels."""
        return int(self.data.shape[1])

    @property
    def channels(self) -> int:
        """Get number of channels (1 for grayscale, 3 for BGR)."""
        if len(self.data.shape) == 2:
            return 1
        return int(self.data.shape[2])

    @property
    def is_grayscale(self) -> bool:
        """Check if image is single channel."""
        return len(self.data.shape) == 2

    def __repr__(self) -> str:
        return f"ImageBuffer(shape={self.shape}, dtype={self.data.dtype})"


class Point(BaseModel):
    """
    A 2D point (x, y) in image space.

    Example:
        >>> point = Point(x=100, y=200.5)
        >>> point.to_pixel()
        (100, 200)
        >>> Point.from_numpy(np.array([150, 250]))
        Point(x=150, y=250)
    """

    x: float = Field(..., description="X-coordinate (horizontal)")
    y: float = Field(..., description="Y-coordinate (vertical)")

    @field_validator("x", "y", mode="before")
    @classmethod
    def _convert_to_float(cls, v: Union[int, float, np.number]) -> float:
        if isinstance(v, (int, float, np.number)):
            return float(v)
        raise ValueError(f"Coordinate must be numeric, got {type(v)}")

    @classmethod
    def from_numpy(cls, arr: np.ndarray) -> "Point":
        """
        Create Point from numpy array.

        Raises:
            ValueError: If array shape is not (2,).
        """
        arr = np.asarray(arr)
        if arr.shape != (2,):
            raise ValueError(f"Expected array of shape (2,), got {arr.shape}")
        return cls(x=float(arr[0]), y=float(arr[1]))

    def to_pixel(self) -> Tuple[int, int]:
        """Round to the nearest integer pixel coordinate."""
        return (int(round(self.x)), int(round(self.y)))

    def __repr__(self) -> str:
        return f"Point(x={self.x:g}, y={self.y:g})"

"""Common type definitions."""

from typing import Tuple, Union
from pathlib import Path

# Type alias for paths
PathLike = Union[str, Path]

# Drawing file suffixes, lower-case with leading dot
Extensions = Tuple[str, ...]

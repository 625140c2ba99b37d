"""SHA-256 hashing for rendered frames and config provenance.

Provides:
    - sha256_file(): Hash file contents (resource YAML, saved PNGs)
    - sha256_array(): Hash array values (rendered bitmaps)

Rendering is deterministic, so a frame digest identifies the exact output of
a given resources file and density. The CLI logs and records it in the
render manifest.

Deterministic hashing:
    - Arrays hashed as shape + dtype + C-contiguous bytes
    - Files read in chunks (1 MB default) for memory efficiency
    - Results are hex strings (64 chars)

Usage:
    from clippingapp.utils import hashing
    digest = hashing.sha256_array(canvas.bitmap)
"""

import hashlib
from pathlib import Path
from typing import Union

import numpy as np


def sha256_file(path: Union[str, Path], chunk_size: int = 1 << 20) -> str:
    """Compute SHA-256 hash of file contents.

    Parameters
    ----------
    path : Union[str, Path]
        File path
    chunk_size : int
        Read chunk size in bytes, default 1 MB

    Returns
    -------
    str
        SHA-256 hex digest (64 characters)

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    sha256 = hashlib.sha256()

    with open(path, 'rb') as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            sha256.update(chunk)

    return sha256.hexdigest()


def sha256_array(a: np.ndarray) -> str:
    """Compute SHA-256 hash of array values.

    Parameters
    ----------
    a : np.ndarray
        Any array

    Returns
    -------
    str
        SHA-256 hex digest (64 characters)

    Notes
    -----
    Shape and dtype are part of the digest, so a (2, 8) and an (4, 4) array
    with the same bytes hash differently.
    """
    a = np.ascontiguousarray(a)
    sha256 = hashlib.sha256()
    sha256.update(str(a.shape).encode('ascii'))
    sha256.update(a.dtype.str.encode('ascii'))
    sha256.update(a.tobytes())
    return sha256.hexdigest()

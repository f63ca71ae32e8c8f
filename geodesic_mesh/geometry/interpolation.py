# SPDX-FileCopyrightText: Copyright (c) 2023 - 2026 NVIDIA CORPORATION & AFFILIATES.
# SPDX-FileCopyrightText: All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Points along the great-circle arc between two unit vectors.

Two policies place ``n`` points strictly between endpoints ``a`` and ``b``,
ordered from the ``a`` side to the ``b`` side:

- ``"projected"``: split the chord evenly, then push each point back onto the
  sphere. Cheap, but the angular spacing bunches slightly towards the middle.
- ``"arc"``: rotate ``a`` about ``a × b`` in equal angular steps. Spacing is
  exactly even.

Both accept batched endpoints, so every edge of a seed (or every row of a
face grid) can be densified in a single call.
"""

from typing import Literal

import torch
import torch.nn.functional as F

from geodesic_mesh.transformations.geometric import rotate_about_axis
from geodesic_mesh.utilities._tolerances import degenerate_tol, safe_eps

InterpolationMethod = Literal["projected", "arc"]

INTERPOLATION_METHODS: tuple[str, ...] = ("projected", "arc")


def _fractions(n: int, like: torch.Tensor) -> torch.Tensor:
    """Return ``i / (n + 1)`` for ``i = 1..n`` with the dtype and device of ``like``."""
    return torch.arange(1, n + 1, dtype=like.dtype, device=like.device) / (n + 1)


def _check_endpoints(a: torch.Tensor, b: torch.Tensor, n: int) -> None:
    if n < 0:
        raise ValueError(f"Number of interpolated points must be non-negative, got {n=}")
    if a.shape[-1] != 3 or b.shape[-1] != 3:
        raise ValueError(
            f"Endpoints must have a trailing dimension of 3, but got {a.shape=} and {b.shape=}"
        )
    if n == 0:
        return

    ### a == b and a == -b leave the great circle undefined
    cross_norms = torch.linalg.cross(a, b, dim=-1).norm(dim=-1)
    if (cross_norms < degenerate_tol(a.dtype)).any():
        raise ValueError(
            f"Endpoints must be neither equal nor antipodal, but got "
            f"{cross_norms.min().item()=} for |a x b|"
        )


def interpolate_projected(a: torch.Tensor, b: torch.Tensor, n: int) -> torch.Tensor:
    """Interpolate along the chord from ``a`` to ``b`` and normalize.

    Point ``i`` (``i = 1..n``) is ``normalize(a + (b - a) * i / (n + 1))``.

    Parameters
    ----------
    a, b : torch.Tensor
        Unit vectors, shapes broadcastable to (..., 3).
    n : int
        Number of points to produce.

    Returns
    -------
    torch.Tensor
        Shape (..., n, 3). Empty along dimension -2 when ``n == 0``.

    Raises
    ------
    ValueError
        If ``n < 0``, or if ``n > 0`` and some pair of endpoints is equal or
        antipodal.
    """
    _check_endpoints(a, b, n)
    t = _fractions(n, a)[:, None]  # (n, 1)
    points = a[..., None, :] + (b - a)[..., None, :] * t
    return F.normalize(points, dim=-1, eps=safe_eps(points.dtype))


def interpolate_arc(a: torch.Tensor, b: torch.Tensor, n: int) -> torch.Tensor:
    """Interpolate in equal angular steps along the great circle.

    The separation is recovered from the chord as ``θ = 2·asin(|a - b| / 2)``,
    and point ``i`` is ``a`` rotated about ``a × b`` by ``θ · i / (n + 1)``.

    Parameters
    ----------
    a, b : torch.Tensor
        Unit vectors, shapes broadcastable to (..., 3).
    n : int
        Number of points to produce.

    Returns
    -------
    torch.Tensor
        Shape (..., n, 3). Empty along dimension -2 when ``n == 0``.

    Raises
    ------
    ValueError
        If ``n < 0``, or if ``n > 0`` and some pair of endpoints is equal or
        antipodal.
    """
    _check_endpoints(a, b, n)
    a, b = torch.broadcast_tensors(a, b)
    if n == 0:
        return a.new_empty((*a.shape[:-1], 0, 3))

    chord = (a - b).norm(dim=-1)
    theta = 2 * torch.asin((chord / 2).clamp(max=1.0))
    angles = theta[..., None] * _fractions(n, a)  # (..., n)

    points = rotate_about_axis(
        a[..., None, :],
        torch.linalg.cross(a, b, dim=-1)[..., None, :],
        angles,
    )
    ### Rotation preserves length only up to rounding
    return F.normalize(points, dim=-1, eps=safe_eps(points.dtype))


def interpolate_great_circle(
    a: torch.Tensor,
    b: torch.Tensor,
    n: int,
    method: InterpolationMethod = "projected",
) -> torch.Tensor:
    """Produce ``n`` unit vectors strictly between ``a`` and ``b``.

    Parameters
    ----------
    a, b : torch.Tensor
        Unit vectors, shapes broadcastable to (..., 3).
    n : int
        Number of points to produce.
    method : {"projected", "arc"}
        Interpolation policy; see the module docstring.

    Returns
    -------
    torch.Tensor
        Shape (..., n, 3), ordered from the ``a`` side to the ``b`` side.

    Raises
    ------
    TypeError
        If ``method`` is not a string.
    ValueError
        If ``method`` is unknown, ``n < 0``, or (for ``n > 0``) some pair of
        endpoints is equal or antipodal.

    Examples
    --------
    >>> a = torch.tensor([1.0, 0.0, 0.0])
    >>> b = torch.tensor([0.0, 1.0, 0.0])
    >>> interpolate_great_circle(a, b, 3, method="arc").shape
    torch.Size([3, 3])
    >>> interpolate_great_circle(a, b, 0).shape
    torch.Size([0, 3])
    """
    return get_interpolator(method)(a, b, n)


def get_interpolator(method: InterpolationMethod):
    """Resolve an interpolation policy name to its function.

    Raises
    ------
    TypeError
        If ``method`` is not a string.
    ValueError
        If ``method`` is not one of ``INTERPOLATION_METHODS``.
    """
    if not isinstance(method, str):
        raise TypeError(f"Interpolation method must be a string, but got {method=}")
    interpolators = {"projected": interpolate_projected, "arc": interpolate_arc}
    if method not in interpolators:
        raise ValueError(
            f"Unknown interpolation method {method!r}; "
            f"expected one of {INTERPOLATION_METHODS}"
        )
    return interpolators[method]

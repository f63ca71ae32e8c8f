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

"""Rotations of direction vectors about arbitrary axes.

Rotation is a pure function of its inputs: nothing is mutated and there is
no transform state to restore afterwards.
"""

import torch
import torch.nn.functional as F

from geodesic_mesh.utilities._tolerances import safe_eps


def _build_rotation_matrix(
    angle: float | torch.Tensor,
    axis: torch.Tensor,
) -> torch.Tensor:
    """Build batched 3D rotation matrices with Rodrigues' formula.

    Parameters
    ----------
    angle : float or torch.Tensor
        Rotation angle in radians, broadcastable against ``axis.shape[:-1]``.
    axis : torch.Tensor
        Rotation axes, shape (..., 3). Need not be normalized.

    Returns
    -------
    torch.Tensor
        Rotation matrices of shape (*batch, 3, 3), where ``batch`` is the
        broadcast of ``angle`` and ``axis.shape[:-1]``.

    Raises
    ------
    NotImplementedError
        If ``axis`` does not have a trailing dimension of size 3.
    ValueError
        If any axis has near-zero length.
    """
    if axis.shape[-1] != 3:
        raise NotImplementedError(
            f"Rotation is only supported about 3D axes, but got {axis.shape=}."
        )
    axis_norms = axis.norm(dim=-1)
    if (axis_norms < safe_eps(axis.dtype)).any():
        raise ValueError(f"Axis vector has near-zero length: {axis_norms.min()=}")

    angle = torch.as_tensor(angle, device=axis.device, dtype=axis.dtype)
    batch_shape = torch.broadcast_shapes(angle.shape, axis.shape[:-1])
    angle = angle.expand(batch_shape)
    u = F.normalize(axis, dim=-1, eps=0.0).expand(*batch_shape, 3)

    c = torch.cos(angle)[..., None, None]
    s = torch.sin(angle)[..., None, None]

    ### R = cI + s[u]_× + (1-c)(u⊗u)
    ux, uy, uz = u.unbind(dim=-1)
    zero = torch.zeros_like(ux)
    u_cross = torch.stack(
        [
            torch.stack([zero, -uz, uy], dim=-1),
            torch.stack([uz, zero, -ux], dim=-1),
            torch.stack([-uy, ux, zero], dim=-1),
        ],
        dim=-2,
    )
    identity = torch.eye(3, device=axis.device, dtype=axis.dtype)
    u_outer = u[..., :, None] * u[..., None, :]

    return c * identity + s * u_cross + (1 - c) * u_outer


def rotate_about_axis(
    v: torch.Tensor,
    axis: torch.Tensor,
    angle: float | torch.Tensor,
) -> torch.Tensor:
    """Rotate vectors by a signed angle about an axis (right-hand rule).

    All arguments broadcast together, so one vector may be rotated by many
    angles at once.

    Parameters
    ----------
    v : torch.Tensor
        Vectors to rotate, shape (..., 3).
    axis : torch.Tensor
        Rotation axes, shape (..., 3). Need not be normalized.
    angle : float or torch.Tensor
        Rotation angles in radians, shape (...).

    Returns
    -------
    torch.Tensor
        Rotated vectors with the broadcast batch shape and a trailing
        dimension of 3. Lengths are preserved.

    Examples
    --------
    >>> import math
    >>> x = torch.tensor([1.0, 0.0, 0.0])
    >>> z = torch.tensor([0.0, 0.0, 1.0])
    >>> y = rotate_about_axis(x, z, math.pi / 2)
    >>> torch.allclose(y, torch.tensor([0.0, 1.0, 0.0]), atol=1e-6)
    True
    """
    rotation = _build_rotation_matrix(angle, axis)
    return torch.matmul(rotation, v[..., None]).squeeze(-1)

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

"""Dtype-aware numerical tolerances for sphere computations.

Two floors are used throughout the package:

- :func:`safe_eps` guards divisions and normalisations. It is far below any
  meaningful length, so it never alters a well-formed result.
- :func:`degenerate_tol` decides when two directions are too close to parallel
  to define a rotation axis, and when a point has drifted off the sphere.

==========  =============  ==================
dtype       ``safe_eps``   ``degenerate_tol``
==========  =============  ==================
float32     ~3.3e-10       ~1.2e-5
float64     ~1.2e-77       ~2.2e-14
==========  =============  ==================
"""

import torch


def safe_eps(dtype: torch.dtype) -> float:
    """Return a dtype-aware safe epsilon for preventing division by zero.

    Parameters
    ----------
    dtype : torch.dtype
        The floating-point dtype (e.g. ``torch.float32``,
        ``torch.float64``).

    Returns
    -------
    float
        A small positive floor value equal to
        ``torch.finfo(dtype).tiny ** 0.25``.
    """
    return torch.finfo(dtype).tiny ** 0.25


def degenerate_tol(dtype: torch.dtype) -> float:
    """Return the tolerance below which a unit-scale quantity counts as zero.

    Parameters
    ----------
    dtype : torch.dtype
        The floating-point dtype.

    Returns
    -------
    float
        ``100 * torch.finfo(dtype).eps``.
    """
    return 100 * torch.finfo(dtype).eps

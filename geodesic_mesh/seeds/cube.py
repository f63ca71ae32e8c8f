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

"""Cube inscribed in the unit sphere, with quadrilateral faces.

Vertex ``i`` sits at ``(±1, ±1, ±1) / √3`` where the signs follow the bits of
``i``: x is positive when bit 2 is set, y for bit 1, z for bit 0.
"""

import math

import torch

from geodesic_mesh.seeds._seed import SeedShape

EDGES = [
    [0, 1], [0, 2], [0, 4], [1, 3], [1, 5], [2, 3],
    [2, 6], [3, 7], [4, 5], [4, 6], [5, 7], [6, 7],
]  # fmt: skip

FACES = [
    [0, 1, 3, 2],  # x = -1
    [0, 4, 5, 1],  # y = -1
    [0, 2, 6, 4],  # z = -1
    [1, 5, 7, 3],  # z = +1
    [2, 3, 7, 6],  # y = +1
    [4, 6, 7, 5],  # x = +1
]


def load(
    dtype: torch.dtype = torch.float32,
    device: torch.device | str = "cpu",
) -> SeedShape:
    """Create the cube seed.

    Parameters
    ----------
    dtype : torch.dtype
        Floating dtype of the vertices.
    device : torch.device or str
        Compute device ('cpu' or 'cuda').

    Returns
    -------
    SeedShape
        8 vertices, 12 edges and 6 quadrilateral faces.
    """
    bits = torch.arange(8, dtype=torch.int64)[:, None] >> torch.tensor([2, 1, 0])
    vertices = ((bits & 1) * 2 - 1).to(torch.float64) / math.sqrt(3.0)
    return SeedShape(
        vertices=vertices.to(dtype=dtype, device=device),
        edges=torch.tensor(EDGES, dtype=torch.int64, device=device),
        faces=torch.tensor(FACES, dtype=torch.int64, device=device),
    )

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

"""Regular icosahedron built from three orthogonal golden rectangles."""

import math

import torch

from geodesic_mesh.seeds._seed import SeedShape

_PHI = (1.0 + math.sqrt(5.0)) / 2.0

VERTICES = [
    [-1.0, -_PHI, 0.0],
    [-1.0, _PHI, 0.0],
    [1.0, -_PHI, 0.0],
    [1.0, _PHI, 0.0],
    [0.0, -1.0, -_PHI],
    [0.0, -1.0, _PHI],
    [0.0, 1.0, -_PHI],
    [0.0, 1.0, _PHI],
    [-_PHI, 0.0, -1.0],
    [_PHI, 0.0, -1.0],
    [-_PHI, 0.0, 1.0],
    [_PHI, 0.0, 1.0],
]

EDGES = [
    [0, 2], [0, 4], [0, 5], [0, 8], [0, 10], [1, 3],
    [1, 6], [1, 7], [1, 8], [1, 10], [2, 4], [2, 5],
    [2, 9], [2, 11], [3, 6], [3, 7], [3, 9], [3, 11],
    [4, 6], [4, 8], [4, 9], [5, 7], [5, 10], [5, 11],
    [6, 8], [6, 9], [7, 10], [7, 11], [8, 10], [9, 11],
]  # fmt: skip

FACES = [
    [0, 2, 5], [0, 4, 2], [0, 5, 10], [0, 8, 4], [0, 10, 8],
    [1, 6, 8], [1, 10, 7], [1, 8, 10], [2, 4, 9], [2, 9, 11],
    [2, 11, 5], [4, 8, 6], [4, 6, 9], [5, 7, 10], [5, 11, 7],
    [1, 3, 6], [1, 7, 3], [3, 9, 6], [3, 7, 11], [3, 11, 9],
]  # fmt: skip


def load(
    dtype: torch.dtype = torch.float32,
    device: torch.device | str = "cpu",
) -> SeedShape:
    """Create the icosahedron seed.

    Parameters
    ----------
    dtype : torch.dtype
        Floating dtype of the vertices.
    device : torch.device or str
        Compute device ('cpu' or 'cuda').

    Returns
    -------
    SeedShape
        12 vertices, 30 edges and 20 triangular faces.
    """
    vertices = torch.tensor(VERTICES, dtype=torch.float64)
    vertices = vertices / vertices.norm(dim=-1, keepdim=True)
    return SeedShape(
        vertices=vertices.to(dtype=dtype, device=device),
        edges=torch.tensor(EDGES, dtype=torch.int64, device=device),
        faces=torch.tensor(FACES, dtype=torch.int64, device=device),
    )

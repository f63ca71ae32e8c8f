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

"""Regular tetrahedron inscribed in the unit sphere.

Two opposite edges lie in the planes z = -1/√3 and z = 1/√3, parallel to the
x and y axes respectively.
"""

import math

import torch

from geodesic_mesh.seeds._seed import SeedShape

_S = math.sqrt(2.0)

VERTICES = [
    [-_S, 0.0, -1.0],
    [_S, 0.0, -1.0],
    [0.0, -_S, 1.0],
    [0.0, _S, 1.0],
]

EDGES = [[0, 1], [0, 2], [0, 3], [1, 2], [1, 3], [2, 3]]

FACES = [[0, 3, 1], [0, 1, 2], [0, 2, 3], [1, 3, 2]]


def load(
    dtype: torch.dtype = torch.float32,
    device: torch.device | str = "cpu",
) -> SeedShape:
    """Create the tetrahedron seed.

    Parameters
    ----------
    dtype : torch.dtype
        Floating dtype of the vertices.
    device : torch.device or str
        Compute device ('cpu' or 'cuda').

    Returns
    -------
    SeedShape
        4 vertices, 6 edges and 4 triangular faces.
    """
    vertices = torch.tensor(VERTICES, dtype=torch.float64) / math.sqrt(3.0)
    return SeedShape(
        vertices=vertices.to(dtype=dtype, device=device),
        edges=torch.tensor(EDGES, dtype=torch.int64, device=device),
        faces=torch.tensor(FACES, dtype=torch.int64, device=device),
    )

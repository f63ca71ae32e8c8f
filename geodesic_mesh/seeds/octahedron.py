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

"""Regular octahedron with its vertices on the coordinate axes."""

import torch

from geodesic_mesh.seeds._seed import SeedShape

# -x, +x, -y, +y, -z, +z
VERTICES = [
    [-1.0, 0.0, 0.0],
    [1.0, 0.0, 0.0],
    [0.0, -1.0, 0.0],
    [0.0, 1.0, 0.0],
    [0.0, 0.0, -1.0],
    [0.0, 0.0, 1.0],
]

EDGES = [
    [0, 2], [0, 3], [0, 4], [0, 5], [1, 2], [1, 3],
    [1, 4], [1, 5], [2, 4], [2, 5], [3, 4], [3, 5],
]  # fmt: skip

FACES = [
    [0, 2, 5], [0, 4, 2], [0, 3, 4], [0, 5, 3],
    [1, 2, 4], [1, 5, 2], [1, 3, 5], [1, 4, 3],
]  # fmt: skip


def load(
    dtype: torch.dtype = torch.float32,
    device: torch.device | str = "cpu",
) -> SeedShape:
    """Create the octahedron seed.

    Parameters
    ----------
    dtype : torch.dtype
        Floating dtype of the vertices.
    device : torch.device or str
        Compute device ('cpu' or 'cuda').

    Returns
    -------
    SeedShape
        6 vertices, 12 edges and 8 triangular faces.
    """
    return SeedShape(
        vertices=torch.tensor(VERTICES, dtype=dtype, device=device),
        edges=torch.tensor(EDGES, dtype=torch.int64, device=device),
        faces=torch.tensor(FACES, dtype=torch.int64, device=device),
    )

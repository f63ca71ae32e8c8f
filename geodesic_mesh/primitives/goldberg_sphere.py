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

"""Goldberg sphere surface in 3D space.

The fan-triangulated dual of a geodesic sphere: mostly hexagons, plus 4
triangles, 6 squares or 12 pentagons depending on the seed.

Dimensional: 2D manifold in 3D space (closed, no boundary).
"""

import torch

from geodesic_mesh.dual import dualize
from geodesic_mesh.geometry.interpolation import InterpolationMethod
from geodesic_mesh.mesh import Mesh
from geodesic_mesh.seeds import SeedKind


def load(
    radius: float = 1.0,
    complexity: int = 2,
    seed: SeedKind | str = SeedKind.ICOSAHEDRON,
    class1: bool = True,
    interpolation: InterpolationMethod = "projected",
    dtype: torch.dtype = torch.float32,
    device: torch.device | str = "cpu",
) -> Mesh:
    """Create a Goldberg sphere of a given radius.

    Parameters
    ----------
    radius : float
        Radius of the sphere.
    complexity : int
        Number of new points inserted along each seed edge before
        dualizing.
    seed : SeedKind or str
        ``"tetrahedron"``, ``"octahedron"`` or ``"icosahedron"``.
    class1 : bool
        True for a Class 1 ``(m, 0)`` polyhedron, False for Class 2
        ``(m, m)``.
    interpolation : {"projected", "arc"}
        Great-circle interpolation policy for the subdivision.
    dtype : torch.dtype
        Floating dtype of the points.
    device : torch.device or str
        Compute device ('cpu' or 'cuda').

    Returns
    -------
    Mesh
        Fan-triangulated polyhedron with ``cell_data["dual_face"]`` naming
        the polygon of each triangle.

    Examples
    --------
    >>> from geodesic_mesh.primitives import goldberg_sphere
    >>> from geodesic_mesh.validation import face_degree_histogram
    >>> face_degree_histogram(goldberg_sphere.load(seed="octahedron", complexity=1))
    {4: 6, 6: 12}
    """
    if radius <= 0:
        raise ValueError(f"radius must be positive, got {radius=}")

    mesh = dualize(
        seed,
        complexity=complexity,
        class1=class1,
        interpolation=interpolation,
        dtype=dtype,
        device=device,
    )
    return Mesh(points=mesh.points * radius, cells=mesh.cells, cell_data=mesh.cell_data)

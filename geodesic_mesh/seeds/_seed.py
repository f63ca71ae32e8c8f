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

"""Data structure for the undivided polyhedra that geodesic meshes start from."""

import torch
from tensordict import tensorclass

from geodesic_mesh.utilities._tolerances import degenerate_tol


@tensorclass
class SeedShape:
    """Vertex, edge and face tables of a seed polyhedron.

    Attributes:
        vertices: Unit vectors, shape (n_vertices, 3), floating dtype.
        edges: Unordered vertex index pairs, shape (n_edges, 2), dtype int64.
            Each pair appears once. The order of rows fixes where the points
            inserted along each edge are stored during subdivision.
        faces: Vertex index tuples wound counter-clockwise when seen from
            outside, shape (n_faces, 3) for triangles or (n_faces, 4) for
            quadrilaterals, dtype int64.

    Examples
    --------
        >>> from geodesic_mesh.seeds import octahedron
        >>> seed = octahedron.load()
        >>> seed.vertices.shape, seed.edges.shape, seed.faces.shape
        (torch.Size([6, 3]), torch.Size([12, 2]), torch.Size([8, 3]))
    """

    vertices: torch.Tensor  # shape: (n_vertices, 3)
    edges: torch.Tensor  # shape: (n_edges, 2), dtype: int64
    faces: torch.Tensor  # shape: (n_faces, 3 or 4), dtype: int64

    def __post_init__(self):
        if not torch.compiler.is_compiling():
            if self.vertices.ndim != 2 or self.vertices.shape[-1] != 3:
                raise ValueError(
                    f"`vertices` must have shape (n_vertices, 3), but got {self.vertices.shape=}."
                )
            if not torch.is_floating_point(self.vertices):
                raise TypeError(
                    f"`vertices` must have a floating dtype, but got {self.vertices.dtype=}."
                )
            if self.edges.ndim != 2 or self.edges.shape[-1] != 2:
                raise ValueError(
                    f"`edges` must have shape (n_edges, 2), but got {self.edges.shape=}."
                )
            if self.faces.ndim != 2 or self.faces.shape[-1] not in (3, 4):
                raise ValueError(
                    f"`faces` must have shape (n_faces, 3) or (n_faces, 4), "
                    f"but got {self.faces.shape=}."
                )
            for name in ("edges", "faces"):
                indices = getattr(self, name)
                if torch.is_floating_point(indices):
                    raise TypeError(
                        f"`{name}` must have an int-like dtype, but got {indices.dtype=}."
                    )
                if indices.numel() > 0 and (
                    indices.min() < 0 or indices.max() >= self.n_vertices
                ):
                    raise ValueError(
                        f"`{name}` must index into [0, {self.n_vertices}), but got "
                        f"{indices.min().item()=} and {indices.max().item()=}."
                    )

            ### Every vertex must already sit on the unit sphere
            norm_errors = (self.vertices.norm(dim=-1) - 1).abs()
            if (norm_errors > degenerate_tol(self.vertices.dtype)).any():
                raise ValueError(
                    f"`vertices` must be unit vectors, but got {norm_errors.max().item()=}."
                )

    @property
    def n_vertices(self) -> int:
        return self.vertices.shape[0]

    @property
    def n_edges(self) -> int:
        return self.edges.shape[0]

    @property
    def n_faces(self) -> int:
        return self.faces.shape[0]

    @property
    def is_triangular(self) -> bool:
        """Whether faces are triangles (as opposed to quadrilaterals)."""
        return self.faces.shape[-1] == 3

    def triangulated_faces(self) -> tuple[torch.Tensor, torch.Tensor]:
        """Split faces into triangles without adding vertices.

        Quadrilateral ``(v1, v2, v3, v4)`` becomes ``(v1, v2, v3)`` and
        ``(v1, v3, v4)``, which keeps the face's winding.

        Returns
        -------
        tuple[torch.Tensor, torch.Tensor]
            ``(triangles, face_ids)``: shape (n_triangles, 3) and
            (n_triangles,), where ``face_ids`` maps each triangle to the face
            it came from.
        """
        face_ids = torch.arange(self.n_faces, dtype=torch.int64, device=self.faces.device)
        if self.is_triangular:
            return self.faces, face_ids

        triangles = torch.stack(
            [self.faces[:, [0, 1, 2]], self.faces[:, [0, 2, 3]]], dim=1
        ).reshape(-1, 3)
        return triangles, face_ids.repeat_interleave(2)

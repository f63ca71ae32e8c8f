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

"""Lookup of the points inserted along each seed edge."""

import torch

from geodesic_mesh.errors import InconsistentMeshError


class EdgeTable:
    """Maps an unordered pair of seed vertices to the points inserted between them.

    Edge ``k`` of the seed owns the contiguous point range starting at
    ``n_seed_vertices + k * complexity``, ordered from its lower-indexed
    endpoint to its higher-indexed one. :meth:`run` hands the range back in
    whichever direction a face traverses the edge.

    Parameters
    ----------
    edges : torch.Tensor
        Seed edges, shape (n_edges, 2).
    n_seed_vertices : int
        Number of seed vertices, which precede all inserted points.
    complexity : int
        Number of points inserted along every edge.

    Raises
    ------
    InconsistentMeshError
        If the same unordered pair appears twice in ``edges``.
    """

    def __init__(self, edges: torch.Tensor, n_seed_vertices: int, complexity: int):
        self.complexity = complexity
        self._first_point: dict[tuple[int, int], int] = {}
        for k, (a, b) in enumerate(edges.tolist()):
            key = (min(a, b), max(a, b))
            if key in self._first_point:
                raise InconsistentMeshError(f"Seed edge {key} is listed more than once.")
            self._first_point[key] = n_seed_vertices + k * complexity

    def run(self, start: int, end: int) -> list[int]:
        """Indices of the points strictly between ``start`` and ``end``, walking from ``start``.

        Raises
        ------
        InconsistentMeshError
            If no seed edge joins ``start`` and ``end``.
        """
        key = (min(start, end), max(start, end))
        try:
            first = self._first_point[key]
        except KeyError:
            raise InconsistentMeshError(
                f"No seed edge joins vertices {start} and {end}; "
                f"the face and edge tables disagree."
            ) from None

        points = list(range(first, first + self.complexity))
        return points if start < end else points[::-1]


def interpolate_edges(
    vertices: torch.Tensor,
    edges: torch.Tensor,
    complexity: int,
    interpolate,
) -> torch.Tensor:
    """Insert ``complexity`` points along every seed edge in one batched call.

    Returns
    -------
    torch.Tensor
        Shape (n_edges * complexity, 3), edge by edge in the order of
        ``edges``, each edge running from its lower-indexed endpoint.
    """
    low = edges.min(dim=-1).values
    high = edges.max(dim=-1).values
    return interpolate(vertices[low], vertices[high], complexity).reshape(-1, 3)

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

"""Seed polyhedra that geodesic meshes are subdivided from.

Each seed is one module exposing ``load(dtype=..., device=...)``. The
:class:`SeedKind` enum names them, and :func:`get_seed` resolves any accepted
seed spelling to a :class:`SeedShape`.
"""

from enum import Enum

import torch
import torch.nn.functional as F

from geodesic_mesh.errors import UnsupportedSeedError
from geodesic_mesh.seeds import cube, icosahedron, octahedron, tetrahedron
from geodesic_mesh.seeds._seed import SeedShape


class SeedKind(str, Enum):
    """The four built-in seed polyhedra."""

    TETRAHEDRON = "tetrahedron"
    CUBE = "cube"
    OCTAHEDRON = "octahedron"
    ICOSAHEDRON = "icosahedron"


_SEED_MODULES = {
    SeedKind.TETRAHEDRON: tetrahedron,
    SeedKind.CUBE: cube,
    SeedKind.OCTAHEDRON: octahedron,
    SeedKind.ICOSAHEDRON: icosahedron,
}

# Degree of the dual face generated at each original seed vertex. Every vertex
# introduced by subdivision is 6-valent and yields a hexagon. The cube has no
# entry because its dual is not constructed.
SEED_FACE_DEGREES: dict[SeedKind, int] = {
    SeedKind.TETRAHEDRON: 3,
    SeedKind.OCTAHEDRON: 4,
    SeedKind.ICOSAHEDRON: 5,
}


def resolve_seed_kind(seed: "SeedKind | str") -> SeedKind:
    """Normalize a seed name or enum member to a :class:`SeedKind`.

    Raises
    ------
    UnsupportedSeedError
        If ``seed`` does not name a built-in seed.
    """
    if isinstance(seed, SeedKind):
        return seed
    if isinstance(seed, str):
        try:
            return SeedKind(seed.lower())
        except ValueError:
            pass
    raise UnsupportedSeedError(
        f"Unknown seed {seed!r}; expected one of {[kind.value for kind in SeedKind]}"
    )


def get_seed(
    seed: "SeedKind | str | SeedShape",
    dtype: torch.dtype = torch.float32,
    device: torch.device | str = "cpu",
) -> SeedShape:
    """Return the :class:`SeedShape` for a seed given by enum, name or value.

    A :class:`SeedShape` passed in is moved to ``dtype`` and ``device`` and its
    vertices renormalized; anything else is resolved with
    :func:`resolve_seed_kind` and loaded.

    Examples
    --------
    >>> get_seed("Icosahedron").n_faces
    20
    """
    if isinstance(seed, SeedShape):
        return SeedShape(
            vertices=F.normalize(seed.vertices.to(dtype=dtype, device=device), dim=-1),
            edges=seed.edges.to(device=device),
            faces=seed.faces.to(device=device),
        )
    return _SEED_MODULES[resolve_seed_kind(seed)].load(dtype=dtype, device=device)


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

"""Exception types raised by geodesic and Goldberg mesh construction.

User-input problems subclass :class:`ValueError` and are raised before any
work begins. :class:`InconsistentMeshError` signals a broken internal
invariant (a malformed seed table or a non-manifold input mesh) and is never
recoverable.
"""


class InvalidComplexityError(ValueError):
    """Raised when a subdivision complexity is negative or not an integer."""


class UnsupportedSeedError(ValueError):
    """Raised when a seed is unknown, or has no dual mapping (e.g. the cube)."""


class InconsistentMeshError(RuntimeError):
    """Raised when an edge lookup or an adjacency walk breaks a mesh invariant.

    This indicates a seed table that is not a closed, consistently-wound
    2-manifold. There is no partial result: construction stops before any
    :class:`~geodesic_mesh.mesh.Mesh` is returned.
    """

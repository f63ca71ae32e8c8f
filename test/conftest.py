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

"""Pytest configuration and shared fixtures for geodesic_mesh tests.

All functions and fixtures defined here are automatically available to all test files
without explicit imports.
"""

import pytest
import torch

### Pytest Hooks ###


def pytest_configure(config):
    """Register custom pytest markers used in geodesic_mesh tests."""
    config.addinivalue_line(
        "markers", "cuda: mark test as requiring CUDA (skipped if unavailable)"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow-running (for optional exclusion)"
    )


def pytest_collection_modifyitems(config, items):
    """Skip tests marked with 'cuda' if CUDA is not available."""
    if torch.cuda.is_available():
        return  # CUDA available, run all tests

    skip_cuda = pytest.mark.skip(reason="CUDA not available")
    for item in items:
        if "cuda" in item.keywords:
            item.add_marker(skip_cuda)


### Seed Configurations ###

# (seed name, n_vertices, n_edges, n_faces, face_degree)
SEED_TABLE_SIZES = [
    ("tetrahedron", 4, 6, 4, 3),
    ("cube", 8, 12, 6, 4),
    ("octahedron", 6, 12, 8, 3),
    ("icosahedron", 12, 30, 20, 3),
]

TRIANGULAR_SEEDS = ["tetrahedron", "octahedron", "icosahedron"]

ALL_SEEDS = [name for name, *_ in SEED_TABLE_SIZES]


def expected_subdivision_counts(seed: str, complexity: int) -> tuple[int, int]:
    """Closed-form (n_points, n_cells) of a subdivided seed.

    Args:
        seed: Seed name
        complexity: Points inserted per seed edge

    Returns:
        Tuple of (n_points, n_cells)
    """
    _, n_vertices, n_edges, n_faces, face_degree = next(
        row for row in SEED_TABLE_SIZES if row[0] == seed
    )
    n = complexity
    if face_degree == 3:
        n_points = n_vertices + n_edges * n + n_faces * n * (n - 1) // 2
        n_cells = n_faces * (n + 1) ** 2
    else:
        n_points = n_vertices + n_edges * n + n_faces * n * n
        n_cells = 2 * n_faces * (n + 1) ** 2
    return n_points, n_cells


### Pytest Fixtures ###


@pytest.fixture(autouse=True)
def disable_tf32():
    """Disable TF32 for deterministic float32 precision across GPU architectures."""
    if not torch.cuda.is_available():
        yield
        return

    orig_matmul = torch.backends.cuda.matmul.allow_tf32
    orig_cudnn = torch.backends.cudnn.allow_tf32
    torch.backends.cuda.matmul.allow_tf32 = False
    torch.backends.cudnn.allow_tf32 = False
    yield
    torch.backends.cuda.matmul.allow_tf32 = orig_matmul
    torch.backends.cudnn.allow_tf32 = orig_cudnn


@pytest.fixture(
    params=[
        "cpu",
        pytest.param("cuda", marks=pytest.mark.cuda),
    ]
)
def device(request):
    """Parametrize tests over all available devices (CPU, CUDA).

    CUDA tests are automatically skipped if CUDA is not available via
    the pytest_collection_modifyitems hook.
    """
    return request.param


@pytest.fixture(params=ALL_SEEDS)
def seed_name(request):
    """Parametrize tests over all four seed polyhedra."""
    return request.param


@pytest.fixture(params=TRIANGULAR_SEEDS)
def triangular_seed_name(request):
    """Parametrize tests over the seeds that have a dual."""
    return request.param


@pytest.fixture(params=["projected", "arc"])
def interpolation(request):
    """Parametrize tests over both great-circle interpolation policies."""
    return request.param


@pytest.fixture
def subdivision_counts():
    """Closed-form (n_points, n_cells) of a subdivided seed, as a callable."""
    return expected_subdivision_counts

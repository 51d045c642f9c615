from __future__ import annotations

import numpy as np
import pytest


@pytest.fixture
def fx_rng(request) -> np.random.Generator:
    # one stream per test, stable across runs
    seed = sum(ord(ch) for ch in request.node.name)
    return np.random.default_rng(seed)

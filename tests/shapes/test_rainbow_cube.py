from __future__ import annotations

from collections import Counter

import numpy as np

from shapes.rainbow_cube import rainbow_cube


def test_cube_counts_and_bounds() -> None:
    m = rainbow_cube()
    assert m.n_vertices == 8
    assert m.n_indices == 36
    assert int(m.indices.max()) < 8
    assert np.all(np.abs(m.positions) == 1.0)


def test_cube_corners_are_distinct() -> None:
    m = rainbow_cube()
    assert len({tuple(p) for p in m.positions.tolist()}) == 8


def test_cube_winding_is_consistent() -> None:
    tris = rainbow_cube().indices.reshape(-1, 3).tolist()
    directed = Counter()
    for a, b, c in tris:
        for e in ((a, b), (b, c), (c, a)):
            directed[e] += 1
    # 閉じた多面体で巻き順が揃っていれば、各有向辺は 1 回ずつ、逆向きも必ず存在する
    assert all(n == 1 for n in directed.values())
    assert all((b, a) in directed for (a, b) in directed)
    assert len(directed) == 36

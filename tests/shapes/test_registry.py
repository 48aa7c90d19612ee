from __future__ import annotations

import pytest

from engine.core.geometry import MeshData
from shapes import generate, get_shape, is_shape_registered, list_shapes, shape
from shapes.registry import unregister


def test_builtin_shapes_registered() -> None:
    assert list_shapes() == ["paper_fold", "rainbow_cube"]


@pytest.mark.parametrize("alias", ["paper_fold", "PaperFold", "paper-fold", "PAPER_FOLD"])
def test_name_aliases_resolve(alias: str) -> None:
    assert is_shape_registered(alias)
    assert get_shape(alias) is get_shape("paper_fold")


def test_generate_by_name() -> None:
    m = generate("paper_fold", depth=3, color=(1.0, 1.0, 1.0))
    assert isinstance(m, MeshData)
    assert m.n_vertices == 6


def test_unknown_shape_raises_key_error() -> None:
    with pytest.raises(KeyError, match="paper_fold"):
        get_shape("no_such_shape")


@pytest.mark.parametrize("bad", ["", 3])
def test_invalid_names(bad: object) -> None:
    with pytest.raises(ValueError):
        is_shape_registered(bad)  # type: ignore[arg-type]


def test_decorator_rejects_non_function() -> None:
    with pytest.raises(TypeError):
        shape()(object())


def test_duplicate_name_rejected_same_function_allowed() -> None:
    @shape("dup_for_test")
    def _one(**params):  # noqa: ANN001 - テスト用
        return MeshData.empty()

    try:
        with pytest.raises(ValueError):
            shape("DupForTest")(lambda **p: MeshData.empty())
        assert shape("dup-for-test")(_one) is _one
    finally:
        unregister("dup_for_test")
    unregister("dup_for_test")  # 未登録でも例外にならない
    assert not is_shape_registered("dup_for_test")


def test_generate_checks_return_type() -> None:
    @shape("bad_output_for_test")
    def _bad(**params):  # noqa: ANN001 - テスト用
        return [1, 2, 3]

    try:
        with pytest.raises(TypeError):
            generate("bad_output_for_test")
    finally:
        unregister("bad_output_for_test")

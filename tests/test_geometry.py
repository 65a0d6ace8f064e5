import math

import pytest

from faceview import geometry
from faceview.model import ObjModel, Triangle


def _square() -> ObjModel:
    model = ObjModel("square.obj")
    model.vertices = [
        [0.0, 0.0, 0.0],
        [2.0, 0.0, 0.0],
        [2.0, 2.0, 0.0],
        [0.0, 2.0, 0.0],
    ]
    model.triangles = [
        Triangle(vindices=[1, 2, 3]),
        Triangle(vindices=[1, 3, 4]),
    ]
    model.add_group("default").triangles = [0, 1]
    return model


def _box() -> ObjModel:
    model = ObjModel("box.obj")
    model.vertices = [[1.0, 3.0, -2.0], [5.0, 4.0, 6.0], [3.0, 7.0, 0.0]]
    model.triangles = [Triangle(vindices=[1, 2, 3])]
    model.add_group("default").triangles = [0]
    return model


def test_dot_of_vector_with_itself_is_squared_length():
    v = [3.0, 4.0, 12.0]
    assert geometry.dot(v, v) == pytest.approx(math.hypot(3.0, 4.0, 12.0) ** 2)


def test_cross_is_orthogonal_to_inputs():
    u, v = [1.0, 2.0, 3.0], [-4.0, 0.5, 2.0]
    n = geometry.cross(u, v)
    assert geometry.dot(n, u) == pytest.approx(0.0)
    assert geometry.dot(n, v) == pytest.approx(0.0)


def test_cross_of_x_and_y_is_z():
    assert geometry.cross([1.0, 0.0, 0.0], [0.0, 1.0, 0.0]) == [0.0, 0.0, 1.0]


def test_cross_is_anticommutative():
    u, v = [1.0, 2.0, 3.0], [4.0, 5.0, 6.0]
    assert geometry.cross(u, v) == [-c for c in geometry.cross(v, u)]


def test_normalize_gives_unit_length_same_direction():
    v = [3.0, -4.0, 12.0]
    n = geometry.normalize(v)
    assert geometry.dot(n, n) == pytest.approx(1.0)
    assert geometry.cross(n, v) == pytest.approx([0.0, 0.0, 0.0])
    assert geometry.dot(n, v) > 0


def test_normalize_zero_vector_raises():
    with pytest.raises(ValueError):
        geometry.normalize([0.0, 0.0, 0.0])


def test_unitize_fits_model_in_unit_cube():
    model = _box()
    before = model.dimensions()
    factor = geometry.unitize(model)
    assert factor * max(before) == pytest.approx(2.0)
    after = model.dimensions()
    assert max(after) == pytest.approx(2.0)
    for column in zip(*model.vertices):
        assert min(column) + max(column) == pytest.approx(0.0)
        assert all(-1.0 - 1e-9 <= c <= 1.0 + 1e-9 for c in column)


def test_unitize_empty_model_returns_zero():
    assert geometry.unitize(ObjModel()) == 0.0


def test_facet_normals_of_flat_square_point_up():
    model = _square()
    geometry.facet_normals(model)
    assert len(model.facetnorms) == len(model.triangles)
    assert [t.findex for t in model.triangles] == [1, 2]
    for normal in model.facetnorms:
        assert normal == pytest.approx([0.0, 0.0, 1.0])


def test_facet_normals_reverse_with_winding():
    model = _box()
    geometry.facet_normals(model)
    first = model.facetnorms[0]
    model.triangles[0].vindices = [1, 3, 2]
    geometry.facet_normals(model)
    assert model.facetnorms[0] == pytest.approx([-c for c in first])
    assert geometry.dot(first, first) == pytest.approx(1.0)


def test_vertex_normals_of_flat_square_match_facet_normal():
    model = _square()
    geometry.facet_normals(model)
    geometry.vertex_normals(model, 90.0)
    assert len(model.normals) == len(model.vertices)
    for normal in model.normals:
        assert normal == pytest.approx(model.facetnorms[0])
    for triangle in model.triangles:
        assert triangle.nindices == triangle.vindices


def test_vertex_normals_without_facet_normals_does_nothing():
    model = _square()
    geometry.vertex_normals(model, 90.0)
    assert model.normals == []
    assert all(t.nindices == [0, 0, 0] for t in model.triangles)


def test_vertex_normals_are_unit_length_on_folded_surface():
    model = _square()
    model.vertices[2][2] = 1.5
    geometry.facet_normals(model)
    geometry.vertex_normals(model, 90.0)
    for normal in model.normals:
        assert geometry.dot(normal, normal) == pytest.approx(1.0)


def test_scale_multiplies_vertices():
    model = _box()
    original = [list(v) for v in model.vertices]
    geometry.scale(model, 2.5)
    for old, new in zip(original, model.vertices):
        assert new == pytest.approx([c * 2.5 for c in old])


def test_rotate_full_turn_is_identity():
    model = _box()
    original = [list(v) for v in model.vertices]
    geometry.rotate(model, 360.0, -360.0, 720.0)
    for old, new in zip(original, model.vertices):
        assert new == pytest.approx(old, abs=1e-9)


def test_rotate_quarter_turn_about_z_maps_x_to_y():
    model = ObjModel()
    model.vertices = [[1.0, 0.0, 0.0]]
    geometry.rotate(model, 0.0, 0.0, 90.0)
    assert model.vertices[0] == pytest.approx([0.0, 1.0, 0.0], abs=1e-9)


def test_rotate_preserves_distance_from_origin():
    model = _box()
    lengths = [geometry.dot(v, v) for v in model.vertices]
    geometry.rotate(model, 30.0, 200.0, -75.0)
    assert [geometry.dot(v, v) for v in model.vertices] == pytest.approx(lengths)


def test_rotate_about_x_leaves_x_unchanged():
    model = _box()
    xs = [v[0] for v in model.vertices]
    geometry.rotate(model, 47.0, 0.0, 0.0)
    assert [v[0] for v in model.vertices] == pytest.approx(xs)


def test_linear_texture_assigns_coordinates_per_vertex():
    model = _box()
    geometry.linear_texture(model)
    assert len(model.texcoords) == len(model.vertices)
    for triangle in model.triangles:
        assert triangle.tindices == triangle.vindices


def test_linear_texture_on_centred_model_stays_in_unit_square():
    model = _box()
    geometry.unitize(model)
    geometry.linear_texture(model)
    for s, t in model.texcoords:
        assert -1e-9 <= s <= 1.0 + 1e-9
        assert -1e-9 <= t <= 1.0 + 1e-9
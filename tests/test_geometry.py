"""
Test suite for ndpolytope geometry.

Tests polytope generators, structure inference and the GeometryND model.
"""

import math
from itertools import combinations

import numpy as np
import pytest

from ndpolytope import (
    DimensionMismatchError,
    GeometryND,
    GeometryType,
    MatrixND,
    ProjectionConfig,
    ProjectionType,
    VectorND,
    connect_within_tolerance,
    create_24_cell,
    create_600_cell,
    create_clifford_torus,
    create_duocylinder,
    create_geometry,
    create_grand_antiprism,
    create_hypercone,
    create_hypercube,
    create_orthoplex,
    create_simplex,
    deduplicate_rounded,
    get_available_geometries,
    get_generator,
    list_geometries,
    rotation_from_angles,
    triangle_closure,
)


def _degrees(geom):
    degree = [0] * geom.vertex_count
    for a, b in geom.edges:
        degree[a] += 1
        degree[b] += 1
    return degree


# =============================================================================
# Hypercube / Simplex / Orthoplex Tests
# =============================================================================

class TestHypercube:
    """Test hypercube generation."""

    def test_named_shapes(self):
        """Test names for low dimensions."""
        assert create_hypercube(2).name == 'Square'
        assert create_hypercube(3).name == 'Cube'
        assert create_hypercube(4).name == 'Tesseract'
        assert create_hypercube(9).name == '9-cube'

    @pytest.mark.parametrize('dimension', [2, 3, 4, 5, 6])
    def test_counts(self, dimension):
        """2^N vertices and N * 2^(N-1) edges."""
        geom = create_hypercube(dimension)
        assert geom.vertex_count == 2 ** dimension
        assert geom.edge_count == dimension * 2 ** (dimension - 1)
        assert geom.face_count == math.comb(dimension, 2) * 2 ** (dimension - 2)
        assert geom.is_valid()

    def test_vertex_coordinates(self):
        """Bit d of the index selects the sign of coordinate d."""
        geom = create_hypercube(3, size=2)
        assert geom.vertices[0].components == (-2, -2, -2)
        assert geom.vertices[5].components == (2, -2, 2)
        assert geom.vertices[0].magnitude() == pytest.approx(2 * math.sqrt(3))

    def test_edges_have_unit_hamming_distance(self):
        """Edges join indices differing in one bit."""
        for i, j in create_hypercube(4).edges:
            assert bin(i ^ j).count('1') == 1

    def test_faces_are_squares_of_edges(self):
        """Consecutive face corners are joined by edges."""
        geom = create_hypercube(4)
        edge_set = set(geom.edges)
        for face in geom.faces:
            assert len(face) == 4
            for k in range(4):
                a, b = face[k], face[(k + 1) % 4]
                assert (min(a, b), max(a, b)) in edge_set


class TestSimplex:
    """Test simplex generation."""

    def test_named_shapes(self):
        """Test names for low dimensions."""
        assert create_simplex(2).name == 'Triangle'
        assert create_simplex(3).name == 'Tetrahedron'
        assert create_simplex(4).name == '5-cell'

    @pytest.mark.parametrize('dimension', [2, 3, 4, 5, 6])
    def test_counts(self, dimension):
        """N+1 vertices, complete edge graph, every triangle a face."""
        geom = create_simplex(dimension)
        assert geom.vertex_count == dimension + 1
        assert geom.edge_count == (dimension + 1) * dimension // 2
        assert geom.face_count == math.comb(dimension + 1, 3)
        assert geom.is_valid()

    @pytest.mark.parametrize('dimension', [2, 3, 4, 5, 6])
    def test_centered(self, dimension):
        """Centroid is at the origin."""
        assert create_simplex(dimension).center().magnitude() == pytest.approx(0, abs=1e-9)

    @pytest.mark.parametrize('dimension', [2, 3, 4, 5, 6])
    def test_equidistant(self, dimension):
        """All vertices are at distance size and mutually equidistant."""
        geom = create_simplex(dimension, size=1.5)
        for v in geom.vertices:
            assert v.magnitude() == pytest.approx(1.5)
        lengths = [
            geom.vertices[i].subtract(geom.vertices[j]).magnitude()
            for i, j in geom.edges
        ]
        assert np.allclose(lengths, lengths[0])


class TestOrthoplex:
    """Test cross-polytope generation."""

    def test_named_shapes(self):
        """Test names for low dimensions."""
        assert create_orthoplex(3).name == 'Octahedron'
        assert create_orthoplex(4).name == '16-cell'

    @pytest.mark.parametrize('dimension', [2, 3, 4, 5, 6])
    def test_counts(self, dimension):
        """2N vertices, 2N(N-1) edges, 8 triangles per axis triple."""
        geom = create_orthoplex(dimension)
        assert geom.vertex_count == 2 * dimension
        assert geom.edge_count == 2 * dimension * (dimension - 1)
        assert geom.face_count == 8 * math.comb(dimension, 3)
        assert geom.is_valid()

    @pytest.mark.parametrize('dimension', [2, 3, 4, 5, 6])
    def test_vertices_on_axes(self, dimension):
        """Every vertex has exactly one non-zero coordinate."""
        for v in create_orthoplex(dimension).vertices:
            assert sum(1 for c in v.components if abs(c) > 1e-3) == 1

    def test_vertex_order(self):
        """Vertex 2d is +size on axis d, vertex 2d+1 is -size."""
        geom = create_orthoplex(3, size=2)
        assert geom.vertices[2].components == (0, 2, 0)
        assert geom.vertices[3].components == (0, -2, 0)

    def test_no_antipodal_edges(self):
        """Opposite vertices are never joined."""
        for i, j in create_orthoplex(5).edges:
            assert i // 2 != j // 2


# =============================================================================
# Distance-Inferred Polytope Tests
# =============================================================================

class Test24Cell:
    """Test 24-cell generation."""

    def test_counts(self):
        """24 vertices in 4-D."""
        geom = create_24_cell()
        assert geom.name == '24-cell'
        assert geom.dimension == 4
        assert geom.vertex_count == 24
        assert geom.vertices[0].dimension == 4
        assert geom.edge_count == 72
        assert geom.face_count == 96
        assert geom.is_valid()

    @pytest.mark.parametrize('size', [1.0, 2.5])
    def test_vertices_on_sphere(self, size):
        """All vertices lie at distance size."""
        for v in create_24_cell(size).vertices:
            assert v.magnitude() == pytest.approx(size)

    @pytest.mark.parametrize('size', [1.0, 2.5])
    def test_edge_lengths(self, size):
        """Every inferred edge has squared length 2 * size^2."""
        geom = create_24_cell(size)
        for i, j in geom.edges:
            dist_sq = geom.vertices[i].subtract(geom.vertices[j]).magnitude_squared()
            assert abs(dist_sq - 2 * size * size) < 0.01 * size * size

    def test_faces_are_closed_triangles(self):
        """Face sides are all edges."""
        geom = create_24_cell()
        edge_set = set(geom.edges)
        for face in geom.faces:
            for a, b in combinations(face, 2):
                assert (a, b) in edge_set


class Test600Cell:
    """Test 600-cell generation."""

    @pytest.fixture(scope='class')
    def cell600(self):
        return create_600_cell()

    def test_counts(self, cell600):
        """120 vertices, 720 edges, 1200 faces."""
        assert cell600.dimension == 4
        assert cell600.vertex_count == 120
        assert cell600.edge_count == 720
        assert cell600.face_count == 1200
        assert cell600.is_valid()

    def test_vertices_on_sphere(self, cell600):
        """All vertices lie at circumradius 1."""
        for v in cell600.vertices:
            assert v.magnitude() == pytest.approx(1.0)

    def test_vertices_unique(self, cell600):
        """No two vertices coincide."""
        keys = {tuple(round(c, 6) for c in v.components) for v in cell600.vertices}
        assert len(keys) == 120

    def test_vertex_degree(self, cell600):
        """Each vertex has 12 neighbours (icosahedral vertex figure)."""
        assert set(_degrees(cell600)) == {12}

    def test_edge_length(self, cell600):
        """Edges have length 1/phi."""
        phi = (1 + math.sqrt(5)) / 2
        i, j = cell600.edges[0]
        length = cell600.vertices[i].subtract(cell600.vertices[j]).magnitude()
        assert length == pytest.approx(1 / phi)


# =============================================================================
# Grid and Heuristic Polytope Tests
# =============================================================================

class TestToroidalGrids:
    """Test Clifford torus and duocylinder."""

    def test_clifford_torus_counts(self):
        """Wrapped grid: one vertex, two edges, two faces per cell."""
        torus = create_clifford_torus(16, 16)
        assert torus.name == 'Clifford Torus'
        assert torus.vertex_count == 256
        assert torus.edge_count == 512
        assert torus.face_count == 512
        assert torus.is_valid()

    def test_clifford_torus_rectangular(self):
        """Major and minor resolution may differ."""
        assert create_clifford_torus(8, 4).vertex_count == 32

    def test_clifford_torus_equal_magnitude(self):
        """All vertices are equally far from the origin."""
        torus = create_clifford_torus(16, 16)
        dist = torus.vertices[0].magnitude()
        for v in torus.vertices:
            assert abs(v.magnitude() - dist) < 1e-4
        assert dist == pytest.approx(1.0)

    def test_duocylinder(self):
        """Duocylinder circles have radius size."""
        duo = create_duocylinder(10)
        assert duo.name == 'Duocylinder'
        assert duo.vertex_count == 100
        assert duo.edge_count == 200
        for v in duo.vertices:
            assert v.magnitude() == pytest.approx(math.sqrt(2))

    def test_coarse_grid_has_no_duplicate_edges(self):
        """Two segments per circle would repeat edges; they are dropped."""
        torus = create_clifford_torus(2, 2)
        assert torus.is_valid()
        assert torus.edge_count == 4


class TestHypercone:
    """Test hypercone generation and its ring indexing."""

    def test_apex(self):
        """First vertex is the apex at W = 1.5 * size."""
        cone = create_hypercone(8, 4, size=2)
        assert cone.dimension == 4
        assert cone.vertices[0].components == (0, 0, 0, 3)

    def test_even_segments(self):
        """Even segment counts connect every ring vertex."""
        cone = create_hypercone(8, 4)
        assert cone.vertex_count == 1 + 4 * 8 * 4
        assert cone.edge_count == 32 + 3 * 32 * 2
        assert cone.face_count == 32 + 3 * 32
        assert cone.is_valid()

    def test_apex_connects_first_ring(self):
        """Apex joins vertices 1..ring_size and its fan wraps to vertex 1."""
        cone = create_hypercone(8, 4)
        apex_edges = [e for e in cone.edges if e[0] == 0]
        assert apex_edges == [(0, i) for i in range(1, 33)]
        assert cone.faces[31] == (0, 32, 1)

    def test_base_ring_at_w_zero(self):
        """Last ring has full radius and W = 0."""
        cone = create_hypercone(8, 4, size=1)
        last = cone.vertices[-1]
        assert last.get(3) == pytest.approx(0)
        assert last.truncate(3).magnitude() == pytest.approx(1)

    def test_odd_segments_stride(self):
        """Odd segments stride by segments * (segments // 2) per ring."""
        cone = create_hypercone(5, 2)
        # Rings hold 5 * 3 vertices but connectivity strides by 5 * 2
        assert cone.vertex_count == 31
        assert cone.edge_count == 30
        assert cone.face_count == 20
        assert max(max(e) for e in cone.edges) == 20
        assert cone.is_valid()

    def test_two_segments(self):
        """The two-segment ring loop does not repeat an edge."""
        cone = create_hypercone(2, 2)
        assert cone.vertex_count == 5
        assert cone.edge_count == 5
        assert cone.is_valid()

    def test_single_ring(self):
        """One ring connects only to the apex."""
        cone = create_hypercone(6, 1)
        assert cone.edge_count == 18
        assert all(a == 0 for a, _ in cone.edges)


class TestGrandAntiprism:
    """Test grand antiprism approximation."""

    def test_counts(self):
        """100 vertices from two stacks of five decagons."""
        geom = create_grand_antiprism()
        assert geom.name == 'Grand Antiprism'
        assert geom.dimension == 4
        assert geom.vertex_count == 100
        assert geom.edge_count == 360
        assert geom.face_count == 160
        assert geom.is_valid()

    def test_cross_stack_edges(self):
        """Vertex i joins 50 + 3i mod 50 and 50 + (3i + 1) mod 50."""
        edge_set = set(create_grand_antiprism().edges)
        for i in range(50):
            assert (i, 50 + (3 * i) % 50) in edge_set
            assert (i, 50 + (3 * i + 1) % 50) in edge_set

    def test_stack_planes(self):
        """First stack has W = 0, second has X = 0."""
        geom = create_grand_antiprism()
        assert all(v.get(3) == 0 for v in geom.vertices[:50])
        assert all(v.get(0) == 0 for v in geom.vertices[50:])


# =============================================================================
# Structure Inference Tests
# =============================================================================

class TestInference:
    """Test distance-based edge inference and triangle closure."""

    def test_connect_square(self):
        """Unit square sides are found, diagonals are not."""
        square = [VectorND(p) for p in ([0, 0], [1, 0], [0, 1], [1, 1])]
        edges = connect_within_tolerance(square, target_distance_sq=1.0, tolerance=0.01)
        assert edges == [(0, 1), (0, 2), (1, 3), (2, 3)]

    def test_connect_too_few_vertices(self):
        """Nothing to connect."""
        assert connect_within_tolerance([VectorND([0, 0])], 1.0, 0.01) == []

    def test_triangle_closure_complete_graph(self):
        """K4 has four triangles."""
        edges = list(combinations(range(4), 2))
        assert triangle_closure(edges) == [(0, 1, 2), (0, 1, 3), (0, 2, 3), (1, 2, 3)]

    def test_triangle_closure_square(self):
        """A 4-cycle has no triangles."""
        assert triangle_closure([(0, 1), (1, 2), (2, 3), (0, 3)]) == []

    def test_deduplicate_rounded(self):
        """Near-identical vertices collapse to the first occurrence."""
        vertices = [
            VectorND([1, 2]),
            VectorND([3, 4]),
            VectorND([1, 2.0000001]),
            VectorND([-0.0, 0.0]),
            VectorND([0.0, 1e-9]),
        ]
        unique = deduplicate_rounded(vertices)
        assert unique == [vertices[0], vertices[1], vertices[3]]


# =============================================================================
# Catalog Tests
# =============================================================================

class TestCatalog:
    """Test geometry registry and dispatch."""

    def test_available_outside_4d(self):
        """Only the dimension-agnostic families outside 4-D."""
        expected = [GeometryType.HYPERCUBE, GeometryType.SIMPLEX, GeometryType.ORTHOPLEX]
        assert get_available_geometries(3) == expected
        assert get_available_geometries(6) == expected

    def test_available_in_4d(self):
        """4-D adds the six special shapes."""
        available = get_available_geometries(4)
        assert len(available) == 9
        assert GeometryType.CELL_600 in available
        assert available[3].label == '24-cell'

    def test_list_geometries(self):
        """Registry lists every shape."""
        names = list_geometries()
        assert 'hypercube' in names
        assert 'grand-antiprism' in names
        assert len(names) == 9

    def test_create_by_name(self):
        """Strings and enum members both work."""
        assert create_geometry('orthoplex', 5).vertex_count == 10
        assert create_geometry(GeometryType.CELL_24).vertex_count == 24

    def test_get_generator_invalid(self):
        """Unknown names raise."""
        with pytest.raises(ValueError, match="Unknown geometry type"):
            get_generator('nonexistent')

    def test_4d_only_in_other_dimension(self):
        """4-D shapes cannot be requested in other dimensions."""
        with pytest.raises(ValueError, match="only exists in 4 dimensions"):
            create_geometry('24-cell', 3)

    @pytest.mark.parametrize('kind', [
        GeometryType.CLIFFORD_TORUS,
        GeometryType.DUOCYLINDER,
        GeometryType.HYPERCONE,
        GeometryType.GRAND_ANTIPRISM,
    ])
    def test_all_4d_generators_valid(self, kind):
        """Every registered 4-D shape satisfies the structural invariants."""
        geom = create_geometry(kind)
        assert geom.dimension == 4
        assert geom.is_valid()


# =============================================================================
# GeometryND Tests
# =============================================================================

class TestGeometryND:
    """Test GeometryND dataclass."""

    def test_lists_become_tuples(self):
        """Constructor freezes its inputs."""
        geom = GeometryND('Segment', 1, [VectorND([-1]), VectorND([1])], [[0, 1]])
        assert geom.vertices == (VectorND([-1]), VectorND([1]))
        assert geom.edges == ((0, 1),)
        assert geom.faces is None
        assert geom.face_count == 0

    def test_center(self):
        """Test center calculation."""
        assert np.allclose(create_orthoplex(4).center().to_array(), 0, atol=1e-10)

    def test_scale_to_unit(self):
        """Test scaling to unit sphere."""
        scaled = create_hypercube(4, size=2).scale_to_unit()
        max_dist = np.max(np.linalg.norm(scaled.vertex_array(), axis=1))
        assert max_dist == pytest.approx(1.0, abs=1e-10)

    def test_translate(self):
        """Test translation."""
        translated = create_orthoplex(3).translate(VectorND([1, 2, 3]))
        assert np.allclose(translated.center().to_array(), [1, 2, 3], atol=1e-10)

    def test_transformed_leaves_original(self):
        """Transforming produces a new geometry."""
        cube = create_hypercube(4)
        turned = cube.transformed(rotation_from_angles(4, {'XW': math.pi / 2}))
        assert cube.vertices[0].components == (-1, -1, -1, -1)
        assert turned.vertices[0].equals(VectorND([1, -1, -1, -1]), epsilon=1e-12)
        assert turned.edges == cube.edges

    def test_transformed_dimension_mismatch(self):
        """Matrix must match the geometry dimension."""
        with pytest.raises(DimensionMismatchError):
            create_hypercube(4).transformed(MatrixND.identity(3))

    def test_project_to_3d(self):
        """Projected vertices are three-dimensional."""
        points = create_hypercube(5).project_to_3d(ProjectionConfig(ProjectionType.ORTHOGRAPHIC))
        assert len(points) == 32
        assert all(p.dimension == 3 for p in points)

    def test_is_valid_detects_bad_index(self):
        """Edges pointing past the vertex list are invalid."""
        geom = GeometryND('bad', 2, [VectorND([0, 0])], [(0, 1)])
        assert not geom.is_valid()

    def test_is_valid_detects_duplicate_edge(self):
        """Repeated unordered pairs are invalid."""
        vertices = [VectorND([0, 0]), VectorND([1, 0])]
        assert not GeometryND('bad', 2, vertices, [(0, 1), (1, 0)]).is_valid()

    def test_is_valid_detects_wrong_dimension(self):
        """Vertices must match the declared dimension."""
        assert not GeometryND('bad', 3, [VectorND([0, 0])], []).is_valid()

    def test_to_dict(self):
        """Test conversion to dictionary."""
        d = create_simplex(3).to_dict()
        assert d['name'] == 'Tetrahedron'
        assert d['dimension'] == 3
        assert len(d['vertices']) == 4
        assert len(d['edges']) == 6
        assert len(d['faces']) == 4

import numpy as np
import pytest
from sklearn.exceptions import ConvergenceWarning

from kmeanspp import Cluster, DimensionMismatchError, InvalidParameterError, refine


def test_converges_on_two_groups():
    points = [(0.0, 0.0), (0.0, 1.0), (10.0, 10.0), (10.0, 11.0)]
    clusters = refine(points, [(0.0, 0.0), (0.0, 1.0)], 1e-6)
    assert len(clusters) == 2
    centers = sorted(tuple(c.center) for c in clusters)
    assert np.allclose(centers, [(0.0, 0.5), (10.0, 10.5)])
    assert [len(c) for c in clusters] == [2, 2]


def test_empty_cluster_keeps_previous_center():
    clusters = refine([(0.0, 0.0), (1.0, 0.0)], [(0.5, 0.0), (100.0, 100.0)], 0.0)
    assert np.array_equal(clusters[0].center, [0.5, 0.0])
    assert len(clusters[0]) == 2
    assert np.array_equal(clusters[1].center, [100.0, 100.0])
    assert clusters[1].members.shape == (0, 2)


def test_ties_go_to_lowest_center_index():
    clusters = refine([(0.0, 0.0)], [(1.0, 0.0), (-1.0, 0.0)], 0.0)
    assert len(clusters[0]) == 1
    assert len(clusters[1]) == 0


def test_members_keep_input_order():
    points = [(5.0,), (0.0,), (6.0,), (1.0,)]
    clusters = refine(points, [(0.0,), (5.0,)], 0.0)
    assert clusters[0].members[:, 0].tolist() == [0.0, 1.0]
    assert clusters[1].members[:, 0].tolist() == [5.0, 6.0]


def test_iteration_cap_warns():
    points = [(0.0, 0.0), (1.0, 0.0), (10.0, 0.0), (11.0, 0.0)]
    with pytest.warns(ConvergenceWarning):
        clusters = refine(points, [(0.0, 0.0), (1.0, 0.0)], 0.0, max_iters=1)
    # Still a complete, consistent clustering
    assert sum(len(c) for c in clusters) == 4
    for cluster in clusters:
        assert np.allclose(cluster.center, cluster.members.mean(axis=0))


def test_unbounded_iterations():
    points = np.random.default_rng(1).normal(size=(60, 2))
    clusters = refine(points, points[:3], 1e-9, max_iters=None)
    assert sum(len(c) for c in clusters) == 60


def test_clusters_are_read_only():
    cluster = refine([(0.0, 0.0), (2.0, 0.0)], [(0.0, 0.0)], 0.0)[0]
    assert isinstance(cluster, Cluster)
    with pytest.raises(ValueError):
        cluster.members[0, 0] = 1.0
    with pytest.raises(ValueError):
        cluster.center[0] = 1.0


def test_invalid_parameters():
    with pytest.raises(InvalidParameterError):
        refine([(0.0, 0.0)], [(0.0, 0.0)], -1.0)
    with pytest.raises(InvalidParameterError):
        refine([(0.0, 0.0)], [(0.0, 0.0)], 0.1, max_iters=0)
    with pytest.raises(InvalidParameterError):
        refine([(0.0, 0.0)], [], 0.1)
    with pytest.raises(DimensionMismatchError):
        refine([(0.0, 0.0)], [(0.0, 0.0, 0.0)], 0.1)


def test_empty_points():
    assert refine([], [(0.0, 0.0)], 0.1) == []


def test_cluster_copies_caller_arrays():
    center = np.array([1.0, 2.0])
    members = np.array([[1.0, 2.0]])
    cluster = Cluster(center=center, members=members)
    assert center.flags.writeable and members.flags.writeable
    members[0, 0] = 5.0
    assert cluster.members[0, 0] == 1.0


def test_refine_huge_coordinates():
    points = [(0.0,), (1e160,), (3e160,), (4e160,)]
    clusters = refine(points, [(0.0,), (4e160,)], 1.0)
    assert [len(c) for c in clusters] == [2, 2]
    assert np.allclose(clusters[0].center, [0.5e160])
    assert np.allclose(clusters[1].center, [3.5e160])

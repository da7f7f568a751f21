import numpy as np
import pytest

from planar_fabrik import Chain, ChainConfig, InvalidConfigError, Point2D

EPSILON = 1e-6


def _assert_segment_lengths(chain):
    np.testing.assert_allclose(chain.segment_lengths(), chain.segment_length, atol=EPSILON)


def _solve_until_converged(chain, target, max_calls=10):
    for _ in range(max_calls):
        result = chain.solve(target)
        if result['converged']:
            return result
    return result


def test_construction_builds_rest_pose():
    config = ChainConfig(segment_count=3, segment_length=10.0)

    chain = Chain(Point2D(0.0, 0.0), config)

    assert chain.joint_count == 4
    assert chain.joints[0] == Point2D(0.0, 0.0)
    assert chain.effector == Point2D(0.0, 30.0)
    assert chain.total_reach == pytest.approx(30.0)
    _assert_segment_lengths(chain)


def test_construction_with_default_config():
    chain = Chain((100, 20))

    assert chain.config == ChainConfig()
    assert chain.root == Point2D(100.0, 20.0)
    assert chain.joint_count == ChainConfig().segment_count + 1


def test_reachable_target_converges():
    config = ChainConfig(segment_count=3, segment_length=10.0, max_iterations=10, tolerance=0.1)
    chain = Chain(Point2D(0.0, 0.0), config)

    result = _solve_until_converged(chain, Point2D(15.0, 0.0))

    assert result['converged']
    assert result['reachable']
    assert chain.effector.distance(Point2D(15.0, 0.0)) <= 0.1
    assert chain.joints[0] == Point2D(0.0, 0.0)
    _assert_segment_lengths(chain)


def test_standard_chain_converges():
    config = ChainConfig(segment_count=4, segment_length=50.0, max_iterations=10, tolerance=0.1)
    chain = Chain(Point2D(0.0, 0.0), config)
    target = Point2D(120.0, 80.0)

    result = _solve_until_converged(chain, target)

    assert result['converged']
    assert chain.effector.distance(target) <= 0.1
    _assert_segment_lengths(chain)


def test_unreachable_target_straight_line():
    config = ChainConfig(segment_count=3, segment_length=10.0)
    chain = Chain(Point2D(0.0, 0.0), config)

    result = chain.solve(Point2D(100.0, 0.0))

    assert not result['reachable']
    assert not result['converged']
    assert result['iterations'] == 0
    np.testing.assert_allclose(chain.joint_array(), [[0, 0], [10, 0], [20, 0], [30, 0]], atol=EPSILON)


def test_unreachable_target_collinear_with_root_and_target():
    root = Point2D(5.0, 5.0)
    target = Point2D(-40.0, 65.0)
    chain = Chain(root, ChainConfig(segment_count=4, segment_length=6.0))

    chain.solve(target)

    line = (target - root).normalize()
    distances = []
    for joint in chain.joints:
        offset = joint - root
        # Cross product with the root-target direction vanishes on the line
        assert abs(offset.x * line.y - offset.y * line.x) <= EPSILON
        distances.append(root.distance(joint))
    assert distances == sorted(distances)
    assert chain.effector.distance(root) == pytest.approx(24.0)
    _assert_segment_lengths(chain)


def test_target_at_full_stretch_uses_straight_line():
    chain = Chain(Point2D(0.0, 0.0), ChainConfig(segment_count=1, segment_length=5.0))

    result = chain.solve(Point2D(3.0, 4.0))

    assert not result['reachable']
    assert chain.effector.distance(Point2D(3.0, 4.0)) <= EPSILON
    assert result['converged']


def test_single_segment_converges_to_target_on_circle():
    config = ChainConfig(segment_count=1, segment_length=10.0, tolerance=0.01)
    chain = Chain(Point2D(0.0, 0.0), config)

    chain.solve(Point2D(-6.0, 8.0))

    assert chain.effector.distance(Point2D(-6.0, 8.0)) <= EPSILON


def test_solve_is_idempotent_near_convergence():
    config = ChainConfig(segment_count=4, segment_length=50.0, max_iterations=10, tolerance=0.1)
    chain = Chain(Point2D(0.0, 0.0), config)
    target = Point2D(-90.0, 110.0)
    _solve_until_converged(chain, target)
    before = chain.joint_array()

    result = chain.solve(target)

    assert result['converged']
    assert result['iterations'] == 0
    np.testing.assert_allclose(chain.joint_array(), before, atol=EPSILON)


def test_iteration_cap_keeps_best_effort_pose():
    config = ChainConfig(segment_count=6, segment_length=10.0, max_iterations=1, tolerance=0.0)
    chain = Chain(Point2D(0.0, 0.0), config)

    result = chain.solve(Point2D(25.0, -20.0))

    assert result['iterations'] == 1
    assert chain.joints[0] == Point2D(0.0, 0.0)
    _assert_segment_lengths(chain)


@pytest.mark.parametrize('target', [
    (0.0, 0.0),
    (0.0, 10.0),
    (0.0, 30.0),
    (-12.0, -3.0),
    (1e-9, 1e-9),
    (250.0, -400.0),
])
def test_segment_lengths_and_root_hold_for_any_target(target):
    root = Point2D(0.0, 0.0)
    chain = Chain(root, ChainConfig(segment_count=3, segment_length=10.0))

    chain.solve(target)

    assert np.all(np.isfinite(chain.joint_array()))
    assert chain.joints[0] == root
    _assert_segment_lengths(chain)


def test_zero_length_segments_stay_at_root():
    root = Point2D(4.0, 4.0)
    chain = Chain(root, ChainConfig(segment_count=3, segment_length=0.0))

    chain.solve(Point2D(10.0, 10.0))
    chain.solve(root)

    assert all(joint == root for joint in chain.joints)


def test_solve_rejects_non_finite_target():
    chain = Chain(Point2D(0.0, 0.0))
    before = chain.joint_array()

    with pytest.raises(ValueError):
        chain.solve(Point2D(float('nan'), 0.0))
    np.testing.assert_array_equal(chain.joint_array(), before)


def test_set_segment_count_resets_topology():
    chain = Chain(Point2D(1.0, 2.0), ChainConfig(segment_count=3, segment_length=10.0))
    chain.solve(Point2D(12.0, 7.0))

    chain.set_segment_count(5)

    assert chain.joint_count == 6
    assert chain.segment_count == 5
    assert chain.joints[0] == Point2D(1.0, 2.0)
    assert chain.effector == Point2D(1.0, 52.0)
    _assert_segment_lengths(chain)


def test_set_segment_length_rebuilds_pose():
    chain = Chain(Point2D(0.0, 0.0), ChainConfig(segment_count=2, segment_length=10.0))

    chain.set_segment_length(4.0)

    assert chain.segment_length == 4.0
    assert chain.total_reach == pytest.approx(8.0)
    assert chain.effector == Point2D(0.0, 8.0)


def test_invalid_reconfiguration_leaves_chain_untouched():
    chain = Chain(Point2D(0.0, 0.0), ChainConfig(segment_count=2, segment_length=10.0))
    chain.solve(Point2D(5.0, 5.0))
    before = chain.joint_array()

    with pytest.raises(InvalidConfigError):
        chain.set_segment_count(0)
    with pytest.raises(InvalidConfigError):
        chain.set_segment_length(-1.0)

    assert chain.segment_count == 2
    np.testing.assert_array_equal(chain.joint_array(), before)


def test_increment_and_decrement_are_bounded():
    chain = Chain(Point2D(0.0, 0.0), ChainConfig(segment_count=1, segment_length=3.0))

    chain.decrement_segment_count()
    assert chain.segment_count == 1
    chain.increment_segment_count()
    assert chain.segment_count == 2
    assert chain.joint_count == 3

    chain.increment_segment_length()
    assert chain.segment_length == 8.0
    chain.decrement_segment_length(step=20.0)
    assert chain.segment_length == 0.0


def test_reset_restores_defaults_at_current_root():
    chain = Chain(Point2D(3.0, 3.0), ChainConfig(segment_count=2, segment_length=1.0))
    chain.set_root(Point2D(10.0, -10.0))

    chain.reset()

    assert chain.config == ChainConfig()
    assert chain.joint_count == ChainConfig().segment_count + 1
    assert chain.joints[0] == Point2D(10.0, -10.0)
    _assert_segment_lengths(chain)


def test_set_root_translates_pose():
    chain = Chain(Point2D(0.0, 0.0), ChainConfig(segment_count=3, segment_length=10.0))
    chain.solve(Point2D(10.0, 10.0))

    chain.set_root((5.0, -5.0))

    assert chain.root == Point2D(5.0, -5.0)
    assert chain.joints[0] == Point2D(5.0, -5.0)
    _assert_segment_lengths(chain)


def test_accessors_do_not_expose_internal_state():
    chain = Chain(Point2D(0.0, 0.0), ChainConfig(segment_count=2, segment_length=10.0))

    array = chain.joint_array()
    array[1] = [999.0, 999.0]

    assert chain.joints[1] == Point2D(0.0, 10.0)
    assert isinstance(chain.joints, tuple)
    with pytest.raises(AttributeError):
        chain.joints = ()


def test_solve_is_deterministic():
    config = ChainConfig(segment_count=5, segment_length=8.0, max_iterations=3)
    first = Chain(Point2D(0.0, 0.0), config)
    second = Chain(Point2D(0.0, 0.0), config)

    for target in [(10.0, 5.0), (-7.0, 20.0), (30.0, 30.0)]:
        first.solve(target)
        second.solve(target)

    np.testing.assert_array_equal(first.joint_array(), second.joint_array())


@pytest.mark.parametrize('target', [(0.0, 30.0), (0.0, 120.0), (0.0, -60.0)])
def test_target_on_rest_pose_axis_converges(target):
    config = ChainConfig(segment_count=4, segment_length=50.0, max_iterations=10, tolerance=0.1)
    chain = Chain(Point2D(0.0, 0.0), config)

    result = _solve_until_converged(chain, target)

    assert result['converged']
    assert chain.effector.distance(Point2D.coerce(target)) <= 0.1
    assert chain.joints[0] == Point2D(0.0, 0.0)
    _assert_segment_lengths(chain)


def test_stretched_chain_reaches_target_on_its_own_line():
    config = ChainConfig(segment_count=3, segment_length=10.0, max_iterations=10, tolerance=0.1)
    chain = Chain(Point2D(0.0, 0.0), config)
    chain.solve(Point2D(100.0, 0.0))

    result = _solve_until_converged(chain, Point2D(15.0, 0.0))

    assert result['converged']
    _assert_segment_lengths(chain)


def test_huge_target_keeps_segment_lengths():
    chain = Chain(Point2D(0.0, 0.0), ChainConfig(segment_count=3, segment_length=10.0))

    result = chain.solve(Point2D(1e308, 1e308))

    assert not result['reachable']
    assert np.isfinite(result['final_error'])
    assert np.all(np.isfinite(chain.joint_array()))
    _assert_segment_lengths(chain)
    expected = 30.0 / np.sqrt(2.0)
    assert chain.effector.x == pytest.approx(expected)
    assert chain.effector.y == pytest.approx(expected)

import math

import numpy as np
import pytest

from curvelib.errors import (
    ExtrapolationError,
    InsufficientPointsError,
    PillarOrderError,
    UnknownConventionError,
)
from curvelib.interpolation import (
    CatmullRomInterpolator,
    ExtrapolationPolicy,
    HermiteInterpolator,
    LinearInterpolator,
    LogCubicInterpolator,
    LogLinearInterpolator,
    MonotoneCubicInterpolator,
    NaturalCubicInterpolator,
    create_interpolator,
    interpolator_name,
)

XS = [0.0, 1.0, 2.0, 3.0]
DFS = [1.0, 0.97, 0.93, 0.9]
ALL_METHODS = [
    LinearInterpolator,
    LogLinearInterpolator,
    NaturalCubicInterpolator,
    LogCubicInterpolator,
    MonotoneCubicInterpolator,
    CatmullRomInterpolator,
]


@pytest.mark.parametrize("cls", ALL_METHODS, ids=lambda c: c.__name__)
def test_knots_are_reproduced_exactly(cls):
    interp = cls(XS, DFS)
    for x, y in zip(XS, DFS):
        assert interp.value_at(x) == y


@pytest.mark.parametrize("cls", ALL_METHODS, ids=lambda c: c.__name__)
def test_default_policy_refuses_to_extrapolate(cls):
    interp = cls(XS, DFS)
    with pytest.raises(ExtrapolationError) as excinfo:
        interp.value_at(3.5)
    assert excinfo.value.x_max == 3.0
    with pytest.raises(ExtrapolationError):
        interp.value_at(-0.1)


@pytest.mark.parametrize("cls", ALL_METHODS, ids=lambda c: c.__name__)
def test_flat_extrapolation_holds_boundary_values(cls):
    interp = cls(XS, DFS, ExtrapolationPolicy.FLAT)
    assert interp.value_at(10.0) == 0.9
    assert interp.value_at(-1.0) == 1.0


def test_linear_values():
    interp = LinearInterpolator(XS, DFS, ExtrapolationPolicy.LINEAR)
    assert interp.value_at(0.5) == pytest.approx(0.985)
    assert interp.value_at(4.0) == pytest.approx(0.87)
    assert interp.values_at([0.5, 2.5]) == pytest.approx([0.985, 0.915])


def test_log_linear_values():
    interp = LogLinearInterpolator(XS, DFS, ExtrapolationPolicy.LINEAR)
    assert interp.value_at(0.5) == pytest.approx(math.sqrt(0.97))
    # constant forward rate carried past the last knot
    assert interp.value_at(4.0) == pytest.approx(0.9 * 0.9 / 0.93)


def test_natural_cubic_known_value():
    interp = NaturalCubicInterpolator([0.0, 1.0, 2.0], [0.0, 1.0, 0.0])
    assert interp.value_at(0.5) == pytest.approx(0.6875)
    assert interp.value_at(1.5) == pytest.approx(0.6875)


def test_natural_cubic_reproduces_straight_lines():
    interp = NaturalCubicInterpolator(XS, [0.0, 2.0, 4.0, 6.0], ExtrapolationPolicy.LINEAR)
    assert interp.value_at(1.5) == pytest.approx(3.0)
    assert interp.value_at(4.0) == pytest.approx(8.0)


@pytest.mark.parametrize("seed", range(5))
def test_monotone_cubic_preserves_shape(seed):
    rng = np.random.default_rng(seed)
    xs = np.concatenate([[0.0], np.cumsum(rng.uniform(0.1, 2.0, size=8))])
    ys = np.exp(-np.cumsum(rng.uniform(0.0, 0.08, size=9)))
    interp = MonotoneCubicInterpolator(xs, ys)

    grid = np.linspace(xs[0], xs[-1], 400)
    values = np.array(interp.values_at(grid))
    assert np.all(values > 0.0)
    assert np.all(np.diff(values) <= 1e-15)
    for i in range(len(xs) - 1):
        inside = values[(grid >= xs[i]) & (grid <= xs[i + 1])]
        assert np.all(inside <= ys[i] + 1e-15)
        assert np.all(inside >= ys[i + 1] - 1e-15)


def test_monotone_cubic_flat_segment_stays_flat():
    interp = MonotoneCubicInterpolator([0.0, 1.0, 2.0, 3.0], [1.0, 0.95, 0.95, 0.9])
    assert interp.value_at(1.5) == pytest.approx(0.95)


def test_catmull_rom_known_value():
    interp = CatmullRomInterpolator([0.0, 1.0, 2.0], [0.0, 1.0, 0.0])
    # slopes 1, 0, -1 at the knots
    assert interp.value_at(0.5) == pytest.approx(0.625)
    assert interp.value_at(1.5) == pytest.approx(0.625)


def test_catmull_rom_reproduces_straight_lines():
    interp = CatmullRomInterpolator([0.0, 0.5, 1.0], [1.0, 0.5, 0.0])
    assert interp.value_at(0.75) == pytest.approx(0.25)


def test_hermite_uses_given_slopes():
    xs = [0.0, 1.0, 2.0, 3.0]
    interp = HermiteInterpolator(xs, [x ** 3 for x in xs], [3.0 * x ** 2 for x in xs])
    for x in xs:
        assert interp.value_at(x) == x ** 3
    # a cubic Hermite spline reproduces any cubic
    assert interp.value_at(1.5) == pytest.approx(3.375)
    assert interp.value_at(2.25) == pytest.approx(2.25 ** 3)
    with pytest.raises(ExtrapolationError):
        interp.value_at(3.5)
    with pytest.raises(ExtrapolationError):
        interp.value_at(-0.5)


def test_hermite_linear_extrapolation_follows_end_slope():
    interp = HermiteInterpolator([0.0, 1.0], [1.0, 2.0], [0.0, 4.0], ExtrapolationPolicy.LINEAR)
    assert interp.value_at(1.5) == pytest.approx(4.0)
    assert interp.value_at(-1.0) == pytest.approx(1.0)


def test_hermite_requires_one_slope_per_knot():
    with pytest.raises(ValueError, match="slope"):
        HermiteInterpolator([0.0, 1.0, 2.0], [1.0, 0.9, 0.8])
    with pytest.raises(ValueError):
        HermiteInterpolator([0.0, 1.0, 2.0], [1.0, 0.9, 0.8], [0.0, 0.0])
    with pytest.raises(ValueError):
        HermiteInterpolator([0.0, 1.0], [1.0, 0.9], [0.0, float("nan")])


def test_log_space_interpolators_require_positive_values():
    with pytest.raises(ValueError):
        LogLinearInterpolator([0.0, 1.0], [1.0, 0.0])
    with pytest.raises(ValueError):
        LogCubicInterpolator([0.0, 1.0, 2.0], [1.0, -0.5, 0.5])


def test_knots_must_strictly_increase():
    with pytest.raises(PillarOrderError):
        LinearInterpolator([0.0, 2.0, 1.0], [1.0, 0.9, 0.8])
    with pytest.raises(PillarOrderError):
        LinearInterpolator([0.0, 1.0, 1.0], [1.0, 0.9, 0.8])


def test_minimum_number_of_points():
    with pytest.raises(InsufficientPointsError):
        LinearInterpolator([0.0], [1.0])
    with pytest.raises(InsufficientPointsError):
        NaturalCubicInterpolator([0.0, 1.0], [1.0, 0.9])
    with pytest.raises(InsufficientPointsError):
        CatmullRomInterpolator([0.0, 1.0], [1.0, 0.9])
    with pytest.raises(ValueError):
        LinearInterpolator([0.0, 1.0], [1.0])


def test_knot_arrays_are_read_only():
    interp = LinearInterpolator(XS, DFS)
    with pytest.raises(ValueError):
        interp.xs[0] = 5.0


@pytest.mark.parametrize(
    "name, cls",
    [
        ("LINEAR", LinearInterpolator),
        ("log_linear", LogLinearInterpolator),
        ("NATURAL_CUBIC", NaturalCubicInterpolator),
        ("LOG_CUBIC", LogCubicInterpolator),
        ("monotone-cubic", MonotoneCubicInterpolator),
        ("catmull-rom", CatmullRomInterpolator),
    ],
)
def test_factory(name, cls):
    interp = create_interpolator(name, XS, DFS, "flat")
    assert type(interp) is cls
    assert interp.extrapolation == ExtrapolationPolicy.FLAT


def test_factory_passes_hermite_slopes():
    interp = create_interpolator("HERMITE", XS, DFS, slopes=[-0.03, -0.035, -0.035, -0.03])
    assert type(interp) is HermiteInterpolator
    assert interp.value_at(2.0) == 0.93


@pytest.mark.parametrize(
    "method, name",
    [
        ("log-linear", "LOG_LINEAR"),
        ("pchip", "PCHIP"),
        (NaturalCubicInterpolator, "NATURAL_CUBIC"),
        (LogLinearInterpolator, "LOG_LINEAR"),
        (CatmullRomInterpolator, "CATMULL_ROM"),
    ],
)
def test_interpolator_name(method, name):
    assert interpolator_name(method) == name


def test_interpolator_name_rejects_unregistered_class():
    class Custom(LinearInterpolator):
        pass

    with pytest.raises(UnknownConventionError):
        interpolator_name(Custom)


def test_factory_unknown_method():
    with pytest.raises(UnknownConventionError, match="Unknown interpolation method"):
        create_interpolator("AKIMA", XS, DFS)

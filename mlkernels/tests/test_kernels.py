"""Tests for kernel families."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from mlkernels import (
    ArgumentError,
    kernel,
    kernel_matrix,
)
from mlkernels.kernels import (
    ExponentialKernel,
    LaplacianKernel,
    SquaredExponentialKernel,
    GaussianKernel,
    RadialBasisKernel,
    GammaExponentialKernel,
    RationalQuadraticKernel,
    GammaRationalQuadraticKernel,
    MaternKernel,
    LinearKernel,
    PolynomialKernel,
    ExponentiatedKernel,
    SigmoidKernel,
    PeriodicKernel,
    PowerKernel,
    LogKernel,
)
from mlkernels.utils.distance import SquaredEuclidean, WeightedSquaredEuclidean


@pytest.fixture
def X():
    rng = np.random.default_rng(1)
    return rng.standard_normal((20, 2))


ISOTROPIC_KERNELS = [
    ExponentialKernel(0.7),
    SquaredExponentialKernel(0.3),
    GammaExponentialKernel(1.5, 0.5),
    RationalQuadraticKernel(2.0, 0.5),
    GammaRationalQuadraticKernel(2.0, 0.5, 0.7),
    MaternKernel(1.5, 2.0),
    PowerKernel(0.5),
    LogKernel(1.0, 0.5),
]


class TestRationalQuadraticKernel:
    def test_zero_distance_is_one(self):
        assert kernel(RationalQuadraticKernel(), [0, 0], [0, 0]) == 1.0

    def test_unit_distance(self):
        assert kernel(RationalQuadraticKernel(), [0, 0], [1, 0]) == 0.5

    def test_formula(self):
        k = RationalQuadraticKernel(2.0, 3.0)
        x, y = np.array([1.0, 2.0]), np.array([0.5, -1.0])
        d2 = np.sum((x - y) ** 2)
        assert_allclose(kernel(k, x, y), (1 + 2.0 * d2) ** -3.0)

    def test_defaults(self):
        k = RationalQuadraticKernel()
        assert k.alpha == 1.0
        assert k.beta == 1.0
        assert k.dtype == np.float64
        assert isinstance(k.base_function, SquaredEuclidean)

    @pytest.mark.parametrize("alpha, beta", [(0.0, 1.0), (-1.0, 1.0), (1.0, 0.0), (1.0, -2.0)])
    def test_parameter_validation(self, alpha, beta):
        with pytest.raises(ArgumentError):
            RationalQuadraticKernel(alpha, beta)

    def test_error_names_parameter_and_constraint(self):
        with pytest.raises(ArgumentError, match="alpha") as excinfo:
            RationalQuadraticKernel(-1.0)
        assert excinfo.value.parameter == 'alpha'
        assert excinfo.value.constraint == "α > 0"
        assert "α > 0" in str(excinfo.value)

    def test_argument_error_is_value_error(self):
        with pytest.raises(ValueError):
            RationalQuadraticKernel(1.0, -1.0)

    def test_vector_alpha_validation(self):
        with pytest.raises(ArgumentError):
            RationalQuadraticKernel(np.array([1.0, 0.0]))

    def test_vector_alpha_uses_weighted_distance(self, X):
        alpha = np.array([0.5, 3.0])
        k = RationalQuadraticKernel(alpha, 2.0)

        assert isinstance(k.base_function, WeightedSquaredEuclidean)
        assert_allclose(k.base_function.weights, alpha)

        # Scaling features by √α gives the same matrix as a unit scalar α
        expected = kernel_matrix(RationalQuadraticKernel(1.0, 2.0), X * np.sqrt(alpha))
        assert_allclose(kernel_matrix(k, X), expected, rtol=1e-12)

    def test_large_distance_is_stable(self):
        value = kernel(RationalQuadraticKernel(), [0.0], [1e150])
        assert np.isfinite(value)
        assert 0 <= value < 1e-250

    def test_immutable(self):
        k = RationalQuadraticKernel()
        with pytest.raises(AttributeError):
            k.alpha = 2.0

    def test_vector_parameter_is_read_only(self):
        k = RationalQuadraticKernel(np.array([1.0, 2.0]))
        with pytest.raises(ValueError):
            k.alpha[0] = 5.0


class TestGammaRationalQuadraticKernel:
    def test_gamma_one_reproduces_rational_quadratic(self, X):
        rq = RationalQuadraticKernel(2.0, 3.0)
        grq = GammaRationalQuadraticKernel(2.0, 3.0, 1.0)

        assert_allclose(kernel_matrix(grq, X), kernel_matrix(rq, X), rtol=1e-15)
        assert kernel(grq, X[0], X[1]) == kernel(rq, X[0], X[1])

    def test_formula(self):
        k = GammaRationalQuadraticKernel(2.0, 3.0, 0.5)
        x, y = np.array([1.0, 2.0]), np.array([0.5, -1.0])
        d2 = np.sum((x - y) ** 2)
        assert_allclose(kernel(k, x, y), (1 + 2.0 * d2 ** 0.5) ** -3.0)

    def test_gamma_boundaries(self):
        GammaRationalQuadraticKernel(gamma=1.0)
        GammaRationalQuadraticKernel(gamma=1e-12)
        with pytest.raises(ArgumentError, match="γ"):
            GammaRationalQuadraticKernel(gamma=0.0)
        with pytest.raises(ArgumentError):
            GammaRationalQuadraticKernel(gamma=1.0 + 1e-9)

    def test_vector_alpha_weights(self):
        alpha = np.array([4.0, 0.25])
        gamma = 0.5
        k = GammaRationalQuadraticKernel(alpha, 2.0, gamma)

        assert isinstance(k.base_function, WeightedSquaredEuclidean)
        assert_allclose(k.base_function.weights, alpha ** -gamma)

        x, y = np.array([1.0, 2.0]), np.array([0.0, 0.0])
        d2 = np.sum(alpha ** -gamma * (x - y) ** 2)
        assert_allclose(kernel(k, x, y), (1 + d2 ** gamma) ** -2.0)


class TestElementType:
    def test_float32_parameters(self):
        k = RationalQuadraticKernel(np.float32(2.0))
        assert k.dtype == np.float32
        assert k.beta.dtype == np.float32

    def test_mixed_precision_promotes(self):
        k = RationalQuadraticKernel(np.float32(2.0), np.float64(2.0))
        assert k.dtype == np.float64

    def test_python_float_promotes(self):
        assert str(RationalQuadraticKernel()) == "RationalQuadraticKernel{float64}(1.0,1.0)"
        assert str(RationalQuadraticKernel(np.float32(2.0))) == \
            "RationalQuadraticKernel{float32}(2.0,1.0)"
        assert str(RationalQuadraticKernel(np.float32(2.0), 2.0)) == \
            "RationalQuadraticKernel{float64}(2.0,2.0)"

    def test_omitted_parameters_follow_leading_type(self):
        assert GammaRationalQuadraticKernel(np.float32(2.0)).dtype == np.float32
        assert GammaRationalQuadraticKernel(np.float32(2.0), np.float32(2.0)).dtype == np.float32
        assert GammaRationalQuadraticKernel(np.float32(2.0), 2.0).dtype == np.float64
        assert LinearKernel(np.float32(2.0)).c.dtype == np.float32

    def test_python_int_does_not_promote(self):
        assert RationalQuadraticKernel(np.float32(2.0), 2).dtype == np.float32

    def test_integer_parameters_become_float64(self):
        k = GammaRationalQuadraticKernel(2, 3, 1)
        assert k.dtype == np.float64
        assert k.alpha == 2.0

    def test_explicit_dtype(self):
        k = RationalQuadraticKernel(2.0, 3.0, dtype=np.float32)
        assert k.alpha.dtype == np.float32

    def test_non_float_dtype_rejected(self):
        with pytest.raises(ValueError):
            SquaredExponentialKernel(1.0, dtype=np.int64)

    def test_astype(self):
        k = GammaRationalQuadraticKernel(2.0, 3.0, 0.5).astype(np.float32)
        assert k.dtype == np.float32
        assert k.alpha.dtype == np.float32
        assert k.gamma == np.float32(0.5)

    def test_astype_round_trip(self):
        k = GammaRationalQuadraticKernel(np.array([0.1, 0.7]), 0.3, 0.9)
        back = k.astype(np.float32).astype(np.float16).astype(np.float64)

        assert back.dtype == np.float64
        assert_allclose(back.alpha, k.alpha, rtol=1e-3)
        assert_allclose(back.beta, k.beta, rtol=1e-3)
        assert_allclose(back.gamma, k.gamma, rtol=1e-3)

    def test_astype_preserves_equality(self):
        k = RationalQuadraticKernel(0.5, 2.0)
        assert k.astype(np.float32).astype(np.float64) == k

    def test_float32_evaluation(self):
        k = RationalQuadraticKernel(np.float32(1.0))
        X = np.arange(6, dtype=np.float32).reshape(3, 2)
        assert kernel_matrix(k, X).dtype == np.float32


class TestDisplay:
    def test_str(self):
        assert str(RationalQuadraticKernel()) == "RationalQuadraticKernel{float64}(1.0,1.0)"
        assert str(RationalQuadraticKernel(np.float32(2.0))) == \
            "RationalQuadraticKernel{float32}(2.0,1.0)"

    def test_str_gamma_variant(self):
        k = GammaRationalQuadraticKernel(np.float32(2.0), np.float32(2.0), np.float32(0.5))
        assert str(k) == "GammaRationalQuadraticKernel{float32}(2.0,2.0,0.5)"

    def test_str_vector_parameter(self):
        k = RationalQuadraticKernel(np.array([1.0, 2.0]))
        assert str(k) == "RationalQuadraticKernel{float64}([1.0,2.0],1.0)"

    def test_repr(self):
        assert repr(RationalQuadraticKernel(2.0, 3.0)) == \
            "RationalQuadraticKernel(alpha=2.0, beta=3.0, dtype=float64)"


class TestPropertyFlags:
    def test_family_level(self):
        for k in (RationalQuadraticKernel(), RationalQuadraticKernel(3.0, 0.2)):
            assert k.is_mercer is RationalQuadraticKernel.is_mercer is True
            assert k.is_isotropic is True
            assert k.is_stationary is True
            assert k.is_negdef is False

    def test_negative_definite(self):
        for cls in (PowerKernel, LogKernel):
            assert cls.is_negdef
            assert not cls.is_mercer
            assert cls.is_isotropic

    def test_dot_product_kernels_not_stationary(self):
        for cls in (LinearKernel, PolynomialKernel, ExponentiatedKernel, SigmoidKernel):
            assert not cls.is_stationary
            assert not cls.is_isotropic

    def test_sigmoid_has_no_flags(self):
        k = SigmoidKernel()
        assert not (k.is_mercer or k.is_negdef or k.is_stationary or k.is_isotropic)

    def test_periodic_stationary_not_isotropic(self):
        assert PeriodicKernel.is_stationary
        assert not PeriodicKernel.is_isotropic
        assert PeriodicKernel.is_mercer


class TestSymmetry:
    @pytest.mark.parametrize("k", ISOTROPIC_KERNELS, ids=str)
    def test_pair_symmetry(self, k, X):
        for x, y in zip(X[:-1], X[1:]):
            assert kernel(k, x, y) == kernel(k, y, x)

    @pytest.mark.parametrize("k", ISOTROPIC_KERNELS, ids=str)
    def test_pair_matches_matrix(self, k, X):
        K = kernel_matrix(k, X)
        assert_allclose(K[2, 7], kernel(k, X[2], X[7]), rtol=1e-12)


class TestExponentialFamily:
    def test_aliases(self):
        assert LaplacianKernel is ExponentialKernel
        assert GaussianKernel is SquaredExponentialKernel
        assert RadialBasisKernel is SquaredExponentialKernel

    def test_exponential_formula(self):
        assert_allclose(kernel(ExponentialKernel(0.5), [0.0, 0.0], [3.0, 4.0]), np.exp(-2.5))

    def test_squared_exponential_formula(self):
        assert_allclose(kernel(SquaredExponentialKernel(0.5), [0.0, 0.0], [3.0, 4.0]),
                        np.exp(-12.5))

    def test_gamma_exponential_formula(self):
        assert_allclose(kernel(GammaExponentialKernel(1.0, 0.5), [0.0, 0.0], [3.0, 4.0]),
                        np.exp(-5.0))

    def test_vector_alpha_exponential(self):
        k = ExponentialKernel(np.array([2.0, 1.0]))
        # ‖α ∘ (x - y)‖ = ‖(6, 4)‖
        assert_allclose(kernel(k, [0.0, 0.0], [3.0, 4.0]), np.exp(-np.sqrt(52.0)))

    def test_vector_alpha_gamma_exponential(self):
        alpha = np.array([2.0, 0.5])
        k = GammaExponentialKernel(alpha, 0.5)
        x, y = np.array([1.0, 2.0]), np.array([0.0, 0.0])
        # Reduces to Σ αᵢ^(1/γ)(xᵢ - yᵢ)² raised to γ
        expected = np.exp(-np.sum(alpha ** 2 * (x - y) ** 2) ** 0.5)
        assert_allclose(kernel(k, x, y), expected)

    def test_gamma_validation(self):
        with pytest.raises(ArgumentError):
            GammaExponentialKernel(1.0, 1.5)


class TestMaternKernel:
    def test_zero_distance_is_one(self):
        assert kernel(MaternKernel(2.5, 1.3), [1.0, 2.0], [1.0, 2.0]) == 1.0

    def test_half_integer_is_exponential(self, X):
        # ν = 1/2 gives exp(-‖x - y‖/ρ)
        K_matern = kernel_matrix(MaternKernel(0.5, 2.0), X)
        K_exp = kernel_matrix(ExponentialKernel(0.5), X)
        assert_allclose(K_matern, K_exp, rtol=1e-10)

    def test_large_distance_underflows_to_zero(self):
        value = kernel(MaternKernel(1.5, 1.0), [0.0], [1e4])
        assert value == 0.0

    @pytest.mark.parametrize("nu", [10.0, 30.0, 50.0, 200.0])
    def test_near_zero_distance_large_nu(self, nu):
        value = kernel(MaternKernel(nu), [0.0], [1e-6])
        assert np.isfinite(value)
        assert_allclose(value, 1.0, atol=1e-8)

    def test_tiny_distance(self):
        assert kernel(MaternKernel(3.0), [0.0], [1e-120]) == 1.0

    def test_near_duplicates_stay_bounded(self):
        K = kernel_matrix(MaternKernel(50.0), [[0.0], [1e-6], [1.0]])
        assert np.all(np.isfinite(K))
        assert np.all(K <= 1.0)
        assert_allclose(K[0, 1], 1.0, atol=1e-8)
        assert_allclose(K[0, 2], K[1, 2], rtol=1e-4)

    def test_validation(self):
        with pytest.raises(ArgumentError):
            MaternKernel(nu=0.0)
        with pytest.raises(ArgumentError):
            MaternKernel(rho=-1.0)


class TestDotProductKernels:
    def test_linear(self):
        assert kernel(LinearKernel(2.0, 1.0), [1.0, 2.0], [3.0, 4.0]) == 23.0

    def test_linear_allows_zero_offset(self):
        assert kernel(LinearKernel(1.0, 0.0), [1.0, 2.0], [3.0, 4.0]) == 11.0

    def test_polynomial(self):
        assert kernel(PolynomialKernel(1.0, 1.0, 2), [1.0, 2.0], [3.0, 4.0]) == 144.0

    def test_polynomial_degree_validation(self):
        with pytest.raises(ArgumentError):
            PolynomialKernel(d=2.5)
        with pytest.raises(ArgumentError):
            PolynomialKernel(d=0)

    def test_polynomial_astype_keeps_integer_degree(self):
        k = PolynomialKernel(d=4).astype(np.float32)
        assert k.d == 4
        assert isinstance(k.d, int)

    def test_exponentiated(self):
        assert_allclose(kernel(ExponentiatedKernel(0.5), [1.0, 0.0], [2.0, 5.0]), np.exp(1.0))

    def test_sigmoid(self):
        assert_allclose(kernel(SigmoidKernel(0.1, 0.5), [1.0, 2.0], [3.0, 4.0]), np.tanh(1.6))

    def test_offset_validation(self):
        with pytest.raises(ArgumentError):
            LinearKernel(1.0, -0.5)
        with pytest.raises(ArgumentError):
            SigmoidKernel(0.0)


class TestPeriodicKernel:
    def test_formula(self):
        assert_allclose(kernel(PeriodicKernel(1.0, 2.0), [0.0], [1.0]), np.exp(-1.0))

    def test_periodicity(self):
        k = PeriodicKernel(1.0, 2.0)
        assert_allclose(kernel(k, [0.25], [2.25]), 1.0)

    def test_validation(self):
        with pytest.raises(ArgumentError):
            PeriodicKernel(p=0.0)


class TestNegativeDefiniteKernels:
    def test_power(self):
        assert_allclose(kernel(PowerKernel(0.5), [0.0, 0.0], [3.0, 4.0]), 5.0)

    def test_log(self):
        assert_allclose(kernel(LogKernel(1.0, 1.0), [0.0, 0.0], [3.0, 4.0]), np.log(26.0))

    def test_conditionally_negative_definite(self, X):
        K = kernel_matrix(PowerKernel(0.5), X)
        n = K.shape[0]
        H = np.eye(n) - np.ones((n, n)) / n
        eigenvalues = np.linalg.eigvalsh(H @ K @ H)
        assert np.all(eigenvalues <= 1e-10)

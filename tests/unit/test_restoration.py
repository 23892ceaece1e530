"""Unit tests for TV regularization and denoising based on left finite differences."""

import numpy as np
import pytest
import skimage

import diffl


def _noisy_square(shape=(32, 32), sigma=0.1, seed=0):
    clean = np.zeros(shape)
    clean[8:24, 8:24] = 1.0
    noisy = clean + sigma * np.random.default_rng(seed).standard_normal(shape)
    return clean, noisy


def test_huber():
    t = np.array([0.0, 0.5, 1.0, 3.0])
    assert np.allclose(diffl.huber(t, 1.0), [0.0, 0.125, 0.5, 2.5])
    assert np.allclose(diffl.huber_weights(t, 1.0) * t, [0.0, 0.5, 1.0, 1.0])


@pytest.mark.parametrize("edge", ["zero", "circ"])
def test_tv_regularizer_constant_image(edge):
    reg = diffl.TVRegularizer((4, 5), weight=2.0, edge=edge)
    x = 3 * np.ones((4, 5))
    assert reg.cost(x) == 0
    assert np.allclose(reg.gradient(x), 0)


def test_tv_regularizer_cost():
    reg = diffl.TVRegularizer((3,), delta=0.1)
    # Differences [0, 1, -2] are all in the linear regime of the Huber potential
    x = np.array([0.0, 1.0, -1.0])
    assert np.isclose(reg.cost(x), (0.1 * 1 - 0.005) + (0.1 * 2 - 0.005))


@pytest.mark.parametrize("edge", ["zero", "circ"])
def test_tv_regularizer_gradient(edge):
    rng = np.random.default_rng(1)
    reg = diffl.TVRegularizer((4, 5), dims=[1, 0], weight=0.5, delta=0.3, edge=edge)
    x = rng.standard_normal((4, 5))

    grad = reg.gradient(x)
    assert grad.shape == x.shape

    # Compare with central differences of the cost
    h = 1e-6
    numerical = np.zeros_like(x)
    for idx in np.ndindex(x.shape):
        e = np.zeros_like(x)
        e[idx] = h
        numerical[idx] = (reg.cost(x + e) - reg.cost(x - e)) / (2 * h)
    assert np.allclose(grad, numerical, atol=1e-5)


def test_tv_regularizer_operator():
    reg = diffl.TVRegularizer((4, 5, 2))
    assert reg.dims == [0, 1, 2]
    assert reg.operator.shape == (3 * 40, 40)
    assert diffl.adjoint_mismatch(reg.operator) < 1e-10

    with pytest.raises(ValueError):
        reg.cost(np.zeros((4, 5)))
    with pytest.raises(ValueError):
        diffl.TVRegularizer((4, 5), delta=0)
    with pytest.raises(diffl.UnsupportedEdgeError):
        diffl.TVRegularizer((4, 5), edge="none")


@pytest.mark.parametrize("isotropic", [False, True])
@pytest.mark.parametrize("edge", ["zero", "circ"])
def test_split_bregman_tvd_denoises(isotropic, edge):
    clean, noisy = _noisy_square()

    denoised = diffl.split_bregman_tvd(
        noisy,
        mu=0.1,
        omega=1.0,
        edge=edge,
        isotropic=isotropic,
        max_num_iter=50,
        eps=1e-6,
    )

    assert denoised.shape == noisy.shape
    assert denoised.dtype == noisy.dtype
    assert np.linalg.norm(denoised - clean) < np.linalg.norm(noisy - clean)


def test_split_bregman_tvd_heterogeneous_weight():
    clean, noisy = _noisy_square()
    mu = np.full(noisy.shape, 0.1)
    mu[:, :16] = 1e-6

    denoised = diffl.split_bregman_tvd(noisy, mu=mu, max_num_iter=50, eps=1e-6)

    # Hardly any regularization on the left half
    left_change = np.linalg.norm(denoised[:, :16] - noisy[:, :16])
    right_change = np.linalg.norm(denoised[:, 16:] - noisy[:, 16:])
    assert left_change < right_change


def test_split_bregman_tvd_single_axis():
    # Regularization along axis 1 only does not couple rows
    noisy = np.zeros((4, 16))
    noisy[2] = np.random.default_rng(2).standard_normal(16)

    denoised = diffl.split_bregman_tvd(noisy, mu=0.1, dims=[1], max_num_iter=30)
    assert np.allclose(denoised[:2], 0, atol=1e-8)


def test_split_bregman_tvd_keeps_dtype():
    clean, noisy = _noisy_square()
    img = skimage.img_as_ubyte(np.clip(0.25 + 0.5 * noisy, 0, 1))

    denoised = diffl.split_bregman_tvd(img, mu=0.1, max_num_iter=20, edge="circ")

    assert denoised.dtype == np.uint8
    assert denoised.shape == img.shape
    target = skimage.img_as_ubyte(0.25 + 0.5 * clean).astype(float)
    assert np.linalg.norm(denoised - target) < np.linalg.norm(img - target)


def test_restoration_namespace():
    # Denoising is only offered through the difference operators
    assert not hasattr(diffl, "tvd")
    assert not hasattr(diffl, "TVD")
    assert diffl.split_bregman_tvd.__module__ == "diffl.restoration.split_bregman_tvd"


def test_split_bregman_tvd_verbose(caplog):
    _, noisy = _noisy_square(shape=(8, 8))
    with caplog.at_level("INFO", logger="diffl"):
        diffl.split_bregman_tvd(noisy, mu=0.1, max_num_iter=3, verbose=True)
    assert "energy functional starts" in caplog.text
    assert "Split Bregman iteration 2" in caplog.text

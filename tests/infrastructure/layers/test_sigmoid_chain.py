import unittest
from types import SimpleNamespace

import numpy as np

from kernelnet.infrastructure.kernel import KernelDispatcher
from kernelnet.infrastructure.layers import sigmoid


def sigmoid_np(x: np.ndarray) -> np.ndarray:
    return 1.0 / (1.0 + np.exp(-x))


class TestSigmoidChain(unittest.TestCase):
    def build(self, x: np.ndarray, workers: int = 1):
        depth = x.shape[0] if x.ndim == 3 else None
        upstream = SimpleNamespace(
            width=x.shape[-1], height=x.shape[-2], depth=depth, weights=x, deltas=None
        )
        settings = {"dispatcher": KernelDispatcher(max_workers=workers)}
        first = sigmoid(upstream, settings)
        second = sigmoid(first, settings)
        for layer in (first, second):
            layer.setup_kernels()
        return first, second

    def test_forward_composes(self):
        rng = np.random.default_rng(0)
        x = rng.normal(size=(3, 5))
        first, second = self.build(x)
        first.predict()
        second.predict()
        np.testing.assert_allclose(second.weights, sigmoid_np(sigmoid_np(x)), atol=1e-12)

    def test_backward_matches_finite_difference(self):
        rng = np.random.default_rng(1)
        x = rng.normal(size=(2, 3, 4))
        first, second = self.build(x, workers=2)

        first.predict()
        second.predict()
        # loss = sum(second.weights)
        second.deltas = np.ones_like(second.weights)
        second.compare()
        first.deltas = second.deltas
        first.compare()

        eps = 1e-6
        f = lambda arr: float(np.sum(sigmoid_np(sigmoid_np(arr))))
        grad_fd = np.zeros_like(x)
        for idx in np.ndindex(x.shape):
            x_pos = x.copy()
            x_neg = x.copy()
            x_pos[idx] += eps
            x_neg[idx] -= eps
            grad_fd[idx] = (f(x_pos) - f(x_neg)) / (2.0 * eps)

        np.testing.assert_allclose(first.deltas, grad_fd, rtol=1e-5, atol=1e-7)


if __name__ == "__main__":
    unittest.main()

import unittest
from unittest import TestCase

import numpy as np

from synapgrad.domain import ShapeMismatchError
from synapgrad.infrastructure import MSELoss, mse_loss
from synapgrad.infrastructure.tensor import Tensor


class TestMSELoss(TestCase):
    def test_value(self):
        pred = Tensor((2, 2), [1.0, 2.0, 3.0, 4.0])
        target = Tensor((2, 2), [1.0, 0.0, 3.0, 8.0])
        loss = mse_loss(pred, target)
        self.assertEqual(loss.shape, (1,))
        self.assertAlmostEqual(loss.item(), (0.0 + 4.0 + 0.0 + 16.0) / 4.0)

    def test_zero_when_equal(self):
        t = Tensor((3,), [1.0, -2.0, 0.5])
        self.assertEqual(mse_loss(t, Tensor((3,), [1.0, -2.0, 0.5])).item(), 0.0)

    def test_gradient(self):
        p_np = np.array([[0.5, -1.0, 2.0]])
        t_np = np.array([[1.0, 1.0, 1.0]])
        pred = Tensor.from_numpy(p_np, requires_grad=True)
        target = Tensor.from_numpy(t_np)

        mse_loss(pred, target).backward()

        np.testing.assert_allclose(pred.grad_numpy(), 2.0 * (p_np - t_np) / 3.0)
        np.testing.assert_array_equal(target.grad, 0.0)

    def test_shape_mismatch(self):
        with self.assertRaises(ShapeMismatchError):
            mse_loss(Tensor((2, 1)), Tensor((1, 2)))

    def test_callable_wrapper(self):
        pred = Tensor((2,), [1.0, 3.0])
        target = Tensor((2,), [0.0, 0.0])
        self.assertAlmostEqual(MSELoss()(pred, target).item(), 5.0)


if __name__ == "__main__":
    unittest.main()

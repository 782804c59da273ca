import unittest
from unittest import TestCase

import numpy as np

from synapgrad.domain import ConstructionLengthError
from synapgrad.infrastructure.tensor import Tensor


class TestTensorConstruction(TestCase):
    def test_zero_filled_by_default(self):
        t = Tensor((2, 3))
        self.assertEqual(t.shape, (2, 3))
        self.assertEqual(t.size, 6)
        self.assertEqual(t.ndim, 2)
        np.testing.assert_array_equal(t.data, np.zeros(6))
        np.testing.assert_array_equal(t.grad, np.zeros(6))
        self.assertFalse(t.requires_grad)
        self.assertEqual(t.parents, ())
        self.assertTrue(t.is_leaf)

    def test_int_shape_is_normalized(self):
        self.assertEqual(Tensor(4).shape, (4,))

    def test_explicit_data_is_row_major(self):
        t = Tensor((2, 2), [1.0, 2.0, 3.0, 4.0])
        np.testing.assert_array_equal(t.to_numpy(), [[1.0, 2.0], [3.0, 4.0]])

    def test_data_is_copied(self):
        src = np.array([1.0, 2.0])
        t = Tensor((2,), src)
        src[0] = 99.0
        self.assertEqual(t.data[0], 1.0)

    def test_invalid_shapes_rejected(self):
        for shape in ((), (0,), (2, -1), (2.5,), (True,)):
            with self.subTest(shape=shape):
                with self.assertRaises(ValueError):
                    Tensor(shape)

    def test_data_length_mismatch(self):
        with self.assertRaises(ConstructionLengthError) as cm:
            Tensor((2, 2), [1.0, 2.0, 3.0])
        self.assertEqual(cm.exception.expected, 4)
        self.assertEqual(cm.exception.got, 3)

    def test_ragged_data_is_a_length_error(self):
        with self.assertRaises(ConstructionLengthError) as cm:
            Tensor((2, 2), [[1.0, 2.0], [3.0]])
        self.assertEqual(cm.exception.expected, 4)
        self.assertEqual(cm.exception.got, 3)

    def test_repr_mentions_shape(self):
        self.assertIn("shape=(1,)", repr(Tensor.from_scalar(1.0)))


class TestTensorFactories(TestCase):
    def test_zeros(self):
        t = Tensor.zeros((3, 1), requires_grad=True)
        self.assertEqual(t.shape, (3, 1))
        self.assertTrue(t.requires_grad)
        np.testing.assert_array_equal(t.data, 0.0)

    def test_from_scalar(self):
        t = Tensor.from_scalar(2.5)
        self.assertEqual(t.shape, (1,))
        self.assertEqual(t.item(), 2.5)

    def test_from_numpy_takes_shape(self):
        a = np.arange(6, dtype=np.float32).reshape(3, 2)
        t = Tensor.from_numpy(a)
        self.assertEqual(t.shape, (3, 2))
        self.assertEqual(t.data.dtype, np.float64)
        np.testing.assert_array_equal(t.to_numpy(), a)

    def test_from_numpy_zero_dim(self):
        self.assertEqual(Tensor.from_numpy(np.float64(3.0)).shape, (1,))

    def test_randn_is_seeded_and_small(self):
        a = Tensor.randn((50, 20), rng=np.random.default_rng(0))
        b = Tensor.randn((50, 20), rng=np.random.default_rng(0))
        np.testing.assert_array_equal(a.data, b.data)
        self.assertLess(float(np.std(a.data)), 0.02)
        self.assertGreater(float(np.std(a.data)), 0.005)

    def test_randn_scale(self):
        t = Tensor.randn((200, 50), scale=2.0, rng=np.random.default_rng(1))
        self.assertAlmostEqual(float(np.std(t.data)), 2.0, delta=0.1)


class TestTensorGradState(TestCase):
    def test_detach_copies_data_without_graph(self):
        a = Tensor((2,), [1.0, -2.0], requires_grad=True)
        b = a * a
        d = b.detach()
        self.assertFalse(d.requires_grad)
        self.assertEqual(d.parents, ())
        np.testing.assert_array_equal(d.data, [1.0, 4.0])
        d.data[0] = 9.0
        self.assertEqual(b.data[0], 1.0)

    def test_zero_grad_only_touches_grad(self):
        t = Tensor((3,), [1.0, 2.0, 3.0], requires_grad=True)
        t.grad[:] = 5.0
        t.zero_grad()
        np.testing.assert_array_equal(t.grad, 0.0)
        np.testing.assert_array_equal(t.data, [1.0, 2.0, 3.0])

    def test_set_requires_grad_chains(self):
        t = Tensor((2,))
        self.assertIs(t.set_requires_grad(True), t)
        self.assertTrue(t.requires_grad)

    def test_disabling_requires_grad_detaches(self):
        a = Tensor((2,), requires_grad=True)
        b = a + a
        self.assertEqual(len(b.parents), 2)
        b.requires_grad = False
        self.assertEqual(b.parents, ())
        self.assertTrue(b.is_leaf)

    def test_item_rejects_non_scalar(self):
        with self.assertRaises(ValueError):
            Tensor((2,)).item()


if __name__ == "__main__":
    unittest.main()

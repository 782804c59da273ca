import unittest
from unittest import TestCase, mock

import numpy as np

from synapgrad.domain import ShapeMismatchError
from synapgrad.infrastructure import add, mean, mul, relu, sub, sum as sum_
from synapgrad.infrastructure.tensor import Tensor


def _t(values, shape=None, requires_grad=False):
    a = np.asarray(values, dtype=np.float64)
    return Tensor(shape if shape is not None else a.shape, a, requires_grad=requires_grad)


class TestElementwiseForward(TestCase):
    def setUp(self):
        self.a = _t([[1.0, -2.0], [3.0, 0.5]])
        self.b = _t([[4.0, 5.0], [-6.0, 2.0]])

    def test_add(self):
        np.testing.assert_allclose((self.a + self.b).to_numpy(), [[5.0, 3.0], [-3.0, 2.5]])

    def test_sub(self):
        np.testing.assert_allclose((self.a - self.b).to_numpy(), [[-3.0, -7.0], [9.0, -1.5]])

    def test_mul(self):
        np.testing.assert_allclose((self.a * self.b).to_numpy(), [[4.0, -10.0], [-18.0, 1.0]])

    def test_functional_and_operator_forms_agree(self):
        np.testing.assert_array_equal(add(self.a, self.b).data, (self.a + self.b).data)
        np.testing.assert_array_equal(sub(self.a, self.b).data, (self.a - self.b).data)
        np.testing.assert_array_equal(mul(self.a, self.b).data, (self.a * self.b).data)

    def test_output_keeps_operand_shape(self):
        self.assertEqual((self.a * self.b).shape, (2, 2))

    def test_relu_clamps_negatives_and_zero(self):
        x = _t([-1.0, 0.0, 2.0])
        np.testing.assert_array_equal(relu(x).data, [0.0, 0.0, 2.0])
        np.testing.assert_array_equal(x.relu().data, [0.0, 0.0, 2.0])

    def test_shape_mismatch_raises_before_allocation(self):
        a = _t([1.0, 2.0, 3.0])
        b = _t([[1.0, 2.0, 3.0]])
        for op in (add, sub, mul):
            with self.subTest(op=op.__name__):
                with mock.patch.object(
                    Tensor, "from_numpy", wraps=Tensor.from_numpy
                ) as spy:
                    with self.assertRaises(ShapeMismatchError):
                        op(a, b)
                spy.assert_not_called()

    def test_valid_op_allocates_exactly_one_output(self):
        a = _t([1.0, 2.0, 3.0])
        with mock.patch.object(Tensor, "from_numpy", wraps=Tensor.from_numpy) as spy:
            out = add(a, a)
        spy.assert_called_once()
        np.testing.assert_array_equal(out.data, [2.0, 4.0, 6.0])

    def test_same_size_different_shape_is_rejected(self):
        with self.assertRaises(ShapeMismatchError):
            _t(np.zeros((2, 3))) + _t(np.zeros((3, 2)))

    def test_non_tensor_operand_rejected(self):
        with self.assertRaises(TypeError):
            add(self.a, 1.0)


class TestElementwiseBackward(TestCase):
    def test_add_sub_mul_rules(self):
        a = _t([1.0, 2.0, 3.0], requires_grad=True)
        b = _t([4.0, 5.0, 6.0], requires_grad=True)

        ((a + b) + (a - b) + (a * b)).sum().backward()

        # d/da = 1 + 1 + b ; d/db = 1 - 1 + a
        np.testing.assert_allclose(a.grad, [6.0, 7.0, 8.0])
        np.testing.assert_allclose(b.grad, [1.0, 2.0, 3.0])

    def test_relu_masks_gradient(self):
        x = _t([-1.0, 0.0, 2.0, 3.0], requires_grad=True)
        x.relu().sum().backward()
        np.testing.assert_array_equal(x.grad, [0.0, 0.0, 1.0, 1.0])

    def test_result_requires_grad_only_if_an_input_does(self):
        a = _t([1.0])
        b = _t([2.0])
        out = a + b
        self.assertFalse(out.requires_grad)
        self.assertEqual(out.parents, ())

        b.requires_grad = True
        out = a + b
        self.assertTrue(out.requires_grad)
        self.assertEqual(len(out.parents), 2)


class TestReductions(TestCase):
    def test_sum_forward_and_backward(self):
        x = _t([[1.0, 2.0], [3.0, 4.0]], requires_grad=True)
        s = sum_(x)
        self.assertEqual(s.shape, (1,))
        self.assertEqual(s.item(), 10.0)
        s.backward()
        np.testing.assert_array_equal(x.grad, np.ones(4))

    def test_mean_forward_and_backward(self):
        x = _t([[1.0, 2.0], [3.0, 6.0]], requires_grad=True)
        m = mean(x)
        self.assertEqual(m.shape, (1,))
        self.assertAlmostEqual(m.item(), 3.0)
        m.backward()
        np.testing.assert_allclose(x.grad, np.full(4, 0.25))

    def test_mean_is_a_single_graph_node(self):
        x = _t([1.0, 2.0], requires_grad=True)
        m = x.mean()
        self.assertEqual(len(m.parents), 1)
        self.assertIs(m.parents[0], x)

    def test_sum_of_single_element(self):
        x = _t([7.0], requires_grad=True)
        x.sum().backward()
        np.testing.assert_array_equal(x.grad, [1.0])


if __name__ == "__main__":
    unittest.main()

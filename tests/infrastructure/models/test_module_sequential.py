import unittest
from unittest import TestCase

import numpy as np

from synapgrad.infrastructure import Linear, Module, Parameter, ReLU, Sequential
from synapgrad.infrastructure.tensor import Tensor


class TestModule(TestCase):
    def test_attribute_assignment_registers_parameters(self):
        m = Module()
        m.w = Parameter((2, 2))
        self.assertEqual(list(m.parameters()), [m.w])

    def test_assigning_none_unregisters(self):
        m = Module()
        m.w = Parameter((2,))
        m.w = None
        self.assertEqual(list(m.parameters()), [])

    def test_register_parameter_none_is_noop(self):
        m = Module()
        m.register_parameter("bias", None)
        self.assertEqual(list(m.parameters()), [])

    def test_call_delegates_to_forward(self):
        class Identity(Module):
            def forward(self, x):
                return x

        x = Tensor((2,))
        self.assertIs(Identity()(x), x)

    def test_forward_not_implemented(self):
        with self.assertRaises(NotImplementedError):
            Module()(Tensor((1,)))

    def test_zero_grad_recurses(self):
        outer = Module()
        outer.inner = Linear(2, 2)
        for p in outer.parameters():
            p.grad[:] = 1.0
        outer.zero_grad()
        for p in outer.parameters():
            np.testing.assert_array_equal(p.grad, 0.0)


class TestReLUModule(TestCase):
    def test_has_no_parameters(self):
        self.assertEqual(list(ReLU().parameters()), [])

    def test_forward(self):
        out = ReLU()(Tensor((3,), [-1.0, 0.0, 4.0]))
        np.testing.assert_array_equal(out.data, [0.0, 0.0, 4.0])


class TestSequential(TestCase):
    def setUp(self):
        rng = np.random.default_rng(0)
        self.model = Sequential(Linear(4, 16, rng=rng), ReLU(), Linear(16, 2, rng=rng))

    def test_parameters_in_layer_order(self):
        params = list(self.model.parameters())
        self.assertEqual(len(params), 4)
        self.assertIs(params[0], self.model[0].weight)
        self.assertIs(params[1], self.model[0].bias)
        self.assertIs(params[2], self.model[2].weight)
        self.assertIs(params[3], self.model[2].bias)

    def test_named_parameters(self):
        names = [n for n, _ in self.model.named_parameters()]
        self.assertEqual(names, ["0.weight", "0.bias", "2.weight", "2.bias"])

    def test_container_protocol(self):
        self.assertEqual(len(self.model), 3)
        self.assertIsInstance(self.model[1], ReLU)
        self.assertEqual(len(list(iter(self.model))), 3)
        self.assertEqual(len(self.model.layers()), 3)

    def test_forward_shape(self):
        out = self.model(Tensor((5, 4)))
        self.assertEqual(out.shape, (5, 2))

    def test_add_rejects_non_module(self):
        with self.assertRaises(TypeError):
            self.model.add(object())

    def test_add_rejects_duplicate_name(self):
        seq = Sequential()
        seq.add(ReLU(), name="act")
        with self.assertRaises(ValueError):
            seq.add(ReLU(), name="act")

    def test_summary_lists_layers(self):
        s = self.model.summary()
        self.assertIn("(0): Linear(in_features=4, out_features=16)", s)
        self.assertIn("(2): Linear(in_features=16, out_features=2)", s)


if __name__ == "__main__":
    unittest.main()

import io
import unittest
from contextlib import redirect_stdout
from unittest import TestCase

import numpy as np

from synapgrad.infrastructure import (
    SGD,
    History,
    Linear,
    MSELoss,
    ReLU,
    Sequential,
    mse_loss,
)
from synapgrad.infrastructure.models import make_linear_regression_data
from synapgrad.infrastructure.tensor import Tensor


def _mlp(seed: int = 0) -> Sequential:
    rng = np.random.default_rng(seed)
    return Sequential(Linear(4, 16, rng=rng), ReLU(), Linear(16, 2, rng=rng))


class TestEndToEndTraining(TestCase):
    def test_full_batch_loss_decreases(self):
        x_np, y_np = make_linear_regression_data(32, 4, 2, seed=0)
        x = Tensor.from_numpy(x_np)
        y = Tensor.from_numpy(y_np)

        model = _mlp()
        opt = SGD(model.parameters(), lr=0.05)

        losses = []
        for _ in range(200):
            opt.zero_grad()
            loss = mse_loss(model(x), y)
            loss.backward()
            opt.step()
            losses.append(loss.item())

        for t in range(len(losses) - 10):
            self.assertLess(losses[t + 10], losses[t])
        self.assertLess(losses[-1], 0.5 * losses[0])

    def test_zeroing_gives_identical_grads_for_identical_forward(self):
        x = Tensor.from_numpy(np.random.default_rng(1).standard_normal((3, 4)))
        y = Tensor.from_numpy(np.zeros((3, 2)))
        model = _mlp()

        grads = []
        for _ in range(2):
            model.zero_grad()
            mse_loss(model(x), y).backward()
            grads.append([p.grad.copy() for p in model.parameters()])

        for g0, g1 in zip(*grads):
            np.testing.assert_array_equal(g0, g1)


class TestModelHelpers(TestCase):
    def test_predict_accepts_arrays_and_runs_no_backward(self):
        model = _mlp()
        out = model.predict(np.ones((5, 4)))
        self.assertEqual(out.shape, (5, 2))
        for p in model.parameters():
            np.testing.assert_array_equal(p.grad, 0.0)

    def test_train_on_batch_returns_loss_and_updates(self):
        model = _mlp()
        opt = SGD(model.parameters(), lr=0.05)
        x, y = make_linear_regression_data(8, 4, 2, seed=2)
        w_before = model[0].weight.to_numpy()

        logs = model.train_on_batch(x, y, loss=MSELoss(), optimizer=opt)

        self.assertEqual(set(logs), {"loss"})
        self.assertIsInstance(logs["loss"], float)
        self.assertFalse(np.array_equal(w_before, model[0].weight.to_numpy()))

    def test_fit_returns_history_and_reports(self):
        model = _mlp()
        opt = SGD(model.parameters(), lr=0.05)
        x, y = make_linear_regression_data(64, 4, 2, seed=0)

        buf = io.StringIO()
        with redirect_stdout(buf):
            hist = model.fit(
                x,
                y,
                loss=mse_loss,
                optimizer=opt,
                batch_size=16,
                epochs=20,
                rng=np.random.default_rng(0),
            )

        self.assertIsInstance(hist, History)
        self.assertEqual(hist.epoch, list(range(20)))
        self.assertEqual(len(hist.history["loss"]), 20)
        self.assertLess(hist.history["loss"][-1], hist.history["loss"][0])

        lines = buf.getvalue().strip().splitlines()
        self.assertEqual(len(lines), 20)
        self.assertTrue(lines[0].startswith("Epoch 1/20 - loss: "))
        self.assertIn("seen: 64", lines[0])

    def test_fit_silent_when_verbose_zero(self):
        model = _mlp()
        opt = SGD(model.parameters(), lr=0.01)
        x, y = make_linear_regression_data(10, 4, 2)

        buf = io.StringIO()
        with redirect_stdout(buf):
            model.fit(x, y, loss=mse_loss, optimizer=opt, batch_size=4, verbose=0)
        self.assertEqual(buf.getvalue(), "")

    def test_fit_rejects_bad_arguments(self):
        model = _mlp()
        opt = SGD(model.parameters(), lr=0.01)
        x, y = make_linear_regression_data(10, 4, 2)
        with self.assertRaises(ValueError):
            model.fit(x, y, loss=mse_loss, optimizer=opt, epochs=0)
        with self.assertRaises(ValueError):
            model.fit(x, y, loss=mse_loss, optimizer=opt, batch_size=0)
        with self.assertRaises(ValueError):
            model.fit(x, y[:5], loss=mse_loss, optimizer=opt, verbose=0)


if __name__ == "__main__":
    unittest.main()

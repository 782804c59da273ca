#!/usr/bin/env python3
"""
Train a small MLP to fit a random linear target, y = x @ A + b.

Every step draws a fresh mini-batch, runs forward / MSE / backward / SGD, and
the loss is printed every 10 steps. The target is exactly representable, so
the printed loss should trend down.
"""

import os
import sys

# Ensure repo_root/src is importable when running this file directly:
# repo_root/
#   src/synapgrad/...
#   scripts/train_linear_target.py
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC_DIR = os.path.join(ROOT_DIR, "src")

if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

import numpy as np

from synapgrad.infrastructure.tensor._tensor import Tensor
from synapgrad.infrastructure._linear import Linear
from synapgrad.infrastructure._activations import ReLU
from synapgrad.infrastructure._losses import mse_loss
from synapgrad.infrastructure.models import Sequential, make_linear_regression_data
from synapgrad.infrastructure.optimizers import SGD

BATCH = 8
IN_FEATURES = 4
HIDDEN = 16
OUT_FEATURES = 2
STEPS = 100
LR = 0.05
SEED = 42


def main() -> None:
    rng = np.random.default_rng(SEED)

    # ----------------------------
    # Build model
    # ----------------------------
    model = Sequential(
        Linear(IN_FEATURES, HIDDEN, rng=rng),
        ReLU(),
        Linear(HIDDEN, OUT_FEATURES, rng=rng),
    )
    opt = SGD(model.parameters(), lr=LR)

    # ----------------------------
    # Data: one fresh batch per step
    # ----------------------------
    x_all, y_all = make_linear_regression_data(
        BATCH * STEPS, IN_FEATURES, OUT_FEATURES, seed=SEED
    )

    for step in range(STEPS):
        lo = step * BATCH
        x = Tensor.from_numpy(x_all[lo : lo + BATCH])
        y = Tensor.from_numpy(y_all[lo : lo + BATCH])

        preds = model(x)
        loss = mse_loss(preds, y)

        model.zero_grad()
        loss.backward()
        opt.step()

        if step % 10 == 0:
            print(f"Epoch {step} loss={loss.item():.6f}")

    print("Training done.")


if __name__ == "__main__":
    main()

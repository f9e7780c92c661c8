"""
Tests for the training loop: loss, SGD update, logging and the CLI.
"""

import logging

import pytest

from scalargrad.engine import Value
from scalargrad.nn import MLP
from scalargrad.train import TrainConfig, loss, main, render_decision_boundary, sgd_step, train

XS = [[1.0, 1.0], [-1.0, -1.0], [2.0, 1.0], [-1.0, -2.0]]
YS = [1.0, -1.0, 1.0, -1.0]


@pytest.fixture
def linear_model():
    """A single linear neuron with every parameter at zero."""
    model = MLP(2, [1])
    for p in model.parameters():
        p.data = 0.0
    return model


def test_loss_at_zero_weights(linear_model):
    total_loss, acc = loss(linear_model, XS, YS, alpha=0.0)
    # every score is 0, so every hinge term is relu(1 - 0) = 1
    assert total_loss.data == pytest.approx(1.0)
    # 0 > 0 is False, so only the negative labels count as correct
    assert acc == pytest.approx(0.5)


def test_loss_includes_l2_term(linear_model):
    for p in linear_model.parameters():
        p.data = 1.0
    without_reg, _ = loss(linear_model, XS, YS, alpha=0.0)
    with_reg, _ = loss(linear_model, XS, YS, alpha=0.5)
    assert with_reg.data - without_reg.data == pytest.approx(0.5 * 3)


def test_loss_rejects_mismatched_labels(linear_model):
    with pytest.raises(ValueError):
        loss(linear_model, XS, YS[:2])
    with pytest.raises(ValueError):
        loss(linear_model, [], [])


def test_sgd_step_moves_against_gradient():
    p = Value(1.0)
    p.grad = 2.0
    sgd_step([p], 0.25)
    assert p.data == 0.5


def test_train_reduces_loss_and_logs(linear_model, caplog):
    config = TrainConfig(steps=20, alpha=0.0, lr_start=0.1, lr_decay=0.0)
    with caplog.at_level(logging.INFO, logger="scalargrad.train"):
        history = train(linear_model, XS, YS, config)

    assert len(history) == 20
    assert history[-1][0] < history[0][0]
    assert history[-1][1] == 1.0
    assert "step 0 loss 1.000, accuracy 50.00%" in caplog.text


def test_first_step_matches_hand_computed_update(linear_model):
    config = TrainConfig(steps=1, alpha=0.0, lr_start=0.1, lr_decay=0.0)
    train(linear_model, XS, YS, config)
    b, w0, w1 = linear_model.parameters()
    # d(loss)/dw = -mean(y_i * x_i) = -(5/4, 5/4); bias gradient is -mean(y) = 0
    assert w0.data == pytest.approx(0.125)
    assert w1.data == pytest.approx(0.125)
    assert b.data == pytest.approx(0.0)


def test_render_decision_boundary(linear_model):
    b, w0, w1 = linear_model.parameters()
    w0.data = 1.0
    grid = render_decision_boundary(linear_model, bound=2).splitlines()
    assert len(grid) == 4
    # x runs from -2 to 1 across each row, so only the right half is positive
    assert grid[0] == ". . . *"
    assert all(row == grid[0] for row in grid)


def test_main_trains_from_csv(tmp_path, caplog):
    path = tmp_path / "moons.csv"
    path.write_text("x,y,label\n1.0,1.0,1\n-1.0,-1.0,-1\n")
    with caplog.at_level(logging.INFO, logger="scalargrad.train"):
        assert main([str(path), "--steps", "2", "--seed", "0"]) == 0
    assert "step 1 loss" in caplog.text


def test_main_reports_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.csv")]) == 1

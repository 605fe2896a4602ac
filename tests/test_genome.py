"""
Tests for neuro_snake/evolution/genome.py

Feed-forward inference and per-element mutation.
"""

import numpy as np
import pytest

from neuro_snake.evolution.genome import NetworkGenome, ShapeMismatch, sigmoid


def zero_genome(n_inputs=4, n_hidden=3, n_outputs=4):
    return NetworkGenome(
        weights_ih=np.zeros((n_hidden, n_inputs)),
        weights_ho=np.zeros((n_outputs, n_hidden)),
        bias_h=np.zeros(n_hidden),
        bias_o=np.zeros(n_outputs),
    )


class TestConstruction:
    """Tests for genome creation."""

    def test_random_shapes(self):
        rng = np.random.default_rng(42)
        genome = NetworkGenome.random(rng, 9, 5, 4)

        assert genome.weights_ih.shape == (5, 9)
        assert genome.weights_ho.shape == (4, 5)
        assert genome.bias_h.shape == (5,)
        assert genome.bias_o.shape == (4,)
        assert genome.shape == (9, 5, 4)
        assert genome.num_parameters == 5 * 9 + 4 * 5 + 5 + 4

    def test_random_values_in_unit_range(self):
        rng = np.random.default_rng(42)
        genome = NetworkGenome.random(rng, 25, 10, 4)
        params = genome.parameters()

        assert np.all(params >= -1.0)
        assert np.all(params <= 1.0)

    def test_default_learning_rate(self):
        assert zero_genome().learning_rate == 0.1

    def test_random_rejects_empty_layers(self):
        rng = np.random.default_rng(42)
        with pytest.raises(ValueError):
            NetworkGenome.random(rng, 4, 0, 4)

    def test_mismatched_bias_raises(self):
        with pytest.raises(ValueError):
            NetworkGenome(
                weights_ih=np.zeros((3, 4)),
                weights_ho=np.zeros((4, 3)),
                bias_h=np.zeros(2),
                bias_o=np.zeros(4),
            )

    def test_mismatched_hidden_layer_raises(self):
        with pytest.raises(ValueError):
            NetworkGenome(
                weights_ih=np.zeros((3, 4)),
                weights_ho=np.zeros((4, 5)),
                bias_h=np.zeros(3),
                bias_o=np.zeros(4),
            )

    def test_arrays_are_read_only(self):
        genome = zero_genome()
        with pytest.raises(ValueError):
            genome.weights_ih[0, 0] = 1.0

    def test_construction_copies_input_arrays(self):
        weights = np.zeros((3, 4))
        genome = NetworkGenome(
            weights_ih=weights,
            weights_ho=np.zeros((4, 3)),
            bias_h=np.zeros(3),
            bias_o=np.zeros(4),
        )
        weights[0, 0] = 7.0
        assert genome.weights_ih[0, 0] == 0.0


class TestForward:
    """Tests for forward inference."""

    def test_output_shape_and_range(self):
        """A 4-input, 3-hidden, 4-output genome returns four values in [0, 1]."""
        rng = np.random.default_rng(42)
        genome = NetworkGenome.random(rng, 4, 3, 4)

        output = genome.forward(np.array([1.0, 0.0, 2.0, 3.0]))

        assert output.shape == (4,)
        assert np.all(output >= 0.0)
        assert np.all(output <= 1.0)

    def test_deterministic(self):
        rng = np.random.default_rng(42)
        genome = NetworkGenome.random(rng, 16, 8, 4)
        inputs = rng.uniform(0, 3, size=16)

        first = genome.forward(inputs)
        second = genome.forward(inputs)

        assert np.array_equal(first, second)

    def test_zero_genome_outputs_half(self):
        output = zero_genome().forward(np.ones(4))
        assert np.allclose(output, 0.5)

    def test_matches_manual_computation(self):
        rng = np.random.default_rng(7)
        genome = NetworkGenome.random(rng, 5, 3, 4)
        x = rng.uniform(0, 3, size=5)

        hidden = 1.0 / (1.0 + np.exp(-(genome.weights_ih @ x + genome.bias_h)))
        expected = 1.0 / (1.0 + np.exp(-(genome.weights_ho @ hidden + genome.bias_o)))

        assert np.allclose(genome.forward(x), expected)

    def test_accepts_lists(self):
        output = zero_genome().forward([0, 1, 2, 3])
        assert output.shape == (4,)

    @pytest.mark.parametrize("length", [0, 3, 5, 16])
    def test_wrong_length_raises(self, length):
        genome = zero_genome()
        with pytest.raises(ShapeMismatch):
            genome.forward(np.zeros(length))

    def test_shape_mismatch_is_value_error(self):
        assert issubclass(ShapeMismatch, ValueError)

    def test_sigmoid(self):
        assert sigmoid(np.array([0.0]))[0] == 0.5
        assert sigmoid(np.array([50.0]))[0] > 0.999


class TestMutation:
    """Tests for per-element mutation."""

    def test_parent_unchanged(self):
        rng = np.random.default_rng(42)
        parent = NetworkGenome.random(rng, 16, 8, 4)
        before = parent.parameters()

        parent.mutate(rng, 0.5)

        assert np.array_equal(parent.parameters(), before)

    def test_returns_new_genome_with_same_shape(self):
        rng = np.random.default_rng(42)
        parent = NetworkGenome.random(rng, 16, 8, 4)
        child = parent.mutate(rng)

        assert child is not parent
        assert child.shape == parent.shape
        assert child.learning_rate == parent.learning_rate

    def test_rate_zero_copies(self):
        rng = np.random.default_rng(42)
        parent = NetworkGenome.random(rng, 16, 8, 4)
        child = parent.mutate(rng, 0.0)

        assert np.array_equal(child.parameters(), parent.parameters())

    def test_rate_one_replaces_everything(self):
        rng = np.random.default_rng(42)
        parent = NetworkGenome.random(rng, 16, 8, 4)
        child = parent.mutate(rng, 1.0)

        assert np.all(child.parameters() != parent.parameters())

    def test_mutated_values_stay_in_unit_range(self):
        rng = np.random.default_rng(42)
        genome = NetworkGenome.random(rng, 16, 8, 4)
        for _ in range(10):
            genome = genome.mutate(rng, 0.3)
        params = genome.parameters()

        assert np.all(params >= -1.0)
        assert np.all(params <= 1.0)

    def test_fraction_changed_converges_to_rate(self):
        rng = np.random.default_rng(42)
        parent = NetworkGenome.random(rng, 100, 50, 4)
        original = parent.parameters()

        fractions = [
            np.mean(parent.mutate(rng, 0.1).parameters() != original)
            for _ in range(20)
        ]

        assert abs(np.mean(fractions) - 0.1) < 0.01

    @pytest.mark.parametrize("rate", [-0.1, 1.5])
    def test_invalid_rate_raises(self, rate):
        rng = np.random.default_rng(42)
        with pytest.raises(ValueError):
            zero_genome().mutate(rng, rate)

    def test_same_seed_same_child(self):
        parent = NetworkGenome.random(np.random.default_rng(1), 9, 4, 4)
        a = parent.mutate(np.random.default_rng(3))
        b = parent.mutate(np.random.default_rng(3))

        assert np.array_equal(a.parameters(), b.parameters())


class TestRepr:
    def test_repr(self):
        assert repr(zero_genome()) == "NetworkGenome(inputs=4, hidden=3, outputs=4)"

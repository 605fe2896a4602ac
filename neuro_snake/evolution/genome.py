"""
neuro_snake/evolution/genome.py

Genome representation for neuroevolution.

A genome is the full set of weights and biases of a one-hidden-layer
feed-forward network. The genome is the genotype; the snake's movement
on the grid is the phenotype.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import numpy as np


class ShapeMismatch(ValueError):
    """Input vector length does not match the genome's input count."""


def sigmoid(x: np.ndarray) -> np.ndarray:
    return 1.0 / (1.0 + np.exp(-x))


def _frozen(values: np.ndarray) -> np.ndarray:
    arr = np.array(values, dtype=np.float64)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class NetworkGenome:
    """
    Weights of a fixed-shape feed-forward network.

    Layout:
    - weights_ih: (n_hidden, n_inputs)
    - weights_ho: (n_outputs, n_hidden)
    - bias_h: (n_hidden,)
    - bias_o: (n_outputs,)

    Arrays are read-only. Variation never edits a genome in place;
    mutate() always returns a new one.
    """

    weights_ih: np.ndarray
    weights_ho: np.ndarray
    bias_h: np.ndarray
    bias_o: np.ndarray
    learning_rate: float = 0.1  # Only meaningful for gradient training, unused here

    def __post_init__(self):
        for name in ("weights_ih", "weights_ho", "bias_h", "bias_o"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))

        n_hidden, n_inputs = self.weights_ih.shape
        if self.weights_ho.ndim != 2 or self.weights_ho.shape[1] != n_hidden:
            raise ValueError(
                f"weights_ho must have {n_hidden} columns, got shape {self.weights_ho.shape}"
            )
        if self.bias_h.shape != (n_hidden,):
            raise ValueError(f"bias_h must have shape ({n_hidden},), got {self.bias_h.shape}")
        if self.bias_o.shape != (self.weights_ho.shape[0],):
            raise ValueError(
                f"bias_o must have shape ({self.weights_ho.shape[0]},), got {self.bias_o.shape}"
            )

    # ==================== Shape ====================

    @property
    def n_inputs(self) -> int:
        return self.weights_ih.shape[1]

    @property
    def n_hidden(self) -> int:
        return self.weights_ih.shape[0]

    @property
    def n_outputs(self) -> int:
        return self.weights_ho.shape[0]

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self.n_inputs, self.n_hidden, self.n_outputs

    @property
    def num_parameters(self) -> int:
        return (
            self.weights_ih.size + self.weights_ho.size
            + self.bias_h.size + self.bias_o.size
        )

    def parameters(self) -> np.ndarray:
        """All weights and biases as one flat (writable) vector."""
        return np.concatenate([
            self.weights_ih.ravel(),
            self.weights_ho.ravel(),
            self.bias_h,
            self.bias_o,
        ])

    # ==================== Inference ====================

    def forward(self, inputs: np.ndarray) -> np.ndarray:
        """
        Feed inputs through the network.

        output = sigmoid(W_ho . sigmoid(W_ih . x + B_h) + B_o)

        Raises ShapeMismatch if the input length is not n_inputs.
        """
        x = np.asarray(inputs, dtype=np.float64).ravel()
        if x.shape[0] != self.n_inputs:
            raise ShapeMismatch(
                f"Expected {self.n_inputs} inputs, got {x.shape[0]}"
            )

        hidden = sigmoid(self.weights_ih @ x + self.bias_h)
        return sigmoid(self.weights_ho @ hidden + self.bias_o)

    # ==================== Variation ====================

    def mutate(self, rng: np.random.Generator, mutation_rate: float = 0.1) -> "NetworkGenome":
        """
        Return a mutated copy of this genome.

        Each element is, independently with probability mutation_rate,
        replaced by a fresh uniform draw in [-1, 1].
        """
        if not 0.0 <= mutation_rate <= 1.0:
            raise ValueError(f"mutation_rate must be in [0, 1], got {mutation_rate}")

        def mutate_array(values: np.ndarray) -> np.ndarray:
            mask = rng.random(values.shape) < mutation_rate
            fresh = rng.uniform(-1.0, 1.0, size=values.shape)
            return np.where(mask, fresh, values)

        return NetworkGenome(
            weights_ih=mutate_array(self.weights_ih),
            weights_ho=mutate_array(self.weights_ho),
            bias_h=mutate_array(self.bias_h),
            bias_o=mutate_array(self.bias_o),
            learning_rate=self.learning_rate,
        )

    @classmethod
    def random(
        cls,
        rng: np.random.Generator,
        n_inputs: int,
        n_hidden: int,
        n_outputs: int,
    ) -> "NetworkGenome":
        """Generate a genome with every element uniform in [-1, 1]."""
        if min(n_inputs, n_hidden, n_outputs) < 1:
            raise ValueError(
                f"Layer sizes must be positive, got ({n_inputs}, {n_hidden}, {n_outputs})"
            )
        return cls(
            weights_ih=rng.uniform(-1.0, 1.0, size=(n_hidden, n_inputs)),
            weights_ho=rng.uniform(-1.0, 1.0, size=(n_outputs, n_hidden)),
            bias_h=rng.uniform(-1.0, 1.0, size=n_hidden),
            bias_o=rng.uniform(-1.0, 1.0, size=n_outputs),
        )

    def __repr__(self) -> str:
        return (
            f"NetworkGenome(inputs={self.n_inputs}, "
            f"hidden={self.n_hidden}, "
            f"outputs={self.n_outputs})"
        )

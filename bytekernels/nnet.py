"""Back-propagation neural net that learns 5x7 input patterns.

Each pattern maps a 5x7 grid of inputs to an 8-bit output. Training runs
the delta rule with a momentum term until every output is within STOP of
its target, or until some error reaches 16 or more.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path

__all__ = [
    "IN_X_SIZE",
    "IN_Y_SIZE",
    "IN_SIZE",
    "MID_SIZE",
    "OUT_SIZE",
    "MAXPATS",
    "BETA",
    "ALPHA",
    "STOP",
    "TrainingState",
    "PatternSet",
    "read_patterns",
    "parse_patterns",
    "NeuralNet",
]

IN_X_SIZE = 5
IN_Y_SIZE = 7
IN_SIZE = IN_X_SIZE * IN_Y_SIZE
MID_SIZE = 8
OUT_SIZE = 8
MAXPATS = 10
BETA = 0.09
ALPHA = 0.09
STOP = 0.1

_ROW_VALUES = 5
_INPUT_HIGH = 0.9
_INPUT_LOW = 0.1
_ERROR_LIMIT = 16.0
_WEIGHT_RANGE = 100000


class TrainingState(IntEnum):
    """Outcome of checking the output errors after a pass."""

    ERROR = -1
    NOT_LEARNED = 0
    LEARNED = 1


@dataclass
class PatternSet:
    """Input and desired output patterns read from a data file."""

    x_size: int
    y_size: int
    out_size: int
    inputs: list[list[float]] = field(default_factory=list)
    outputs: list[list[float]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.inputs)


def _clamp_input(value: float) -> float:
    if value >= _INPUT_HIGH:
        value = _INPUT_HIGH
    if value <= _INPUT_LOW:
        value = _INPUT_LOW
    return value


def parse_patterns(text: str) -> PatternSet:
    """Parse pattern data whose numbers are separated by commas or blanks.

    The data holds the input x size, input y size and output size, then the
    number of patterns (at most MAXPATS are kept), then for every pattern
    y size rows of five inputs followed by eight outputs. Inputs are clamped
    to the range 0.1..0.9.
    """
    stripped = text.strip()
    tokens = re.split(r"[\s,]+", stripped) if stripped else []
    try:
        numbers = [int(token) for token in tokens]
    except ValueError as exc:
        raise ValueError(f"malformed number: {exc}") from None
    stream = iter(numbers)

    def take(count: int, what: str) -> list[int]:
        values = [value for _, value in zip(range(count), stream)]
        if len(values) != count:
            raise ValueError(
                f"should read {count} items in {what}; did read {len(values)}"
            )
        return values

    x_size, y_size, out_size = take(3, "line one")
    (count,) = take(1, "line two")
    count = max(0, min(count, MAXPATS))

    patterns = PatternSet(x_size=x_size, y_size=y_size, out_size=out_size)
    for patt in range(count):
        inputs = [0.0] * IN_SIZE
        for row in range(y_size):
            values = take(_ROW_VALUES, f"input row {row} of pattern {patt}")
            start = row * x_size
            if start < 0 or start + _ROW_VALUES > IN_SIZE:
                raise ValueError(
                    f"input row {row} of pattern {patt} falls outside "
                    f"the {IN_SIZE} inputs"
                )
            inputs[start : start + _ROW_VALUES] = [float(v) for v in values]
        patterns.inputs.append([_clamp_input(v) for v in inputs])
        outputs = take(OUT_SIZE, f"outputs of pattern {patt}")
        patterns.outputs.append([float(v) for v in outputs])
    return patterns


def read_patterns(path) -> PatternSet:
    """Read and parse a pattern data file."""
    return parse_patterns(Path(path).read_text())


def _sigmoid(x: float) -> float:
    try:
        return 1.0 / (1.0 + math.exp(-x))
    except OverflowError:
        return 0.0


def _zeros(rows: int, cols: int) -> list[list[float]]:
    return [[0.0] * cols for _ in range(rows)]


class NeuralNet:
    """A three-layer net with 35 inputs, 8 middle and 8 output neurodes.

    Weights start at zero; train() begins from fresh random weights drawn
    from rng, which must provide randrange().
    """

    def __init__(self, patterns: PatternSet, rng) -> None:
        self.patterns = patterns
        self.rng = rng
        self.mid_weights = _zeros(MID_SIZE, IN_SIZE)
        self.out_weights = _zeros(OUT_SIZE, MID_SIZE)
        self.mid_out = [0.0] * MID_SIZE
        self.out_out = [0.0] * OUT_SIZE
        self.mid_error = [0.0] * MID_SIZE
        self.out_error = [0.0] * OUT_SIZE
        self.mid_change = _zeros(MID_SIZE, IN_SIZE)
        self.out_change = _zeros(OUT_SIZE, MID_SIZE)
        self.mid_cum_change = _zeros(MID_SIZE, IN_SIZE)
        self.out_cum_change = _zeros(OUT_SIZE, MID_SIZE)
        count = len(patterns)
        self.tot_out_error = [0.0] * count
        self.avg_out_error = [0.0] * count
        self.worst_error = 0.0
        self.average_error = 0.0
        self.iteration_count = 0
        self.passes = 0
        self.state = TrainingState.NOT_LEARNED

    def randomize_weights(self) -> None:
        """Draw new random weights for both layers."""
        for row in self.mid_weights:
            for i in range(IN_SIZE):
                value = self.rng.randrange(_WEIGHT_RANGE) / 100000.0 - 0.5
                row[i] = value / 2
        for row in self.out_weights:
            for i in range(MID_SIZE):
                value = self.rng.randrange(_WEIGHT_RANGE) / 10000.0 - 0.5
                row[i] = value / 2

    def zero_changes(self) -> None:
        """Clear the weight-change and accumulated-change arrays."""
        for grid in (
            self.mid_change,
            self.mid_cum_change,
            self.out_change,
            self.out_cum_change,
        ):
            for row in grid:
                row[:] = [0.0] * len(row)

    def _move_changes(self) -> None:
        for change, cum in (
            (self.mid_change, self.mid_cum_change),
            (self.out_change, self.out_cum_change),
        ):
            for change_row, cum_row in zip(change, cum):
                change_row[:] = cum_row
                cum_row[:] = [0.0] * len(cum_row)

    def forward(self, patt: int) -> list[float]:
        """Run pattern patt through the net; return the output activations."""
        inputs = self.patterns.inputs[patt]
        for n, weights in enumerate(self.mid_weights):
            total = 0.0
            for w, x in zip(weights, inputs):
                total += w * x
            self.mid_out[n] = _sigmoid(total)
        for n, weights in enumerate(self.out_weights):
            total = 0.0
            for w, x in zip(weights, self.mid_out):
                total += w * x
            self.out_out[n] = _sigmoid(total)
        return list(self.out_out)

    def backward(self, patt: int) -> None:
        """Propagate the errors of pattern patt back and adjust the weights.

        Uses the activations left by the last forward pass.
        """
        targets = self.patterns.outputs[patt]
        inputs = self.patterns.inputs[patt]

        worst = 0.0
        total = 0.0
        for n in range(OUT_SIZE):
            error = targets[n] - self.out_out[n]
            self.out_error[n] = error
            total += abs(error)
            worst = max(worst, abs(error))
        self.avg_out_error[patt] = total / OUT_SIZE
        self.tot_out_error[patt] = worst

        for n in range(MID_SIZE):
            total = 0.0
            for i in range(OUT_SIZE):
                total += self.out_weights[i][n] * self.out_error[i]
            out = self.mid_out[n]
            self.mid_error[n] = out * (1 - out) * total

        for n in range(OUT_SIZE):
            for w in range(MID_SIZE):
                delta = BETA * self.out_error[n] * self.mid_out[w]
                delta += ALPHA * self.out_change[n][w]
                self.out_weights[n][w] += delta
                self.out_cum_change[n][w] += delta

        for n in range(MID_SIZE):
            for w in range(IN_SIZE):
                delta = BETA * self.mid_error[n] * inputs[w]
                delta += ALPHA * self.mid_change[n][w]
                self.mid_weights[n][w] += delta
                self.mid_cum_change[n][w] += delta

    def check_out_error(self) -> TrainingState:
        """Record the worst and average pass errors and judge the pass."""
        count = len(self.patterns)
        self.worst_error = max(self.tot_out_error, default=0.0)
        self.worst_error = max(self.worst_error, 0.0)
        self.average_error = sum(self.avg_out_error) / count if count else 0.0
        if any(error >= _ERROR_LIMIT for error in self.tot_out_error):
            return TrainingState.ERROR
        if count and self.worst_error >= STOP:
            return TrainingState.NOT_LEARNED
        return TrainingState.LEARNED

    def train(self) -> int:
        """Train from fresh random weights; return the number of passes.

        Stops when the net has learned every pattern or an error reaches
        16; the outcome is left in the state attribute.
        """
        self.randomize_weights()
        self.zero_changes()
        self.iteration_count = 1
        self.passes = 0
        self.state = TrainingState.NOT_LEARNED
        while self.state == TrainingState.NOT_LEARNED:
            for patt in range(len(self.patterns)):
                self.worst_error = 0.0
                self._move_changes()
                self.forward(patt)
                self.backward(patt)
                self.iteration_count += 1
            self.passes += 1
            self.state = self.check_out_error()
        return self.passes
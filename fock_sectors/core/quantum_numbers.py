"""
Quantum Numbers for fock-sectors
================================

Evaluation of conserved quantities on states, and the keyed
collections that turn quantum-number vectors into block indices.

Evaluation:
  qn_k(s) = <s| Q_k |s>   for each conserved operator Q_k

Keying policies:
  - 'tolerant': ordered map with component-wise comparison
                a < b  iff  a < b - eps (lexicographic over components);
                the first vector seen is the canonical key of its block
  - 'rounded':  exact dict on components rounded to a fixed number of
                decimals

The tolerant comparison is not transitive near the tolerance
boundary. Quantum numbers that are integers or half-integers (particle
number, Sz, ...) are far away from it.

Author: Masamichi Iizumi, Tamaki Iizumi
"""

import numpy as np
from typing import Dict, List, Optional, Sequence, Tuple

from .fundamental_operators import FundamentalOperatorSet
from .operators import ManyBodyOperator, OperatorMatrix


QuantumNumbers = Tuple[float, ...]


# =============================================================================
# Evaluator
# =============================================================================

class QuantumNumberEvaluator:
    """
    Compute the quantum-number vector of a state.

    Args:
        qn_operators: Conserved quantities, as expressions or compiled
                      OperatorMatrix objects
        fops: Fundamental operator set (needed to compile expressions)

    Example:
        >>> ev = QuantumNumberEvaluator([n("a") + n("b")], fops)
        >>> ev.evaluate_fock_state(3)
        (2.0,)
    """

    def __init__(self, qn_operators: Sequence, fops: FundamentalOperatorSet):
        self.fops = fops
        self.dim = fops.dimension()
        self.operators: List[OperatorMatrix] = []
        for op in qn_operators:
            if isinstance(op, ManyBodyOperator):
                op = OperatorMatrix(op, fops)
            elif not isinstance(op, OperatorMatrix):
                raise TypeError(f"Quantum number must be ManyBodyOperator or OperatorMatrix, got {type(op).__name__}")
            self.operators.append(op)

    def __len__(self) -> int:
        return len(self.operators)

    def evaluate(self, vector: np.ndarray) -> QuantumNumbers:
        """
        <v|Q_k|v> for every operator.

        Vectors with a norm different from one (e.g. a basis vector
        with a fermionic sign) are normalized first.
        """
        vector = np.asarray(vector, dtype=np.float64)
        norm2 = float(np.dot(vector, vector))
        if norm2 == 0.0:
            raise ValueError("Cannot evaluate quantum numbers of the null vector")
        return tuple(float(np.dot(vector, op(vector))) / norm2 for op in self.operators)

    def evaluate_fock_state(self, f: int) -> QuantumNumbers:
        """Quantum numbers of the single-amplitude state |f>."""
        vec = np.zeros(self.dim, dtype=np.float64)
        vec[f] = 1.0
        return self.evaluate(vec)


# =============================================================================
# Keying policies
# =============================================================================

def tolerant_less(v1: Sequence[float], v2: Sequence[float], eps: float = 1e-8) -> bool:
    """Lexicographic comparison with absolute tolerance eps per component."""
    for a, b in zip(v1, v2):
        if a < b - eps:
            return True
        if b < a - eps:
            return False
    return False


class TolerantKeyMap:
    """
    Sorted list of canonical quantum-number vectors with binary search.

    Two vectors are the same key when neither is tolerant_less than
    the other.
    """

    policy = "tolerant"

    def __init__(self, eps: float = 1e-8):
        self.eps = eps
        self._keys: List[QuantumNumbers] = []
        self._blocks: List[int] = []

    def _lower_bound(self, qn: Sequence[float]) -> int:
        lo, hi = 0, len(self._keys)
        while lo < hi:
            mid = (lo + hi) // 2
            if tolerant_less(self._keys[mid], qn, self.eps):
                lo = mid + 1
            else:
                hi = mid
        return lo

    def lookup(self, qn: Sequence[float]) -> Optional[int]:
        pos = self._lower_bound(qn)
        if pos < len(self._keys) and not tolerant_less(qn, self._keys[pos], self.eps):
            return self._blocks[pos]
        return None

    def insert(self, qn: Sequence[float], block: int):
        pos = self._lower_bound(qn)
        self._keys.insert(pos, tuple(qn))
        self._blocks.insert(pos, block)

    def __len__(self) -> int:
        return len(self._keys)


class RoundedKeyMap:
    """Exact dict on quantum numbers rounded to `decimals` places."""

    policy = "rounded"

    def __init__(self, decimals: int = 8):
        self.decimals = decimals
        self._map: Dict[QuantumNumbers, int] = {}

    def _key(self, qn: Sequence[float]) -> QuantumNumbers:
        # + 0.0 folds -0.0 into 0.0
        return tuple(round(float(x), self.decimals) + 0.0 for x in qn)

    def lookup(self, qn: Sequence[float]) -> Optional[int]:
        return self._map.get(self._key(qn))

    def insert(self, qn: Sequence[float], block: int):
        self._map[self._key(qn)] = block

    def __len__(self) -> int:
        return len(self._map)


def make_key_map(policy: str = "tolerant", eps: float = 1e-8, decimals: int = 8):
    if policy == "tolerant":
        return TolerantKeyMap(eps)
    if policy == "rounded":
        return RoundedKeyMap(decimals)
    raise ValueError(f"Unknown key policy: {policy}. Use 'tolerant' or 'rounded'.")

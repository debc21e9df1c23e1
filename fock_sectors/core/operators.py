"""
Many-Body Operators for fock-sectors
====================================

Second-quantized operator expressions and their sparse matrices.

Expressions are polynomials in c†(label) and c(label) with real
coefficients:

    H = -t (c†_up0 c_up1 + h.c.) + U n_up0 n_dn0

An expression is compiled against a FundamentalOperatorSet into a
sparse matrix on the full Fock space (Jordan-Wigner sign convention:
the sign of c†_i / c_i is the parity of the occupied modes j < i).

Features:
  - Operator algebra: +, -, *, scalar multiples, identity shifts
  - Canonical factories: c, c_dag, n
  - OperatorMatrix: "apply(operator, state) -> state" on full-space vectors

Author: Masamichi Iizumi, Tamaki Iizumi
"""

import numpy as np
import scipy.sparse as sp
from typing import Dict, Iterator, Tuple, Union

from .fundamental_operators import FundamentalOperatorSet, Label, _as_label


# (dagger, label) for one canonical operator; a monomial is a tuple of them
Canonical = Tuple[bool, Label]
Monomial = Tuple[Canonical, ...]

Number = Union[int, float]


# =============================================================================
# Operator Expressions
# =============================================================================

class ManyBodyOperator:
    """
    Polynomial in fermionic creation/annihilation operators.

    Monomials are stored as written (leftmost operator acts last).
    Terms with |coefficient| below 1e-14 are dropped.

    Example:
        >>> H = -1.0 * (c_dag("a") * c("b") + c_dag("b") * c("a"))
        >>> len(H.terms)
        2
    """

    _CUTOFF = 1e-14

    def __init__(self, terms: Dict[Monomial, float] = None):
        self.terms: Dict[Monomial, float] = {}
        if terms:
            for mono, coef in terms.items():
                self._add_term(mono, coef)

    @classmethod
    def make_canonical(cls, dagger: bool, label) -> "ManyBodyOperator":
        """Single c† (dagger=True) or c (dagger=False)."""
        return cls({((bool(dagger), _as_label(label)),): 1.0})

    @classmethod
    def identity(cls, coef: Number = 1.0) -> "ManyBodyOperator":
        return cls({(): float(coef)})

    def _add_term(self, mono: Monomial, coef: float):
        value = self.terms.get(mono, 0.0) + float(coef)
        if abs(value) < self._CUTOFF:
            self.terms.pop(mono, None)
        else:
            self.terms[mono] = value

    def labels(self):
        """All mode labels appearing in the expression."""
        return {lab for mono in self.terms for _, lab in mono}

    def is_zero(self) -> bool:
        return not self.terms

    def __iter__(self) -> Iterator[Tuple[Monomial, float]]:
        return iter(self.terms.items())

    # -------------------------------------------------------------------------
    # Algebra
    # -------------------------------------------------------------------------

    @staticmethod
    def _coerce(other) -> "ManyBodyOperator":
        if isinstance(other, ManyBodyOperator):
            return other
        if isinstance(other, (int, float, np.integer, np.floating)):
            return ManyBodyOperator.identity(float(other))
        raise TypeError(f"Cannot combine ManyBodyOperator with {type(other).__name__}")

    def __add__(self, other):
        other = self._coerce(other)
        result = ManyBodyOperator(self.terms)
        for mono, coef in other.terms.items():
            result._add_term(mono, coef)
        return result

    __radd__ = __add__

    def __neg__(self):
        return ManyBodyOperator({m: -c for m, c in self.terms.items()})

    def __sub__(self, other):
        return self + (-self._coerce(other))

    def __rsub__(self, other):
        return self._coerce(other) + (-self)

    def __mul__(self, other):
        other = self._coerce(other)
        result = ManyBodyOperator()
        for m1, c1 in self.terms.items():
            for m2, c2 in other.terms.items():
                result._add_term(m1 + m2, c1 * c2)
        return result

    def __rmul__(self, other):
        return self._coerce(other) * self

    def __eq__(self, other) -> bool:
        if not isinstance(other, ManyBodyOperator):
            return NotImplemented
        diff = self - other
        return diff.is_zero()

    __hash__ = None

    def __repr__(self) -> str:
        if not self.terms:
            return "0"
        parts = []
        for mono, coef in self.terms.items():
            ops = " ".join(("c_dag" if dag else "c") + str(list(lab)) for dag, lab in mono)
            parts.append(f"{coef:g}" + (f"*{ops}" if ops else ""))
        return " + ".join(parts)


def _label_args(label) -> Label:
    # c("up", 0) and c(("up", 0)) name the same mode
    if len(label) == 1:
        return _as_label(label[0])
    return tuple(label)


def c(*label) -> ManyBodyOperator:
    """Annihilation operator c(label)."""
    return ManyBodyOperator.make_canonical(False, _label_args(label))


def c_dag(*label) -> ManyBodyOperator:
    """Creation operator c†(label)."""
    return ManyBodyOperator.make_canonical(True, _label_args(label))


def n(*label) -> ManyBodyOperator:
    """Number operator c†(label) c(label)."""
    return c_dag(*label) * c(*label)


# =============================================================================
# Compiled (imperative) operator on the full Fock space
# =============================================================================

def _parity_below(states: np.ndarray, mode: int) -> np.ndarray:
    """Parity (0/1) of the occupied modes with index < mode, per state."""
    parity = np.zeros_like(states)
    for k in range(mode):
        parity ^= (states >> k) & 1
    return parity


def _act_monomial(mono: Tuple[Tuple[bool, int], ...], states: np.ndarray):
    """
    Apply a monomial (with linear mode indices) to every Fock state.

    Returns:
        (new_states, signs, alive) arrays; alive is False where the
        monomial annihilates the state.
    """
    out = states.copy()
    signs = np.ones(len(states), dtype=np.float64)
    alive = np.ones(len(states), dtype=bool)
    for dagger, mode in reversed(mono):
        occ = (out >> mode) & 1
        alive &= (occ == 0) if dagger else (occ == 1)
        signs *= 1.0 - 2.0 * _parity_below(out, mode)
        out = out ^ (1 << mode)
    return out, signs, alive


class OperatorMatrix:
    """
    Sparse matrix of a ManyBodyOperator on the full Fock space.

    Attributes:
        operator: The source expression
        fops: Fundamental operator set it was compiled against
        matrix: scipy.sparse CSR matrix (dim × dim)
    """

    def __init__(self, operator: ManyBodyOperator, fops: FundamentalOperatorSet):
        self.operator = operator
        self.fops = fops
        self.dim = fops.dimension()
        self.matrix = self._compile()

    def _compile(self) -> sp.csr_matrix:
        dim = self.dim
        states = np.arange(dim, dtype=np.int64)
        rows, cols, data = [], [], []

        for mono, coef in self.operator:
            linear = tuple((dag, self.fops.linear_index(lab)) for dag, lab in mono)
            new_states, signs, alive = _act_monomial(linear, states)
            rows.append(new_states[alive])
            cols.append(states[alive])
            data.append(coef * signs[alive])

        if not rows:
            return sp.csr_matrix((dim, dim), dtype=np.float64)

        mat = sp.coo_matrix(
            (np.concatenate(data), (np.concatenate(rows), np.concatenate(cols))),
            shape=(dim, dim),
        ).tocsr()
        mat.sum_duplicates()
        mat.eliminate_zeros()
        return mat

    def apply(self, vector: np.ndarray) -> np.ndarray:
        """Return operator |vector>."""
        vector = np.asarray(vector)
        if vector.shape != (self.dim,):
            raise ValueError(f"Vector of shape {vector.shape} does not live in a space of dimension {self.dim}")
        return self.matrix @ vector

    __call__ = apply

    def is_hermitian(self, atol: float = 1e-12) -> bool:
        diff = self.matrix - self.matrix.T
        return diff.nnz == 0 or np.max(np.abs(diff.data)) < atol

    def __repr__(self) -> str:
        return f"OperatorMatrix(dim={self.dim}, nnz={self.matrix.nnz})"

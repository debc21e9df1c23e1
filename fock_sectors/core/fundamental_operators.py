"""
Fundamental Operator Set
========================

Ordered set of fermionic modes (orbital, spin, site, ...).

Each mode is identified by a label, a tuple of hashable indices such as
("up", 0), and receives a stable linear index 0..N-1 in insertion order.
Bit i of a Fock state is the occupation of the mode with linear index i.

Author: Masamichi Iizumi, Tamaki Iizumi
"""

from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, Iterator, List, Optional, Tuple


Label = Tuple[Hashable, ...]


def _as_label(index) -> Label:
    """Normalize a label: scalars become 1-tuples."""
    if isinstance(index, tuple):
        return index
    if isinstance(index, list):
        return tuple(index)
    return (index,)


@dataclass
class BlockDescriptor:
    """
    One block of the Green's-function block structure.

    Attributes:
        name: Block name (e.g. 'up')
        indices: Inner indices of the block, in order
    """
    name: Hashable
    indices: List[Hashable] = field(default_factory=list)

    def labels(self) -> List[Label]:
        return [(self.name,) + _as_label(i) for i in self.indices]


class FundamentalOperatorSet:
    """
    Ordered, immutable set of mode labels.

    Example:
        >>> fops = FundamentalOperatorSet([("up", 0), ("dn", 0)])
        >>> fops.n_operators(), fops.dimension()
        (2, 4)
        >>> fops.linear_index(("dn", 0))
        1
    """

    def __init__(self, labels: Iterable = ()):
        self._labels: List[Label] = []
        self._index: Dict[Label, int] = {}
        for lab in labels:
            lab = _as_label(lab)
            if lab in self._index:
                raise ValueError(f"Duplicate mode label: {lab}")
            self._index[lab] = len(self._labels)
            self._labels.append(lab)

    @classmethod
    def from_block_structure(cls, block_structure: List[BlockDescriptor]) -> "FundamentalOperatorSet":
        """Build the set from a block structure, labels are (name, index)."""
        labels = []
        for block in block_structure:
            labels.extend(block.labels())
        return cls(labels)

    def n_operators(self) -> int:
        """Number of modes N."""
        return len(self._labels)

    def dimension(self) -> int:
        """Dimension of the full Fock space, 2^N."""
        return 1 << len(self._labels)

    def linear_index(self, label) -> int:
        lab = _as_label(label)
        try:
            return self._index[lab]
        except KeyError:
            raise KeyError(f"Unknown mode label: {lab}") from None

    def label(self, n: int) -> Label:
        return self._labels[n]

    def labels(self) -> List[Label]:
        return list(self._labels)

    def block_lookup(self, block_structure: Optional[List[BlockDescriptor]]) -> Dict[Tuple[int, int], int]:
        """
        Map (block number, offset inside block) -> linear mode index.

        Every label of the block structure must belong to this set.
        """
        lookup: Dict[Tuple[int, int], int] = {}
        if not block_structure:
            return lookup
        for bl, block in enumerate(block_structure):
            for i, lab in enumerate(block.labels()):
                lookup[(bl, i)] = self.linear_index(lab)
        return lookup

    def __contains__(self, label) -> bool:
        return _as_label(label) in self._index

    def __iter__(self) -> Iterator[Tuple[Label, int]]:
        return iter((lab, n) for n, lab in enumerate(self._labels))

    def __len__(self) -> int:
        return len(self._labels)

    def __eq__(self, other) -> bool:
        return isinstance(other, FundamentalOperatorSet) and self._labels == other._labels

    def __repr__(self) -> str:
        return f"FundamentalOperatorSet(N={len(self._labels)}, labels={self._labels})"

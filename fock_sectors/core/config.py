"""
Decomposition Configuration
===========================

Author: Masamichi Iizumi, Tamaki Iizumi
"""

from dataclasses import dataclass


@dataclass
class DecompositionConfig:
    """ブロック分解の設定"""
    # Quantum-number keying
    qn_tolerance: float = 1e-8
    key_policy: str = "tolerant"      # 'tolerant' | 'rounded'
    qn_decimals: int = 8

    # Operator acting on a state gives zero below this squared norm
    norm_threshold: float = 1e-10

    # Threads for per-mode connectivity and per-block diagonalization
    n_workers: int = 1

    verbose: bool = False

    def __post_init__(self):
        if self.qn_tolerance <= 0:
            raise ValueError(f"qn_tolerance must be positive, got {self.qn_tolerance}")
        if self.key_policy not in ("tolerant", "rounded"):
            raise ValueError(f"Unknown key policy: {self.key_policy}. Use 'tolerant' or 'rounded'.")
        if self.qn_decimals < 0:
            raise ValueError(f"qn_decimals must be >= 0, got {self.qn_decimals}")
        if self.norm_threshold <= 0:
            raise ValueError(f"norm_threshold must be positive, got {self.norm_threshold}")
        if self.n_workers < 1:
            raise ValueError(f"n_workers must be >= 1, got {self.n_workers}")

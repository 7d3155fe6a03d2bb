"""
Envelope model representation.
"""

from dataclasses import dataclass

import numpy as np


@dataclass
class EnvelopeModel:
    """
    Shell structure and line list of a homologously expanding envelope.

    Attributes
    ----------
    r_inner : np.ndarray
        Inner radius of each shell in cm, innermost first
    r_outer : np.ndarray
        Outer radius of each shell in cm, innermost first
    time_explosion : float
        Time since explosion in s
    line_list_nu : np.ndarray
        Line rest frequencies in Hz, sorted in descending order
    tau_sobolevs : np.ndarray
        Sobolev optical depths, shape (no_of_lines, no_of_shells)
    """

    r_inner: np.ndarray
    r_outer: np.ndarray
    time_explosion: float
    line_list_nu: np.ndarray
    tau_sobolevs: np.ndarray

    def __post_init__(self):
        self.r_inner = np.asarray(self.r_inner, dtype=np.float64)
        self.r_outer = np.asarray(self.r_outer, dtype=np.float64)
        self.line_list_nu = np.asarray(self.line_list_nu, dtype=np.float64)
        self.tau_sobolevs = np.asarray(self.tau_sobolevs, dtype=np.float64)
        self.time_explosion = float(self.time_explosion)

    @classmethod
    def from_velocities(
        cls,
        v_inner: np.ndarray,
        v_outer: np.ndarray,
        time_explosion: float,
        line_list_nu: np.ndarray,
        tau_sobolevs: np.ndarray,
    ) -> "EnvelopeModel":
        """
        Build a model from shell velocities (cm/s) assuming r = v * t.
        """
        return cls(
            r_inner=np.asarray(v_inner, dtype=np.float64) * time_explosion,
            r_outer=np.asarray(v_outer, dtype=np.float64) * time_explosion,
            time_explosion=time_explosion,
            line_list_nu=line_list_nu,
            tau_sobolevs=tau_sobolevs,
        )

    @property
    def no_of_shells(self) -> int:
        return len(self.r_outer)

    @property
    def no_of_lines(self) -> int:
        return len(self.line_list_nu)

    @property
    def inverse_time_explosion(self) -> float:
        return 1.0 / self.time_explosion

    @property
    def r_photosphere(self) -> float:
        """Inner radius of the innermost shell in cm."""
        return float(self.r_inner[0])

    @property
    def r_max(self) -> float:
        """Outer radius of the outermost shell in cm."""
        return float(self.r_outer[-1])

    @property
    def v_inner(self) -> np.ndarray:
        return self.r_inner * self.inverse_time_explosion

    @property
    def v_outer(self) -> np.ndarray:
        return self.r_outer * self.inverse_time_explosion

    def validate(self) -> bool:
        """
        Validate the model structure.

        Returns
        -------
        bool
            True if valid

        Raises
        ------
        ValueError
            If the model is malformed
        """
        if self.r_outer.ndim != 1 or self.no_of_shells == 0:
            raise ValueError("r_outer must be a non-empty 1D array")

        if self.r_inner.shape != self.r_outer.shape:
            raise ValueError(
                f"r_inner shape {self.r_inner.shape} does not match "
                f"r_outer shape {self.r_outer.shape}"
            )

        if not (np.all(np.isfinite(self.r_inner)) and np.all(np.isfinite(self.r_outer))):
            raise ValueError("Shell radii must be finite")

        if self.r_inner[0] <= 0:
            raise ValueError("Photosphere radius must be positive")

        if np.any(self.r_outer <= self.r_inner):
            raise ValueError("Each shell's outer radius must exceed its inner radius")

        if np.any(np.diff(self.r_outer) <= 0):
            raise ValueError("Shell radii must be strictly increasing")

        if not np.isfinite(self.time_explosion) or self.time_explosion <= 0:
            raise ValueError("time_explosion must be positive")

        if self.line_list_nu.ndim != 1 or self.no_of_lines == 0:
            raise ValueError("line_list_nu must be a non-empty 1D array")

        if not np.all(np.isfinite(self.line_list_nu)) or np.any(self.line_list_nu <= 0):
            raise ValueError("Line frequencies must be finite and positive")

        if np.any(np.diff(self.line_list_nu) >= 0):
            raise ValueError("line_list_nu must be sorted in strictly descending order")

        expected = (self.no_of_lines, self.no_of_shells)
        if self.tau_sobolevs.shape != expected:
            raise ValueError(
                f"tau_sobolevs shape {self.tau_sobolevs.shape} does not match "
                f"(no_of_lines, no_of_shells) = {expected}"
            )

        if not np.all(np.isfinite(self.tau_sobolevs)) or np.any(self.tau_sobolevs < 0):
            raise ValueError("Sobolev optical depths must be finite and non-negative")

        return True

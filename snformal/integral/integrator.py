"""
Formal integral of the radiative transfer equation.

For each observer frame frequency the emergent intensity is accumulated
along p-lines through the envelope, resonance by resonance, and the
p-weighted intensities are integrated over impact parameter with the
trapezoid rule to give the luminosity density.

Frequencies are independent of each other and are split into contiguous
ranges, one task per worker. Each worker owns its scratch buffers and
returns its block of the spectrum; the model, the opacity cache and the
source function are shared read-only. The per-ray kernel is pure Python
and holds the GIL, so threads give no speedup on CPython; use
``use_processes=True`` for parallel runs.
"""

import os
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from typing import Any, Dict, Optional, Tuple

import numpy as np

from snformal.core.constants import LUMINOSITY_PREFACTOR
from snformal.core.config import DEFAULT_POINTS
from snformal.core.logging_config import get_logger
from snformal.integral.blackbody import intensity_black_body
from snformal.integral.geometry import calculate_p_values, populate_z
from snformal.integral.line_search import line_search
from snformal.integral.spectrum import FormalIntegralSpectrum
from snformal.model.envelope import EnvelopeModel

logger = get_logger("integral.integrator")


def calculate_exp_tau(tau_sobolevs: np.ndarray) -> np.ndarray:
    """
    Attenuation factors exp(-τ) for every (line, shell) pair.

    The returned array is read-only.
    """
    exp_tau = np.exp(-np.asarray(tau_sobolevs, dtype=np.float64))
    exp_tau.flags.writeable = False
    return exp_tau


def trapezoid_integration(array: np.ndarray, h: float) -> float:
    """
    Trapezoid rule on a uniformly spaced grid.

    Parameters
    ----------
    array : array
        Function values, at least two
    h : float
        Grid spacing

    Returns
    -------
    float
        h * ((f_0 + f_{N-1}) / 2 + sum of the interior values)
    """
    result = (array[0] + array[-1]) / 2
    for value in array[1:-1]:
        result += value
    return float(result * h)


def trace_ray(
    nu: float,
    z: np.ndarray,
    shell_id: np.ndarray,
    size_z: int,
    line_list_nu: np.ndarray,
    exp_tau: np.ndarray,
    att_S_ul: np.ndarray,
    intensity: float,
) -> float:
    """
    Accumulate the intensity along one p-line.

    Each segment between consecutive crossings spans the comoving frequency
    window from ν·z[k] down to ν·z[k+1]. Every line in that window
    attenuates the intensity by exp(-τ) of the segment's shell and then adds
    the shell's line source term.

    Parameters
    ----------
    nu : float
        Observer frame frequency in Hz
    z : array
        Crossing coordinates from :func:`populate_z`
    shell_id : array
        Shell of each crossing
    size_z : int
        Number of valid crossings
    line_list_nu : array
        Line frequencies in Hz, descending
    exp_tau : array
        Attenuation factors, shape (no_of_lines, no_of_shells)
    att_S_ul : array
        Line source terms, shape (no_of_lines, no_of_shells)
    intensity : float
        Boundary intensity where the ray enters

    Returns
    -------
    float
        Intensity leaving the envelope
    """
    n_lines = len(line_list_nu)

    for i in range(size_z - 1):
        nu_start = nu * z[i]
        nu_end = nu * z[i + 1]
        shell = shell_id[i]

        idx_nu_start = line_search(line_list_nu, nu_start)

        for j in range(idx_nu_start, n_lines):
            if line_list_nu[j] < nu_end:
                break
            intensity = intensity * exp_tau[j, shell] + att_S_ul[j, shell]

    return intensity


def integrate_frequency(
    nu: float,
    model: EnvelopeModel,
    iT: float,
    pp: np.ndarray,
    exp_tau: np.ndarray,
    att_S_ul: np.ndarray,
    I_nu: np.ndarray,
    z: np.ndarray,
    shell_id: np.ndarray,
) -> float:
    """
    Luminosity density at a single frequency.

    ``I_nu``, ``z`` and ``shell_id`` are scratch buffers owned by the
    calling worker and are overwritten.
    """
    R_ph = model.r_photosphere
    N = len(pp)

    # p = 0 contributes nothing to the p-weighted integrand
    I_nu[0] = 0.0

    for p_idx in range(1, N):
        p = pp[p_idx]
        size_z = populate_z(model, p, z, shell_id)

        if p <= R_ph:
            boundary = intensity_black_body(nu, iT)
        else:
            boundary = 0.0

        I_nu[p_idx] = p * trace_ray(
            nu, z, shell_id, size_z, model.line_list_nu, exp_tau, att_S_ul, boundary
        )

    return LUMINOSITY_PREFACTOR * trapezoid_integration(I_nu, model.r_max / N)


def _integrate_range(
    start: int,
    frequencies: np.ndarray,
    model: EnvelopeModel,
    iT: float,
    pp: np.ndarray,
    exp_tau: np.ndarray,
    att_S_ul: np.ndarray,
) -> Tuple[int, np.ndarray]:
    """
    Worker task: integrate one contiguous block of frequencies.

    Allocates private scratch buffers and returns ``(start, L_block)`` so
    the caller can place the block at ``L[start:start + len(frequencies)]``.
    Module level so it can be pickled into a worker process.
    """
    N = len(pp)
    I_nu = np.zeros(N, dtype=np.float64)
    z = np.zeros(2 * model.no_of_shells, dtype=np.float64)
    shell_id = np.zeros(2 * model.no_of_shells, dtype=np.int64)
    pp = pp.copy()
    L_block = np.zeros(len(frequencies), dtype=np.float64)

    logger.debug(f"Worker integrating frequencies [{start}, {start + len(frequencies)})")

    for k, nu in enumerate(frequencies):
        L_block[k] = integrate_frequency(nu, model, iT, pp, exp_tau, att_S_ul, I_nu, z, shell_id)

    return start, L_block


def check_inputs(
    model: EnvelopeModel, iT: float, inu: np.ndarray, att_S_ul: np.ndarray, N: int
) -> None:
    """
    Reject malformed inputs before any computation starts.

    Raises
    ------
    ValueError
        If any precondition of the formal integral is violated
    """
    model.validate()

    if not np.isfinite(iT) or iT <= 0:
        raise ValueError(f"Photosphere temperature must be positive, got {iT}")

    if not isinstance(N, (int, np.integer)) or N < 2:
        raise ValueError(f"Number of impact parameters must be an integer >= 2, got {N!r}")

    if inu.ndim != 1 or len(inu) == 0:
        raise ValueError("Frequency grid must be a non-empty 1D array")

    if not np.all(np.isfinite(inu)) or np.any(inu <= 0):
        raise ValueError("Frequencies must be finite and positive")

    if att_S_ul.shape != model.tau_sobolevs.shape:
        raise ValueError(
            f"Source function shape {att_S_ul.shape} does not match "
            f"tau_sobolevs shape {model.tau_sobolevs.shape}"
        )

    if not np.all(np.isfinite(att_S_ul)):
        raise ValueError("Source function must be finite")


def formal_integral(
    model: EnvelopeModel,
    iT: float,
    inu: np.ndarray,
    att_S_ul: np.ndarray,
    N: int = DEFAULT_POINTS,
    n_workers: Optional[int] = None,
    use_processes: bool = False,
) -> np.ndarray:
    """
    Compute a spectrum using the formal integral approach.

    Parameters
    ----------
    model : EnvelopeModel
        Envelope geometry, line list and Sobolev optical depths
    iT : float
        Photosphere temperature in K
    inu : array
        Observer frame frequencies in Hz
    att_S_ul : array
        Line source terms, shape (no_of_lines, no_of_shells)
    N : int
        Number of impact parameters (>= 2)
    n_workers : int, optional
        Number of worker threads/processes. If None, uses CPU count.
    use_processes : bool
        If True, use processes instead of threads. The kernel is CPU-bound
        Python, so only processes run frequency ranges in parallel; threads
        run them one after another under the GIL.

    Returns
    -------
    array
        Luminosity density in erg s^-1 Hz^-1, one value per frequency
    """
    inu = np.asarray(inu, dtype=np.float64)
    att_S_ul = np.asarray(att_S_ul, dtype=np.float64)

    check_inputs(model, iT, inu, att_S_ul, N)

    if n_workers is None:
        n_workers = os.cpu_count() or 1
    elif n_workers < 1:
        raise ValueError(f"n_workers must be >= 1, got {n_workers}")
    n_workers = max(1, min(n_workers, len(inu)))

    exp_tau = calculate_exp_tau(model.tau_sobolevs)
    pp = calculate_p_values(model, N)
    pp.flags.writeable = False

    L = np.zeros(len(inu), dtype=np.float64)

    kind = "processes" if use_processes and n_workers > 1 else "threads"
    logger.info(
        f"Doing the formal integral with {n_workers} {kind} "
        f"({len(inu)} frequencies, {N} impact parameters)"
    )

    if n_workers == 1:
        blocks = [_integrate_range(0, inu, model, iT, pp, exp_tau, att_S_ul)]
    else:
        bounds = np.linspace(0, len(inu), n_workers + 1).astype(int)
        ranges = [(start, stop) for start, stop in zip(bounds[:-1], bounds[1:]) if stop > start]

        executor_class = ProcessPoolExecutor if use_processes else ThreadPoolExecutor

        with executor_class(max_workers=n_workers) as executor:
            futures = [
                executor.submit(
                    _integrate_range,
                    int(start),
                    inu[start:stop],
                    model,
                    iT,
                    pp,
                    exp_tau,
                    att_S_ul,
                )
                for start, stop in ranges
            ]
            # Re-raises the first worker failure; no partial spectrum escapes
            blocks = [future.result() for future in futures]

    for start, L_block in blocks:
        L[start : start + len(L_block)] = L_block

    logger.info("Formal integral complete")
    return L


class FormalIntegrator:
    """
    Formal-integral spectrum synthesis for one envelope model.

    Holds the model and integration settings and turns a frequency grid
    plus line source function into a :class:`FormalIntegralSpectrum`.
    """

    def __init__(
        self,
        model: EnvelopeModel,
        photosphere_temperature: float,
        points: int = DEFAULT_POINTS,
        n_workers: Optional[int] = None,
        use_processes: bool = False,
    ):
        """
        Initialize formal integrator.

        Parameters
        ----------
        model : EnvelopeModel
            Envelope model
        photosphere_temperature : float
            Photosphere temperature in K
        points : int
            Number of impact parameters (>= 2)
        n_workers : int, optional
            Number of worker threads/processes. If None, uses CPU count.
        use_processes : bool
            If True, integrate frequency ranges in worker processes
        """
        self.model = model
        self.photosphere_temperature = photosphere_temperature
        self.points = points
        self.n_workers = n_workers
        self.use_processes = use_processes

        logger.info(
            f"Initialized FormalIntegrator: {model.no_of_shells} shells, "
            f"{model.no_of_lines} lines, T_ph={photosphere_temperature:.1f} K, "
            f"{points} impact parameters"
        )

    @classmethod
    def from_config(cls, config: Dict[str, Any], model: EnvelopeModel) -> "FormalIntegrator":
        """
        Build an integrator from a validated configuration dictionary.

        Parameters
        ----------
        config : dict
            Configuration with a 'formal_integral' section
        model : EnvelopeModel
            Envelope model the configuration refers to
        """
        section = config["formal_integral"]
        return cls(
            model=model,
            photosphere_temperature=section["photosphere_temperature"],
            points=section.get("points", DEFAULT_POINTS),
            n_workers=section.get("n_workers"),
            use_processes=section.get("use_processes", False),
        )

    def validate(self) -> bool:
        """
        Validate the model and integration settings.

        Raises
        ------
        ValueError
            If the configuration cannot be integrated
        """
        self.model.validate()

        if self.photosphere_temperature <= 0:
            raise ValueError("Photosphere temperature must be positive")

        if self.points < 2:
            raise ValueError("Number of impact parameters must be >= 2")

        if self.n_workers is not None and self.n_workers < 1:
            raise ValueError("n_workers must be >= 1")

        return True

    def make_source_function_check(self, att_S_ul: np.ndarray) -> np.ndarray:
        """
        Coerce a line source function to the model's (line, shell) layout.

        A flat array of length no_of_lines * no_of_shells is reshaped
        line-major.

        Raises
        ------
        ValueError
            If the size does not match the model
        """
        att_S_ul = np.asarray(att_S_ul, dtype=np.float64)
        expected = self.model.tau_sobolevs.shape

        if att_S_ul.ndim == 1 and att_S_ul.size == self.model.tau_sobolevs.size:
            att_S_ul = att_S_ul.reshape(expected)

        if att_S_ul.shape != expected:
            raise ValueError(
                f"Source function shape {att_S_ul.shape} does not match "
                f"(no_of_lines, no_of_shells) = {expected}"
            )
        return att_S_ul

    def calculate_spectrum(
        self, frequency: np.ndarray, att_S_ul: Optional[np.ndarray] = None
    ) -> FormalIntegralSpectrum:
        """
        Compute the emergent spectrum.

        Parameters
        ----------
        frequency : array
            Observer frame frequencies in Hz
        att_S_ul : array, optional
            Line source terms. If None, lines only absorb.

        Returns
        -------
        FormalIntegralSpectrum
            Luminosity density on ``frequency``
        """
        self.validate()

        if att_S_ul is None:
            att_S_ul = np.zeros_like(self.model.tau_sobolevs)
        att_S_ul = self.make_source_function_check(att_S_ul)

        L = formal_integral(
            self.model,
            self.photosphere_temperature,
            frequency,
            att_S_ul,
            N=self.points,
            n_workers=self.n_workers,
            use_processes=self.use_processes,
        )
        return FormalIntegralSpectrum(frequency=frequency, luminosity_density_nu=L)

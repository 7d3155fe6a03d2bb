"""
Envelope model loading and saving utilities.

Models are stored as flat collections of named arrays, either in a numpy
``.npz`` archive or in an HDF5 file (requires h5py).
"""

from pathlib import Path
from typing import Union

import numpy as np

try:
    import h5py

    HAS_H5PY = True
except ImportError:
    HAS_H5PY = False
    h5py = None

from snformal.core.logging_config import get_logger
from snformal.model.envelope import EnvelopeModel

logger = get_logger("model.loader")

ARRAY_FIELDS = ["r_inner", "r_outer", "line_list_nu", "tau_sobolevs"]
HDF5_SUFFIXES = [".h5", ".hdf5"]


def _require_h5py() -> None:
    if not HAS_H5PY:
        raise ImportError("h5py is required for HDF5 models. " "Install with: pip install h5py")


def load_envelope(model_path: Union[str, Path], validate: bool = True) -> EnvelopeModel:
    """
    Load an envelope model from file.

    Parameters
    ----------
    model_path : str or Path
        Path to a ``.npz`` or ``.h5``/``.hdf5`` file
    validate : bool
        Run :meth:`EnvelopeModel.validate` on the loaded model

    Returns
    -------
    EnvelopeModel
        Loaded model

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    ValueError
        If the format is unsupported or a dataset is missing
    """
    model_path = Path(model_path)

    if not model_path.exists():
        raise FileNotFoundError(f"Model file not found: {model_path}")

    suffix = model_path.suffix.lower()
    data = {}

    if suffix == ".npz":
        with np.load(model_path) as archive:
            for field in ARRAY_FIELDS + ["time_explosion"]:
                if field not in archive.files:
                    raise ValueError(f"Model file {model_path} missing dataset: {field}")
                data[field] = archive[field]
    elif suffix in HDF5_SUFFIXES:
        _require_h5py()
        with h5py.File(model_path, "r") as f:
            for field in ARRAY_FIELDS:
                if field not in f:
                    raise ValueError(f"Model file {model_path} missing dataset: {field}")
                data[field] = f[field][:]
            if "time_explosion" in f.attrs:
                data["time_explosion"] = f.attrs["time_explosion"]
            elif "time_explosion" in f:
                data["time_explosion"] = f["time_explosion"][()]
            else:
                raise ValueError(f"Model file {model_path} missing dataset: time_explosion")
    else:
        raise ValueError(f"Unsupported model file format: {suffix}. Use .npz, .h5 or .hdf5")

    model = EnvelopeModel(
        r_inner=data["r_inner"],
        r_outer=data["r_outer"],
        time_explosion=float(data["time_explosion"]),
        line_list_nu=data["line_list_nu"],
        tau_sobolevs=data["tau_sobolevs"],
    )

    if validate:
        model.validate()

    logger.info(
        f"Loaded model from {model_path}: {model.no_of_shells} shells, "
        f"{model.no_of_lines} lines"
    )
    return model


def save_envelope(model: EnvelopeModel, model_path: Union[str, Path]) -> None:
    """
    Save an envelope model to file.

    Parameters
    ----------
    model : EnvelopeModel
        Model to save
    model_path : str or Path
        Output path; the suffix selects the format (``.npz``, ``.h5``, ``.hdf5``)
    """
    model_path = Path(model_path)
    suffix = model_path.suffix.lower()

    if suffix == ".npz":
        np.savez(
            model_path,
            r_inner=model.r_inner,
            r_outer=model.r_outer,
            time_explosion=np.float64(model.time_explosion),
            line_list_nu=model.line_list_nu,
            tau_sobolevs=model.tau_sobolevs,
        )
    elif suffix in HDF5_SUFFIXES:
        _require_h5py()
        model_path.parent.mkdir(parents=True, exist_ok=True)
        with h5py.File(model_path, "w") as f:
            for field in ARRAY_FIELDS:
                f.create_dataset(field, data=getattr(model, field))
            f.attrs["time_explosion"] = model.time_explosion
    else:
        raise ValueError(f"Unsupported model file format: {suffix}. Use .npz, .h5 or .hdf5")

    logger.info(f"Saved model to {model_path}")

"""
Main CLI entry point for SN-Formal.
"""

import argparse
import sys
from pathlib import Path

from snformal.core.logging_config import setup_logging, get_logger

logger = get_logger("cli.main")


def _resolve(path: str, config_path: Path) -> Path:
    """Resolve a path from the config file relative to the config's directory."""
    resolved = Path(path)
    if not resolved.is_absolute():
        resolved = config_path.parent / resolved
    return resolved


def integrate_cmd(args):
    """Formal integral command."""
    from snformal.core.config import load_config, validate_integral_config, DEFAULT_POINTS
    from snformal.model.loader import load_envelope
    from snformal.integral.integrator import FormalIntegrator
    from snformal.io.spectrum import save_spectrum
    import numpy as np

    config_path = Path(args.config)
    logger.info(f"Loading configuration from {config_path}")
    config = load_config(config_path)

    # Validate configuration
    validate_integral_config(config)
    section = config["formal_integral"]

    if "frequency" not in section:
        raise ValueError("Formal integral config missing required field: frequency")

    model = load_envelope(_resolve(section["model"], config_path))

    if section.get("source_function"):
        source_path = _resolve(section["source_function"], config_path)
        if not source_path.exists():
            raise FileNotFoundError(f"Source function file not found: {source_path}")
        att_S_ul = np.load(source_path)
    else:
        logger.warning("No source function given, lines will only absorb")
        att_S_ul = None

    frequency_config = section["frequency"]
    frequency = np.linspace(
        frequency_config["nu_min"],
        frequency_config["nu_max"],
        frequency_config.get("n_points", DEFAULT_POINTS),
    )

    integrator = FormalIntegrator.from_config(config, model)

    logger.info("Computing spectrum...")
    spectrum = integrator.calculate_spectrum(frequency, att_S_ul)

    # Output results
    if args.output:
        output_path = Path(args.output)
        save_spectrum(output_path, spectrum)
        print(f"Spectrum saved to {output_path}")
    else:
        print("# Frequency (Hz), Luminosity density (erg s^-1 Hz^-1)")
        for nu, L_nu in zip(spectrum.frequency, spectrum.luminosity_density_nu):
            print(f"{nu:.6e},{L_nu:.6e}")

    logger.info(f"Total luminosity: {spectrum.luminosity:.4e} erg/s")


def info_cmd(args):
    """Model summary command."""
    from snformal.model.loader import load_envelope

    model = load_envelope(args.model)

    print(f"Model: {args.model}")
    print(f"  Shells: {model.no_of_shells}")
    print(f"  Lines: {model.no_of_lines}")
    print(f"  Time since explosion: {model.time_explosion:.4e} s")
    print(f"  Radius: {model.r_photosphere:.4e} - {model.r_max:.4e} cm")
    print(
        f"  Velocity: {model.v_inner[0] / 1e5:.1f} - {model.v_outer[-1] / 1e5:.1f} km/s"
    )
    print(
        f"  Line frequencies: {model.line_list_nu[-1]:.4e} - {model.line_list_nu[0]:.4e} Hz"
    )
    print(f"  Max Sobolev optical depth: {model.tau_sobolevs.max():.4e}")


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="SN-Formal: formal-integral spectra of supernova ejecta",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set logging level (default: INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Formal integral command
    integrate_parser = subparsers.add_parser(
        "integrate", help="Compute the emergent spectrum from a configuration"
    )
    integrate_parser.add_argument(
        "config", type=str, help="Path to configuration file (YAML or JSON)"
    )
    integrate_parser.add_argument(
        "--output", type=str, default=None, help="Output CSV path (default: print to stdout)"
    )
    integrate_parser.set_defaults(func=integrate_cmd)

    # Model summary command
    info_parser = subparsers.add_parser("info", help="Summarize an envelope model file")
    info_parser.add_argument("model", type=str, help="Path to model file (.npz, .h5)")
    info_parser.set_defaults(func=info_cmd)

    args = parser.parse_args()

    # Setup logging
    setup_logging(level=args.log_level)

    # Execute command
    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except Exception as e:
        logger.error(f"Error executing command: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()

"""
runner.py
High-level pipeline runner. Loads an encoded R1CS (and optionally a witness),
validates, writes a JSON report and prints a compact summary for human reading.
"""

import logging
from pathlib import Path
from typing import Dict, Any

from codec import read_r1cs
from config import DEFAULT_CONFIG
from r1cs import R1CS
from r1cs_utils import constraint_to_str, r1cs_summary
from utils import timestamp_iso, write_json_atomic
from validator import ValidationReport, WitnessValidator
from witness import check_witness_structure, load_witness_json

logger = logging.getLogger(__name__)


def run_info(r1cs_path: str, config: Dict[str, Any] = None, quiet: bool = False) -> Dict[str, Any]:
    """
    Load an R1CS file and print its summary.

    :return: summary dict
    """
    cfg = DEFAULT_CONFIG.copy()
    if config:
        cfg.update(config)
    r1cs = read_r1cs(r1cs_path)
    summary = r1cs_summary(r1cs)
    if not quiet:
        print_summary(r1cs, cfg)
    return summary


def run_validation(r1cs_path: str, witness_path: str, out_dir: str = "out",
                   config: Dict[str, Any] = None, quiet: bool = False) -> ValidationReport:
    """
    Run the load + validate + export pipeline.

    :param r1cs_path: path to an encoded .r1cs file
    :param witness_path: path to a witness JSON file
    :param out_dir: directory to write the JSON report
    :param config: configuration dictionary
    :param quiet: if True, suppress verbose printing
    """
    cfg = DEFAULT_CONFIG.copy()
    if config:
        cfg.update(config)

    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    logger.info("loading %s", r1cs_path)
    r1cs = read_r1cs(r1cs_path)
    witness = load_witness_json(witness_path, r1cs.field)

    missing, unknown = check_witness_structure(r1cs, witness)
    if unknown:
        logger.warning("witness has values for %d wires not in the circuit", len(unknown))
    if missing:
        logger.warning("witness has no value for %d wires", len(missing))

    report = WitnessValidator(r1cs).validate(witness)

    out_path = out_dir / cfg.get("report_filename", "validation_report.json")
    payload = report.to_dict()
    payload["r1cs"] = str(r1cs_path)
    payload["witness"] = str(witness_path)
    payload["timestamp"] = timestamp_iso()
    write_json_atomic(str(out_path), payload)
    logger.info("wrote validation report to %s", out_path)

    if not quiet:
        print_report(r1cs, report, cfg)
    return report


def print_summary(r1cs: R1CS, cfg: Dict[str, Any]) -> None:
    """
    Print a compact summary of wires and constraints.
    """
    s = r1cs_summary(r1cs)
    top_n = cfg.get("max_reported_violations", 20)

    print("=== R1CS Summary ===")
    print(f"Field: {s['prime_bits']}-bit prime ({s['field_byte_width']} bytes)")
    print(f"Wires: {s['wires']} (public in {s['public_inputs']}, public out {s['public_outputs']}, "
          f"private {s['private']})")
    print(f"Constraints: {s['constraints']}")
    print()
    print("First constraints (up to {}):".format(top_n))
    for i, c in enumerate(r1cs.constraints[:top_n]):
        print(f"  [{i}] {constraint_to_str(c)}")
    print("====================")


def print_report(r1cs: R1CS, report: ValidationReport, cfg: Dict[str, Any]) -> None:
    top_n = cfg.get("max_reported_violations", 20)
    if report.is_satisfied:
        print(f"OK: all {report.constraint_count} constraints satisfied")
        return
    print(f"FAILED: {len(report.violations)} of {report.constraint_count} constraints violated")
    for v in report.violations[:top_n]:
        print(f"  [{v.index}] {constraint_to_str(r1cs.constraints[v.index])}")
        print(f"        a={v.a} b={v.b} c={v.c}")
    if len(report.violations) > top_n:
        print(f"  ... {len(report.violations) - top_n} more")

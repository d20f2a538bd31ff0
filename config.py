"""
config.py
Default configuration and loader. Very small helper to override defaults via JSON files.
"""

from pathlib import Path
from typing import Any, Dict

from finite_field import BN254_SCALAR_FIELD
from utils import read_json

# Default constants used by the CLI pipeline.
DEFAULT_CONFIG: Dict[str, Any] = {
    "default_modulus": BN254_SCALAR_FIELD,   # field used when building without an explicit modulus
    "log_level": "INFO",
    "report_filename": "validation_report.json",
    "max_reported_violations": 50,           # for summary printing / limiting
}


def load_config(path: str, base: Dict[str, Any] = None) -> Dict[str, Any]:
    """
    Load a JSON config file and merge it into base (shallow merge).

    :param path: path to JSON config file
    :param base: base configuration dictionary to update (if None use DEFAULT_CONFIG)
    :return: merged configuration dictionary
    """
    base = base.copy() if base is not None else DEFAULT_CONFIG.copy()
    if not Path(path).exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    data = read_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a JSON object: {path}")
    # shallow merge
    for k, v in data.items():
        base[k] = v
    # moduli may be written as decimal strings to survive other JSON tooling
    base["default_modulus"] = int(base["default_modulus"])
    return base

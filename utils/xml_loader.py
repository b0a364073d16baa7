# utils/xml_loader.py
import xml.etree.ElementTree as ET
from typing import Any, Dict
from pathlib import Path

# <section><tag> -> flat setup key
SECTION_PREFIXES = {
    "social_security": "ss",
    "conversion": "conversion",
}

# Flattened keys that don't follow the "<prefix>_<tag>" pattern
FIELD_ALIASES = {
    "conversion_auto_optimize": "auto_optimize",
    "conversion_target_bracket_index": "target_bracket_index",
}


def parse_setup_xml(file_path: Any) -> Dict[str, Any]:
    """
    Load a scenario setup file into a flat dict keyed by SimulationConfig
    field names.  `file_path` may be a path or a file-like object.
    Account balances are returned as a nested dict under "balances".
    """
    tree = ET.parse(file_path)
    root = tree.getroot()

    setup_dict: Dict[str, Any] = {}

    for child in root:
        if child.tag == "balances":
            setup_dict["balances"] = {
                sub.tag: float(try_cast(sub.text) or 0.0) for sub in child
            }
        elif child.tag in SECTION_PREFIXES:
            prefix = SECTION_PREFIXES[child.tag]
            for sub in child:
                key = f"{prefix}_{sub.tag}"
                setup_dict[FIELD_ALIASES.get(key, key)] = try_cast(sub.text)
        else:
            val = try_cast(child.text)
            if isinstance(val, str):
                val = val.strip().lower()
            setup_dict[child.tag] = val

    return setup_dict


def try_cast(value: str) -> Any:
    """Try to convert string to int or float if possible, else leave as str."""
    if value is None:
        return None
    value = value.strip()
    # Booleans
    if value.lower() in ("true", "false"):
        return value.lower() == "true"

    # Integers (try first)
    try:
        if '.' not in value:
            return int(value)
    except ValueError:
        pass

    # Floats (try second)
    try:
        return float(value)
    except ValueError:
        pass

    return value


CONFIG_DIR = Path(__file__).parent.parent / "config"

DEFAULT_SETUP = parse_setup_xml(CONFIG_DIR / "default_setup.xml")

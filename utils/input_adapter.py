import copy
import logging
from dataclasses import fields
from typing import Any, Dict, Optional

from models import POOLS, AccountBalances, SimulationConfig
from utils.currency import clean_bool, clean_currency, clean_percent
from utils.xml_loader import DEFAULT_SETUP

logger = logging.getLogger(__name__)

CURRENCY_FIELDS = {"annual_spending", "conversion_amount", "ss_amount"}
PERCENT_FIELDS = {"inflation_rate", "avg_return"}
INT_FIELDS = {
    "current_age", "target_retirement_age", "retirement_end_age",
    "conversion_start_age", "conversion_end_age", "target_bracket_index",
    "ss_start_age", "start_year",
}
BOOL_FIELDS = {"stress_test", "auto_optimize", "advanced_features"}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _clean_value(key: str, value: Any) -> Any:
    if key in CURRENCY_FIELDS:
        return clean_currency(value)
    if key in PERCENT_FIELDS:
        cleaned = clean_percent(value)
        return 0.0 if cleaned is None else cleaned
    if key in INT_FIELDS:
        return int(float(str(value).strip()))
    if key in BOOL_FIELDS:
        return clean_bool(value)
    if key == "strategy":
        return str(value).strip().lower()
    return value


def get_simulation_config(
    setup: Optional[Dict[str, Any]] = None,
    **kwargs: Any,
) -> SimulationConfig:
    """
    Builds a SimulationConfig by merging the XML defaults, an optional setup
    dict (e.g. from utils.xml_loader.parse_setup_xml) and raw UI values.

    Raw values may be strings as typed in a form ("$85,000", "6.5%",
    "true").  Per-pool balances can be passed as `balances={...}` or as
    individual `taxable=` / `traditional=` / `roth=` keywords.
    """

    # 1. Start with defaults loaded from the XML setup file
    inputs_dict = copy.deepcopy(DEFAULT_SETUP)

    # 2. Layer the setup file, then the UI inputs (later wins)
    for layer in (setup or {}, kwargs):
        # Blank form fields fall back to the layer below
        layer = {k: v for k, v in layer.items() if not _is_blank(v)}
        balances = dict(inputs_dict.get("balances", {}))
        balances.update(layer.pop("balances", None) or {})
        for pool in POOLS:
            if pool in layer:
                balances[pool] = layer.pop(pool)
        inputs_dict.update(layer)
        inputs_dict["balances"] = balances

    # 3. Drop anything SimulationConfig doesn't know about
    config_field_names = {f.name for f in fields(SimulationConfig)}
    unknown = sorted(k for k in inputs_dict if k not in config_field_names)
    if unknown:
        logger.warning("Ignoring unknown setup fields: %s", ", ".join(unknown))

    final_inputs = {
        key: _clean_value(key, value)
        for key, value in inputs_dict.items()
        if key in config_field_names and key != "balances" and not _is_blank(value)
    }
    final_inputs["balances"] = AccountBalances(**{
        pool: clean_currency(inputs_dict["balances"].get(pool, 0.0)) for pool in POOLS
    })

    if final_inputs.get("auto_optimize") and not final_inputs.get("advanced_features"):
        logger.warning("Auto-optimized conversions need advanced features; using the manual amount.")

    # 4. Create the SimulationConfig object
    return SimulationConfig(**final_inputs)

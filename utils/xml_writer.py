import xml.etree.ElementTree as ET
from xml.dom import minidom

from models import POOLS, SimulationConfig


def prettify_xml(elem):
    """Return a pretty-printed XML string for an Element."""
    rough_string = ET.tostring(elem, 'utf-8')
    reparsed = minidom.parseString(rough_string)
    # Return the XML declaration and the pretty-printed content
    return reparsed.toprettyxml(indent="    ")


def _text(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def create_setup_xml(config: SimulationConfig) -> str:
    """
    Converts a SimulationConfig back into the setup XML format read by
    utils.xml_loader.parse_setup_xml.
    """
    root = ET.Element('setup')

    for key in ("current_age", "target_retirement_age", "retirement_end_age",
                "annual_spending", "inflation_rate", "avg_return", "stress_test",
                "strategy", "start_year"):
        ET.SubElement(root, key).text = _text(getattr(config, key))

    balances = ET.SubElement(root, 'balances')
    for pool in POOLS:
        ET.SubElement(balances, pool).text = _text(getattr(config.balances, pool))

    ss = ET.SubElement(root, 'social_security')
    ET.SubElement(ss, 'amount').text = _text(config.ss_amount)
    ET.SubElement(ss, 'start_age').text = _text(config.ss_start_age)

    conv = ET.SubElement(root, 'conversion')
    ET.SubElement(conv, 'amount').text = _text(config.conversion_amount)
    ET.SubElement(conv, 'start_age').text = _text(config.conversion_start_age)
    ET.SubElement(conv, 'end_age').text = _text(config.conversion_end_age)
    ET.SubElement(conv, 'auto_optimize').text = _text(config.auto_optimize)
    ET.SubElement(conv, 'target_bracket_index').text = _text(config.target_bracket_index)

    ET.SubElement(root, 'advanced_features').text = _text(config.advanced_features)

    return prettify_xml(root)

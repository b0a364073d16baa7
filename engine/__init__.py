# engine/__init__.py

# Main entry point: one deterministic projection
from .simulator import RetirementSimulator, simulate

# Reference tables (pass replacements to simulate() to substitute them)
from .tax_engine import DEFAULT_TAX_TABLE, TaxTable, estimate_tax
from .rmd_tables import DEFAULT_RMD_TABLE, RMDTable

# Multi-run comparisons
from .comparison import compare_conversion_ladder, compare_strategies

"""Tax rules loading from tax-rules/YYYY.yaml."""

import logging
from pathlib import Path
from typing import Optional, Union

import yaml

from ..config import get_default_tax_year, get_tax_rules_dirs
from .schemas import TaxRules

logger = logging.getLogger(__name__)


class TaxRulesNotFoundError(Exception):
    """Raised when no tax rules file exists for a requested year."""
    pass


def find_tax_rules_file(year: Union[int, str]) -> Path:
    """Locate <year>.yaml, checking user directories before bundled rules.

    Raises:
        TaxRulesNotFoundError: If no directory has the year
    """
    searched = []
    for rules_dir in get_tax_rules_dirs():
        config_file = rules_dir / f"{year}.yaml"
        if config_file.exists():
            return config_file
        searched.append(str(config_file))

    raise TaxRulesNotFoundError(
        f"Tax rules file not found for year {year}. Checked:\n"
        + "\n".join(f"  - {p}" for p in searched)
    )


def list_tax_years() -> list[int]:
    """Get sorted list of available tax rule years (descending)."""
    years = set()
    for rules_dir in get_tax_rules_dirs():
        if rules_dir.is_dir():
            years.update(int(p.stem) for p in rules_dir.glob("*.yaml") if p.stem.isdigit())
    return sorted(years, reverse=True)


def load_tax_rules(year: Optional[Union[int, str]] = None) -> TaxRules:
    """Load and validate tax rules for a year.

    Args:
        year: Tax year; defaults to the configured tax_year setting

    Returns:
        Validated TaxRules

    Raises:
        TaxRulesNotFoundError: If no rules file exists for the year
        pydantic.ValidationError: If the file is malformed
    """
    if year is None:
        year = get_default_tax_year()

    config_file = find_tax_rules_file(year)
    logger.debug(f"Loading tax rules for {year} from {config_file}")

    with open(config_file, "r") as f:
        data = yaml.safe_load(f) or {}

    data.setdefault("year", int(year))
    return TaxRules.model_validate(data)

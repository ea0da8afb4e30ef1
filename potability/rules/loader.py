"""
Rule Table Loader — YAML Rule Sets → Immutable RuleSet Objects

Rule tables are versioned YAML files shipped in `potability/rules/tables/`.
A deployment may point RULES_DIR at its own directory instead.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from potability.errors import RuleConfigError, UnknownVariantError

from .models import RuleSet


logger = logging.getLogger(__name__)

# Packaged rule tables
DEFAULT_TABLES_DIR = Path(__file__).parent / "tables"
TABLE_SUFFIX = ".yaml"


def load_rule_set(path: Path) -> RuleSet:
    """
    Load and validate one rule table.

    Args:
        path: Path to a YAML rule table

    Returns:
        Validated, immutable RuleSet

    Raises:
        RuleConfigError: If the file is unreadable or fails validation
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise RuleConfigError(f"Cannot read rule table {path}: {e}") from e

    if not isinstance(raw, dict):
        raise RuleConfigError(f"Rule table {path} must be a mapping at the top level")

    try:
        rule_set = RuleSet.model_validate(raw)
    except PydanticValidationError as e:
        raise RuleConfigError(f"Invalid rule table {path}: {e}") from e

    logger.info(
        f"Loaded rule table '{rule_set.variant}' v{rule_set.version} "
        f"({rule_set.policy.value}, {len(rule_set.rules)} rules) from {path.name}"
    )
    return rule_set


class RuleRegistry:
    """
    Variant name -> RuleSet lookup over a directory of rule tables.

    Read-only after construction; safe to share across requests.
    """

    def __init__(self, tables_dir: Optional[Path] = None):
        """
        Load every rule table in a directory.

        Args:
            tables_dir: Directory of *.yaml tables (default: packaged tables)
        """
        self.tables_dir = Path(tables_dir) if tables_dir else DEFAULT_TABLES_DIR
        self._rule_sets: Dict[str, RuleSet] = {}

        paths = sorted(self.tables_dir.glob(f"*{TABLE_SUFFIX}"))
        if not paths:
            raise RuleConfigError(f"No rule tables found in {self.tables_dir}")

        for path in paths:
            rule_set = load_rule_set(path)
            if rule_set.variant in self._rule_sets:
                raise RuleConfigError(
                    f"Variant '{rule_set.variant}' defined more than once in {self.tables_dir}"
                )
            self._rule_sets[rule_set.variant] = rule_set

    @property
    def variants(self) -> List[str]:
        return sorted(self._rule_sets)

    def get(self, variant: str) -> RuleSet:
        """Get a variant's rule set, raising UnknownVariantError if absent."""
        try:
            return self._rule_sets[variant]
        except KeyError:
            raise UnknownVariantError(variant, self.variants) from None

    def __contains__(self, variant: str) -> bool:
        return variant in self._rule_sets

    def __iter__(self):
        return iter(self._rule_sets[name] for name in self.variants)


@lru_cache(maxsize=None)
def get_registry(tables_dir: Optional[str] = None) -> RuleRegistry:
    """Process-wide registry, built once per tables directory."""
    return RuleRegistry(Path(tables_dir) if tables_dir else None)

"""YAML loader + schema validation for mutation-set documents.

A document names one or more mutation sets, each an ordered list of rule
descriptors. Every set is applied to each seed word on its own; outputs are
not chained between sets.

Example:
    name: office passwords
    mutation_sets:
      plain: [nothing]
      capital_year: [uppercase_first, "append_any(2023, 2024)"]

``mutation_sets`` may also be a plain list of rule lists; sets are then named
``set1``, ``set2`` and so on.
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List

import jsonschema
import yaml

from mangler.logging import get_logger
from mangler.mutation.mutation_set import MutationSet
from mangler.mutation.rules import parse_mutation
from mangler.utils.yaml_utils import normalize_yaml_dict_keys

logger = get_logger(__name__)

RECOGNIZED_KEYS = {"name", "mutation_sets"}


def _load_schema() -> Dict[str, Any]:
    with (
        resources.files("mangler.schemas")
        .joinpath("mutation_sets.json")
        .open("r", encoding="utf-8")
    ) as f:
        return json.load(f)


def load_mutation_document(yaml_str: str) -> Dict[str, Any]:
    """Parse, normalize and validate a mutation-set YAML string.

    Returns:
        Canonical dictionary with string set names.

    Raises:
        ValueError: On an empty or non-mapping document or unknown top-level keys.
        jsonschema.ValidationError: When the document does not match the schema.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        raise ValueError("Mutation-set document is empty.")
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")

    extra = set(data.keys()) - RECOGNIZED_KEYS
    if extra:
        raise ValueError(
            f"Unrecognized top-level key(s) in mutation-set document: "
            f"{', '.join(sorted(str(k) for k in extra))}. "
            f"Allowed keys are {sorted(RECOGNIZED_KEYS)}"
        )
    if "mutation_sets" not in data:
        raise ValueError("Mutation-set document must define 'mutation_sets'.")

    if isinstance(data["mutation_sets"], dict):
        data["mutation_sets"] = normalize_yaml_dict_keys(data["mutation_sets"])

    jsonschema.validate(data, _load_schema())
    return data


def build_mutation_sets(data: Dict[str, Any]) -> List[MutationSet]:
    """Build MutationSet objects from a validated document dictionary.

    Raises:
        MutationParseError: If any descriptor is not a known rule.
    """
    raw_sets = data["mutation_sets"]
    if isinstance(raw_sets, dict):
        named = list(raw_sets.items())
    else:
        named = [(f"set{i}", rules) for i, rules in enumerate(raw_sets, start=1)]

    mutation_sets: List[MutationSet] = []
    for name, rules in named:
        mutations = [parse_mutation(descriptor) for descriptor in rules]
        mutation_sets.append(MutationSet(name=name, mutations=mutations))
        logger.debug(f"Loaded mutation set '{name}' with {len(mutations)} rule(s)")
    return mutation_sets


def load_mutation_sets_yaml(yaml_str: str) -> List[MutationSet]:
    """Load every mutation set defined in a YAML string."""
    return build_mutation_sets(load_mutation_document(yaml_str))


def load_mutation_sets_file(path: Path) -> List[MutationSet]:
    """Load every mutation set defined in a UTF-8 YAML file."""
    logger.info(f"Loading mutation sets from: {path}")
    return load_mutation_sets_yaml(Path(path).read_text(encoding="utf-8"))
